# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:

    id: int
    username: str
    password_hash: str
    created_at: datetime | None = None


@dataclass(slots=True, frozen=True)
class AuthSession:
    """The identity currently signed in to this application instance."""

    user_id: int
    username: str
    logged_in: bool = True

    @classmethod
    def for_user(cls, user: User) -> AuthSession:
        return cls(user_id=user.id, username=user.username, logged_in=True)
