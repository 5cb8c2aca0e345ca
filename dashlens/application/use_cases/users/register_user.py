# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from dashlens.domain.users.entities import AuthSession, User
from dashlens.domain.users.exceptions import (
    InvalidCredentialsError,
    LockAcquisitionError,
    UserAlreadyExistsError,
)
from dashlens.domain.users.repositories import PasswordHasher, SessionStore, UserRepository
from dashlens.shared.errors.base import ValidationError
from dashlens.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionStore,
        password_hasher: PasswordHasher,
        min_password_length: int = 8,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._password_hasher = password_hasher
        self._min_password_length = min_password_length

    def execute(self, username: str, password: str) -> AuthSession:
        username = username.strip()
        if not username:
            raise ValidationError(
                message="Username cannot be empty", context={"fields": ["username"]}
            )
        if len(password) < self._min_password_length:
            raise ValidationError(
                message=f"Password must be at least {self._min_password_length} characters",
                context={"fields": ["password"]},
            )

        if self._users.find_by_username(username):
            raise UserAlreadyExistsError()

        hashed = self._password_hasher.hash(password)
        user = User(id=0, username=username, password_hash=hashed, created_at=datetime.now(UTC))
        persisted = self._users.add(user)

        session = AuthSession.for_user(persisted)
        try:
            self._sessions.set(session)
        except LockAcquisitionError as exc:
            # The account stays; signing in later with the same credentials works.
            logger.error(
                f"auth.register: created user_id={persisted.id} but session state unavailable: {exc}"
            )
            raise InvalidCredentialsError() from exc
        logger.info(f"auth.register: ok user_id={persisted.id}")
        return session
