# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .users.entities import AuthSession, User
from .users.exceptions import (
    HashingError,
    HashParseError,
    InvalidCredentialsError,
    LockAcquisitionError,
    UserAlreadyExistsError,
)

__all__ = [
    "AuthSession",
    "User",
    "HashingError",
    "HashParseError",
    "InvalidCredentialsError",
    "LockAcquisitionError",
    "UserAlreadyExistsError",
]
