# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from dashlens.shared.errors.base import DomainError, InfrastructureError


class UserAlreadyExistsError(DomainError):
    code = "user_already_exists"
    status = HTTPStatus.CONFLICT
    message = "Username already exists"


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED
    message = "Unable to sign in"


class HashParseError(DomainError):
    """Stored password hash is not a well-formed encoded hash."""

    code = "hash_parse_failed"
    status = HTTPStatus.UNPROCESSABLE_ENTITY
    message = "Stored password hash could not be parsed"


class HashingError(InfrastructureError):
    def __init__(self, reason: str = "") -> None:
        super().__init__(
            code="hashing_failed",
            message=f"Failed to hash password: {reason}" if reason else "Failed to hash password",
        )


class LockAcquisitionError(InfrastructureError):
    def __init__(self, reason: str = "") -> None:
        super().__init__(
            code="session_lock_unavailable",
            status=HTTPStatus.SERVICE_UNAVAILABLE,
            message=reason or "Session state is unavailable",
        )
