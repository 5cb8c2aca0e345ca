# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dashlens.domain.users.entities import AuthSession
from dashlens.domain.users.exceptions import (
    HashParseError,
    InvalidCredentialsError,
    LockAcquisitionError,
)
from dashlens.domain.users.repositories import PasswordHasher, SessionStore, UserRepository
from dashlens.shared.logging import logger


class LoginUserUseCase:
    """Verify credentials and record the signed-in identity.

    Every failure surfaces as :class:`InvalidCredentialsError` so callers
    cannot tell an unknown user from a wrong password or a damaged stored
    hash. The real cause goes to the log.
    """

    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionStore,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._password_hasher = password_hasher

    def execute(self, username: str, password: str) -> AuthSession:
        user = self._users.find_by_username(username.strip())
        if user is None:
            logger.info("auth.login: rejected reason=unknown_user")
            raise InvalidCredentialsError()

        try:
            password_valid = self._password_hasher.verify(password, user.password_hash)
        except HashParseError as exc:
            logger.warning(f"auth.login: stored hash unreadable user_id={user.id}")
            raise InvalidCredentialsError() from exc

        if not password_valid:
            logger.info(f"auth.login: rejected reason=wrong_password user_id={user.id}")
            raise InvalidCredentialsError()

        session = AuthSession.for_user(user)
        try:
            self._sessions.set(session)
        except LockAcquisitionError as exc:
            logger.error(f"auth.login: session state unavailable user_id={user.id}: {exc}")
            raise InvalidCredentialsError() from exc

        logger.info(f"auth.login: ok user_id={user.id}")
        return session
