# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Request/response operations offered to the GUI front end.

This is the boundary where typed errors meet the front end: a malformed
stored hash becomes ``valid=False`` here and nowhere earlier, and account
flow failures become ``success=False`` responses carrying a message.
"""

from __future__ import annotations

from dashlens.application.use_cases.users.login_user import LoginUserUseCase
from dashlens.application.use_cases.users.logout_user import LogoutUserUseCase
from dashlens.application.use_cases.users.register_user import RegisterUserUseCase
from dashlens.domain.users.exceptions import HashParseError
from dashlens.domain.users.repositories import PasswordHasher, SessionStore
from dashlens.interfaces.http.dto.commands import (
    AuthResponseDTO,
    AuthSessionDTO,
    HashResponseDTO,
    VerifyResponseDTO,
)
from dashlens.shared.errors.base import DomainError, ValidationError
from dashlens.shared.logging import logger


class AuthCommands:
    def __init__(
        self,
        *,
        password_hasher: PasswordHasher,
        sessions: SessionStore,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
    ) -> None:
        self._password_hasher = password_hasher
        self._sessions = sessions
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case

    def hash_password(self, password: str) -> HashResponseDTO:
        return HashResponseDTO(hash=self._password_hasher.hash(password))

    def verify_password(self, password: str, hash: str) -> VerifyResponseDTO:
        try:
            valid = self._password_hasher.verify(password, hash)
        except HashParseError as exc:
            # Reported as "not valid" so the caller cannot tell a damaged
            # credential from a wrong password; the log keeps the difference.
            logger.warning(f"commands.verify_password: unparsable hash ({exc.context})")
            valid = False
        return VerifyResponseDTO(valid=valid)

    def set_session(self, session: AuthSessionDTO) -> None:
        self._sessions.set(session.to_domain())

    def clear_session(self) -> None:
        self._sessions.clear()

    def get_current_user(self) -> AuthSessionDTO | None:
        session = self._sessions.get()
        return AuthSessionDTO.from_domain(session) if session else None

    def check_auth_status(self) -> bool:
        return self._sessions.is_authenticated()

    def register(self, username: str, password: str) -> AuthResponseDTO:
        try:
            session = self._register_use_case.execute(username, password)
        except (DomainError, ValidationError) as exc:
            logger.info(f"commands.register: rejected code={exc.code}")
            return AuthResponseDTO(success=False, message=exc.message or exc.code)
        return AuthResponseDTO(
            success=True,
            message="Registration successful",
            user=AuthSessionDTO.from_domain(session),
        )

    def login(self, username: str, password: str) -> AuthResponseDTO:
        try:
            session = self._login_use_case.execute(username, password)
        except DomainError as exc:
            return AuthResponseDTO(success=False, message=exc.message or exc.code)
        return AuthResponseDTO(
            success=True,
            message="Login successful",
            user=AuthSessionDTO.from_domain(session),
        )

    def logout(self) -> AuthResponseDTO:
        self._logout_use_case.execute()
        return AuthResponseDTO(success=True, message="Logout successful")
