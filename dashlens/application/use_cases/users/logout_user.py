"""Use-case for ending the current session."""

from __future__ import annotations

from dashlens.domain.users.repositories import SessionStore


class LogoutUserUseCase:
    def __init__(self, *, sessions: SessionStore) -> None:
        self._sessions = sessions

    def execute(self) -> None:
        self._sessions.clear()
