# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from threading import Lock

from dashlens.domain.users.entities import AuthSession
from dashlens.domain.users.exceptions import LockAcquisitionError
from dashlens.domain.users.repositories import SessionStore
from dashlens.shared.logging import logger


class InMemorySessionStore(SessionStore):
    """Single-slot holder of the signed-in identity.

    Lives for the process only; a restart always starts anonymous. Every
    operation holds the lock just long enough to read or swap the slot.
    """

    def __init__(self, *, lock_timeout: float = 2.0) -> None:
        self._current: AuthSession | None = None
        self._lock = Lock()
        self._lock_timeout = lock_timeout
        self._poisoned = False

    @contextmanager
    def _guard(self) -> Iterator[None]:
        if not self._lock.acquire(timeout=self._lock_timeout):
            raise LockAcquisitionError(
                f"Timed out after {self._lock_timeout}s waiting for session state"
            )
        try:
            if self._poisoned:
                raise LockAcquisitionError(
                    "Session state was left inconsistent by an earlier failure"
                )
            try:
                yield
            except BaseException:
                self._poisoned = True
                raise
        finally:
            self._lock.release()

    def get(self) -> AuthSession | None:
        with self._guard():
            return self._current

    def set(self, session: AuthSession) -> None:
        with self._guard():
            previous = self._current
            self._current = session
        if previous is not None and previous.user_id != session.user_id:
            logger.info(
                f"session.set: replaced user_id={previous.user_id} with user_id={session.user_id}"
            )
        else:
            logger.info(f"session.set: user_id={session.user_id}")

    def clear(self) -> None:
        with self._guard():
            previous, self._current = self._current, None
        if previous is not None:
            logger.info(f"session.clear: user_id={previous.user_id}")

    def is_authenticated(self) -> bool:
        with self._guard():
            return self._current is not None

    @property
    def poisoned(self) -> bool:
        return self._poisoned
