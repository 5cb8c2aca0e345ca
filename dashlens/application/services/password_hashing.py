"""Password hashing strategies."""

from __future__ import annotations

from argon2 import PasswordHasher as _Argon2Hasher
from argon2.exceptions import (
    HashingError as _Argon2HashingError,
    InvalidHashError,
    VerificationError,
    VerifyMismatchError,
)

from dashlens.domain.users.exceptions import HashingError, HashParseError
from dashlens.domain.users.repositories import PasswordHasher


def _password_bytes(password: str) -> bytes:
    # Lone surrogates are kept rather than rejected; they still round-trip.
    return password.encode("utf-8", "surrogatepass")


class Argon2PasswordHasher(PasswordHasher):
    """Argon2id with the library's default cost parameters.

    The encoded output carries algorithm, version, parameters and salt, so
    verification never needs anything besides the stored string.
    """

    def __init__(self, hasher: _Argon2Hasher | None = None) -> None:
        self._hasher = hasher or _Argon2Hasher()

    def hash(self, password: str) -> str:
        try:
            return self._hasher.hash(_password_bytes(password))
        except _Argon2HashingError as exc:
            raise HashingError(str(exc)) from exc

    def verify(self, password: str, hashed: str) -> bool:
        """Return whether ``password`` matches ``hashed``.

        Raises :class:`HashParseError` when ``hashed`` is not an encoded
        Argon2 hash; a wrong password is a plain ``False``.
        """
        try:
            hashed.encode("ascii")
        except UnicodeEncodeError as exc:
            raise HashParseError(context={"reason": "non_ascii_hash"}) from exc

        try:
            return self._hasher.verify(hashed, _password_bytes(password))
        except VerifyMismatchError:
            return False
        except InvalidHashError as exc:
            raise HashParseError(context={"reason": type(exc).__name__}) from exc
        except VerificationError as exc:
            raise HashParseError(context={"reason": str(exc)}) from exc
