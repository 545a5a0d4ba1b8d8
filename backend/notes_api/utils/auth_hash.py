"""Password hashing using passlib.

``PasswordHasher.hash`` produces a self-describing modular-crypt string
(algorithm, cost and salt are embedded), so ``verify`` needs nothing but the
stored hash. bcrypt is preferred; if its backend fails to initialize the
hasher falls back to pbkdf2_sha256.
"""
from __future__ import annotations

import secrets
import warnings
from typing import Optional

from passlib.context import CryptContext

from notes_api.errors import HashingError, ValidationError

DEFAULT_BCRYPT_ROUNDS = 12


def _build_context(rounds: Optional[int]) -> CryptContext:
    rounds = rounds or DEFAULT_BCRYPT_ROUNDS
    try:
        ctx = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)
        # force backend load now rather than on the first request
        ctx.hash("probe")
        return ctx
    except Exception as exc:
        warnings.warn(
            "bcrypt backend not available or failed to initialize; falling back to pbkdf2_sha256. "
            f"Original error: {exc}",
            RuntimeWarning,
        )
        return CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class PasswordHasher:
    def __init__(self, rounds: Optional[int] = None):
        self._ctx = _build_context(rounds)
        # stands in for accounts that do not exist, so a miss costs a full verify
        self._dummy_hash = self._ctx.hash(secrets.token_urlsafe(16))

    def hash(self, password: str) -> str:
        if password is None:
            raise ValueError("Password must not be None")
        try:
            return self._ctx.hash(password)
        except ValueError as exc:
            # PasswordValueError and friends: NUL bytes, oversize input
            raise ValidationError("Password contains unsupported characters") from exc
        except Exception as exc:
            raise HashingError() from exc

    def verify(self, password: str, stored_hash: Optional[str]) -> bool:
        """Return True if ``password`` matches ``stored_hash``; never raises on mismatch.

        With no ``stored_hash`` the password is still checked against a dummy
        hash, so unknown accounts take as long as wrong passwords.
        """
        if password is None:
            return False
        try:
            if not stored_hash:
                self._ctx.verify(password, self._dummy_hash)
                return False
            return self._ctx.verify(password, stored_hash)
        except (ValueError, TypeError):
            # unknown or corrupted hash format, or password the backend refuses
            return False
