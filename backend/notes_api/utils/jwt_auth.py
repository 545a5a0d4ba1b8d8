from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from jose import ExpiredSignatureError, JOSEError, JWTError, jwt
from jose.exceptions import JWTClaimsError

from notes_api.config import TokenSettings
from notes_api.errors import (
    ExpiredTokenError,
    InvalidSignatureError,
    MalformedTokenError,
    SigningError,
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Claims:
    user_id: int
    username: str
    issued_at: datetime
    expires_at: datetime


def _claims_from_payload(payload: dict[str, Any]) -> Claims:
    try:
        user_id = int(payload["sub"])
        username = payload["username"]
        iat = int(payload["iat"])
        exp = int(payload["exp"])
    except (KeyError, TypeError, ValueError) as exc:
        raise MalformedTokenError("Token claims are incomplete") from exc
    if not isinstance(username, str) or not username:
        raise MalformedTokenError("Token username claim is invalid")
    return Claims(
        user_id=user_id,
        username=username,
        issued_at=datetime.fromtimestamp(iat, tz=timezone.utc),
        expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
    )


class TokenService:
    """Issues and validates signed identity tokens (JWT, HMAC by default).

    The signing key comes from ``TokenSettings`` handed over at construction
    and is never changed afterwards. Tokens are stateless: there is no
    revocation list, a leaked token stays valid until its ``exp``.
    """

    def __init__(self, settings: TokenSettings, clock: Optional[Callable[[], datetime]] = None):
        self._settings = settings
        self._clock = clock or _utc_now

    def ensure_ready(self) -> None:
        """Raise SigningError now if tokens cannot be signed."""
        if not self._settings.secret:
            raise SigningError("JWT_SECRET is not set")

    def issue(self, user_id: int, username: str) -> str:
        self.ensure_ready()

        now = self._clock()
        exp = now + self._settings.ttl
        payload = {
            "sub": str(user_id),
            "username": username,
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
        }
        try:
            return jwt.encode(payload, self._settings.secret, algorithm=self._settings.algorithm)
        except JOSEError as exc:
            raise SigningError() from exc

    def validate(self, token: str) -> Claims:
        """Check signature and expiry of ``token`` and return its claims.

        Raises MalformedTokenError, InvalidSignatureError or ExpiredTokenError.
        """
        self.ensure_ready()

        # structure first, so a garbled token is not reported as a bad signature
        try:
            jwt.get_unverified_claims(token)
        except JWTError as exc:
            raise MalformedTokenError(str(exc)) from exc

        try:
            payload = jwt.decode(token, self._settings.secret, algorithms=[self._settings.algorithm])
        except ExpiredSignatureError as exc:
            raise ExpiredTokenError(str(exc)) from exc
        except JWTClaimsError as exc:
            raise MalformedTokenError(str(exc)) from exc
        except JWTError as exc:
            raise InvalidSignatureError(str(exc)) from exc

        return _claims_from_payload(payload)
