from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import structlog
from fastapi import Header, Request

from notes_api.errors import MalformedHeaderError, TokenError, Unauthorized
from notes_api.utils.jwt_auth import TokenService

logger = structlog.get_logger()

BEARER_SCHEME = "Bearer"


@dataclass(frozen=True)
class AuthenticatedIdentity:
    user_id: int
    username: str


class IdentityExtractor:
    """Turns an ``Authorization`` header value into an authenticated identity.

    Only ``Bearer <token>`` is accepted, scheme compared case-sensitively.
    Why a token failed (expired, garbled, bad signature) is logged at debug
    level and never returned to the caller.
    """

    def __init__(self, tokens: TokenService):
        self._tokens = tokens

    def extract(self, header_value: Optional[str]) -> AuthenticatedIdentity:
        if not header_value:
            raise MalformedHeaderError("Missing authorization header")

        parts = header_value.split(" ")
        if len(parts) != 2 or parts[0] != BEARER_SCHEME or not parts[1]:
            raise MalformedHeaderError("Invalid authorization header format")

        try:
            claims = self._tokens.validate(parts[1])
        except TokenError as exc:
            logger.debug("auth.token_rejected", reason=type(exc).__name__)
            raise Unauthorized("Invalid or expired token") from None

        return AuthenticatedIdentity(user_id=claims.user_id, username=claims.username)


def get_current_identity(
    request: Request,
    authorization: Optional[str] = Header(default=None),
) -> AuthenticatedIdentity:
    """FastAPI dependency for protected routes."""
    extractor: IdentityExtractor = request.app.state.identity
    return extractor.extract(authorization)
