"""Typed error outcomes of the notes API.

Core code raises these; the FastAPI exception handler in ``notes_api.main``
turns each one into a response with its ``status_code``.
"""
from __future__ import annotations

from fastapi import status


class NotesApiError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(NotesApiError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = "Invalid request"


class Unauthorized(NotesApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Unauthorized"


class MalformedHeaderError(Unauthorized):
    default_detail = "Invalid authorization header format"


class Forbidden(NotesApiError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden"


class NotFound(NotesApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class Conflict(NotesApiError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict"


class InternalError(NotesApiError):
    pass


class HashingError(InternalError):
    default_detail = "Password hashing failed"


class SigningError(InternalError):
    default_detail = "Token signing failed"


# Token validation failures. They never reach the client as-is: the identity
# extractor turns every one of them into a plain Unauthorized.
class TokenError(Exception):
    pass


class ExpiredTokenError(TokenError):
    pass


class MalformedTokenError(TokenError):
    pass


class InvalidSignatureError(TokenError):
    pass


class DuplicateKeyError(Exception):
    """Raised by the account directory when a unique key is already taken."""
