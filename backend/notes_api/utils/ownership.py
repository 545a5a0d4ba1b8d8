"""Single-owner authorization checks.

Both checks are plain comparisons over ids the caller already has: the user id
from the path, or the ``owner_id`` of a note that was just fetched.
"""
from __future__ import annotations

from typing import Optional

from notes_api.errors import Forbidden, NotFound
from notes_api.storage.interfaces import OwnedResource
from notes_api.utils.identity import AuthenticatedIdentity


def require_same_user(
    identity: AuthenticatedIdentity,
    user_id: int,
    detail: str = "You can only access your own notes",
) -> None:
    if identity.user_id != user_id:
        raise Forbidden(detail)


def require_note_owner(
    identity: AuthenticatedIdentity,
    note: Optional[OwnedResource],
    detail: str = "You don't have permission to access this note",
):
    # absent notes are 404, someone else's existing note is 403
    if note is None:
        raise NotFound("Note not found")
    if note.owner_id != identity.user_id:
        raise Forbidden(detail)
    return note
