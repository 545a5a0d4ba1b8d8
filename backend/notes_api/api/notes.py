from typing import Literal

import structlog
from fastapi import APIRouter, Depends, Query, status

from notes_api.api.deps import get_notes
from notes_api.errors import NotFound
from notes_api.models.notes import MessageOut, NoteCreate, NoteOut, NoteUpdate
from notes_api.storage.interfaces import NoteRepository
from notes_api.utils.identity import AuthenticatedIdentity, get_current_identity
from notes_api.utils.ownership import require_note_owner, require_same_user

logger = structlog.get_logger()

router = APIRouter(prefix="/users/{user_id}/notes", tags=["notes"])


@router.post("", response_model=NoteOut, status_code=status.HTTP_201_CREATED)
def create_note(
    user_id: int,
    payload: NoteCreate,
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    store: NoteRepository = Depends(get_notes),
) -> NoteOut:
    require_same_user(identity, user_id, "You can only create notes for yourself")

    # owner comes from the token, not from the path
    note = store.create_note(owner_id=identity.user_id, title=payload.title, content=payload.content)
    logger.info("notes.created", user_id=identity.user_id, note_id=note.id)
    return NoteOut(**note.to_dict())


@router.get("", response_model=list[NoteOut])
def list_notes(
    user_id: int,
    limit: int = Query(default=10, ge=1),
    offset: int = Query(default=0, ge=0),
    sort: Literal["asc", "desc"] = Query(default="desc"),
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    store: NoteRepository = Depends(get_notes),
) -> list[NoteOut]:
    require_same_user(identity, user_id, "You can only view your own notes")

    notes = store.list_notes(owner_id=identity.user_id, limit=limit, offset=offset, sort=sort)
    return [NoteOut(**n.to_dict()) for n in notes]


@router.get("/{note_id}", response_model=NoteOut)
def get_note(
    user_id: int,
    note_id: int,
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    store: NoteRepository = Depends(get_notes),
) -> NoteOut:
    require_same_user(identity, user_id, "You can only view your own notes")

    note = require_note_owner(identity, store.find_by_id(note_id))
    return NoteOut(**note.to_dict())


@router.put("/{note_id}", response_model=NoteOut)
def update_note(
    user_id: int,
    note_id: int,
    payload: NoteUpdate,
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    store: NoteRepository = Depends(get_notes),
) -> NoteOut:
    require_same_user(identity, user_id, "You can only update your own notes")
    require_note_owner(
        identity,
        store.find_by_id(note_id),
        "You don't have permission to update this note",
    )

    updated = store.update_note(note_id=note_id, title=payload.title, content=payload.content)
    if updated is None:
        # deleted between the ownership check and the write
        raise NotFound("Note not found")

    logger.info("notes.updated", user_id=identity.user_id, note_id=note_id)
    return NoteOut(**updated.to_dict())


@router.delete("/{note_id}", response_model=MessageOut)
def delete_note(
    user_id: int,
    note_id: int,
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    store: NoteRepository = Depends(get_notes),
) -> MessageOut:
    require_same_user(identity, user_id, "You can only delete your own notes")
    require_note_owner(
        identity,
        store.find_by_id(note_id),
        "You don't have permission to delete this note",
    )

    if not store.delete_note(note_id):
        raise NotFound("Note not found")

    logger.info("notes.deleted", user_id=identity.user_id, note_id=note_id)
    return MessageOut(message="Note deleted successfully")
