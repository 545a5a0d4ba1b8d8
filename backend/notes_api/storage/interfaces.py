from __future__ import annotations

from typing import Optional, Protocol

from notes_api.storage.notes_store import NoteRecord
from notes_api.storage.users_store import UserRecord


class OwnedResource(Protocol):
    owner_id: int


class AccountDirectory(Protocol):
    def find_by_username(self, username: str) -> Optional[UserRecord]: ...

    def find_by_id(self, user_id: int) -> Optional[UserRecord]: ...

    # raises DuplicateKeyError when the username is already taken
    def create(self, username: str, password_hash: str) -> UserRecord: ...


class NoteRepository(Protocol):
    def create_note(self, owner_id: int, title: str, content: str) -> NoteRecord: ...

    def find_by_id(self, note_id: int) -> Optional[NoteRecord]: ...

    def list_notes(
        self, owner_id: int, limit: int = 10, offset: int = 0, sort: str = "desc"
    ) -> list[NoteRecord]: ...

    def update_note(self, note_id: int, title: str, content: str) -> Optional[NoteRecord]: ...

    def delete_note(self, note_id: int) -> bool: ...
