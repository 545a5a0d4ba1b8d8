import pytest

from notes_api.errors import Forbidden, NotFound
from notes_api.storage.notes_store import NoteRecord
from notes_api.utils.identity import AuthenticatedIdentity
from notes_api.utils.ownership import require_note_owner, require_same_user

ALICE = AuthenticatedIdentity(user_id=1, username="alice")


def _note(owner_id: int) -> NoteRecord:
    return NoteRecord(
        id=10,
        owner_id=owner_id,
        title="t",
        content="c",
        created_at="2024-01-01T00:00:00+00:00",
        updated_at="2024-01-01T00:00:00+00:00",
    )


def test_same_user_passes():
    require_same_user(ALICE, 1)


def test_other_user_is_forbidden():
    with pytest.raises(Forbidden):
        require_same_user(ALICE, 2)


def test_own_note_is_returned():
    note = _note(owner_id=1)
    assert require_note_owner(ALICE, note) is note


def test_foreign_note_is_forbidden():
    with pytest.raises(Forbidden):
        require_note_owner(ALICE, _note(owner_id=2))


def test_absent_note_is_not_found():
    with pytest.raises(NotFound):
        require_note_owner(ALICE, None)
