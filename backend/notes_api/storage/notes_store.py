import json
import os
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _atomic_write_json(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
        f.flush()
        os.fsync(f.fileno())
    tmp_path.replace(path)


def _read_json(path: Path, empty: dict[str, Any]) -> dict[str, Any]:
    if not path.exists():
        return empty
    return json.loads(path.read_text(encoding="utf-8"))


@dataclass(frozen=True)
class NoteRecord:
    id: int
    owner_id: int
    title: str
    content: str
    created_at: str
    updated_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "title": self.title,
            "content": self.content,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "NoteRecord":
        return cls(
            id=int(raw["id"]),
            owner_id=int(raw["owner_id"]),
            title=raw["title"],
            content=raw["content"],
            created_at=raw["created_at"],
            updated_at=raw["updated_at"],
        )


class NotesStore:
    """Notes kept in a single JSON document: ``<base_dir>/notes.json``."""

    def __init__(self, base_dir: Path):
        self.base_dir = base_dir
        self._path = base_dir / "notes.json"
        self._lock = threading.Lock()

    def _load(self) -> dict[str, Any]:
        return _read_json(self._path, {"next_id": 1, "notes": {}})

    def create_note(self, owner_id: int, title: str, content: str) -> NoteRecord:
        with self._lock:
            data = self._load()
            note_id = int(data["next_id"])
            now = _utc_now_iso()
            note = NoteRecord(
                id=note_id,
                owner_id=owner_id,
                title=title,
                content=content,
                created_at=now,
                updated_at=now,
            )
            data["notes"][str(note_id)] = note.to_dict()
            data["next_id"] = note_id + 1
            _atomic_write_json(self._path, data)
            return note

    def find_by_id(self, note_id: int) -> Optional[NoteRecord]:
        with self._lock:
            raw = self._load()["notes"].get(str(note_id))
        if raw is None:
            return None
        return NoteRecord.from_dict(raw)

    def list_notes(self, owner_id: int, limit: int = 10, offset: int = 0, sort: str = "desc") -> list[NoteRecord]:
        if sort not in ("asc", "desc"):
            sort = "desc"

        with self._lock:
            raw_notes = list(self._load()["notes"].values())

        notes = [NoteRecord.from_dict(r) for r in raw_notes if int(r["owner_id"]) == owner_id]
        notes.sort(key=lambda n: (n.created_at, n.id), reverse=(sort == "desc"))
        return notes[offset:offset + limit]

    def update_note(self, note_id: int, title: str, content: str) -> Optional[NoteRecord]:
        with self._lock:
            data = self._load()
            raw = data["notes"].get(str(note_id))
            if raw is None:
                return None

            raw["title"] = title
            raw["content"] = content
            raw["updated_at"] = _utc_now_iso()
            _atomic_write_json(self._path, data)
            return NoteRecord.from_dict(raw)

    def delete_note(self, note_id: int) -> bool:
        with self._lock:
            data = self._load()
            if data["notes"].pop(str(note_id), None) is None:
                return False
            _atomic_write_json(self._path, data)
            return True
