from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from notes_api.errors import DuplicateKeyError
from notes_api.storage.notes_store import _atomic_write_json, _read_json


@dataclass(frozen=True)
class UserRecord:
    id: int
    username: str
    password_hash: str
    created_at: str

    def public_dict(self) -> dict[str, Any]:
        # password_hash never leaves the store through this view
        return {"id": self.id, "username": self.username, "created_at": self.created_at}


class UsersStore:
    """Account directory backed by ``<base_dir>/users.json``."""

    def __init__(self, base_dir: Path):
        self.base_dir = base_dir
        self._path = base_dir / "users.json"
        self._lock = threading.Lock()

    def _load(self) -> dict[str, Any]:
        return _read_json(self._path, {"next_id": 1, "users": []})

    def find_by_username(self, username: str) -> Optional[UserRecord]:
        with self._lock:
            users = self._load()["users"]
        for raw in users:
            if raw["username"] == username:
                return UserRecord(**raw)
        return None

    def find_by_id(self, user_id: int) -> Optional[UserRecord]:
        with self._lock:
            users = self._load()["users"]
        for raw in users:
            if int(raw["id"]) == user_id:
                return UserRecord(**raw)
        return None

    def create(self, username: str, password_hash: str) -> UserRecord:
        with self._lock:
            data = self._load()
            if any(raw["username"] == username for raw in data["users"]):
                raise DuplicateKeyError("username")

            rec = UserRecord(
                id=int(data["next_id"]),
                username=username,
                password_hash=password_hash,
                created_at=datetime.now(timezone.utc).isoformat(),
            )
            data["users"].append(rec.__dict__)
            data["next_id"] = rec.id + 1
            _atomic_write_json(self._path, data)
            return rec
