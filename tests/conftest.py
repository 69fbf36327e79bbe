from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

import profile_editor.data.db as app_db
from profile_editor.data.db import init_db
from profile_editor.errors import RecordStoreError
from profile_editor.services.collaborators import ObjectStore, RecordStore


@pytest.fixture
def api_db(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Use a temporary SQLite DB and storage root for API tests."""
    db_path = tmp_path / "api.db"
    monkeypatch.setenv("DB_URL", f"sqlite:///{db_path.as_posix()}")
    monkeypatch.setenv("PROFILE_EDITOR_STORAGE_DIR", (tmp_path / "uploads").as_posix())
    app_db._engine = None
    app_db._SessionLocal = None
    init_db()
    yield
    # Dispose engine to release connections
    if app_db._engine is not None:
        app_db._engine.dispose()
        app_db._engine = None
        app_db._SessionLocal = None


class FakeRecordStore(RecordStore):
    """In-memory record store that records every call in order."""

    def __init__(self) -> None:
        self.tables: dict[str, dict[Any, dict[str, Any]]] = {
            "accounts": {},
            "extended_profiles": {},
        }
        self.calls: list[tuple[str, str]] = []
        self.fail_on: dict[tuple[str, str], Exception] = {}
        self._next_id = 1

    def add(self, table: str, key: Any, record: dict[str, Any]) -> None:
        self.tables[table][key] = {"id": key, **record}

    def _maybe_fail(self, op: str, table: str) -> None:
        self.calls.append((op, table))
        error = self.fail_on.get((op, table))
        if error is not None:
            raise error

    async def fetch_one(self, table: str, **filters: Any) -> dict[str, Any] | None:
        self._maybe_fail("fetch", table)
        matches = [
            dict(record)
            for record in self.tables[table].values()
            if all(record.get(k) == v for k, v in filters.items())
        ]
        if len(matches) > 1:
            raise RecordStoreError("more than one match")
        return matches[0] if matches else None

    async def update(self, table: str, key: Any, fields: dict[str, Any]) -> bool:
        self._maybe_fail("update", table)
        if key not in self.tables[table]:
            return False
        self.tables[table][key].update(fields)
        return True

    async def insert(self, table: str, fields: dict[str, Any]) -> Any:
        self._maybe_fail("insert", table)
        key = self._next_id
        self._next_id += 1
        self.tables[table][key] = {"id": key, **fields}
        return key


class FakeObjectStore(ObjectStore):
    """In-memory object store; shares the call log of a record store if given."""

    def __init__(self, calls: list[tuple[str, str]] | None = None) -> None:
        self.objects: dict[tuple[str, str], bytes] = {}
        self.calls = calls if calls is not None else []
        self.fail_upload: Exception | None = None

    async def upload(
        self, bucket: str, name: str, data: bytes, content_type: str | None = None
    ) -> None:
        self.calls.append(("upload", bucket))
        if self.fail_upload is not None:
            raise self.fail_upload
        self.objects[(bucket, name)] = data

    def public_address(self, bucket: str, name: str) -> str:
        self.calls.append(("public_address", bucket))
        return f"https://cdn.example.com/{bucket}/{name}"


@pytest.fixture
def records() -> FakeRecordStore:
    store = FakeRecordStore()
    store.add(
        "accounts",
        "acct-1",
        {
            "first_name": "Ada",
            "last_name": "Lovelace",
            "phone": "555-0100",
            "email": "ada@example.com",
        },
    )
    return store


@pytest.fixture
def objects(records: FakeRecordStore) -> FakeObjectStore:
    return FakeObjectStore(records.calls)
