"""Tests for the local-disk object store."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from profile_editor.errors import ObjectStoreError
from profile_editor.services.object_store import LocalObjectStore, get_media_type

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"fake"


def test_upload_writes_under_bucket(tmp_path: Path) -> None:
    store = LocalObjectStore(root=tmp_path, base_url="/api/objects/")

    asyncio.run(store.upload("avatars", "acct-1-1.png", PNG_BYTES, "image/png"))

    path = store.open_object("avatars", "acct-1-1.png")
    assert path == tmp_path / "avatars" / "acct-1-1.png"
    assert path.read_bytes() == PNG_BYTES
    assert store.public_address("avatars", "acct-1-1.png") == "/api/objects/avatars/acct-1-1.png"


def test_defaults_come_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROFILE_EDITOR_STORAGE_DIR", str(tmp_path / "store"))
    monkeypatch.setenv("PROFILE_EDITOR_PUBLIC_BASE_URL", "https://cdn.example.com/files")

    store = LocalObjectStore()

    assert store.root == (tmp_path / "store").resolve()
    assert store.public_address("avatars", "a.png") == "https://cdn.example.com/files/avatars/a.png"


def test_open_missing_object_returns_none(tmp_path: Path) -> None:
    assert LocalObjectStore(root=tmp_path).open_object("avatars", "missing.png") is None


@pytest.mark.parametrize("name", ["../escape.png", "nested/a.png", "..", ""])
def test_rejects_path_traversal(tmp_path: Path, name: str) -> None:
    store = LocalObjectStore(root=tmp_path)
    with pytest.raises(ObjectStoreError):
        asyncio.run(store.upload("avatars", name, PNG_BYTES))


def test_media_type_from_extension() -> None:
    assert get_media_type(Path("a.JPG")) == "image/jpeg"
    assert get_media_type(Path("a.txt")) is None
