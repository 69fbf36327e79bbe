"""Helpers for storing uploaded objects on local disk.

Objects live under ``<storage_root>/<bucket>/<name>`` and are served back by
the API under ``<public_base_url>/<bucket>/<name>``.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from profile_editor.config import get_public_base_url, get_storage_root
from profile_editor.errors import ObjectStoreError
from profile_editor.services.collaborators import ObjectStore

logger = logging.getLogger(__name__)

EXTENSION_TO_MIME = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
}


def _safe_segment(value: str) -> str:
    """Reject names that would escape the bucket directory."""
    if not value or Path(value).name != value or value in (".", ".."):
        raise ObjectStoreError(f"Invalid object path segment: {value!r}")
    return value


def get_media_type(path: Path) -> str | None:
    """Return the MIME type for a stored object path."""
    return EXTENSION_TO_MIME.get(path.suffix.lower())


class LocalObjectStore(ObjectStore):
    """Object store writing to a directory tree.

    Args:
        root: Storage root. Defaults to ``PROFILE_EDITOR_STORAGE_DIR``.
        base_url: Public URL prefix. Defaults to ``PROFILE_EDITOR_PUBLIC_BASE_URL``.
    """

    def __init__(self, root: Path | None = None, base_url: str | None = None) -> None:
        self.root = root if root is not None else get_storage_root()
        self.base_url = (base_url if base_url is not None else get_public_base_url()).rstrip("/")

    def get_object_path(self, bucket: str, name: str) -> Path:
        return self.root / _safe_segment(bucket) / _safe_segment(name)

    async def upload(
        self, bucket: str, name: str, data: bytes, content_type: str | None = None
    ) -> None:
        target = self.get_object_path(bucket, name)
        try:
            await asyncio.to_thread(self._write, target, data)
        except OSError as exc:
            logger.exception("Failed to store object %s/%s", bucket, name)
            raise ObjectStoreError(f"Failed to store {bucket}/{name}: {exc}") from exc
        logger.info("Stored %s/%s (%d bytes, %s)", bucket, name, len(data), content_type)

    def public_address(self, bucket: str, name: str) -> str:
        return f"{self.base_url}/{_safe_segment(bucket)}/{_safe_segment(name)}"

    def open_object(self, bucket: str, name: str) -> Path | None:
        """Return the path of a stored object, or None if it does not exist."""
        path = self.get_object_path(bucket, name)
        return path if path.is_file() else None

    @staticmethod
    def _write(target: Path, data: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        tmp = target.with_name(target.name + ".part")
        tmp.write_bytes(data)
        tmp.replace(target)
