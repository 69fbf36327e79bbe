"""Local staging of a selected avatar image before it is uploaded."""

from __future__ import annotations

import asyncio
import base64
from dataclasses import dataclass

from profile_editor.errors import AvatarRejected

MAX_AVATAR_BYTES = 2 * 1024 * 1024

IMAGE_TYPE_TO_MIME = {
    "png": "image/png",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "webp": "image/webp",
    "bmp": "image/bmp",
}
IMAGE_TYPE_TO_EXTENSION = {
    "png": ".png",
    "jpeg": ".jpg",
    "gif": ".gif",
    "webp": ".webp",
    "bmp": ".bmp",
}
CONTENT_TYPE_ALIASES = {
    "image/jpg": "image/jpeg",
    "image/pjpeg": "image/jpeg",
}


@dataclass(frozen=True)
class StagedFile:
    """An image selected by the user and not yet uploaded."""

    filename: str
    data: bytes
    content_type: str | None = None

    @property
    def image_type(self) -> str:
        return _detect_image_type(self.data) or "png"

    @property
    def mime_type(self) -> str:
        return IMAGE_TYPE_TO_MIME[self.image_type]

    @property
    def extension(self) -> str:
        """File extension matching the sniffed image type."""
        return IMAGE_TYPE_TO_EXTENSION[self.image_type]


def _normalize_content_type(content_type: str | None) -> str | None:
    if content_type is None:
        return None
    normalized = content_type.strip().lower()
    return CONTENT_TYPE_ALIASES.get(normalized, normalized)


def _detect_image_type(data: bytes) -> str | None:
    if len(data) >= 8 and data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "png"
    if len(data) >= 3 and data[:3] == b"\xff\xd8\xff":
        return "jpeg"
    if len(data) >= 6 and data[:6] in (b"GIF87a", b"GIF89a"):
        return "gif"
    if len(data) >= 12 and data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "webp"
    if len(data) >= 2 and data[:2] == b"BM":
        return "bmp"
    return None


def validate_avatar(file: StagedFile) -> None:
    """Check size and image type of a selected avatar.

    Raises:
        AvatarRejected: If the file is empty, too large, not a supported image,
            or declares a content type that does not match its bytes.
    """
    if not file.data:
        raise AvatarRejected("Avatar file is empty.")
    if len(file.data) > MAX_AVATAR_BYTES:
        raise AvatarRejected("Avatar exceeds 2 MiB.")

    image_type = _detect_image_type(file.data)
    if image_type is None:
        raise AvatarRejected("Unsupported avatar image type.")

    normalized_type = _normalize_content_type(file.content_type)
    if normalized_type and normalized_type not in IMAGE_TYPE_TO_MIME.values():
        raise AvatarRejected("Unsupported avatar content type.")
    if normalized_type and normalized_type != IMAGE_TYPE_TO_MIME[image_type]:
        raise AvatarRejected("Avatar content type does not match image data.")


def build_preview(file: StagedFile) -> str:
    """Return a ``data:`` URI that renders the staged image."""
    encoded = base64.b64encode(file.data).decode("ascii")
    return f"data:{file.mime_type};base64,{encoded}"


class AvatarStaging:
    """Holds the selected avatar file and its locally rendered preview.

    The preview is derived in a background task after :meth:`select` returns,
    so it may briefly be None while a file is staged.
    """

    def __init__(self) -> None:
        self._file: StagedFile | None = None
        self._preview: str | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def file(self) -> StagedFile | None:
        return self._file

    @property
    def preview(self) -> str | None:
        return self._preview

    def select(self, file: StagedFile) -> None:
        """Stage ``file`` and start deriving its preview.

        Must be called from a running event loop.
        """
        validate_avatar(file)
        self._cancel_derivation()
        self._file = file
        self._preview = None
        self._task = asyncio.get_running_loop().create_task(self._derive_preview(file))

    async def wait_for_preview(self) -> str | None:
        """Wait for the in-flight preview derivation, if any."""
        if self._task is not None:
            await asyncio.wait({self._task})
        return self._preview

    def clear(self) -> None:
        """Discard the staged file and preview."""
        self._cancel_derivation()
        self._file = None
        self._preview = None

    async def _derive_preview(self, file: StagedFile) -> None:
        preview = await asyncio.to_thread(build_preview, file)
        # A newer selection or a clear() wins over this result.
        if self._file is file:
            self._preview = preview

    def _cancel_derivation(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
