"""Save sequence for the profile view.

The three steps run strictly in order and stop at the first failure:

1. update the account's editable fields
2. upload the staged avatar (if any) and resolve its public address
3. insert or update the extended profile, depending on ``profile_id``

Earlier steps are not rolled back when a later one fails.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from profile_editor.errors import RecordStoreError, SaveStepFailure
from profile_editor.services.avatar_staging import StagedFile
from profile_editor.services.collaborators import (
    ACCOUNTS_TABLE,
    AVATAR_BUCKET,
    PROFILES_TABLE,
    ObjectStore,
    RecordStore,
)
from profile_editor.services.profile_view import ProfileView

logger = logging.getLogger(__name__)

__all__ = ["SaveOutcome", "avatar_object_name", "save_profile", "utcnow"]


@dataclass(frozen=True)
class SaveOutcome:
    """Keys and addresses confirmed by a completed save."""

    profile_id: int
    avatar_url: str | None
    inserted: bool

    def apply_to(self, view: ProfileView) -> ProfileView:
        return dataclasses.replace(view, profile_id=self.profile_id, avatar_url=self.avatar_url)


def utcnow() -> datetime:
    return datetime.now(UTC)


def avatar_object_name(account_id: str, file: StagedFile, now: datetime) -> str:
    """Return a per-upload object name so successive uploads never collide."""
    return f"{account_id}-{int(now.timestamp() * 1000)}{file.extension}"


async def _upload_avatar(
    view: ProfileView, file: StagedFile, objects: ObjectStore, now: datetime
) -> str:
    name = avatar_object_name(view.account_id, file, now)
    await objects.upload(AVATAR_BUCKET, name, file.data, content_type=file.mime_type)
    return objects.public_address(AVATAR_BUCKET, name)


async def save_profile(
    view: ProfileView,
    avatar_file: StagedFile | None,
    records: RecordStore,
    objects: ObjectStore,
    *,
    now: Callable[[], datetime] = utcnow,
) -> SaveOutcome:
    """Persist ``view`` and the optional staged avatar.

    Args:
        view: Current draft.
        avatar_file: Staged avatar to upload, or None to keep ``view.avatar_url``.
        records: Record store holding accounts and extended profiles.
        objects: Object store receiving avatar uploads.
        now: Clock used to name the uploaded avatar.

    Returns:
        SaveOutcome with the surrogate key and effective avatar address.

    Raises:
        SaveStepFailure: For the first step that fails.
    """
    if not view.account_id:
        raise SaveStepFailure("account", ValueError("missing account identity"))

    try:
        matched = await records.update(ACCOUNTS_TABLE, view.account_id, view.account_fields())
    except Exception as exc:
        raise SaveStepFailure("account", exc) from exc
    if not matched:
        logger.warning("No account record for %s; account fields not saved", view.account_id)

    avatar_url = view.avatar_url
    if avatar_file is not None:
        try:
            avatar_url = await _upload_avatar(view, avatar_file, objects, now())
        except Exception as exc:
            raise SaveStepFailure("avatar", exc) from exc
        logger.info("Uploaded avatar for %s to %s", view.account_id, avatar_url)

    fields = view.profile_fields()
    fields["avatar_url"] = avatar_url
    try:
        if view.profile_id is not None:
            if not await records.update(PROFILES_TABLE, view.profile_id, fields):
                raise RecordStoreError(f"No extended profile with key {view.profile_id!r}")
            return SaveOutcome(profile_id=view.profile_id, avatar_url=avatar_url, inserted=False)

        profile_id = await records.insert(
            PROFILES_TABLE, {"account_id": view.account_id, **fields}
        )
    except Exception as exc:
        raise SaveStepFailure("profile", exc) from exc

    logger.info("Created extended profile %s for %s", profile_id, view.account_id)
    return SaveOutcome(profile_id=profile_id, avatar_url=avatar_url, inserted=True)
