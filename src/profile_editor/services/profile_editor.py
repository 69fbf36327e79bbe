"""Edit session for one caller's profile.

A :class:`ProfileEditor` owns the single view-model of a session and wires
it to the collaborators: it loads, applies user edits, stages an avatar and
saves. Failures are turned into one notification per action.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from profile_editor.config import get_login_url
from profile_editor.errors import AuthenticationMissing, FetchFailure, SaveStepFailure
from profile_editor.services import skill_list
from profile_editor.services.avatar_staging import AvatarStaging, StagedFile
from profile_editor.services.collaborators import (
    Notifier,
    ObjectStore,
    RecordStore,
    SessionProvider,
)
from profile_editor.services.profile_save import save_profile, utcnow
from profile_editor.services.profile_view import (
    ProfileChanges,
    ProfileView,
    apply_changes,
    load_profile_view,
)

logger = logging.getLogger(__name__)

SAVE_SUCCESS_MESSAGE = "Profile updated successfully"


class ProfileState(StrEnum):
    LOADING = "loading"
    PERSISTED = "persisted"
    DRAFT = "draft"


class NavigationAction(StrEnum):
    PROCEED = "proceed"
    REDIRECT_TO_LOGIN = "redirect_to_login"
    FAILED = "failed"


@dataclass(frozen=True)
class LoadResult:
    """Outcome of :meth:`ProfileEditor.load`."""

    action: NavigationAction
    view: ProfileView | None = None
    redirect_url: str | None = None
    message: str | None = None


class ProfileEditor:
    """Load, edit and save the current caller's profile.

    Args:
        sessions: Supplies the caller identity.
        records: Record store for accounts and extended profiles.
        objects: Object store for avatar uploads.
        notifier: Receives one success or error message per action.
        login_url: Redirect target when there is no caller identity.
        clock: Clock used to name avatar uploads.
    """

    def __init__(
        self,
        sessions: SessionProvider,
        records: RecordStore,
        objects: ObjectStore,
        notifier: Notifier,
        *,
        login_url: str | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.sessions = sessions
        self.records = records
        self.objects = objects
        self.notifier = notifier
        self.login_url = login_url or get_login_url()
        self.clock = clock
        self.avatar = AvatarStaging()
        self.view: ProfileView | None = None
        self.state = ProfileState.LOADING
        self.saving = False
        self.closed = False
        self._uploaded_avatar: StagedFile | None = None

    def _require_identity(self) -> str:
        identity = self.sessions.current_identity()
        if not identity:
            raise AuthenticationMissing("No authenticated caller")
        return identity

    def _require_view(self) -> ProfileView:
        if self.view is None:
            raise RuntimeError("Profile has not been loaded")
        return self.view

    async def load(self) -> LoadResult:
        """Fetch and merge the caller's records into the view."""
        try:
            identity = self._require_identity()
        except AuthenticationMissing:
            return LoadResult(NavigationAction.REDIRECT_TO_LOGIN, redirect_url=self.login_url)

        try:
            view = await load_profile_view(identity, self.records)
        except FetchFailure as exc:
            logger.exception("Failed to load profile for %s", identity)
            if not self.closed:
                self.notifier.error(str(exc))
            return LoadResult(NavigationAction.FAILED, message=str(exc))

        if self.closed:
            logger.debug("Editor closed before load completed; dropping result")
        else:
            self.view = view
            self.state = ProfileState.PERSISTED
        return LoadResult(NavigationAction.PROCEED, view=view)

    def _replace_view(self, view: ProfileView) -> None:
        if view != self.view:
            self.view = view
            self.state = ProfileState.DRAFT

    def edit(self, changes: ProfileChanges) -> ProfileView:
        """Apply a partial update of the editable fields."""
        self._replace_view(apply_changes(self._require_view(), changes))
        return self._require_view()

    def add_skill(self, candidate: str) -> bool:
        """Add a skill; returns False when the input was blank or a duplicate."""
        view = self._require_view()
        skills = skill_list.add_skill(view.skills, candidate)
        if skills == view.skills:
            return False
        self._replace_view(dataclasses.replace(view, skills=skills))
        return True

    def remove_skill(self, value: str) -> bool:
        view = self._require_view()
        skills = skill_list.remove_skill(view.skills, value)
        if skills == view.skills:
            return False
        self._replace_view(dataclasses.replace(view, skills=skills))
        return True

    def stage_avatar(self, file: StagedFile) -> None:
        """Stage a new avatar; it is uploaded on the next save."""
        self._require_view()
        self.avatar.select(file)
        self.state = ProfileState.DRAFT

    def _pending_avatar(self) -> StagedFile | None:
        file = self.avatar.file
        return None if file is self._uploaded_avatar else file

    async def save(self) -> bool:
        """Run the save sequence for the current draft.

        Returns:
            True if every step completed. False if a step failed, another
            save was already in flight, or the editor was closed meanwhile.
        """
        if self.saving:
            logger.debug("Save already in progress; ignoring")
            return False
        view = self._require_view()
        avatar_file = self._pending_avatar()

        self.saving = True
        try:
            outcome = await save_profile(
                view, avatar_file, self.records, self.objects, now=self.clock
            )
        except SaveStepFailure as exc:
            logger.exception("Failed to save profile for %s", view.account_id)
            if not self.closed:
                self.notifier.error(str(exc))
            return False
        finally:
            self.saving = False

        if self.closed:
            logger.debug("Editor closed before save completed; dropping result")
            return False

        # The staged file stays visible but must not be uploaded again.
        if avatar_file is not None:
            self._uploaded_avatar = avatar_file
        edited_meanwhile = self.view != view
        self.view = outcome.apply_to(self._require_view())
        if not edited_meanwhile and self._pending_avatar() is None:
            self.state = ProfileState.PERSISTED
        self.notifier.success(SAVE_SUCCESS_MESSAGE)
        return True

    def close(self) -> None:
        """Discard staged state; later completions become no-ops."""
        self.closed = True
        self.avatar.clear()
