"""Services"""

from profile_editor.services.profile_editor import (
    LoadResult,
    NavigationAction,
    ProfileEditor,
    ProfileState,
)
from profile_editor.services.profile_save import SaveOutcome, save_profile
from profile_editor.services.profile_view import (
    ProfileChanges,
    ProfileView,
    apply_changes,
    load_profile_view,
)
from profile_editor.services.skill_list import add_skill, can_add_skill, remove_skill

__all__ = [
    "LoadResult",
    "NavigationAction",
    "ProfileChanges",
    "ProfileEditor",
    "ProfileState",
    "ProfileView",
    "SaveOutcome",
    "add_skill",
    "apply_changes",
    "can_add_skill",
    "load_profile_view",
    "remove_skill",
    "save_profile",
]
