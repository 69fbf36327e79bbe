"""Merge an account and its extended profile into one editable view.

The view is a flat, immutable snapshot. Edits go through
:class:`ProfileChanges`, which only accepts the editable fields, and produce
a new view.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from profile_editor.errors import FetchFailure, RecordStoreError
from profile_editor.services.collaborators import ACCOUNTS_TABLE, PROFILES_TABLE, RecordStore
from profile_editor.services.skill_list import normalize_skills

logger = logging.getLogger(__name__)

__all__ = [
    "ACCOUNT_FIELDS",
    "PROFILE_FIELDS",
    "ProfileChanges",
    "ProfileView",
    "apply_changes",
    "load_profile_view",
    "merge_profile_view",
]

# Account columns editable through this service
ACCOUNT_FIELDS = ("first_name", "last_name", "phone")

# ExtendedProfile columns written on save; rating and job count are read-only
PROFILE_FIELDS = (
    "bio",
    "skills",
    "hourly_rate",
    "portfolio_url",
    "github_url",
    "linkedin_url",
    "years_experience",
    "experience_years",
    "service_radius",
    "avatar_url",
)


@dataclass(frozen=True)
class ProfileView:
    """Flattened account + extended profile data.

    ``profile_id`` is None until an extended profile has been stored.
    """

    account_id: str
    first_name: str = ""
    last_name: str = ""
    phone: str = ""
    email: str = ""
    profile_id: int | None = None
    bio: str = ""
    skills: tuple[str, ...] = ()
    hourly_rate: float = 0.0
    portfolio_url: str = ""
    github_url: str = ""
    linkedin_url: str = ""
    years_experience: int = 0
    experience_years: int = 0
    service_radius: int = 0
    avatar_url: str | None = None
    average_rating: float | None = None
    total_jobs: int | None = None

    def account_fields(self) -> dict[str, str]:
        return {name: getattr(self, name) for name in ACCOUNT_FIELDS}

    def profile_fields(self) -> dict[str, Any]:
        """Return the extended profile columns to persist."""
        fields = {name: getattr(self, name) for name in PROFILE_FIELDS}
        fields["skills"] = list(self.skills)
        return fields


class ProfileChanges(BaseModel):
    """Partial update of the editable view fields.

    Unknown keys are rejected. Only fields that were explicitly set are applied.
    """

    model_config = ConfigDict(extra="forbid")

    first_name: str | None = Field(None, description="First name")
    last_name: str | None = Field(None, description="Last name")
    phone: str | None = Field(None, description="Phone number")
    bio: str | None = Field(None, description="Free-text introduction")
    skills: list[str] | None = Field(None, description="Full replacement skill list")
    hourly_rate: float | None = Field(None, ge=0, description="Hourly rate")
    portfolio_url: str | None = Field(None, description="Portfolio link")
    github_url: str | None = Field(None, description="Source code profile link")
    linkedin_url: str | None = Field(None, description="Social profile link")
    years_experience: int | None = Field(None, ge=0, description="Years of experience")
    experience_years: int | None = Field(None, ge=0, description="Years of experience (rates)")
    service_radius: int | None = Field(None, ge=1, le=100, description="Service radius")


def apply_changes(view: ProfileView, changes: ProfileChanges) -> ProfileView:
    """Return a copy of ``view`` with the explicitly set fields replaced.

    Explicit nulls are ignored since every editable field is non-nullable in
    the view.
    """
    updates = {
        name: value
        for name, value in changes.model_dump(exclude_unset=True).items()
        if value is not None
    }
    if "skills" in updates:
        updates["skills"] = normalize_skills(updates["skills"])
    return dataclasses.replace(view, **updates)


def _text(record: dict[str, Any] | None, name: str) -> str:
    if not record:
        return ""
    return record.get(name) or ""


def _number(record: dict[str, Any] | None, name: str, cast: type) -> Any:
    if not record or record.get(name) is None:
        return cast(0)
    return cast(record[name])


def merge_profile_view(
    account_id: str,
    account: dict[str, Any] | None,
    profile: dict[str, Any] | None,
) -> ProfileView:
    """Combine the two records, falling back to defaults for absent fields."""
    return ProfileView(
        account_id=account_id,
        first_name=_text(account, "first_name"),
        last_name=_text(account, "last_name"),
        phone=_text(account, "phone"),
        email=_text(account, "email"),
        profile_id=profile.get("id") if profile else None,
        bio=_text(profile, "bio"),
        skills=normalize_skills(profile.get("skills") if profile else None),
        hourly_rate=_number(profile, "hourly_rate", float),
        portfolio_url=_text(profile, "portfolio_url"),
        github_url=_text(profile, "github_url"),
        linkedin_url=_text(profile, "linkedin_url"),
        years_experience=_number(profile, "years_experience", int),
        experience_years=_number(profile, "experience_years", int),
        service_radius=_number(profile, "service_radius", int),
        avatar_url=(profile.get("avatar_url") or None) if profile else None,
        average_rating=profile.get("average_rating") if profile else None,
        total_jobs=profile.get("total_jobs") if profile else None,
    )


async def load_profile_view(account_id: str, records: RecordStore) -> ProfileView:
    """Fetch the account and its extended profile and merge them.

    A missing account is tolerated the same way as a missing profile and
    yields empty account fields.

    Raises:
        FetchFailure: If either fetch fails for a reason other than "no match".
    """
    try:
        account = await records.fetch_one(ACCOUNTS_TABLE, id=account_id)
    except RecordStoreError as exc:
        raise FetchFailure(f"Failed to load account: {exc}") from exc
    if account is None:
        logger.warning("No account record for %s; using empty account fields", account_id)

    try:
        profile = await records.fetch_one(PROFILES_TABLE, account_id=account_id)
    except RecordStoreError as exc:
        raise FetchFailure(f"Failed to load profile: {exc}") from exc

    return merge_profile_view(account_id, account, profile)
