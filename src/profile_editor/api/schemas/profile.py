"""Pydantic schemas for profile API requests and responses."""

from __future__ import annotations

import dataclasses

from pydantic import BaseModel, Field

from profile_editor.services.collaborators import CollectingNotifier
from profile_editor.services.profile_editor import ProfileEditor


class NotificationResponse(BaseModel):
    """A message surfaced to the user."""

    level: str
    message: str


class ProfileViewResponse(BaseModel):
    """Merged account and extended profile data."""

    account_id: str
    first_name: str
    last_name: str
    phone: str
    email: str
    profile_id: int | None = None
    bio: str
    skills: list[str]
    hourly_rate: float
    portfolio_url: str
    github_url: str
    linkedin_url: str
    years_experience: int
    experience_years: int
    service_radius: int
    avatar_url: str | None = None
    average_rating: float | None = None
    total_jobs: int | None = None


class ProfileEditorResponse(BaseModel):
    """Profile view together with editor state and notifications."""

    profile: ProfileViewResponse
    state: str
    avatar_preview: str | None = None
    notifications: list[NotificationResponse] = Field(default_factory=list)

    @classmethod
    def from_editor(cls, editor: ProfileEditor) -> ProfileEditorResponse:
        view = editor.view
        if view is None:
            raise ValueError("Editor has no loaded profile")
        notifier = editor.notifier
        messages = notifier.messages if isinstance(notifier, CollectingNotifier) else []
        return cls(
            profile=ProfileViewResponse(**dataclasses.asdict(view)),
            state=str(editor.state),
            avatar_preview=editor.avatar.preview,
            notifications=[
                NotificationResponse(level=level, message=message) for level, message in messages
            ],
        )


class SkillRequest(BaseModel):
    """Request schema for adding a skill."""

    skill: str = Field(..., description="Skill name; surrounding whitespace is ignored")
