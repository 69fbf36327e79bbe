"""Shared dependencies for API routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header

from profile_editor.services.collaborators import (
    CollectingNotifier,
    ObjectStore,
    RecordStore,
    SessionProvider,
    StaticSessionProvider,
)
from profile_editor.services.object_store import LocalObjectStore
from profile_editor.services.profile_editor import ProfileEditor
from profile_editor.services.record_store import SqlAlchemyRecordStore


def get_session_provider(
    x_account_id: Annotated[
        str | None,
        Header(
            description=(
                "Identity key of the caller. In production, this should be extracted "
                "from the authenticated session/JWT token."
            )
        ),
    ] = None,
) -> SessionProvider:
    """Resolve the caller identity from the X-Account-Id header.

    A missing header is not an error here; the editor turns it into a
    redirect to the login page.
    """
    return StaticSessionProvider(x_account_id)


def get_record_store() -> RecordStore:
    return SqlAlchemyRecordStore()


def get_object_store() -> LocalObjectStore:
    """Return the object store used for avatar uploads and downloads."""
    return LocalObjectStore()


def get_profile_editor(
    sessions: Annotated[SessionProvider, Depends(get_session_provider)],
    records: Annotated[RecordStore, Depends(get_record_store)],
    objects: Annotated[ObjectStore, Depends(get_object_store)],
) -> ProfileEditor:
    """Build a per-request editor that collects its notifications."""
    return ProfileEditor(sessions, records, objects, CollectingNotifier())
