"""Profile routes: view, save, and skill editing for the current caller."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, Path, UploadFile, status
from fastapi.responses import RedirectResponse
from pydantic import ValidationError

from profile_editor.api.dependencies import get_profile_editor
from profile_editor.api.schemas.profile import ProfileEditorResponse, SkillRequest
from profile_editor.errors import AvatarRejected
from profile_editor.services.avatar_staging import StagedFile
from profile_editor.services.collaborators import CollectingNotifier
from profile_editor.services.profile_editor import NavigationAction, ProfileEditor
from profile_editor.services.profile_view import ProfileChanges
from profile_editor.services.skill_list import can_add_skill

router = APIRouter(prefix="/profile", tags=["profile"])

_RESPONSES = {
    303: {"description": "No authenticated caller; redirect to login"},
    502: {"description": "The record or object store failed"},
}


async def _load(editor: ProfileEditor) -> RedirectResponse | None:
    """Load the editor, returning a redirect when the caller is unauthenticated.

    Raises:
        HTTPException: If loading failed (502).
    """
    result = await editor.load()
    if result.action == NavigationAction.REDIRECT_TO_LOGIN:
        return RedirectResponse(result.redirect_url, status_code=status.HTTP_303_SEE_OTHER)
    if result.action == NavigationAction.FAILED:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=result.message)
    return None


async def _save(editor: ProfileEditor) -> ProfileEditorResponse:
    saved = await editor.save()
    if not saved:
        notifier = editor.notifier
        errors = notifier.errors if isinstance(notifier, CollectingNotifier) else []
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=errors[-1] if errors else "Failed to save profile",
        )
    return ProfileEditorResponse.from_editor(editor)


@router.get("", response_model=ProfileEditorResponse, responses=_RESPONSES)
async def get_profile(
    editor: Annotated[ProfileEditor, Depends(get_profile_editor)],
) -> ProfileEditorResponse | RedirectResponse:
    """Get the merged account and extended profile of the current caller."""
    redirect = await _load(editor)
    if redirect is not None:
        return redirect
    return ProfileEditorResponse.from_editor(editor)


@router.put(
    "",
    response_model=ProfileEditorResponse,
    responses={400: {"description": "Invalid changes or avatar"}, **_RESPONSES},
)
async def save_profile(
    editor: Annotated[ProfileEditor, Depends(get_profile_editor)],
    changes: Annotated[
        str | None, Form(description="JSON object with the edited profile fields")
    ] = None,
    avatar: Annotated[UploadFile | None, File(description="New avatar image")] = None,
) -> ProfileEditorResponse | RedirectResponse:
    """Apply edits, stage an optional avatar and save the profile.

    Raises:
        HTTPException: If the changes or avatar are invalid (400) or a save
            step failed (502).
    """
    redirect = await _load(editor)
    if redirect is not None:
        return redirect

    if changes:
        try:
            editor.edit(ProfileChanges.model_validate_json(changes))
        except ValidationError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid profile changes: {exc.errors(include_url=False)}",
            ) from exc

    if avatar is not None:
        data = await avatar.read()
        try:
            editor.stage_avatar(
                StagedFile(
                    filename=avatar.filename or "avatar",
                    data=data,
                    content_type=avatar.content_type,
                )
            )
        except AvatarRejected as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
        await editor.avatar.wait_for_preview()

    return await _save(editor)


@router.post(
    "/skills",
    response_model=ProfileEditorResponse,
    responses={400: {"description": "Blank skill"}, **_RESPONSES},
)
async def add_skill(
    request: SkillRequest,
    editor: Annotated[ProfileEditor, Depends(get_profile_editor)],
) -> ProfileEditorResponse | RedirectResponse:
    """Add a skill and save. Adding an existing skill changes nothing."""
    redirect = await _load(editor)
    if redirect is not None:
        return redirect

    if not can_add_skill(request.skill):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Skill cannot be empty",
        )
    if not editor.add_skill(request.skill):
        return ProfileEditorResponse.from_editor(editor)
    return await _save(editor)


@router.delete(
    "/skills/{skill:path}", response_model=ProfileEditorResponse, responses=_RESPONSES
)
async def remove_skill(
    skill: Annotated[str, Path(description="Skill to remove")],
    editor: Annotated[ProfileEditor, Depends(get_profile_editor)],
) -> ProfileEditorResponse | RedirectResponse:
    """Remove a skill and save. Removing an unknown skill changes nothing."""
    redirect = await _load(editor)
    if redirect is not None:
        return redirect

    if not editor.remove_skill(skill):
        return ProfileEditorResponse.from_editor(editor)
    return await _save(editor)
