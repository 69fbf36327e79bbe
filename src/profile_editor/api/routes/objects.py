"""Routes serving uploaded objects at their public addresses."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse

from profile_editor.api.dependencies import get_object_store
from profile_editor.errors import ObjectStoreError
from profile_editor.services.object_store import LocalObjectStore, get_media_type

router = APIRouter(prefix="/objects", tags=["objects"])


@router.get(
    "/{bucket}/{name}",
    summary="Get an uploaded object",
    responses={
        200: {"description": "Stored object"},
        404: {"description": "Object not found"},
    },
)
def get_object(
    bucket: str,
    name: str,
    store: Annotated[LocalObjectStore, Depends(get_object_store)],
) -> FileResponse:
    try:
        path = store.open_object(bucket, name)
    except ObjectStoreError:
        path = None
    if path is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Object not found.")
    return FileResponse(path, media_type=get_media_type(path))
