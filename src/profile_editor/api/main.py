"""FastAPI application entry point for the profile editor API."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from profile_editor.api.routes import health, objects, profile
from profile_editor.config import get_log_level

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize resources on startup and clean up on shutdown."""
    from profile_editor.data.db import init_db

    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_db()
    yield


app = FastAPI(
    title="Profile Editor API",
    description="API for viewing and editing account and extended profile data",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(profile.router, prefix="/api")
app.include_router(objects.router, prefix="/api")


def main() -> None:
    """Start the development server."""
    import uvicorn

    uvicorn.run(
        "profile_editor.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
