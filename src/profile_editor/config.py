"""Environment-driven configuration for the profile editor.

Values are read from the process environment on every call so tests can
override them with ``monkeypatch.setenv``. A ``.env`` file in the working
directory is loaded once at import time.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_PUBLIC_BASE_URL = "/api/objects"
DEFAULT_LOGIN_URL = "/login"
DEFAULT_LOG_LEVEL = "INFO"

_PROJECT_ROOT = Path(__file__).resolve().parents[2]


def get_project_root() -> Path:
    """Return the repository root used for default on-disk locations."""
    return _PROJECT_ROOT


def get_storage_root() -> Path:
    """Return the root directory for uploaded objects."""
    env_root = os.getenv("PROFILE_EDITOR_STORAGE_DIR")
    if env_root:
        return Path(env_root).expanduser().resolve()
    return _PROJECT_ROOT / ".profile_uploads"


def get_public_base_url() -> str:
    """Return the URL prefix under which uploaded objects are served."""
    return os.getenv("PROFILE_EDITOR_PUBLIC_BASE_URL", DEFAULT_PUBLIC_BASE_URL).rstrip("/")


def get_login_url() -> str:
    """Return where unauthenticated callers are sent."""
    return os.getenv("PROFILE_EDITOR_LOGIN_URL", DEFAULT_LOGIN_URL)


def get_log_level() -> str:
    return os.getenv("PROFILE_EDITOR_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
