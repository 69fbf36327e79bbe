"""Route handlers for the API."""

from profile_editor.api.routes import health, objects, profile

__all__ = ["health", "objects", "profile"]
