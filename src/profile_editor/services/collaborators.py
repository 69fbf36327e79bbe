"""Interfaces for the external collaborators of the profile editor.

The editor never reaches into global session or storage state; it is handed
one implementation of each of these classes instead.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

notification_logger = logging.getLogger("profile_editor.notifications")

ACCOUNTS_TABLE = "accounts"
PROFILES_TABLE = "extended_profiles"
AVATAR_BUCKET = "avatars"


class SessionProvider(ABC):
    """Supplies the identity of the current caller."""

    @abstractmethod
    def current_identity(self) -> str | None:
        """Return the caller's identity key, or None when unauthenticated."""


class RecordStore(ABC):
    """Per-record CRUD over named tables."""

    @abstractmethod
    async def fetch_one(self, table: str, **filters: Any) -> dict[str, Any] | None:
        """Return the single record matching ``filters``.

        Returns:
            The record as a dictionary, or None if nothing matches.

        Raises:
            RecordStoreError: For every failure other than "no matching record".
        """

    @abstractmethod
    async def update(self, table: str, key: Any, fields: dict[str, Any]) -> bool:
        """Update the record identified by ``key`` with ``fields``.

        Returns False when no record has that key.
        """

    @abstractmethod
    async def insert(self, table: str, fields: dict[str, Any]) -> Any:
        """Insert a new record and return the key assigned by the store."""


class ObjectStore(ABC):
    """Binary object storage with public addresses."""

    @abstractmethod
    async def upload(
        self, bucket: str, name: str, data: bytes, content_type: str | None = None
    ) -> None:
        """Store ``data`` under ``bucket``/``name``."""

    @abstractmethod
    def public_address(self, bucket: str, name: str) -> str:
        """Return a durable public URL for a stored object."""


class Notifier(ABC):
    """Fire-and-forget user notifications."""

    @abstractmethod
    def success(self, message: str) -> None: ...

    @abstractmethod
    def error(self, message: str) -> None: ...


class StaticSessionProvider(SessionProvider):
    """Session provider for an identity resolved up front (request header, test)."""

    def __init__(self, identity: str | None) -> None:
        self._identity = identity.strip() if identity else None

    def current_identity(self) -> str | None:
        return self._identity or None


class LoggingNotifier(Notifier):
    """Write notifications to the ``profile_editor.notifications`` logger."""

    def success(self, message: str) -> None:
        notification_logger.info(message)

    def error(self, message: str) -> None:
        notification_logger.error(message)


class CollectingNotifier(LoggingNotifier):
    """Keep notifications in memory so a caller can return them.

    Messages are also logged.
    """

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def success(self, message: str) -> None:
        super().success(message)
        self.messages.append(("success", message))

    def error(self, message: str) -> None:
        super().error(message)
        self.messages.append(("error", message))

    @property
    def errors(self) -> list[str]:
        return [message for level, message in self.messages if level == "error"]

    @property
    def successes(self) -> list[str]:
        return [message for level, message in self.messages if level == "success"]
