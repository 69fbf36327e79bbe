"""Exception types raised by the profile editor services."""

from __future__ import annotations


class AuthenticationMissing(Exception):
    """Raised when no caller identity is available."""


class RecordStoreError(RuntimeError):
    """Raised when the record store fails for a reason other than "no match"."""


class ObjectStoreError(RuntimeError):
    """Raised when an object cannot be stored or addressed."""


class FetchFailure(RuntimeError):
    """Raised when loading the profile view fails."""


class AvatarRejected(ValueError):
    """Raised when a selected avatar file is not an acceptable image."""


class SaveStepFailure(RuntimeError):
    """Raised when one step of the profile save sequence fails.

    Attributes:
        step: Name of the failed step (``account``, ``avatar`` or ``profile``).
        cause: The underlying exception.
    """

    def __init__(self, step: str, cause: BaseException) -> None:
        super().__init__(f"{step} step failed: {cause}")
        self.step = step
        self.cause = cause
