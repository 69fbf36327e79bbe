"""ORM models package for database tables.

This package provides SQLAlchemy ORM models representing database tables:
- Account: Base contact fields keyed by the caller's identity
- ExtendedProfile: Bio, skills, rates, links and avatar for an account

All models inherit from the shared Base declarative class defined in data.db.
"""

from profile_editor.data.db import Base
from profile_editor.data.models.account import Account
from profile_editor.data.models.extended_profile import ExtendedProfile

__all__ = ["Account", "Base", "ExtendedProfile"]
