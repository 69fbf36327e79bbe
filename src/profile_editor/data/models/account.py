"""Account model holding the base contact fields of an authenticated caller.

The account row is owned by the identity system; this service only edits
the name and phone columns. Email is read-only here.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from profile_editor.data.db import Base

if TYPE_CHECKING:
    from profile_editor.data.models.extended_profile import ExtendedProfile


class Account(Base):
    """Base account record.

    Attributes:
        id: Identity key issued by the session provider (immutable).
        first_name: Account holder's first name.
        last_name: Account holder's last name.
        phone: Contact phone number.
        email: Login email address.
        created_at: UTC timestamp when the account was created.
    """

    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    first_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )

    profile: Mapped[ExtendedProfile | None] = relationship(
        "ExtendedProfile", back_populates="account", uselist=False, cascade="all, delete-orphan"
    )
