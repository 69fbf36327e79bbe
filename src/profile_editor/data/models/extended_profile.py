"""ExtendedProfile model for the professional side of an account.

It has a 1:1 relationship with Account and only exists once the account
holder has saved their profile at least once.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import JSON, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from profile_editor.data.db import Base

if TYPE_CHECKING:
    from profile_editor.data.models.account import Account


class ExtendedProfile(Base):
    """Extended profile with bio, skills, rates and links.

    Attributes:
        id: Store-assigned surrogate key.
        account_id: Foreign key to accounts table (unique, 1:1 relationship).
        bio: Free-text introduction.
        skills: Ordered list of unique skill names.
        hourly_rate: Asking rate per hour.
        portfolio_url: Portfolio link.
        github_url: Source code profile link.
        linkedin_url: Social profile link.
        years_experience: Years of experience.
        experience_years: Years of experience as entered on the rates form.
        service_radius: Service radius, intended range 1-100.
        avatar_url: Public address of the uploaded avatar.
        average_rating: Externally computed rating, read-only here.
        total_jobs: Externally computed job count, read-only here.
        updated_at: UTC timestamp when the profile was last updated.
    """

    __tablename__ = "extended_profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    account_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )

    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    skills: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    hourly_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    portfolio_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    github_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    linkedin_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    years_experience: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    experience_years: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    service_radius: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    avatar_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    average_rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    total_jobs: Mapped[int | None] = mapped_column(Integer, nullable=True)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    account: Mapped[Account] = relationship("Account", back_populates="profile")
