"""SQLAlchemy ORM model for content platforms."""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from content_engine.db.base import Base

if TYPE_CHECKING:
    from content_engine.models.keyword import KeywordService, KeywordTemplate


class Platform(Base):
    """Represents a row in the ``platforms`` table.

    A platform (SOS-Expat, Ulixai) owns its own keyword services,
    templates and generated combinations.
    """

    __tablename__ = "platforms"

    # ------------------------------------------------------------------ #
    # Columns                                                             #
    # ------------------------------------------------------------------ #
    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        comment="Display name used in rendered keywords (e.g., 'SOS-Expat')"
    )
    slug: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        index=True
    )
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=lambda: datetime.datetime.now(datetime.timezone.utc)
    )

    # ------------------------------------------------------------------ #
    # Relationships                                                       #
    # ------------------------------------------------------------------ #
    services: Mapped[list[KeywordService]] = relationship(
        "KeywordService",
        back_populates="platform",
        cascade="all, delete-orphan"
    )
    templates: Mapped[list[KeywordTemplate]] = relationship(
        "KeywordTemplate",
        back_populates="platform",
        cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:  # noqa: D401 – we want a short repr
        return f"Platform(id={self.id!r}, name={self.name!r})"
