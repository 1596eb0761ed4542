"""SQLAlchemy ORM models for the SEO keyword system."""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON, Boolean, DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from content_engine.core.enums import IntentType, PhraseType, SeoTemplateType
from content_engine.db.base import Base

if TYPE_CHECKING:
    from content_engine.models.platform import Platform


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class KeywordService(Base):
    """Represents a row in the ``keyword_services`` table.

    A service is the subject of a keyword (e.g., "lawyer", "translator"),
    stored with its display text in every supported language.
    """

    __tablename__ = "keyword_services"

    # ------------------------------------------------------------------ #
    # Columns                                                             #
    # ------------------------------------------------------------------ #
    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    platform_id: Mapped[int] = mapped_column(
        ForeignKey("platforms.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    service_key: Mapped[str] = mapped_column(
        String(150),
        nullable=False,
        comment="Underscore slug of the English (or French) name"
    )
    translations: Mapped[dict[str, str]] = mapped_column(
        JSON,
        nullable=False,
        comment="Language code -> localized service text"
    )
    category: Mapped[str] = mapped_column(String(100), nullable=False, default="general")
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=50)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow, onupdate=_utcnow
    )

    # ------------------------------------------------------------------ #
    # Relationships                                                       #
    # ------------------------------------------------------------------ #
    platform: Mapped[Platform] = relationship("Platform", back_populates="services")

    # ------------------------------------------------------------------ #
    # Table Constraints                                                   #
    # ------------------------------------------------------------------ #
    __table_args__ = (
        UniqueConstraint('platform_id', 'service_key', name='uq_keyword_service_platform_key'),
    )

    def __repr__(self) -> str:  # noqa: D401 – we want a short repr
        return (
            f"KeywordService(id={self.id!r}, platform_id={self.platform_id!r}, "
            f"service_key={self.service_key!r})"
        )


class KeywordTemplate(Base):
    """Represents a row in the ``keyword_templates`` table.

    The pattern holds ``{service}``, ``{country}`` or ``{platform}``
    placeholders, optionally with a ``_lower`` suffix.
    """

    __tablename__ = "keyword_templates"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    platform_id: Mapped[int] = mapped_column(
        ForeignKey("platforms.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    template_key: Mapped[str] = mapped_column(
        String(150),
        nullable=False,
        unique=True,
        comment="Platform id prefixed slug (e.g., '1_service_country')"
    )
    pattern: Mapped[str] = mapped_column(String(255), nullable=False)
    variables: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    intent_type: Mapped[IntentType] = mapped_column(
        String(20),
        nullable=False,
        default=IntentType.INFORMATIONAL.value
    )
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=50)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow, onupdate=_utcnow
    )

    platform: Mapped[Platform] = relationship("Platform", back_populates="templates")

    def __repr__(self) -> str:  # noqa: D401 – we want a short repr
        return f"KeywordTemplate(id={self.id!r}, pattern={self.pattern!r})"


class KeywordSeoTemplate(Base):
    """Represents a row in the ``keyword_seo_templates`` table."""

    __tablename__ = "keyword_seo_templates"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    platform_id: Mapped[int] = mapped_column(
        ForeignKey("platforms.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    template_key: Mapped[str] = mapped_column(String(150), nullable=False, unique=True)
    language_code: Mapped[str] = mapped_column(String(5), nullable=False, index=True)
    template_type: Mapped[SeoTemplateType] = mapped_column(
        String(30),
        nullable=False,
        default=SeoTemplateType.TITLE.value
    )
    template: Mapped[str] = mapped_column(String(255), nullable=False)
    variables: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    max_length: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=60,
        comment="Maximum rendered length in characters"
    )
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=50)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow, onupdate=_utcnow
    )


class KeywordNaturalPhrase(Base):
    """Represents a row in the ``keyword_natural_phrases`` table.

    Sentence snippets used to weave a keyword into article text.
    """

    __tablename__ = "keyword_natural_phrases"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    language_code: Mapped[str] = mapped_column(String(5), nullable=False, index=True)
    phrase_type: Mapped[PhraseType] = mapped_column(String(20), nullable=False)
    template: Mapped[str] = mapped_column(Text, nullable=False)
    variables: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=50)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow, onupdate=_utcnow
    )

    __table_args__ = (
        UniqueConstraint('language_code', 'template', name='uq_natural_phrase_language_template'),
    )


class KeywordCombination(Base):
    """Represents a row in the ``keyword_combinations`` table.

    One row per service x template x country x language. Search volume and
    competition are placeholders filled in by later enrichment.
    """

    __tablename__ = "keyword_combinations"

    # ------------------------------------------------------------------ #
    # Columns                                                             #
    # ------------------------------------------------------------------ #
    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    platform_id: Mapped[int] = mapped_column(
        ForeignKey("platforms.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    service_id: Mapped[int] = mapped_column(
        ForeignKey("keyword_services.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    template_id: Mapped[int] = mapped_column(
        ForeignKey("keyword_templates.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    country_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        comment="Country identifier from the import workbook"
    )
    language_code: Mapped[str] = mapped_column(String(5), nullable=False, index=True)
    keyword_text: Mapped[str] = mapped_column(String(255), nullable=False)
    keyword_normalized: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Lower-case ASCII projection used for deduplication"
    )
    intent_type: Mapped[IntentType] = mapped_column(String(20), nullable=False)
    search_volume: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    competition: Mapped[float] = mapped_column(Float, nullable=False, default=0.50)
    priority_score: Mapped[int] = mapped_column(Integer, nullable=False, default=50)
    usage_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow, onupdate=_utcnow
    )

    def __repr__(self) -> str:  # noqa: D401 – we want a short repr
        return (
            f"KeywordCombination(id={self.id!r}, language_code={self.language_code!r}, "
            f"keyword_text={self.keyword_text!r})"
        )
