"""CRUD operations for platforms and the SEO keyword tables."""

from __future__ import annotations

import datetime
from collections.abc import Sequence
from typing import Any

from sqlalchemy import delete, func, insert, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from content_engine.models.keyword import (
    KeywordCombination,
    KeywordNaturalPhrase,
    KeywordSeoTemplate,
    KeywordService,
    KeywordTemplate,
)
from content_engine.models.platform import Platform
from content_engine.schemas.keyword import (
    KeywordCombinationCreate,
    KeywordNaturalPhraseCreate,
    KeywordSeoTemplateCreate,
    KeywordServiceCreate,
    KeywordServiceRead,
    KeywordTemplateCreate,
    KeywordTemplateRead,
    PlatformCombinationCount,
    PlatformCreate,
    PlatformRead,
    SeedSummary,
)
from content_engine.services.keywords.generator import BulkInsertSink


# ================================================================== #
# Upsert Helpers                                                     #
# ================================================================== #

_DIALECT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def _upsert(
        db: Session,
        model: type,
        rows: list[dict[str, Any]],
        conflict_columns: Sequence[str],
) -> None:
    """Insert ``rows``, updating every other column on natural-key conflict.

    Args:
        db: Database session
        model: ORM model class
        rows: Column -> value mappings, all with the same keys
        conflict_columns: Columns of the unique constraint to upsert on

    Raises:
        NotImplementedError: If the database dialect has no upsert support here
    """
    if not rows:
        return

    dialect = db.get_bind().dialect.name
    try:
        dialect_insert = _DIALECT_INSERTS[dialect]
    except KeyError:
        raise NotImplementedError(f"Upsert is not supported for dialect '{dialect}'") from None

    stmt = dialect_insert(model).values(rows)
    updated = {
        column: stmt.excluded[column]
        for column in rows[0]
        if column not in conflict_columns and column != "created_at"
    }
    db.execute(stmt.on_conflict_do_update(index_elements=list(conflict_columns), set_=updated))


def _stamped(data: dict[str, Any], now: datetime.datetime, *, updated: bool = True) -> dict[str, Any]:
    data["created_at"] = now
    if updated:
        data["updated_at"] = now
    return data


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


# ================================================================== #
# Platform Operations                                                #
# ================================================================== #

def upsert_platforms(db: Session, platforms: Sequence[PlatformCreate]) -> list[PlatformRead]:
    """Insert or rename platforms keyed on their id.

    Args:
        db: Database session
        platforms: Platforms to store

    Returns:
        All platforms, ordered by id
    """
    now = _utcnow()
    _upsert(
        db,
        Platform,
        [_stamped(p.model_dump(), now, updated=False) for p in platforms],
        conflict_columns=["id"],
    )
    return get_all_platforms(db)


def get_all_platforms(db: Session) -> list[PlatformRead]:
    """Get all platforms, ordered by id."""
    platforms = db.scalars(
        select(Platform)
        .order_by(Platform.id)
        .execution_options(populate_existing=True)
    ).all()
    return [PlatformRead.model_validate(p) for p in platforms]


# ================================================================== #
# Service Operations                                                 #
# ================================================================== #

def upsert_services(db: Session, services: Sequence[KeywordServiceCreate]) -> int:
    """Insert services or refresh existing ones keyed on (platform_id, service_key).

    Duplicate keys within ``services`` keep the last occurrence.

    Returns:
        Number of distinct services written
    """
    now = _utcnow()
    unique = {(s.platform_id, s.service_key): s for s in services}
    _upsert(
        db,
        KeywordService,
        [_stamped(s.model_dump(), now) for s in unique.values()],
        conflict_columns=["platform_id", "service_key"],
    )
    return len(unique)


def get_services_by_platform(db: Session, platform_id: int) -> list[KeywordServiceRead]:
    """Get all services of a platform, ordered by id.

    Args:
        db: Database session
        platform_id: Platform ID to filter by

    Returns:
        List of service schemas
    """
    services = db.scalars(
        select(KeywordService)
        .where(KeywordService.platform_id == platform_id)
        .order_by(KeywordService.id)
        .execution_options(populate_existing=True)
    ).all()
    return [KeywordServiceRead.model_validate(s) for s in services]


# ================================================================== #
# Template Operations                                                #
# ================================================================== #

def upsert_keyword_templates(db: Session, templates: Sequence[KeywordTemplateCreate]) -> int:
    """Insert keyword templates or refresh existing ones keyed on template_key."""
    now = _utcnow()
    unique = {t.template_key: t for t in templates}
    _upsert(
        db,
        KeywordTemplate,
        [_stamped(t.model_dump(), now) for t in unique.values()],
        conflict_columns=["template_key"],
    )
    return len(unique)


def get_active_templates_by_platform(db: Session, platform_id: int) -> list[KeywordTemplateRead]:
    """Get the active keyword templates of a platform, ordered by id."""
    templates = db.scalars(
        select(KeywordTemplate)
        .where(KeywordTemplate.platform_id == platform_id, KeywordTemplate.is_active.is_(True))
        .order_by(KeywordTemplate.id)
        .execution_options(populate_existing=True)
    ).all()
    return [KeywordTemplateRead.model_validate(t) for t in templates]


def upsert_seo_templates(db: Session, templates: Sequence[KeywordSeoTemplateCreate]) -> int:
    """Insert SEO templates or refresh existing ones keyed on template_key."""
    now = _utcnow()
    unique = {t.template_key: t for t in templates}
    _upsert(
        db,
        KeywordSeoTemplate,
        [_stamped(t.model_dump(), now) for t in unique.values()],
        conflict_columns=["template_key"],
    )
    return len(unique)


def upsert_natural_phrases(db: Session, phrases: Sequence[KeywordNaturalPhraseCreate]) -> int:
    """Insert natural phrases or refresh existing ones keyed on (language_code, template)."""
    now = _utcnow()
    unique = {(p.language_code, p.template): p for p in phrases}
    _upsert(
        db,
        KeywordNaturalPhrase,
        [_stamped(p.model_dump(), now) for p in unique.values()],
        conflict_columns=["language_code", "template"],
    )
    return len(unique)


# ================================================================== #
# Combination Operations                                             #
# ================================================================== #

def bulk_insert_combinations(db: Session, combinations: Sequence[KeywordCombinationCreate]) -> None:
    """Write one batch of combinations with a single multi-row INSERT."""
    if not combinations:
        return
    now = _utcnow()
    db.execute(
        insert(KeywordCombination),
        [_stamped(c.model_dump(), now) for c in combinations],
    )


def combination_sink(db: Session) -> BulkInsertSink:
    """Return a sink that bulk inserts each batch through ``db``."""

    def _sink(batch: list[KeywordCombinationCreate]) -> None:
        bulk_insert_combinations(db, batch)

    return _sink


def delete_combinations(db: Session, platform_id: int | None = None) -> int:
    """Delete generated combinations, optionally only those of one platform.

    Returns:
        Number of rows deleted
    """
    stmt = delete(KeywordCombination)
    if platform_id is not None:
        stmt = stmt.where(KeywordCombination.platform_id == platform_id)
    return db.execute(stmt).rowcount


# ================================================================== #
# Statistics                                                         #
# ================================================================== #

def _count(db: Session, model: type) -> int:
    return db.scalar(select(func.count()).select_from(model)) or 0


def get_keyword_statistics(db: Session) -> SeedSummary:
    """Count the rows of every keyword table and the combinations per platform.

    Args:
        db: Database session

    Returns:
        Summary of table sizes
    """
    per_platform = db.execute(
        select(Platform.name, func.count(KeywordCombination.id))
        .join(KeywordCombination, KeywordCombination.platform_id == Platform.id)
        .group_by(Platform.id, Platform.name)
        .order_by(Platform.id)
    ).all()

    return SeedSummary(
        services=_count(db, KeywordService),
        templates=_count(db, KeywordTemplate),
        seo_templates=_count(db, KeywordSeoTemplate),
        natural_phrases=_count(db, KeywordNaturalPhrase),
        combinations=_count(db, KeywordCombination),
        per_platform=[
            PlatformCombinationCount(platform=name, count=count)
            for name, count in per_platform
        ],
    )
