"""Cartesian-product keyword generation with bounded-size batch writes."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence

from content_engine.core.config import settings
from content_engine.core.enums import SUPPORTED_LANGUAGES
from content_engine.schemas.keyword import (
    CountryRecord,
    KeywordCombinationCreate,
    KeywordServiceRead,
    KeywordTemplateRead,
    PlatformRead,
)
from content_engine.services.keywords.rendering import normalize_keyword, render_template
from content_engine.services.keywords.translations import resolve_translation

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 500
INITIAL_COMPETITION = 0.50

BulkInsertSink = Callable[[list[KeywordCombinationCreate]], None]


def iter_keyword_combinations(
        platform: PlatformRead,
        services: Sequence[KeywordServiceRead],
        templates: Sequence[KeywordTemplateRead],
        countries: Sequence[CountryRecord],
        languages: Sequence[str] = SUPPORTED_LANGUAGES,
        default_language: str | None = None,
) -> Iterator[KeywordCombinationCreate]:
    """Yield one combination per service x template x country x language.

    Iteration order is services, then templates, then countries, then
    languages. Degenerate (even empty) phrases are still yielded.

    Args:
        platform: Platform whose name fills ``{platform}``
        services: Services of the platform
        templates: Active templates of the platform
        countries: Countries to combine with
        languages: Language codes, in generation order
        default_language: Fallback for missing service text; defaults to settings

    Yields:
        Unsaved keyword combination records
    """
    fallback = default_language or settings.DEFAULT_LANGUAGE

    for service in services:
        for template in templates:
            for country in countries:
                for language in languages:
                    keyword = render_template(template.pattern, {
                        "service": resolve_translation(service.translations, language, [fallback]),
                        "country": resolve_translation(country.translations, language) or country.name,
                        "platform": platform.name,
                    })
                    yield KeywordCombinationCreate(
                        platform_id=platform.id,
                        service_id=service.id,
                        template_id=template.id,
                        country_id=country.id,
                        language_code=language,
                        keyword_text=keyword,
                        keyword_normalized=normalize_keyword(keyword),
                        intent_type=template.intent_type,
                        search_volume=0,
                        competition=INITIAL_COMPETITION,
                        priority_score=template.priority,
                    )


def generate_keyword_combinations(
        platform: PlatformRead,
        services: Sequence[KeywordServiceRead],
        templates: Sequence[KeywordTemplateRead],
        countries: Sequence[CountryRecord],
        sink: BulkInsertSink,
        *,
        languages: Sequence[str] = SUPPORTED_LANGUAGES,
        batch_size: int = DEFAULT_BATCH_SIZE,
        default_language: str | None = None,
) -> int:
    """Generate every combination and hand them to ``sink`` in batches.

    At most ``batch_size`` records are held in memory. Batches already
    passed to the sink stay written if a later one fails.

    Returns:
        Number of combinations generated

    Raises:
        ValueError: If batch_size is not positive
    """
    if batch_size < 1:
        raise ValueError("batch_size must be a positive integer")

    batch: list[KeywordCombinationCreate] = []
    count = 0

    for combination in iter_keyword_combinations(
            platform, services, templates, countries, languages, default_language
    ):
        batch.append(combination)
        count += 1

        if len(batch) >= batch_size:
            sink(batch)
            batch = []
            logger.info(f"{platform.name}: {count} combinations...")

    if batch:
        sink(batch)

    logger.info(f"{platform.name}: {count} combinations generated")
    return count
