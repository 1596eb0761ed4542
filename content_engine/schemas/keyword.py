"""Pydantic schemas for the SEO keyword system."""

from __future__ import annotations

from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator

from content_engine.core.enums import (
    SUPPORTED_LANGUAGES,
    IntentType,
    LanguageCode,
    PhraseType,
    SeoTemplateType,
)


def _check_language_keys(translations: dict[str, str]) -> dict[str, str]:
    unknown = sorted(set(translations) - set(SUPPORTED_LANGUAGES))
    if unknown:
        raise ValueError(f"Unsupported language codes: {', '.join(unknown)}")
    return translations


Translations = Annotated[dict[str, str], AfterValidator(_check_language_keys)]


# ================================================================== #
# Platform Schemas                                                   #
# ================================================================== #

class PlatformCreate(BaseModel):
    """Schema for creating or upserting a platform."""

    id: Annotated[int, Field(gt=0)]
    name: Annotated[str, Field(min_length=1, max_length=100)]
    slug: Annotated[str, Field(min_length=1, max_length=100)]


class PlatformRead(PlatformCreate):
    """Schema for reading platform data."""

    model_config = ConfigDict(from_attributes=True)


# ================================================================== #
# Input Records                                                      #
# ================================================================== #

class CountryRecord(BaseModel):
    """A country as read from a workbook or the built-in defaults.

    Countries are not persisted; only their ``id`` ends up on the
    generated combinations.
    """

    id: int
    name: Annotated[str, Field(min_length=1)]
    translations: Translations = Field(default_factory=dict)


# ================================================================== #
# Service Schemas                                                    #
# ================================================================== #

class KeywordServiceCreate(BaseModel):
    """Schema for upserting a keyword service."""

    platform_id: Annotated[int, Field(gt=0)]
    service_key: Annotated[str, Field(min_length=1, max_length=150)]
    translations: Translations
    category: str = "general"
    priority: int = 50
    is_active: bool = True

    model_config = ConfigDict(str_strip_whitespace=True)


class KeywordServiceRead(KeywordServiceCreate):
    """Schema for reading a keyword service."""

    id: int

    model_config = ConfigDict(from_attributes=True)


# ================================================================== #
# Template Schemas                                                   #
# ================================================================== #

class KeywordTemplateCreate(BaseModel):
    """Schema for upserting a keyword phrase template."""

    platform_id: Annotated[int, Field(gt=0)]
    template_key: Annotated[str, Field(min_length=1, max_length=150)]
    pattern: Annotated[str, Field(min_length=1, max_length=255)]
    variables: list[str] = Field(default_factory=list)
    intent_type: IntentType = IntentType.INFORMATIONAL
    priority: int = 50
    is_active: bool = True

    model_config = ConfigDict(use_enum_values=True)


class KeywordTemplateRead(KeywordTemplateCreate):
    """Schema for reading a keyword phrase template."""

    id: int

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)


class KeywordSeoTemplateCreate(BaseModel):
    """Schema for upserting an SEO title/description template."""

    platform_id: Annotated[int, Field(gt=0)]
    template_key: Annotated[str, Field(min_length=1, max_length=150)]
    language_code: LanguageCode
    template_type: SeoTemplateType = SeoTemplateType.TITLE
    template: Annotated[str, Field(min_length=1, max_length=255)]
    variables: list[str] = Field(default_factory=list)
    max_length: Annotated[int, Field(gt=0)] = 60
    priority: int = 50
    is_active: bool = True

    model_config = ConfigDict(use_enum_values=True)


class KeywordNaturalPhraseCreate(BaseModel):
    """Schema for upserting a natural-language phrase snippet."""

    language_code: LanguageCode
    phrase_type: PhraseType
    template: Annotated[str, Field(min_length=1)]
    variables: list[str] = Field(default_factory=lambda: ["keyword"])
    priority: int = 50
    is_active: bool = True

    model_config = ConfigDict(use_enum_values=True)


# ================================================================== #
# Combination Schema                                                 #
# ================================================================== #

class KeywordCombinationCreate(BaseModel):
    """One generated keyword, ready for bulk insertion."""

    platform_id: int
    service_id: int
    template_id: int
    country_id: int
    language_code: LanguageCode
    keyword_text: str
    keyword_normalized: str
    intent_type: IntentType
    search_volume: int = 0
    competition: float = 0.50
    priority_score: int = 50
    usage_count: int = 0

    model_config = ConfigDict(use_enum_values=True)

    @field_validator("keyword_text")
    def validate_keyword_text(cls, v: str) -> str:
        """Reject phrases that still carry placeholder braces."""
        if "{" in v or "}" in v:
            raise ValueError(f"Unresolved placeholder in keyword: {v!r}")
        return v


# ================================================================== #
# Seed Summary                                                       #
# ================================================================== #

class PlatformCombinationCount(BaseModel):
    """Number of combinations generated for one platform."""

    platform: str
    count: int


class SeedSummary(BaseModel):
    """Row counts reported at the end of a seed run."""

    services: int = 0
    templates: int = 0
    seo_templates: int = 0
    natural_phrases: int = 0
    combinations: int = 0
    per_platform: list[PlatformCombinationCount] = Field(default_factory=list)
