"""Core enums for the content engine keyword tables."""

from __future__ import annotations

from enum import Enum


class LanguageCode(str, Enum):
    """Languages every keyword is generated in, in generation order."""

    FR = "fr"
    EN = "en"
    DE = "de"
    ES = "es"
    PT = "pt"
    RU = "ru"
    ZH = "zh"
    AR = "ar"
    HI = "hi"


SUPPORTED_LANGUAGES: tuple[str, ...] = tuple(lang.value for lang in LanguageCode)


class IntentType(str, Enum):
    """Search intent inherited by a keyword from its template."""

    INFORMATIONAL = "informational"
    TRANSACTIONAL = "transactional"


class SeoTemplateType(str, Enum):
    """Page element an SEO template renders."""

    TITLE = "title"
    META_DESCRIPTION = "meta_description"
    H1 = "h1"


class PhraseType(str, Enum):
    """Position of a natural phrase within an article."""

    OPENING = "opening"
    TRANSITION = "transition"
    CONCLUSION = "conclusion"
    QUESTION = "question"
