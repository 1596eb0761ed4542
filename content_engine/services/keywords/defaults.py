"""Built-in keyword data used when an import workbook or sheet is missing."""

from __future__ import annotations

from dataclasses import dataclass

from slugify import slugify

from content_engine.core.enums import SUPPORTED_LANGUAGES, IntentType, PhraseType
from content_engine.schemas.keyword import (
    CountryRecord,
    KeywordNaturalPhraseCreate,
    KeywordSeoTemplateCreate,
    KeywordServiceCreate,
    KeywordTemplateCreate,
)
from content_engine.services.keywords.rendering import extract_variables


# ================================================================== #
# Platforms                                                          #
# ================================================================== #

@dataclass(frozen=True)
class PlatformSpec:
    """A platform seeded by the keyword importer and its workbook file name."""

    id: int
    name: str
    slug: str
    workbook: str


PLATFORMS: tuple[PlatformSpec, ...] = (
    PlatformSpec(1, "SOS-Expat", "sos-expat", "SOS_EXPAT_Keywords_Database.xlsx"),
    PlatformSpec(2, "Ulixai", "ulixai", "Ulixai_Keywords_Database.xlsx"),
)


# ================================================================== #
# Countries                                                          #
# ================================================================== #

# Top expat destinations; workbooks normally carry the full list
_DEFAULT_COUNTRIES: list[tuple[int, str, dict[str, str]]] = [
    (164, "Thaïlande", {
        "fr": "Thaïlande", "en": "Thailand", "de": "Thailand", "es": "Tailandia",
        "pt": "Tailândia", "ru": "Таиланд", "zh": "泰国", "ar": "تايلاند", "hi": "थाईलैंड",
    }),
    (74, "France", {
        "fr": "France", "en": "France", "de": "Frankreich", "es": "Francia",
        "pt": "França", "ru": "Франция", "zh": "法国", "ar": "فرنسا", "hi": "फ़्रांस",
    }),
    (212, "États-Unis", {
        "fr": "États-Unis", "en": "United States", "de": "Vereinigte Staaten",
        "es": "Estados Unidos", "pt": "Estados Unidos", "ru": "США", "zh": "美国",
        "ar": "الولايات المتحدة", "hi": "संयुक्त राज्य अमेरिका",
    }),
]


def default_countries() -> list[CountryRecord]:
    return [
        CountryRecord(id=country_id, name=name, translations=translations)
        for country_id, name, translations in _DEFAULT_COUNTRIES
    ]


# ================================================================== #
# Services                                                           #
# ================================================================== #

_DEFAULT_SERVICES: dict[int, list[tuple[str, dict[str, str]]]] = {
    1: [
        ("legal", {
            "fr": "avocat", "en": "lawyer", "de": "Anwalt", "es": "abogado",
            "pt": "advogado", "ru": "адвокат", "zh": "律师", "ar": "محامي", "hi": "वकील",
        }),
        ("assistance", {
            "fr": "aide expatrié", "en": "expat help", "de": "Expat-Hilfe",
            "es": "ayuda expatriado", "pt": "ajuda expatriado", "ru": "помощь экспатам",
            "zh": "外籍人士帮助", "ar": "مساعدة المغتربين", "hi": "प्रवासी सहायता",
        }),
    ],
    2: [
        ("administrative", {
            "fr": "aide visa", "en": "visa help", "de": "Visahilfe", "es": "ayuda visado",
            "pt": "ajuda visto", "ru": "помощь с визой", "zh": "签证帮助",
            "ar": "مساعدة التأشيرة", "hi": "वीज़ा सहायता",
        }),
        ("language", {
            "fr": "traducteur", "en": "translator", "de": "Übersetzer", "es": "traductor",
            "pt": "tradutor", "ru": "переводчик", "zh": "翻译", "ar": "مترجم", "hi": "अनुवादक",
        }),
    ],
}


def default_services(platform_id: int) -> list[KeywordServiceCreate]:
    return [
        KeywordServiceCreate(
            platform_id=platform_id,
            service_key=slugify(translations["en"], separator="_"),
            translations=translations,
            category=category,
        )
        for category, translations in _DEFAULT_SERVICES.get(platform_id, [])
    ]


# ================================================================== #
# Templates                                                          #
# ================================================================== #

_DEFAULT_TEMPLATES: list[tuple[str, IntentType]] = [
    ("{service} {country}", IntentType.INFORMATIONAL),
    ("{service} {country_lower}", IntentType.TRANSACTIONAL),
    ("{service} urgent {country}", IntentType.TRANSACTIONAL),
]


def default_keyword_templates(platform_id: int) -> list[KeywordTemplateCreate]:
    return [
        KeywordTemplateCreate(
            platform_id=platform_id,
            template_key=f"{platform_id}_default_{index}",
            pattern=pattern,
            variables=extract_variables(pattern),
            intent_type=intent,
        )
        for index, (pattern, intent) in enumerate(_DEFAULT_TEMPLATES)
    ]


DEFAULT_SEO_TITLE = "{keyword} - Guide Complet | {platform}"


def default_seo_templates(platform_id: int) -> list[KeywordSeoTemplateCreate]:
    """One title template per supported language."""
    return [
        KeywordSeoTemplateCreate(
            platform_id=platform_id,
            template_key=f"{platform_id}_title_{language}",
            language_code=language,
            template=DEFAULT_SEO_TITLE,
            variables=extract_variables(DEFAULT_SEO_TITLE),
            max_length=60,
        )
        for language in SUPPORTED_LANGUAGES
    ]


# ================================================================== #
# Natural Phrases                                                    #
# ================================================================== #

_NATURAL_PHRASES: list[tuple[str, PhraseType, str]] = [
    # French
    ("fr", PhraseType.OPENING, "Vous recherchez {keyword} ? Notre guide complet vous accompagne pas à pas."),
    ("fr", PhraseType.OPENING, "Besoin d'aide pour {keyword} ? Découvrez nos conseils d'experts."),
    ("fr", PhraseType.OPENING, "{keyword} : voici tout ce que vous devez savoir pour réussir."),
    ("fr", PhraseType.TRANSITION, "Concernant {keyword}, plusieurs options s'offrent à vous."),
    ("fr", PhraseType.TRANSITION, "Pour ce qui est de {keyword}, il est essentiel de comprendre les étapes clés."),
    ("fr", PhraseType.CONCLUSION, "En résumé, {keyword} nécessite une préparation minutieuse."),
    ("fr", PhraseType.QUESTION, "Comment réussir {keyword} ? Voici nos recommandations."),
    # English
    ("en", PhraseType.OPENING, "Looking for {keyword}? Our complete guide will help you every step of the way."),
    ("en", PhraseType.OPENING, "Need help with {keyword}? Discover our expert advice."),
    ("en", PhraseType.TRANSITION, "Regarding {keyword}, several options are available to you."),
    ("en", PhraseType.CONCLUSION, "In summary, {keyword} requires careful preparation."),
    # Spanish
    ("es", PhraseType.OPENING, "¿Busca {keyword}? Nuestra guía completa le acompañará en cada paso."),
    ("es", PhraseType.TRANSITION, "En cuanto a {keyword}, varias opciones están disponibles."),
    # German
    ("de", PhraseType.OPENING, "Sie suchen {keyword}? Unser vollständiger Leitfaden begleitet Sie Schritt für Schritt."),
    ("de", PhraseType.TRANSITION, "Was {keyword} betrifft, stehen Ihnen mehrere Optionen zur Verfügung."),
]


def natural_phrases() -> list[KeywordNaturalPhraseCreate]:
    return [
        KeywordNaturalPhraseCreate(
            language_code=language,
            phrase_type=phrase_type,
            template=template,
            variables=extract_variables(template),
        )
        for language, phrase_type, template in _NATURAL_PHRASES
    ]
