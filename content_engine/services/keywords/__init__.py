"""Keyword import, rendering and combination generation."""

from content_engine.services.keywords.generator import (
    generate_keyword_combinations,
    iter_keyword_combinations,
)
from content_engine.services.keywords.rendering import (
    extract_variables,
    normalize_keyword,
    render_template,
)
from content_engine.services.keywords.translations import resolve_translation

__all__ = [
    "extract_variables",
    "generate_keyword_combinations",
    "iter_keyword_combinations",
    "normalize_keyword",
    "render_template",
    "resolve_translation",
]
