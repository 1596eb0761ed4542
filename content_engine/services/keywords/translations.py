"""Ordered-fallback lookup for per-language text."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any


def first_non_empty(*values: Any) -> str | None:
    """Return the first value that is not None and not blank, as a stripped string."""
    for value in values:
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return None


def resolve_translation(
        translations: Mapping[str, Any],
        language: str,
        fallbacks: Iterable[str] = (),
) -> str:
    """Return the text for ``language``, falling back through ``fallbacks`` in order.

    Args:
        translations: Language code -> text mapping (values may be None or blank)
        language: Preferred language code
        fallbacks: Language codes tried, in order, when the preferred one is missing

    Returns:
        The first non-empty text found, or an empty string when none is.
    """
    found = first_non_empty(*(translations.get(code) for code in (language, *fallbacks)))
    return found or ""
