"""Placeholder rendering and keyword normalization."""

from __future__ import annotations

import re
from collections.abc import Mapping

from text_unidecode import unidecode

_PLACEHOLDER_RE = re.compile(r"\{([^{}]*)\}")
_WHITESPACE_RE = re.compile(r"\s+")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")

LOWER_SUFFIX = "_lower"


def extract_variables(pattern: str) -> list[str]:
    """Return placeholder names in order of first appearance.

    >>> extract_variables("{service} {country_lower} {service}")
    ['service', 'country_lower']
    """
    names: list[str] = []
    for name in _PLACEHOLDER_RE.findall(pattern):
        if name and name not in names:
            names.append(name)
    return names


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def render_template(pattern: str, values: Mapping[str, str]) -> str:
    """Fill ``{key}`` and ``{key_lower}`` placeholders in ``pattern``.

    Placeholders without a value are removed, stray braces are dropped and
    whitespace is collapsed, so the result never contains ``{`` or ``}``.
    Missing keys never raise.

    Args:
        pattern: Template such as ``"{service} {country}"``
        values: Placeholder name -> replacement text

    Returns:
        The rendered, trimmed phrase (possibly empty).
    """
    text = pattern
    for key, value in values.items():
        text = text.replace("{" + key + "}", value)
        text = text.replace("{" + key + LOWER_SUFFIX + "}", value.lower())

    text = _PLACEHOLDER_RE.sub("", text)
    text = text.replace("{", "").replace("}", "")
    return collapse_whitespace(text)


def normalize_keyword(keyword: str) -> str:
    """Project a phrase onto lower-case ASCII letters, digits and single spaces.

    Non-Latin scripts are transliterated (``"Россия"`` -> ``"rossiia"``);
    characters with no ASCII transliteration disappear.
    """
    normalized = unidecode(keyword.lower()).lower()
    normalized = _NON_ALNUM_RE.sub("", normalized)
    return collapse_whitespace(normalized)
