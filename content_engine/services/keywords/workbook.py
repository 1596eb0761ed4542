"""Reader for the per-platform keyword import workbooks (.xlsx)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pandas as pd
from slugify import slugify

from content_engine.core.enums import SUPPORTED_LANGUAGES
from content_engine.schemas.keyword import (
    CountryRecord,
    KeywordSeoTemplateCreate,
    KeywordServiceCreate,
    KeywordTemplateCreate,
)
from content_engine.services.keywords.rendering import extract_variables
from content_engine.services.keywords.translations import first_non_empty

logger = logging.getLogger(__name__)

COUNTRY_SHEETS = ("COUNTRIES", "Countries")
SERVICE_SHEETS = ("SERVICES", "Services")
KEYWORD_TEMPLATE_SHEETS = ("KEYWORD_TEMPLATES", "Keywords")
SEO_TEMPLATE_SHEETS = ("SEO_TEMPLATES",)

Row = list[Any]


def _cell(row: Row, index: int) -> Any:
    """Return a cell value, treating short rows and NaN cells as None."""
    if index >= len(row):
        return None
    value = row[index]
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return None
    return value


def _cell_text(row: Row, index: int) -> str | None:
    value = _cell(row, index)
    # Excel stores integral numbers as floats; "12.0" should read as "12"
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return first_non_empty(value)


def _cell_int(row: Row, index: int, default: int) -> int:
    value = _cell(row, index)
    if value is None or str(value).strip() == "":
        return default
    return int(float(value))


class KeywordWorkbook:
    """Rows of the sheets of one keyword workbook.

    Each ``read_*`` method returns ``None`` when its sheet is absent so that
    the caller can fall back to built-in defaults, and raises on malformed
    content.
    """

    def __init__(self, sheets: dict[str, pd.DataFrame], source: Path | None = None):
        self.sheets = sheets
        self.source = source

    @classmethod
    def load(cls, path: Path) -> KeywordWorkbook | None:
        """Read every sheet of ``path``.

        Args:
            path: Location of the ``.xlsx`` file

        Returns:
            The workbook, or None if the file does not exist.
        """
        if not path.exists():
            logger.warning(f"Workbook not found: {path}")
            return None

        sheets = pd.read_excel(path, sheet_name=None, header=None, dtype=object, engine="openpyxl")
        logger.info(f"Loaded workbook {path.name} ({len(sheets)} sheets)")
        return cls(sheets, source=path)

    # ------------------------------------------------------------------ #
    # Sheet access                                                        #
    # ------------------------------------------------------------------ #
    def sheet_rows(self, names: tuple[str, ...]) -> list[Row] | None:
        """Data rows (header skipped) of the first sheet found among ``names``."""
        for name in names:
            frame = self.sheets.get(name)
            if frame is not None:
                return frame.iloc[1:].values.tolist()
        return None

    # ------------------------------------------------------------------ #
    # Sections                                                            #
    # ------------------------------------------------------------------ #
    def read_countries(self) -> list[CountryRecord] | None:
        """Columns: id, name, then one localized name per supported language."""
        rows = self.sheet_rows(COUNTRY_SHEETS)
        if rows is None:
            return None

        countries = []
        for row in rows:
            if _cell(row, 0) is None:
                continue
            name = _cell_text(row, 1) or str(_cell(row, 0))
            translations = {
                language: _cell_text(row, 2 + offset) or name
                for offset, language in enumerate(SUPPORTED_LANGUAGES)
            }
            countries.append(CountryRecord(
                id=_cell_int(row, 0, 0),
                name=name,
                translations=translations,
            ))
        return countries

    def read_services(self, platform_id: int) -> list[KeywordServiceCreate] | None:
        """Columns: one text per supported language (fr first), category, priority."""
        rows = self.sheet_rows(SERVICE_SHEETS)
        if rows is None:
            return None

        services = []
        for row in rows:
            french, english = _cell_text(row, 0), _cell_text(row, 1)
            if french is None and english is None:
                continue

            translations = {}
            for index, language in enumerate(SUPPORTED_LANGUAGES):
                if language == "fr":
                    text = first_non_empty(french, english)
                elif language == "en":
                    text = first_non_empty(english, french)
                else:
                    text = first_non_empty(_cell_text(row, index), french, english)
                translations[language] = text

            services.append(KeywordServiceCreate(
                platform_id=platform_id,
                service_key=slugify(english or french, separator="_"),
                translations=translations,
                category=_cell_text(row, 9) or "general",
                priority=_cell_int(row, 10, 50),
            ))
        return services

    def read_keyword_templates(self, platform_id: int) -> list[KeywordTemplateCreate] | None:
        """Columns: key, pattern, (unused), intent type, priority."""
        rows = self.sheet_rows(KEYWORD_TEMPLATE_SHEETS)
        if rows is None:
            return None

        templates = []
        for row in rows:
            pattern = _cell_text(row, 1)
            if pattern is None:
                continue
            key = _cell_text(row, 0) or pattern
            templates.append(KeywordTemplateCreate(
                platform_id=platform_id,
                template_key=f"{platform_id}_{slugify(key, separator='_')}",
                pattern=pattern,
                variables=extract_variables(pattern),
                intent_type=_cell_text(row, 3) or "informational",
                priority=_cell_int(row, 4, 50),
            ))
        return templates

    def read_seo_templates(self, platform_id: int) -> list[KeywordSeoTemplateCreate] | None:
        """Columns: key, template, language, type, max length, priority."""
        rows = self.sheet_rows(SEO_TEMPLATE_SHEETS)
        if rows is None:
            return None

        templates = []
        for row in rows:
            template = _cell_text(row, 1)
            if template is None:
                continue
            key = _cell_text(row, 0) or template
            templates.append(KeywordSeoTemplateCreate(
                platform_id=platform_id,
                template_key=f"{platform_id}_{slugify(key, separator='_')}",
                language_code=_cell_text(row, 2) or "fr",
                template_type=_cell_text(row, 3) or "title",
                template=template,
                variables=extract_variables(template),
                max_length=_cell_int(row, 4, 60),
                priority=_cell_int(row, 5, 50),
            ))
        return templates
