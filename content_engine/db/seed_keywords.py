"""Seed the SEO keyword tables for every platform."""
# Run:  python -m content_engine.db.seed_keywords --reset

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

import click
import pandas as pd
from sqlalchemy.orm import Session

from content_engine.core.config import settings
from content_engine.crud import keyword as crud_keyword
from content_engine.schemas.keyword import CountryRecord, PlatformCreate, SeedSummary
from content_engine.services.keywords import defaults
from content_engine.services.keywords.generator import generate_keyword_combinations
from content_engine.services.keywords.workbook import KeywordWorkbook

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ================================================================== #
# Input Loading                                                      #
# ================================================================== #

def open_workbook(path: Path) -> KeywordWorkbook | None:
    """Load a workbook, returning None when it is missing or unreadable."""
    try:
        return KeywordWorkbook.load(path)
    except Exception as exc:
        logger.warning(f"Could not read workbook {path.name}: {exc} - using built-in defaults")
        return None


def load_section(
        label: str,
        reader: Callable[[], list[T] | None] | None,
        fallback: Callable[[], list[T]],
) -> list[T]:
    """Read one workbook section, falling back to built-in data on any problem.

    Args:
        label: Section name used in log messages
        reader: Bound workbook reader, or None when there is no workbook
        fallback: Producer of the built-in records

    Returns:
        Records from the workbook, or the fallback records
    """
    if reader is None:
        records = fallback()
        logger.info(f"  {label}: {len(records)} built-in records")
        return records

    try:
        records = reader()
    except Exception as exc:
        logger.warning(f"  {label}: could not read sheet ({exc}) - using built-in defaults")
        return fallback()

    if records is None:
        logger.warning(f"  {label}: sheet not found - using built-in defaults")
        return fallback()

    logger.info(f"  {label}: {len(records)} records")
    return records


# ================================================================== #
# Seeding                                                            #
# ================================================================== #

def load_countries(workbooks: list[KeywordWorkbook | None]) -> list[CountryRecord]:
    """Read countries from the first available workbook, else use the defaults."""
    workbook = next((w for w in workbooks if w is not None), None)
    return load_section(
        "countries",
        workbook.read_countries if workbook else None,
        defaults.default_countries,
    )


def seed_platform(
        db: Session,
        platform_spec: defaults.PlatformSpec,
        workbook: KeywordWorkbook | None,
        countries: list[CountryRecord],
        batch_size: int,
) -> int:
    """Import one platform's workbook and generate its combinations.

    Args:
        db: Database session
        platform_spec: Platform to import
        workbook: The platform's workbook, or None to use built-in data only
        countries: Countries shared by every platform of the run
        batch_size: Combinations per bulk insert

    Returns:
        Number of combinations generated
    """
    logger.info(f"Importing {platform_spec.name}...")
    platform_id = platform_spec.id

    services = load_section(
        "services",
        (lambda: workbook.read_services(platform_id)) if workbook else None,
        lambda: defaults.default_services(platform_id),
    )
    templates = load_section(
        "keyword templates",
        (lambda: workbook.read_keyword_templates(platform_id)) if workbook else None,
        lambda: defaults.default_keyword_templates(platform_id),
    )
    seo_templates = load_section(
        "SEO templates",
        (lambda: workbook.read_seo_templates(platform_id)) if workbook else None,
        lambda: defaults.default_seo_templates(platform_id),
    )

    crud_keyword.upsert_services(db, services)
    crud_keyword.upsert_keyword_templates(db, templates)
    crud_keyword.upsert_seo_templates(db, seo_templates)

    platform = next(p for p in crud_keyword.get_all_platforms(db) if p.id == platform_id)
    count = generate_keyword_combinations(
        platform,
        crud_keyword.get_services_by_platform(db, platform_id),
        crud_keyword.get_active_templates_by_platform(db, platform_id),
        countries,
        crud_keyword.combination_sink(db),
        batch_size=batch_size,
    )
    return count


def seed_keywords(
        db: Session,
        *,
        imports_dir: Path | None = None,
        batch_size: int | None = None,
        reset: bool = False,
) -> SeedSummary:
    """Seed platforms, services, templates, natural phrases and combinations.

    The whole run happens in the session's transaction: it is committed at
    the end and rolled back if anything fails.

    Args:
        db: Database session
        imports_dir: Directory holding the platform workbooks
        batch_size: Combinations per bulk insert
        reset: Delete existing combinations before generating new ones

    Returns:
        Row counts after the run

    Raises:
        Exception: Whatever aborted the run, after rollback
    """
    imports_dir = imports_dir or settings.KEYWORD_IMPORTS_DIR
    batch_size = batch_size or settings.KEYWORD_BATCH_SIZE

    try:
        if reset:
            deleted = crud_keyword.delete_combinations(db)
            logger.info(f"Deleted {deleted} existing combinations")

        crud_keyword.upsert_platforms(db, [
            PlatformCreate(id=p.id, name=p.name, slug=p.slug) for p in defaults.PLATFORMS
        ])

        workbooks = [open_workbook(imports_dir / p.workbook) for p in defaults.PLATFORMS]
        countries = load_countries(workbooks)

        for platform_spec, workbook in zip(defaults.PLATFORMS, workbooks):
            count = seed_platform(db, platform_spec, workbook, countries, batch_size)
            logger.info(f"{platform_spec.name} imported ({count} combinations)")

        phrases = crud_keyword.upsert_natural_phrases(db, defaults.natural_phrases())
        logger.info(f"{phrases} natural phrases")

        db.commit()
    except Exception:
        db.rollback()
        logger.error("Keyword seeding failed - transaction rolled back")
        raise

    return crud_keyword.get_keyword_statistics(db)


# ================================================================== #
# Output                                                             #
# ================================================================== #

def format_summary(summary: SeedSummary) -> str:
    """Render the summary as a totals table followed by a per-platform table."""
    totals = pd.DataFrame(
        [
            ("Services", summary.services),
            ("Keyword templates", summary.templates),
            ("SEO templates", summary.seo_templates),
            ("Natural phrases", summary.natural_phrases),
            ("Combinations", summary.combinations),
        ],
        columns=["Type", "Count"],
    )
    per_platform = pd.DataFrame(
        [(p.platform, p.count) for p in summary.per_platform],
        columns=["Platform", "Combinations"],
    )
    return (
        f"STATISTICS\n{totals.to_string(index=False)}\n\n"
        f"BY PLATFORM\n{per_platform.to_string(index=False)}"
    )


# ------------------------------------------------------------------------- #
# Command-line interface                                                    #
# ------------------------------------------------------------------------- #
@click.command(help="Import keyword workbooks and generate keyword combinations.")
@click.option(
    "--imports-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory containing the platform .xlsx workbooks.",
)
@click.option(
    "--batch-size",
    type=click.IntRange(min=1),
    default=None,
    help="Combinations written per bulk insert.",
)
@click.option(
    "--reset",
    is_flag=True,
    default=False,
    help="Delete existing keyword combinations first.",
)
def _cli(imports_dir: Path | None, batch_size: int | None, reset: bool) -> None:  # pragma: no cover
    """CLI wrapper."""
    from content_engine.db.session import SessionLocal

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    click.echo("Keyword seeding started …")
    with SessionLocal() as db:
        try:
            summary = seed_keywords(db, imports_dir=imports_dir, batch_size=batch_size, reset=reset)
        except Exception as exc:
            raise click.ClickException(f"Keyword seeding failed: {exc}") from exc

    click.echo(format_summary(summary))
    click.echo("Done ✔")


if __name__ == "__main__":  # pragma: no cover
    _cli()
