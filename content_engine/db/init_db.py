"""
Database initialisation utility.

Usage (CLI):
    python -m content_engine.db.init_db          # create tables if they don't exist
    python -m content_engine.db.init_db --reset  # drop all tables first, then recreate

The module can also be imported and `init_db()` called programmatically.
"""

from __future__ import annotations

import click
from sqlalchemy import Engine, MetaData

from content_engine.db.base import Base
from content_engine.db.session import engine as default_engine
from content_engine.models import keyword  # noqa: F401  – ensures keyword models are registered
from content_engine.models import platform  # noqa: F401  – ensures Platform model is registered


def init_db(*, reset: bool = False, engine: Engine | None = None) -> None:
    """
    Create all database tables (optionally dropping existing ones first).

    Args:
        reset: If True, **drops** all tables before creating them again.
        engine: Engine to use; defaults to the one configured in settings.
    """
    bind = engine or default_engine
    metadata: MetaData = Base.metadata

    if reset:
        click.echo("Dropping existing tables …")
        metadata.drop_all(bind=bind)

    click.echo("Creating tables …")
    metadata.create_all(bind=bind)
    click.echo("Done ✔")


# ------------------------------------------------------------------------- #
# Optional command-line interface using `click`                             #
# ------------------------------------------------------------------------- #
@click.command(help="Initialise the database schema.")
@click.option(
    "--reset",
    is_flag=True,
    default=False,
    help="Drop all tables before recreating them.",
)
def _cli(reset: bool) -> None:  # pragma: no cover
    """CLI wrapper."""
    init_db(reset=reset)


if __name__ == "__main__":  # pragma: no cover
    _cli()
