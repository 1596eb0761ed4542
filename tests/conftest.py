"""Shared pytest fixtures: an in-memory SQLite database per test."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pandas as pd
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from content_engine.db.base import Base
from content_engine.models import keyword, platform  # noqa: F401  – registers tables


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def db(engine) -> Generator[Session, None, None]:
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def write_workbook(tmp_path: Path):
    """Return a helper writing ``{sheet_name: rows}`` to an .xlsx file.

    The first row of every sheet is its header.
    """

    def _write(filename: str, sheets: dict[str, list[list[object]]]) -> Path:
        path = tmp_path / filename
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            for name, rows in sheets.items():
                pd.DataFrame(rows).to_excel(writer, sheet_name=name, header=False, index=False)
        return path

    return _write
