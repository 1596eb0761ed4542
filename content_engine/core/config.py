"""Application configuration loaded from environment and .env file."""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings


def find_project_root() -> Path:
    """Return the nearest ancestor directory that contains a .env file.

    Starts at the directory of this file and walks up to the filesystem root.
    Falls back to two levels above this file if no .env is found.
    """
    current_dir = Path(__file__).parent
    while current_dir != current_dir.parent:
        if (current_dir / ".env").exists():
            return current_dir
        current_dir = current_dir.parent
    return Path(__file__).parent.parent.parent


# Pre-load .env so that code using os.getenv(...) sees the same values
PROJECT_ROOT: Path = find_project_root()
load_dotenv(PROJECT_ROOT / ".env")


class Settings(BaseSettings):
    """Strongly-typed seeder settings loaded from environment and .env."""

    # Database
    DATABASE_URL: str = "sqlite:///./content_engine.sqlite"

    # Keyword import
    KEYWORD_IMPORTS_DIR: Path = Path("storage/app/imports")
    KEYWORD_BATCH_SIZE: int = 500
    DEFAULT_LANGUAGE: str = "fr"

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = str(PROJECT_ROOT / ".env")
        env_file_encoding = "utf-8"


# Singleton settings instance
settings = Settings()
