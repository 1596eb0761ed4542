"""SQLAlchemy models package."""

from content_engine.models import (
    keyword,
    platform,
)

__all__ = [
    "keyword",
    "platform",
]
