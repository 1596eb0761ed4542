"""CRUD operations package."""

from content_engine.crud import keyword

__all__ = ["keyword"]
