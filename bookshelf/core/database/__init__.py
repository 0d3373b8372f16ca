"""Database building blocks: declarative base, generic repository, errors."""

from __future__ import annotations

from bookshelf.core.database.base import NAMING_CONVENTION, Base, IntegerPKMixin
from bookshelf.core.database.exceptions import (
    MultipleResultsFoundError,
    NotFoundError,
    RepositoryError,
)
from bookshelf.core.database.repository import BaseRepository

__all__ = [
    "NAMING_CONVENTION",
    "Base",
    "BaseRepository",
    "IntegerPKMixin",
    "MultipleResultsFoundError",
    "NotFoundError",
    "RepositoryError",
]
