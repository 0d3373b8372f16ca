"""LRU-cached settings loaders.

Settings are loaded and validated once, then cached for the lifetime of the process.

Testing:
    In tests, clear the cache to force reload:
    get_books_settings.cache_clear()

    Or override with custom values:
    settings = BooksSettings(author_delete_policy="cascade")
"""

from __future__ import annotations

from functools import lru_cache

from .app import AppSettings
from .books import BooksSettings
from .database import DatabaseSettings
from .graphql import GraphQLSettings
from .logs import LoggingSettings


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """Get cached application settings.

    Returns:
        Validated and frozen AppSettings instance.
    """
    return AppSettings()


@lru_cache(maxsize=1)
def get_db_settings() -> DatabaseSettings:
    """Get cached database settings.

    Returns:
        Validated and frozen DatabaseSettings instance.
    """
    return DatabaseSettings()


@lru_cache(maxsize=1)
def get_graphql_settings() -> GraphQLSettings:
    """Get cached GraphQL settings."""
    return GraphQLSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings."""
    return LoggingSettings()


@lru_cache(maxsize=1)
def get_books_settings() -> BooksSettings:
    """Get cached catalogue policy settings."""
    return BooksSettings()


def clear_settings_cache() -> None:
    """Drop every cached settings instance (tests, reloads)."""
    for loader in (
        get_app_settings,
        get_db_settings,
        get_graphql_settings,
        get_logging_settings,
        get_books_settings,
    ):
        loader.cache_clear()
