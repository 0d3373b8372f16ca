"""Modular Pydantic Settings v2 configuration.

One frozen settings model per domain, each with its own environment prefix:
- APP_: application identity and server binding
- DB_: database URL and pool
- GRAPHQL_: endpoint, IDE and limits
- LOG_: logging
- BOOKS_: catalogue policies

Import settings via cached loaders:
    from bookshelf.core.settings import get_books_settings

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables
    3. .env file
"""

from __future__ import annotations

from .app import AppSettings
from .books import AuthorDeletePolicy, BooksSettings
from .database import DatabaseSettings
from .graphql import GraphQLSettings
from .loader import (
    clear_settings_cache,
    get_app_settings,
    get_books_settings,
    get_db_settings,
    get_graphql_settings,
    get_logging_settings,
)
from .logs import LoggingSettings

__all__ = [
    "AppSettings",
    "AuthorDeletePolicy",
    "BooksSettings",
    "DatabaseSettings",
    "GraphQLSettings",
    "LoggingSettings",
    "clear_settings_cache",
    "get_app_settings",
    "get_books_settings",
    "get_db_settings",
    "get_graphql_settings",
    "get_logging_settings",
]
