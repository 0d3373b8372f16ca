"""Catalogue policies.

Constraints the data model does not enforce by itself are explicit settings
here rather than assumptions buried in resolvers.
Environment variables use BOOKS_ prefix.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

AuthorDeletePolicy = Literal["restrict", "cascade"]


class BooksSettings(BaseSettings):
    """Catalogue behaviour settings.

    Example: BOOKS_RECENT_BOOKS_LIMIT=5, BOOKS_AUTHOR_DELETE_POLICY=cascade
    """

    recent_books_limit: int = Field(
        default=2,
        ge=1,
        le=100,
        description="Number of books returned by recentBooks (latest publication dates first)",
    )
    enforce_unique_titles: bool = Field(
        default=True,
        description="Reject addBook/updateBook when another book already has the title",
    )
    author_delete_policy: AuthorDeletePolicy = Field(
        default="restrict",
        description="restrict: refuse to delete authors with books; cascade: delete their books too",
    )

    model_config = SettingsConfigDict(
        env_prefix="BOOKS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )
