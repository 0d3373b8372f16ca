"""Strawberry GraphQL output types."""

from __future__ import annotations

from bookshelf.features.graphql.types.books import AuthorType, BookType

__all__ = ["AuthorType", "BookType"]
