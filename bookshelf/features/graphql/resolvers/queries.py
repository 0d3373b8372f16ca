"""Query resolvers for the GraphQL API.

Provides read operations for the catalogue:
- books / authors: everything, in insertion order
- recentBooks: the most recently published books
- booksByCategory(category) / booksSortedByDate(order)
- book(id) / author(id): single lookups through the DataLoaders
"""

from __future__ import annotations

import logging
from typing import Annotated

import strawberry
from strawberry.types import Info

from bookshelf.core.settings import get_books_settings
from bookshelf.features.books.repository import get_author_repository, get_book_repository
from bookshelf.features.graphql.types.books import AuthorType, BookType
from bookshelf.features.graphql.context import GraphQLContext

logger = logging.getLogger(__name__)

CategoryArg = Annotated[
    str, strawberry.argument(description="Category to match exactly (case-sensitive)"),
]
OrderArg = Annotated[
    str, strawberry.argument(description='"ASC" for oldest first; anything else is newest first'),
]
IdArg = Annotated[int, strawberry.argument(description="Store-assigned identifier")]


@strawberry.type(description="Root query type")
class Query:
    """GraphQL Query resolvers."""

    @strawberry.field(description="All books, in insertion order")
    async def books(self, info: Info[GraphQLContext, None]) -> list[BookType]:
        books = await get_book_repository().list(info.context.session)
        return [BookType.from_model(book) for book in books]

    @strawberry.field(description="The most recently published books, newest first")
    async def recent_books(self, info: Info[GraphQLContext, None]) -> list[BookType]:
        limit = get_books_settings().recent_books_limit
        books = await get_book_repository().list_recent(info.context.session, limit)
        return [BookType.from_model(book) for book in books]

    @strawberry.field(description="All authors, in insertion order")
    async def authors(self, info: Info[GraphQLContext, None]) -> list[AuthorType]:
        authors = await get_author_repository().list(info.context.session)
        return [AuthorType.from_model(author) for author in authors]

    @strawberry.field(description="Books that carry the given category")
    async def books_by_category(
        self,
        info: Info[GraphQLContext, None],
        category: CategoryArg,
    ) -> list[BookType]:
        books = await get_book_repository().find_by_category(info.context.session, category)
        return [BookType.from_model(book) for book in books]

    @strawberry.field(description="All books sorted by publication date")
    async def books_sorted_by_date(
        self,
        info: Info[GraphQLContext, None],
        order: OrderArg,
    ) -> list[BookType]:
        descending = order != "ASC"
        books = await get_book_repository().list_sorted_by_date(
            info.context.session,
            descending=descending,
        )
        return [BookType.from_model(book) for book in books]

    @strawberry.field(description="Get a single book by ID")
    async def book(self, info: Info[GraphQLContext, None], id: IdArg) -> BookType | None:  # noqa: A002
        book = await info.context.loaders.books.load(id)
        return BookType.from_model(book) if book else None

    @strawberry.field(description="Get a single author by ID")
    async def author(self, info: Info[GraphQLContext, None], id: IdArg) -> AuthorType | None:  # noqa: A002
        author = await info.context.loaders.authors.load(id)
        return AuthorType.from_model(author) if author else None


__all__ = ["Query"]
