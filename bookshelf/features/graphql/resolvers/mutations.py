"""Mutation resolvers for the GraphQL API.

Each mutation runs in its own transaction: committed when it succeeds,
rolled back when it raises. Failures surface as field errors carrying
``extensions.code``.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Annotated

import strawberry
from strawberry.types import Info
from sqlalchemy.exc import SQLAlchemyError

from bookshelf.core.exceptions import AppException, StoreException
from bookshelf.features.books.schemas import (
    AuthorCreate,
    BookCreate,
    parse_book_update,
    parse_payload,
)
from bookshelf.features.books.service import BookService
from bookshelf.features.graphql.dataloaders import create_dataloaders
from bookshelf.features.graphql.types.books import AuthorType, BookType
from bookshelf.features.graphql.context import GraphQLContext

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)

TitleArg = Annotated[str, strawberry.argument(description="Exact title of an existing book")]
NewTitleArg = Annotated[
    str | None, strawberry.argument(description="Replacement title; omit to keep"),
]
NewDateArg = Annotated[
    str | None,
    strawberry.argument(description="Replacement ISO date (YYYY-MM-DD); omit to keep"),
]
NewCategoriesArg = Annotated[
    list[str] | None,
    strawberry.argument(description="Replacement categories; [] clears them, omit to keep"),
]


async def _rollback(ctx: GraphQLContext) -> None:
    await ctx.session.rollback()
    ctx.loaders = create_dataloaders(ctx.session)


@asynccontextmanager
async def transaction(ctx: GraphQLContext, operation: str) -> AsyncIterator[None]:
    """Commit on success, roll back on any failure.

    A rollback expires every instance in the session, including those the
    request's DataLoaders have cached, so the loaders are rebuilt before the
    next mutation can read from them. Store errors are re-raised as
    StoreException so clients see a stable message while the log keeps the
    original error.
    """
    try:
        yield
        await ctx.session.commit()
    except AppException:
        await _rollback(ctx)
        raise
    except SQLAlchemyError as e:
        await _rollback(ctx)
        logger.exception("Store error during mutation", extra={"operation": operation})
        msg = f"Failed to {operation.replace('_', ' ')}"
        raise StoreException(msg, extra={"operation": operation}) from e
    except Exception:
        await _rollback(ctx)
        raise


@strawberry.type(description="Root mutation type")
class Mutation:
    """GraphQL Mutation resolvers."""

    @strawberry.mutation(description="Create a book for an existing author")
    async def add_book(
        self,
        info: Info[GraphQLContext, None],
        title: str,
        author_id: int,
        publication_date: str,
        categories: list[str],
    ) -> BookType | None:
        ctx = info.context
        payload = parse_payload(
            BookCreate,
            title=title,
            author_id=author_id,
            publication_date=publication_date,
            categories=categories,
        )

        async with transaction(ctx, "add_book"):
            book = await BookService(ctx.session).add_book(payload)

        return BookType.from_model(book)

    @strawberry.mutation(description="Create an author")
    async def add_author(self, info: Info[GraphQLContext, None], name: str) -> AuthorType | None:
        ctx = info.context
        payload = parse_payload(AuthorCreate, name=name)

        async with transaction(ctx, "add_author"):
            author = await BookService(ctx.session).add_author(payload)

        return AuthorType.from_model(author)

    @strawberry.mutation(description="Update the book with the given title; omitted fields are kept")
    async def update_book(
        self,
        info: Info[GraphQLContext, None],
        title: TitleArg,
        new_title: NewTitleArg = strawberry.UNSET,
        new_publication_date: NewDateArg = strawberry.UNSET,
        new_categories: NewCategoriesArg = strawberry.UNSET,
    ) -> BookType | None:
        ctx = info.context
        provided = {
            "title": new_title,
            "publication_date": new_publication_date,
            "categories": new_categories,
        }
        payload = parse_book_update(
            **{key: value for key, value in provided.items() if value is not strawberry.UNSET}
        )

        async with transaction(ctx, "update_book"):
            book = await BookService(ctx.session).update_book(title, payload)

        return BookType.from_model(book)

    @strawberry.mutation(description="Delete the book with the given title and return it")
    async def delete_book(
        self,
        info: Info[GraphQLContext, None],
        title: TitleArg,
    ) -> BookType | None:
        ctx = info.context

        async with transaction(ctx, "delete_book"):
            book = await BookService(ctx.session).delete_book(title)

        return BookType.from_model(book)

    @strawberry.mutation(description="Delete an author, following the configured delete policy")
    async def delete_author(
        self,
        info: Info[GraphQLContext, None],
        id: int,  # noqa: A002
    ) -> AuthorType | None:
        ctx = info.context

        async with transaction(ctx, "delete_author"):
            author = await BookService(ctx.session).delete_author(id)

        return AuthorType.from_model(author)


__all__ = ["Mutation", "transaction"]
