"""DataLoader container and factory.

DataLoaders batch and cache database lookups within a single request,
preventing N+1 query problems in the nested ``Book.author`` and
``Author.books`` fields.

Each GraphQL request gets its own DataLoaders instance to ensure proper
batching boundaries and cache isolation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from bookshelf.features.graphql.dataloaders.authors import AuthorDataLoader
from bookshelf.features.graphql.dataloaders.books import BookDataLoader
from bookshelf.features.graphql.dataloaders.relationships import AuthorBooksDataLoader

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


@dataclass
class DataLoaders:
    """Container for all DataLoader instances.

    One instance created per GraphQL request.

    Usage in resolver:
        ctx = info.context
        author = await ctx.loaders.authors.load(book.author_id)
    """

    authors: AuthorDataLoader
    books: BookDataLoader
    books_by_author: AuthorBooksDataLoader


def create_dataloaders(session: AsyncSession) -> DataLoaders:
    """Factory for creating request-scoped DataLoaders.

    Args:
        session: Database session for the current request
    """
    books = BookDataLoader(session)
    return DataLoaders(
        authors=AuthorDataLoader(session),
        books=books,
        books_by_author=AuthorBooksDataLoader(session, book_loader=books),
    )


__all__ = [
    "AuthorBooksDataLoader",
    "AuthorDataLoader",
    "BookDataLoader",
    "DataLoaders",
    "create_dataloaders",
]
