"""Relationship DataLoaders for one-to-many associations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from strawberry.dataloader import DataLoader

from bookshelf.features.books.repository import get_book_repository

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from bookshelf.features.books.models import Book
    from bookshelf.features.graphql.dataloaders.books import BookDataLoader


class AuthorBooksDataLoader:
    """DataLoader for batch-loading books by author ID.

    Maps author_id -> list of books (empty list if none). Books fetched here
    are primed into ``book_loader`` when one is given, so a later
    ``book(id)`` lookup in the same request is served from cache.

    Usage:
        loader = AuthorBooksDataLoader(session)
        books = await loader.load(author_id)  # Returns list[Book]
    """

    def __init__(self, session: AsyncSession, book_loader: BookDataLoader | None = None) -> None:
        self._session = session
        self._book_loader = book_loader
        self._repository = get_book_repository()
        self._loader: DataLoader[int, list[Book]] = DataLoader(
            load_fn=self._batch_load_books_by_author,
        )

    async def _batch_load_books_by_author(self, author_ids: list[int]) -> list[list[Book]]:
        """Batch load the books of several authors with one query.

        Returns:
            One list of books per author_id, in id order
        """
        if not author_ids:
            return []

        rows = await self._repository.list_by_author_ids(self._session, author_ids)

        books_by_author: dict[int, list[Book]] = {author_id: [] for author_id in author_ids}
        for book in rows:
            if book.author_id in books_by_author:
                books_by_author[book.author_id].append(book)

        if self._book_loader is not None:
            self._book_loader.prime_many(rows)

        return [books_by_author[author_id] for author_id in author_ids]

    async def load(self, author_id: int) -> list[Book]:
        return await self._loader.load(author_id)

    async def load_many(self, author_ids: list[int]) -> list[list[Book]]:
        return await self._loader.load_many(author_ids)


__all__ = ["AuthorBooksDataLoader"]
