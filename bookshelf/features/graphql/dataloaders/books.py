"""DataLoader for batch-loading books by ID."""

from __future__ import annotations

from typing import TYPE_CHECKING

from strawberry.dataloader import DataLoader

from bookshelf.features.books.repository import get_book_repository

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy.ext.asyncio import AsyncSession

    from bookshelf.features.books.models import Book


class BookDataLoader:
    """DataLoader for batch-loading books by ID.

    Usage:
        loader = BookDataLoader(session)
        book = await loader.load(book_id)
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._repository = get_book_repository()
        self._loader: DataLoader[int, Book | None] = DataLoader(load_fn=self._batch_load_books)

    async def _batch_load_books(self, ids: list[int]) -> list[Book | None]:
        if not ids:
            return []

        rows = await self._repository.get_many(self._session, ids)
        books = {book.id: book for book in rows}
        return [books.get(id_) for id_ in ids]

    async def load(self, id_: int) -> Book | None:
        return await self._loader.load(id_)

    async def load_many(self, ids: list[int]) -> list[Book | None]:
        return await self._loader.load_many(ids)

    def prime_many(self, books: Iterable[Book]) -> None:
        """Seed the cache with books fetched by another query.

        Keys already cached keep their value.
        """
        self._loader.prime_many({book.id: book for book in books})


__all__ = ["BookDataLoader"]
