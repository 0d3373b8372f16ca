"""Repositories for authors and books."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, select

from bookshelf.core.database import BaseRepository
from bookshelf.features.books.models import Author, Book, BookCategory

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from sqlalchemy.ext.asyncio import AsyncSession


class AuthorRepository(BaseRepository[Author]):
    """Repository for Author model."""

    def __init__(self) -> None:
        super().__init__(Author)

    async def find_by_name(self, session: AsyncSession, name: str) -> Author | None:
        return await self.get_by(session, Author.name, name)


class BookRepository(BaseRepository[Book]):
    """Repository for Book model.

    Ordering rules:
        - Plain listings and filters come back in id (insertion) order
        - Date sorts break ties by id so results are stable
    """

    def __init__(self) -> None:
        super().__init__(Book)

    async def find_all_by_title(self, session: AsyncSession, title: str) -> Sequence[Book]:
        """Every book whose title matches exactly, oldest first."""
        stmt = select(Book).where(Book.title == title).order_by(Book.id)
        result = await session.execute(stmt)
        books = result.scalars().all()

        self._lazy.debug(lambda: f"db.find_all_by_title({title!r}) -> {len(books)} items")
        return books

    async def find_by_category(self, session: AsyncSession, category: str) -> Sequence[Book]:
        """Books carrying ``category`` (exact, case-sensitive match)."""
        stmt = (
            select(Book)
            .where(Book.category_links.any(BookCategory.name == category))
            .order_by(Book.id)
        )
        result = await session.execute(stmt)
        books = result.scalars().all()

        self._lazy.debug(lambda: f"db.find_by_category({category!r}) -> {len(books)} items")
        return books

    async def list_sorted_by_date(
        self,
        session: AsyncSession,
        *,
        descending: bool = False,
    ) -> Sequence[Book]:
        """All books ordered by publication date."""
        date_order = Book.publication_date.desc() if descending else Book.publication_date.asc()
        stmt = select(Book).order_by(date_order, Book.id)
        result = await session.execute(stmt)
        books = result.scalars().all()

        self._lazy.debug(
            lambda: f"db.list_sorted_by_date(descending={descending}) -> {len(books)} items"
        )
        return books

    async def list_recent(self, session: AsyncSession, limit: int) -> Sequence[Book]:
        """The ``limit`` most recently published books, newest first."""
        stmt = (
            select(Book)
            .order_by(Book.publication_date.desc(), Book.id.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        books = result.scalars().all()

        self._lazy.debug(lambda: f"db.list_recent(limit={limit}) -> {len(books)} items")
        return books

    async def list_by_author_ids(
        self,
        session: AsyncSession,
        author_ids: Iterable[int],
    ) -> Sequence[Book]:
        """Books of any of the given authors in one query, in id order."""
        id_list = list(author_ids)
        if not id_list:
            return []

        stmt = select(Book).where(Book.author_id.in_(id_list)).order_by(Book.id)
        result = await session.execute(stmt)
        books = result.scalars().all()

        self._lazy.debug(
            lambda: f"db.list_by_author_ids({len(id_list)} authors) -> {len(books)} items"
        )
        return books

    async def count_by_author(self, session: AsyncSession, author_id: int) -> int:
        stmt = select(func.count()).select_from(Book).where(Book.author_id == author_id)
        result = await session.execute(stmt)
        return result.scalar_one()


# Factory functions for dependency injection
_author_repository: AuthorRepository | None = None
_book_repository: BookRepository | None = None


def get_author_repository() -> AuthorRepository:
    """Get the shared AuthorRepository instance."""
    global _author_repository
    if _author_repository is None:
        _author_repository = AuthorRepository()
    return _author_repository


def get_book_repository() -> BookRepository:
    """Get the shared BookRepository instance.

    Repositories hold no per-request state; the session is always passed in.
    """
    global _book_repository
    if _book_repository is None:
        _book_repository = BookRepository()
    return _book_repository


__all__ = [
    "AuthorRepository",
    "BookRepository",
    "get_author_repository",
    "get_book_repository",
]
