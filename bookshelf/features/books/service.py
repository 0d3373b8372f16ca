"""Write operations on the catalogue.

The service validates and applies mutations; it flushes but never commits,
so the caller decides the transaction boundary.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bookshelf.core.database import MultipleResultsFoundError, NotFoundError
from bookshelf.core.exceptions import ConflictException, NotFoundException
from bookshelf.core.services.base import BaseService
from bookshelf.core.settings import get_books_settings
from bookshelf.features.books.models import Author, Book
from bookshelf.features.books.repository import get_author_repository, get_book_repository

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from bookshelf.core.settings import BooksSettings
    from bookshelf.features.books.repository import AuthorRepository, BookRepository
    from bookshelf.features.books.schemas import AuthorCreate, BookCreate, BookUpdate


class BookService(BaseService):
    """Mutations for books and authors, applying the catalogue policies."""

    def __init__(
        self,
        session: AsyncSession,
        settings: BooksSettings | None = None,
        authors: AuthorRepository | None = None,
        books: BookRepository | None = None,
    ) -> None:
        super().__init__()
        self.session = session
        self.settings = settings or get_books_settings()
        self.authors = authors or get_author_repository()
        self.books = books or get_book_repository()

    async def add_author(self, payload: AuthorCreate) -> Author:
        existing = await self.authors.find_by_name(self.session, payload.name)
        if existing is not None:
            raise ConflictException(
                "Author already exists",
                extra={"name": payload.name, "author_id": existing.id},
            )

        author = await self.authors.create(self.session, Author(name=payload.name))
        self.logger.info(
            "Author created",
            extra={"author_id": author.id, "operation": "service.add_author"},
        )
        return author

    async def add_book(self, payload: BookCreate) -> Book:
        """Create a book for an existing author.

        Raises:
            NotFoundException: If the author does not exist. Nothing is written.
            ConflictException: If titles are unique and the title is taken.
        """
        author = await self._get_author(payload.author_id)

        await self._ensure_title_available(payload.title)

        book = await self.books.create(
            self.session,
            Book(
                title=payload.title,
                author_id=author.id,
                publication_date=payload.publication_date,
                categories=list(payload.categories),
            ),
        )
        self.logger.info(
            "Book created",
            extra={"book_id": book.id, "author_id": author.id, "operation": "service.add_book"},
        )
        return book

    async def update_book(self, title: str, payload: BookUpdate) -> Book:
        """Apply the provided fields of ``payload`` to the book titled ``title``.

        Fields absent from the payload keep their stored value; an empty
        category list clears the categories.
        """
        book = await self._get_book_by_title(title)
        changes = payload.changes()

        new_title = changes.get("title")
        if new_title is not None and new_title != book.title:
            await self._ensure_title_available(new_title, exclude_id=book.id)

        if changes:
            await self.books.update(self.session, book, changes)

        self.logger.info(
            "Book updated",
            extra={
                "book_id": book.id,
                "fields": sorted(changes),
                "operation": "service.update_book",
            },
        )
        return book

    async def delete_book(self, title: str) -> Book:
        book = await self._get_book_by_title(title)
        await self.books.delete(self.session, book)
        self.logger.info(
            "Book deleted",
            extra={"book_id": book.id, "operation": "service.delete_book"},
        )
        return book

    async def delete_author(self, author_id: int) -> Author:
        """Delete an author according to ``author_delete_policy``.

        Under ``restrict`` an author who still has books is refused; under
        ``cascade`` those books are deleted first.
        """
        author = await self._get_author(author_id)

        book_count = await self.books.count_by_author(self.session, author_id)
        if book_count:
            if self.settings.author_delete_policy == "restrict":
                raise ConflictException(
                    "Author still has books",
                    extra={"author_id": author_id, "book_count": book_count},
                )
            for book in await self.books.list_by_author_ids(self.session, [author_id]):
                await self.books.delete(self.session, book)

        await self.authors.delete(self.session, author)
        self.logger.info(
            "Author deleted",
            extra={
                "author_id": author_id,
                "cascaded_books": book_count,
                "operation": "service.delete_author",
            },
        )
        return author

    async def _get_author(self, author_id: int) -> Author:
        try:
            return await self.authors.get_or_raise(self.session, author_id)
        except NotFoundError as e:
            raise NotFoundException("Author not found", extra={"author_id": author_id}) from e

    async def _get_book_by_title(self, title: str) -> Book:
        books = await self.books.find_all_by_title(self.session, title)
        if not books:
            raise NotFoundException("Book not found", extra={"title": title})
        if len(books) > 1:
            error = MultipleResultsFoundError("Book", {"title": title}, len(books))
            raise ConflictException(str(error), extra=error.details) from error
        return books[0]

    async def _ensure_title_available(self, title: str, exclude_id: int | None = None) -> None:
        if not self.settings.enforce_unique_titles:
            return

        for book in await self.books.find_all_by_title(self.session, title):
            if book.id != exclude_id:
                raise ConflictException(
                    "A book with this title already exists",
                    extra={"title": title, "book_id": book.id},
                )


__all__ = ["BookService"]
