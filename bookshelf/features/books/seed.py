"""Reference dataset and an idempotent loader for it."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from bookshelf.features.books.models import Author, Book
from bookshelf.features.books.repository import get_author_repository, get_book_repository

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SeedBook:
    title: str
    author_name: str
    publication_date: date
    categories: tuple[str, ...]


SEED_AUTHORS: tuple[str, ...] = (
    "Kate Chopin",
    "Paul Auster",
    "Sylvia Plath",
    "George Orwell",
    "F. Scott Fitzgerald",
    "ROLLIN Clément",
)

SEED_BOOKS: tuple[SeedBook, ...] = (
    SeedBook("The Awakening", "Kate Chopin", date(1899, 4, 22), ("Fiction", "Classics")),
    SeedBook("City of Glass", "Paul Auster", date(1985, 3, 12), ("Fiction", "Mystery")),
    SeedBook("The Bell Jar", "Sylvia Plath", date(1963, 1, 14), ("Fiction", "Autobiographical")),
    SeedBook("1984", "George Orwell", date(1949, 6, 8), ("Dystopian", "Political Fiction")),
    SeedBook("The Great Gatsby", "F. Scott Fitzgerald", date(1925, 4, 10), ("Fiction", "Classics")),
    SeedBook(
        "Les aventures de Clément",
        "ROLLIN Clément",
        date(2021, 5, 27),
        ("Aventure", "Découverte"),
    ),
)


@dataclass(slots=True)
class SeedReport:
    authors_created: int = 0
    books_created: int = 0
    books_skipped: int = 0


async def seed_database(
    session: AsyncSession,
    authors: tuple[str, ...] = SEED_AUTHORS,
    books: tuple[SeedBook, ...] = SEED_BOOKS,
) -> SeedReport:
    """Insert the reference authors and books that are not there yet.

    Authors are matched by name and books by title, so running this twice
    inserts nothing the second time. A book whose author cannot be found is
    skipped with a warning. Commits once at the end.
    """
    author_repo = get_author_repository()
    book_repo = get_book_repository()
    report = SeedReport()

    for name in authors:
        if await author_repo.find_by_name(session, name) is None:
            await author_repo.create(session, Author(name=name))
            report.authors_created += 1

    for seed_book in books:
        if await book_repo.find_all_by_title(session, seed_book.title):
            continue

        author = await author_repo.find_by_name(session, seed_book.author_name)
        if author is None:
            logger.warning(
                "Skipping seed book, author not found",
                extra={"title": seed_book.title, "author_name": seed_book.author_name},
            )
            report.books_skipped += 1
            continue

        await book_repo.create(
            session,
            Book(
                title=seed_book.title,
                author_id=author.id,
                publication_date=seed_book.publication_date,
                categories=list(seed_book.categories),
            ),
        )
        report.books_created += 1

    await session.commit()
    logger.info(
        "Seed data loaded",
        extra={
            "authors_created": report.authors_created,
            "books_created": report.books_created,
            "books_skipped": report.books_skipped,
        },
    )
    return report


__all__ = ["SEED_AUTHORS", "SEED_BOOKS", "SeedBook", "SeedReport", "seed_database"]
