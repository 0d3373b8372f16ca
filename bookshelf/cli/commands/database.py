"""Database management commands.

Each command opens its own engine from the current settings and disposes
it before exiting.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TypeVar

import click
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from bookshelf.cli.utils import coro, error, info, success, warning
from bookshelf.core.settings import get_db_settings
from bookshelf.infra.database.session import build_engine, build_sessionmaker, create_tables

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from sqlalchemy.ext.asyncio import AsyncEngine

T = TypeVar("T")


async def _run_with_engine(action: Callable[[AsyncEngine], Awaitable[T]]) -> T:
    db_settings = get_db_settings()
    engine = build_engine(db_settings)
    info(f"Database: {engine.url.render_as_string()}")
    try:
        return await action(engine)
    finally:
        await engine.dispose()


@click.group(name="db")
def db() -> None:
    """Database management commands."""


@db.command()
@coro
async def init() -> None:
    """Create any missing tables."""
    info("Creating tables...")

    try:
        await _run_with_engine(lambda engine: create_tables(bind=engine))
    except SQLAlchemyError as e:
        error(f"Failed to create tables: {e}")
        sys.exit(1)

    success("Database initialized")


@db.command()
@coro
async def seed() -> None:
    """Insert the reference authors and books (safe to run repeatedly)."""
    from bookshelf.features.books.seed import seed_database

    async def _seed(engine: AsyncEngine):
        await create_tables(bind=engine)
        async with build_sessionmaker(engine)() as session:
            return await seed_database(session)

    try:
        report = await _run_with_engine(_seed)
    except SQLAlchemyError as e:
        error(f"Failed to seed database: {e}")
        sys.exit(1)

    success(
        f"Seeded {report.authors_created} authors and {report.books_created} books"
    )
    if report.books_skipped:
        warning(f"Skipped {report.books_skipped} books whose author is missing")


@db.command()
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.option("--seed/--no-seed", "with_seed", default=False, help="Load the reference data afterwards")
@coro
async def reset(yes: bool, with_seed: bool) -> None:
    """Drop and recreate every table. All data is lost."""
    if not yes and not click.confirm("This deletes all books and authors. Continue?"):
        info("Aborted")
        return

    from bookshelf.features.books.seed import SeedReport, seed_database

    async def _reset(engine: AsyncEngine) -> SeedReport | None:
        await create_tables(drop_first=True, bind=engine)
        if not with_seed:
            return None
        async with build_sessionmaker(engine)() as session:
            return await seed_database(session)

    try:
        report = await _run_with_engine(_reset)
    except SQLAlchemyError as e:
        error(f"Failed to reset database: {e}")
        sys.exit(1)

    success("Database reset")
    if report is not None:
        success(f"Seeded {report.authors_created} authors and {report.books_created} books")


@db.command()
@coro
async def stats() -> None:
    """Show how many authors and books are stored."""
    from bookshelf.features.books.models import Author, Book

    async def _count(engine: AsyncEngine) -> tuple[int, int]:
        async with build_sessionmaker(engine)() as session:
            authors = await session.scalar(select(func.count()).select_from(Author))
            books = await session.scalar(select(func.count()).select_from(Book))
        return authors or 0, books or 0

    try:
        authors, books = await _run_with_engine(_count)
    except SQLAlchemyError as e:
        error(f"Failed to read database: {e}")
        sys.exit(1)

    click.echo(f"authors: {authors}")
    click.echo(f"books: {books}")
