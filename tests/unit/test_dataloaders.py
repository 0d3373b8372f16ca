"""Tests for the request-scoped DataLoaders."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from bookshelf.features.books.models import Author
from bookshelf.features.graphql.dataloaders import AuthorDataLoader, create_dataloaders
from tests.utils import count_selects

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


pytestmark = pytest.mark.usefixtures("seeded")


async def test_concurrent_loads_share_one_query(session: AsyncSession, statements: list[str]) -> None:
    loaders = create_dataloaders(session)
    statements.clear()

    authors = await asyncio.gather(*(loaders.authors.load(id_) for id_ in (3, 1, 3, 2)))

    assert [author.name for author in authors] == [
        "Sylvia Plath",
        "Kate Chopin",
        "Sylvia Plath",
        "Paul Auster",
    ]
    assert authors[0] is authors[2]
    assert count_selects(statements, "author") == 1


async def test_missing_keys_resolve_to_none(session: AsyncSession) -> None:
    loaders = create_dataloaders(session)

    found, missing = await asyncio.gather(loaders.authors.load(1), loaders.authors.load(404))

    assert found.name == "Kate Chopin"
    assert missing is None


async def test_load_many_keeps_key_order(session: AsyncSession) -> None:
    loaders = create_dataloaders(session)

    books = await loaders.books.load_many([5, 404, 1])

    assert [book.title if book else None for book in books] == [
        "The Great Gatsby",
        None,
        "The Awakening",
    ]


async def test_cached_keys_are_not_fetched_again(session: AsyncSession, statements: list[str]) -> None:
    loaders = create_dataloaders(session)
    await loaders.authors.load(1)
    statements.clear()

    author = await loaders.authors.load(1)

    assert author.name == "Kate Chopin"
    assert statements == []


async def test_loaders_are_isolated_per_request(session: AsyncSession, statements: list[str]) -> None:
    first = create_dataloaders(session)
    second = create_dataloaders(session)
    await first.authors.load(1)
    statements.clear()

    await second.authors.load(1)

    assert first.authors is not second.authors
    assert count_selects(statements, "author") == 1


async def test_books_by_author_groups_and_defaults_to_empty(session: AsyncSession) -> None:
    session.add(Author(name="Unpublished Writer"))
    await session.commit()
    loaders = create_dataloaders(session)

    orwell, nobody, unknown = await loaders.books_by_author.load_many([4, 7, 404])

    assert [book.title for book in orwell] == ["1984"]
    assert nobody == []
    assert unknown == []


async def test_empty_batch_issues_no_query(session: AsyncSession, statements: list[str]) -> None:
    loader = AuthorDataLoader(session)
    statements.clear()

    assert await loader._batch_load_authors([]) == []
    assert statements == []


async def test_store_failure_fails_whole_batch_only() -> None:
    rows = MagicMock()
    rows.scalars.return_value.all.return_value = [Author(id=5, name="F. Scott Fitzgerald")]
    session = MagicMock()
    session.execute = AsyncMock(
        side_effect=[OperationalError("SELECT", {}, Exception("database is locked")), rows],
    )
    loader = AuthorDataLoader(session)

    results = await asyncio.gather(loader.load(1), loader.load(2), return_exceptions=True)

    assert all(isinstance(result, OperationalError) for result in results)
    assert session.execute.await_count == 1

    later = await loader.load(5)
    assert later.name == "F. Scott Fitzgerald"
    assert session.execute.await_count == 2
