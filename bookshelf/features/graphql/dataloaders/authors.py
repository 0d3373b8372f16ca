"""DataLoader for batch-loading authors.

Resolves ``Book.author`` for any number of books with a single query.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from strawberry.dataloader import DataLoader

from bookshelf.features.books.repository import get_author_repository

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from bookshelf.features.books.models import Author


class AuthorDataLoader:
    """DataLoader for batch-loading authors by ID.

    Each request gets its own loader instance for proper caching.

    Usage:
        loader = AuthorDataLoader(session)
        author = await loader.load(author_id)  # Batched with other loads
        authors = await loader.load_many([1, 2, 3])
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._repository = get_author_repository()
        self._loader: DataLoader[int, Author | None] = DataLoader(
            load_fn=self._batch_load_authors
        )

    async def _batch_load_authors(self, ids: list[int]) -> list[Author | None]:
        """Batch load authors by IDs.

        Returns results in the same order as ``ids``; missing IDs map to
        None. Rows the store returns that were not asked for are ignored.
        """
        if not ids:
            return []

        rows = await self._repository.get_many(self._session, ids)
        authors = {author.id: author for author in rows}
        return [authors.get(id_) for id_ in ids]

    async def load(self, id_: int) -> Author | None:
        """Load a single author by ID.

        Batched with every other ``load`` issued in the same event loop tick.
        """
        return await self._loader.load(id_)

    async def load_many(self, ids: list[int]) -> list[Author | None]:
        return await self._loader.load_many(ids)


__all__ = ["AuthorDataLoader"]
