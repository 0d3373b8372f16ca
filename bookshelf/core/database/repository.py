"""Minimal generic repository for SQLAlchemy models.

Provides basic CRUD operations with explicit session passing.
For complex queries, use the session directly - this is a convenience, not a cage.

Example:
    from bookshelf.core.database import BaseRepository
    from bookshelf.features.books.models import Author

    class AuthorRepository(BaseRepository[Author]):
        async def find_by_name(self, session: AsyncSession, name: str) -> Author | None:
            return await self.get_by(session, Author.name, name)

    author_repo = AuthorRepository(Author)
    author = await author_repo.get(session, author_id)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from sqlalchemy import select

from bookshelf.core.database.exceptions import NotFoundError
from bookshelf.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.orm import InstrumentedAttribute

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """Minimal generic repository for CRUD operations.

    Provides:
        - get(session, id) -> T | None
        - get_many(session, ids) -> Sequence[T]
        - get_or_raise(session, id) -> T (raises NotFoundError)
        - get_by(session, attr, value) -> T | None
        - list(session, limit, offset) -> Sequence[T]
        - create(session, instance) -> T
        - update(session, instance, values) -> T
        - delete(session, instance) -> None

    Session is always explicit - no hidden state. Writes flush but never
    commit; the caller owns the transaction.
    """

    __slots__ = ("model", "_logger", "_lazy")

    def __init__(self, model: type[T]) -> None:
        """Initialize repository with model class.

        Args:
            model: SQLAlchemy model class (e.g., Book, Author)
        """
        self.model = model
        self._logger = logging.getLogger(f"repository.{model.__name__}")
        self._lazy = get_lazy_logger(f"repository.{model.__name__}")

    def _pk_attr(self) -> InstrumentedAttribute[Any]:
        return self.model.id  # type: ignore[attr-defined]

    async def get(
        self,
        session: AsyncSession,
        id: Any,  # noqa: A002
    ) -> T | None:
        """Get entity by primary key.

        Args:
            session: Database session
            id: Primary key value

        Returns:
            Entity if found, None otherwise
        """
        instance = await session.get(self.model, id)

        self._lazy.debug(
            lambda: f"db.get: {self.model.__name__}({id}) -> {'found' if instance else 'not found'}"
        )
        return instance

    async def get_many(
        self,
        session: AsyncSession,
        ids: Iterable[Any],
    ) -> Sequence[T]:
        """Get every entity whose primary key is in ``ids`` with one query.

        Rows come back in database order; ids with no row are simply absent.
        Callers that need positional alignment map the rows back by id.

        Args:
            session: Database session
            ids: Primary key values

        Returns:
            Sequence of the entities that exist
        """
        id_list = list(ids)
        if not id_list:
            return []

        stmt = select(self.model).where(self._pk_attr().in_(id_list))
        result = await session.execute(stmt)
        items = result.scalars().all()

        self._lazy.debug(
            lambda: f"db.get_many: {self.model.__name__}({len(id_list)} ids) -> {len(items)} found"
        )
        return items

    async def get_or_raise(
        self,
        session: AsyncSession,
        id: Any,  # noqa: A002
    ) -> T:
        """Get entity by primary key or raise NotFoundError.

        Raises:
            NotFoundError: If entity doesn't exist
        """
        instance = await self.get(session, id)
        if instance is None:
            self._logger.info(
                "Entity not found",
                extra={
                    "entity": self.model.__name__,
                    "id": str(id),
                    "operation": "db.get_or_raise",
                },
            )
            raise NotFoundError(self.model.__name__, {"id": id})
        return instance

    async def get_by(
        self,
        session: AsyncSession,
        attr: InstrumentedAttribute[Any],
        value: Any,
    ) -> T | None:
        """Get entity by arbitrary attribute.

        Args:
            session: Database session
            attr: Model attribute to filter by (e.g., Author.name)
            value: Value to match

        Returns:
            First matching entity or None
        """
        stmt = select(self.model).where(attr == value).order_by(self._pk_attr()).limit(1)
        result = await session.execute(stmt)
        instance = result.scalars().first()

        self._lazy.debug(
            lambda: f"db.get_by: {self.model.__name__}.{attr.key}={value!r} -> {'found' if instance else 'not found'}"
        )
        return instance

    async def list(
        self,
        session: AsyncSession,
        *,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[T]:
        """List entities in primary key (insertion) order.

        Args:
            session: Database session
            limit: Maximum results to return (None for all)
            offset: Number of results to skip

        Returns:
            Sequence of entities
        """
        stmt = select(self.model).order_by(self._pk_attr()).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        items = result.scalars().all()

        self._lazy.debug(
            lambda: f"db.list: {self.model.__name__}(limit={limit}, offset={offset}) -> {len(items)} items"
        )
        return items

    async def create(self, session: AsyncSession, instance: T) -> T:
        """Persist a new entity.

        Adds to session and flushes so generated values (like id) are populated.

        Args:
            session: Database session
            instance: Entity instance to persist

        Returns:
            Persisted entity with generated fields populated
        """
        session.add(instance)
        await session.flush()

        entity_id = getattr(instance, "id", None)
        self._lazy.debug(lambda: f"db.create: {self.model.__name__}(id={entity_id})")
        return instance

    async def update(
        self,
        session: AsyncSession,
        instance: T,
        values: Mapping[str, Any],
    ) -> T:
        """Apply a partial update to a tracked entity.

        Only the keys present in ``values`` are written; everything else is
        left untouched.

        Args:
            session: Database session
            instance: Entity loaded in this session
            values: Attribute name -> new value

        Returns:
            The updated entity
        """
        for key, value in values.items():
            setattr(instance, key, value)
        await session.flush()

        entity_id = getattr(instance, "id", None)
        self._lazy.debug(
            lambda: f"db.update: {self.model.__name__}(id={entity_id}) fields={sorted(values)}"
        )
        return instance

    async def delete(self, session: AsyncSession, instance: T) -> None:
        """Delete an entity.

        Args:
            session: Database session
            instance: Entity to delete
        """
        entity_id = getattr(instance, "id", None)
        await session.delete(instance)
        await session.flush()

        self._logger.info(
            "Entity deleted",
            extra={"entity": self.model.__name__, "id": str(entity_id), "operation": "db.delete"},
        )


__all__ = ["BaseRepository"]
