"""Database engine and session management (SQLAlchemy async)."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from bookshelf.core.database import Base
from bookshelf.core.settings import get_db_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from sqlalchemy.ext.asyncio import AsyncEngine

    from bookshelf.core.settings import DatabaseSettings

logger = logging.getLogger(__name__)


def build_engine(db_settings: DatabaseSettings) -> AsyncEngine:
    """Create an async engine for the configured URL.

    SQLite connections get ``PRAGMA foreign_keys=ON`` so Book.author_id is
    enforced by the database as well, and in-memory databases share one
    connection so every session sees the same data.
    """
    kwargs = db_settings.engine_kwargs()
    if db_settings.is_sqlite and ":memory:" in db_settings.database_url:
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}

    new_engine = create_async_engine(db_settings.database_url, **kwargs)

    if db_settings.is_sqlite:

        @event.listens_for(new_engine.sync_engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_conn: Any, connection_record: Any) -> None:
            _ = connection_record
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return new_engine


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory used by the app, the CLI and the tests."""
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


db_settings = get_db_settings()
engine = build_engine(db_settings)
AsyncSessionLocal = build_sessionmaker(engine)


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Get async database session.

    Yields:
        Database session that is automatically closed.

    Example:
        async with get_async_session() as session:
            result = await session.execute(select(Book))
            books = result.scalars().all()
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def create_tables(*, drop_first: bool = False, bind: AsyncEngine | None = None) -> None:
    """Create every mapped table, optionally dropping them first.

    Uses the application engine unless ``bind`` is given.
    """
    import bookshelf.features.books.models  # noqa: F401  (registers mappers)

    async with (bind or engine).begin() as conn:
        if drop_first:
            await conn.run_sync(Base.metadata.drop_all)
            logger.warning("Dropped all tables")
        await conn.run_sync(Base.metadata.create_all)


async def init_database() -> None:
    """Check connectivity and create missing tables when configured to.

    Raises:
        sqlalchemy.exc.SQLAlchemyError: If the database is unreachable.
    """
    logger.info("Initializing database connection", extra={"url": engine.url.render_as_string()})

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

        if db_settings.create_tables_on_startup:
            await create_tables()
    except Exception as e:
        logger.error(
            "Failed to connect to database",
            extra={"url": engine.url.render_as_string(), "error": str(e)},
        )
        raise

    logger.info("Database connection established successfully")


async def close_database() -> None:
    """Dispose of the engine's connection pool at shutdown."""
    logger.info("Closing database connection")
    await engine.dispose()
    logger.info("Database connection closed successfully")


__all__ = [
    "AsyncSessionLocal",
    "build_engine",
    "build_sessionmaker",
    "close_database",
    "create_tables",
    "engine",
    "get_async_session",
    "init_database",
]
