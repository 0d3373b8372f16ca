"""Database dependencies for FastAPI route handlers.

`get_db_session()` ties a session to the HTTP request; CLI commands and
scripts use `bookshelf.infra.database.get_async_session()` directly. Both
come from the same session factory.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.infra.database import get_async_session


async def get_db_session() -> AsyncGenerator[AsyncSession]:
    """FastAPI dependency for database session.

    Yields:
        Database session that is automatically closed after request.
    """
    async with get_async_session() as session:
        yield session
