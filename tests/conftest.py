"""Pytest configuration and shared fixtures.

Organization:
    - Environment: settings that keep tests on in-memory SQLite
    - Database Fixtures: engine, session, seeded data, statement counter
    - Application Fixtures: FastAPI app and HTTP client
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event

# Settings are read at import time by the session module
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("DB_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DB_CREATE_TABLES_ON_STARTUP", "true")
os.environ.setdefault("LOG_JSON_LOGS", "false")

from bookshelf.core.database import Base  # noqa: E402
from bookshelf.core.settings import DatabaseSettings, clear_settings_cache  # noqa: E402
from bookshelf.features.books import models  # noqa: E402, F401
from bookshelf.infra.database.session import build_engine, build_sessionmaker  # noqa: E402

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Iterator

    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

    from bookshelf.features.books.seed import SeedReport


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    """Drop cached settings so env changes made by a test never leak."""
    clear_settings_cache()
    yield
    clear_settings_cache()


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory SQLite database with every table created."""
    test_engine = build_engine(DatabaseSettings(database_url="sqlite+aiosqlite:///:memory:"))
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_sessionmaker(engine)


@pytest.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    async with session_factory() as db_session:
        yield db_session


@pytest.fixture
async def seeded(session: AsyncSession) -> SeedReport:
    """Load the reference authors and books."""
    from bookshelf.features.books.seed import seed_database

    return await seed_database(session)


@pytest.fixture
def statements(engine: AsyncEngine) -> Iterator[list[str]]:
    """Every SQL statement sent to the test database, in order.

    Example:
        statements.clear()
        await do_work()
        assert sum("FROM author" in s for s in statements) == 1
    """
    captured: list[str] = []

    def _capture(conn, cursor, statement, parameters, context, executemany) -> None:  # noqa: ANN001
        captured.append(statement)

    event.listen(engine.sync_engine, "before_cursor_execute", _capture)
    yield captured
    event.remove(engine.sync_engine, "before_cursor_execute", _capture)


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def app(session_factory: async_sessionmaker[AsyncSession]) -> FastAPI:
    """FastAPI application whose requests use the test database."""
    from bookshelf.app.main import create_app
    from bookshelf.core.dependencies.database import get_db_session

    application = create_app()

    async def _override_session() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as db_session:
            yield db_session

    application.dependency_overrides[get_db_session] = _override_session
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTPX AsyncClient bound to the app without a network socket."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
