"""Application lifespan management.

Startup Order:
1. Logging
2. Database (connectivity check, optional table creation)

Shutdown Order: reverse of startup.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from bookshelf.core.settings import get_app_settings, get_db_settings, get_logging_settings
from bookshelf.infra.logging.config import setup_logging
from bookshelf.infra.logging.config import shutdown as shutdown_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


async def _startup_core() -> None:
    """Configure logging first so every later step is logged."""
    app = get_app_settings()

    setup_logging(log_settings=get_logging_settings(), force=True)
    logger.info(
        "Application starting",
        extra={"service": app.service_name, "environment": app.environment},
    )


async def _startup_database() -> None:
    from bookshelf.infra.database.session import init_database

    db = get_db_settings()
    try:
        await init_database()
    except Exception as e:
        logger.exception(
            "Database unavailable, failing startup",
            extra={"error": str(e), "create_tables_on_startup": db.create_tables_on_startup},
        )
        raise


async def _shutdown_database() -> None:
    from bookshelf.infra.database.session import close_database

    await close_database()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    _ = app

    await _startup_core()
    await _startup_database()

    app_settings = get_app_settings()
    logger.info(
        "Application is ready to serve requests on http://%s:%s",
        app_settings.host,
        app_settings.port,
        extra={
            "service": app_settings.service_name,
            "environment": app_settings.environment,
            "version": app_settings.version,
        },
    )

    try:
        yield
    finally:
        logger.info("Application shutting down")
        await _shutdown_database()
        shutdown_logging()


__all__ = ["lifespan"]
