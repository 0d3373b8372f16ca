"""Router registry and setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from bookshelf.core.settings import get_graphql_settings
from bookshelf.features.health.router import router as health_router

if TYPE_CHECKING:
    from fastapi import FastAPI

    from bookshelf.core.settings import GraphQLSettings

logger = logging.getLogger(__name__)


def setup_routers(app: FastAPI, graphql_settings: GraphQLSettings | None = None) -> None:
    """Register all feature routers with the application.

    The GraphQL router is imported only when enabled, so a disabled endpoint
    never builds the schema.
    """
    graphql_settings = graphql_settings or get_graphql_settings()

    app.include_router(health_router)

    if graphql_settings.enabled:
        from bookshelf.features.graphql.router import create_graphql_router

        app.include_router(create_graphql_router())
        logger.info("GraphQL endpoint enabled", extra={"path": graphql_settings.path})
    else:
        logger.info("GraphQL endpoint disabled")


__all__ = ["setup_routers"]
