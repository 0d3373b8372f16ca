"""GraphQL router for FastAPI integration.

Provides:
- GraphQL endpoint at GRAPHQL_PATH (default /graphql)
- Optional in-browser IDE on GET (GraphiQL, Apollo Sandbox or Pathfinder)
- Request context with session and fresh DataLoaders
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Annotated, Any, cast

from fastapi import BackgroundTasks, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002
from strawberry.fastapi import GraphQLRouter

from bookshelf.core.dependencies.database import get_db_session
from bookshelf.core.settings import get_graphql_settings
from bookshelf.features.graphql.context import GraphQLContext
from bookshelf.features.graphql.dataloaders import create_dataloaders
from bookshelf.features.graphql.schema import schema

if TYPE_CHECKING:
    from bookshelf.features.graphql.schema import BookshelfSchema

logger = logging.getLogger(__name__)


async def get_graphql_context(
    request: Request,
    response: Response,
    background_tasks: BackgroundTasks,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> GraphQLContext:
    """Create GraphQL context from FastAPI dependencies.

    Every call builds new DataLoaders, so caches never outlive the request.
    """
    return GraphQLContext(
        request=request,
        response=response,
        background_tasks=background_tasks,
        session=session,
        loaders=create_dataloaders(session),
        request_id=getattr(request.state, "request_id", None),
    )


def create_graphql_router(graphql_schema: BookshelfSchema | None = None) -> GraphQLRouter:
    """Create GraphQL router with settings-based configuration."""
    settings = get_graphql_settings()

    graphql_app: GraphQLRouter = GraphQLRouter(
        graphql_schema or schema,
        path=settings.path,
        context_getter=cast("Any", get_graphql_context),
        graphql_ide=settings.graphql_ide or None,
    )
    logger.debug(
        "GraphQL router created",
        extra={"path": settings.path, "graphql_ide": settings.graphql_ide},
    )
    return graphql_app


__all__ = ["create_graphql_router", "get_graphql_context"]
