"""GraphQL context for request-scoped dependencies.

The context is created fresh for each GraphQL request and provides:
- Database session (for queries/mutations)
- DataLoaders (for N+1 prevention)
- Request ID (for log correlation)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from strawberry.fastapi import BaseContext

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession
    from starlette.background import BackgroundTasks
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.websockets import WebSocket

    from bookshelf.features.graphql.dataloaders import DataLoaders


@dataclass
class GraphQLContext(BaseContext):
    """Request context for GraphQL operations.

    Inherits the standard FastAPI integration fields (request, response,
    background_tasks) from Strawberry's BaseContext.

    Example usage in resolver:
        @strawberry.field
        async def author(self, info: Info[GraphQLContext, None], id: int) -> AuthorType | None:
            author = await info.context.loaders.authors.load(id)
            return AuthorType.from_model(author) if author else None
    """

    request: Request | WebSocket | None = None
    response: Response | None = None
    background_tasks: BackgroundTasks | None = None

    session: AsyncSession = field(default=None)  # type: ignore[assignment]
    loaders: DataLoaders = field(default=None)  # type: ignore[assignment]
    request_id: str | None = None


__all__ = ["GraphQLContext"]
