"""GraphQL schema assembly.

Combines the Query and Mutation root types into a single schema with the
configured extensions.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import strawberry

from bookshelf.features.graphql.error_handler import process_graphql_errors
from bookshelf.features.graphql.extensions import get_extensions
from bookshelf.features.graphql.resolvers import Mutation, Query

if TYPE_CHECKING:
    from graphql import GraphQLError
    from strawberry.types import ExecutionContext

logger = logging.getLogger(__name__)


class BookshelfSchema(strawberry.Schema):
    """Schema that logs errors through the application's error handler."""

    def process_errors(
        self,
        errors: list[GraphQLError],
        execution_context: ExecutionContext | None = None,
    ) -> None:
        process_graphql_errors(errors, execution_context)


def create_schema() -> BookshelfSchema:
    return BookshelfSchema(query=Query, mutation=Mutation, extensions=get_extensions())


schema = create_schema()

logger.info("GraphQL schema created successfully")

__all__ = ["BookshelfSchema", "create_schema", "schema"]
