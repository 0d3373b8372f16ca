"""Strawberry extensions for the GraphQL schema.

Provides:
- Query depth limiting (GRAPHQL_MAX_QUERY_DEPTH)
- Error codes, plus masking of internal errors in production
- Disabling introspection when GRAPHQL_INTROSPECTION_ENABLED is false
"""

from __future__ import annotations

import logging

from graphql.validation import NoSchemaIntrospectionCustomRule
from strawberry.extensions import AddValidationRules, QueryDepthLimiter, SchemaExtension

from bookshelf.core.settings import get_app_settings, get_graphql_settings
from bookshelf.features.graphql.error_handler import ErrorCodeExtension

logger = logging.getLogger(__name__)


def get_extensions() -> list[SchemaExtension | type[SchemaExtension]]:
    """Get list of Strawberry extensions for the schema."""
    settings = get_graphql_settings()
    mask_internal_errors = get_app_settings().is_production

    extensions: list[SchemaExtension | type[SchemaExtension]] = [
        QueryDepthLimiter(max_depth=settings.max_query_depth),
        ErrorCodeExtension.configure(mask_internal_errors=mask_internal_errors),
    ]
    if not settings.introspection_enabled:
        extensions.append(AddValidationRules([NoSchemaIntrospectionCustomRule]))

    logger.debug(
        "GraphQL extensions configured",
        extra={
            "max_query_depth": settings.max_query_depth,
            "mask_internal_errors": mask_internal_errors,
            "introspection_enabled": settings.introspection_enabled,
        },
    )
    return extensions


__all__ = ["get_extensions"]
