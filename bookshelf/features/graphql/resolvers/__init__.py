"""Root Query and Mutation types."""

from __future__ import annotations

from bookshelf.features.graphql.resolvers.mutations import Mutation
from bookshelf.features.graphql.resolvers.queries import Query

__all__ = ["Mutation", "Query"]
