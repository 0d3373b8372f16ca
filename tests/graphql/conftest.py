"""GraphQL test fixtures.

Provides:
- ``gql``: executes a document against the schema with a fresh context,
  the way each HTTP request gets its own session-bound DataLoaders
- Query and mutation documents shared across test modules
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from bookshelf.features.graphql.context import GraphQLContext
from bookshelf.features.graphql.dataloaders import create_dataloaders
from bookshelf.features.graphql.schema import schema

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from sqlalchemy.ext.asyncio import AsyncSession
    from strawberry.types import ExecutionResult


@pytest.fixture
def graphql_context(session: AsyncSession) -> GraphQLContext:
    return GraphQLContext(session=session, loaders=create_dataloaders(session))


@pytest.fixture
def gql(session: AsyncSession) -> Callable[..., Awaitable[ExecutionResult]]:
    """Run a GraphQL document with a new context per call."""

    async def _execute(
        query: str,
        variables: dict[str, Any] | None = None,
        context: GraphQLContext | None = None,
    ) -> ExecutionResult:
        context = context or GraphQLContext(session=session, loaders=create_dataloaders(session))
        return await schema.execute(query, variable_values=variables, context_value=context)

    return _execute


def error_codes(result: ExecutionResult) -> list[str]:
    return [(error.extensions or {}).get("code") for error in result.errors or []]


BOOKS_QUERY = """
    query {
        books { id title publicationDate categories }
    }
"""

BOOKS_WITH_AUTHORS_QUERY = """
    query {
        books { title author { id name } }
    }
"""

AUTHORS_WITH_BOOKS_QUERY = """
    query {
        authors { id name books { title } }
    }
"""

RECENT_BOOKS_QUERY = """
    query {
        recentBooks { title publicationDate }
    }
"""

BOOKS_BY_CATEGORY_QUERY = """
    query BooksByCategory($category: String!) {
        booksByCategory(category: $category) { title categories }
    }
"""

BOOKS_SORTED_QUERY = """
    query BooksSorted($order: String!) {
        booksSortedByDate(order: $order) { title publicationDate }
    }
"""

BOOK_QUERY = """
    query Book($id: Int!) {
        book(id: $id) { id title author { name } }
    }
"""

AUTHOR_QUERY = """
    query Author($id: Int!) {
        author(id: $id) { id name books { title } }
    }
"""

ADD_AUTHOR_MUTATION = """
    mutation AddAuthor($name: String!) {
        addAuthor(name: $name) { id name }
    }
"""

ADD_BOOK_MUTATION = """
    mutation AddBook(
        $title: String!
        $authorId: Int!
        $publicationDate: String!
        $categories: [String!]!
    ) {
        addBook(
            title: $title
            authorId: $authorId
            publicationDate: $publicationDate
            categories: $categories
        ) {
            id
            title
            publicationDate
            categories
            author { name }
        }
    }
"""

DELETE_BOOK_MUTATION = """
    mutation DeleteBook($title: String!) {
        deleteBook(title: $title) { id title author { name } }
    }
"""

DELETE_AUTHOR_MUTATION = """
    mutation DeleteAuthor($id: Int!) {
        deleteAuthor(id: $id) { id name }
    }
"""
