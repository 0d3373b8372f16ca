"""GraphQL types for books and authors.

``Book.author`` and ``Author.books`` are resolved through the request's
DataLoaders, never with a query per object.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry
from strawberry.types import Info

from bookshelf.core.exceptions import NotFoundException
from bookshelf.features.graphql.context import GraphQLContext

if TYPE_CHECKING:
    from bookshelf.features.books.models import Author, Book


@strawberry.type(name="Author", description="A writer of one or more books")
class AuthorType:
    id: int = strawberry.field(description="Store-assigned identifier")
    name: str = strawberry.field(description="Author's full name")

    @strawberry.field(description="Books written by this author, oldest id first")
    async def books(self, info: Info[GraphQLContext, None]) -> list[BookType]:
        books = await info.context.loaders.books_by_author.load(self.id)
        return [BookType.from_model(book) for book in books]

    @classmethod
    def from_model(cls, author: Author) -> AuthorType:
        return cls(id=author.id, name=author.name)


@strawberry.type(name="Book", description="A book in the catalogue")
class BookType:
    id: int = strawberry.field(description="Store-assigned identifier")
    title: str = strawberry.field(description="Book title")
    publication_date: str = strawberry.field(description="ISO publication date (YYYY-MM-DD)")
    categories: list[str] = strawberry.field(description="Category labels, in order")
    author_id: strawberry.Private[int]

    @strawberry.field(description="The book's author")
    async def author(self, info: Info[GraphQLContext, None]) -> AuthorType:
        author = await info.context.loaders.authors.load(self.author_id)
        if author is None:
            raise NotFoundException("Author not found", extra={"author_id": self.author_id})
        return AuthorType.from_model(author)

    @classmethod
    def from_model(cls, book: Book) -> BookType:
        """Create GraphQL type from SQLAlchemy model."""
        return cls(
            id=book.id,
            title=book.title,
            publication_date=book.publication_date.isoformat(),
            categories=book.categories,
            author_id=book.author_id,
        )


__all__ = ["AuthorType", "BookType"]
