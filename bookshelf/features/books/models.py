"""Database models for the books feature."""

from __future__ import annotations

from datetime import date

from sqlalchemy import Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookshelf.core.database import Base, IntegerPKMixin


class Author(Base, IntegerPKMixin):
    """A writer. Books point at their author through ``Book.author_id``."""

    __tablename__ = "author"

    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Author(id={self.id}, name={self.name!r})>"


class BookCategory(Base, IntegerPKMixin):
    """One category label of a book, kept in the book's own order."""

    __tablename__ = "book_category"

    book_id: Mapped[int] = mapped_column(
        ForeignKey("book.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)


class Book(Base, IntegerPKMixin):
    """A book with an ISO publication date and an ordered list of categories.

    Author is not mapped as a relationship; nested author/book fields go
    through the request-scoped DataLoaders.
    """

    __tablename__ = "book"

    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    author_id: Mapped[int] = mapped_column(
        ForeignKey("author.id"),
        nullable=False,
        index=True,
    )
    publication_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)

    category_links: Mapped[list[BookCategory]] = relationship(
        order_by=BookCategory.position,
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    @property
    def categories(self) -> list[str]:
        return [link.name for link in self.category_links]

    @categories.setter
    def categories(self, names: list[str]) -> None:
        self.category_links = [
            BookCategory(position=position, name=name) for position, name in enumerate(names)
        ]

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title={self.title!r}, author_id={self.author_id})>"


__all__ = ["Author", "Book", "BookCategory"]
