"""Pydantic schemas validating book and author writes."""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any, Self, TypeVar

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StringConstraints,
    ValidationError,
    model_validator,
)

from bookshelf.core.exceptions import ValidationException

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
AuthorName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
Category = Annotated[str, StringConstraints(min_length=1, max_length=100)]


def _parse_iso_date(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            raise ValueError("must be an ISO date (YYYY-MM-DD)") from None
    return value


IsoDate = Annotated[date, BeforeValidator(_parse_iso_date)]

# Field name -> GraphQL argument name, used in validation messages
_ARGUMENT_NAMES = {
    "title": "title",
    "name": "name",
    "author_id": "authorId",
    "publication_date": "publicationDate",
    "categories": "categories",
}
_UPDATE_ARGUMENT_NAMES = {
    "title": "newTitle",
    "publication_date": "newPublicationDate",
    "categories": "newCategories",
}


class AuthorCreate(BaseModel):
    """Schema for creating an author."""

    model_config = ConfigDict(extra="forbid")

    name: AuthorName


class BookCreate(BaseModel):
    """Schema for creating a book."""

    model_config = ConfigDict(extra="forbid")

    title: Title
    author_id: int
    publication_date: IsoDate = Field(..., description="ISO calendar date, YYYY-MM-DD")
    categories: list[Category] = Field(default_factory=list)


class BookUpdate(BaseModel):
    """Partial update of a book.

    Only fields that were explicitly provided end up in ``model_fields_set``.
    Providing one of them as ``None`` is rejected since the stored columns
    are not nullable.
    """

    model_config = ConfigDict(extra="forbid")

    title: Title | None = None
    publication_date: IsoDate | None = None
    categories: list[Category] | None = None

    @model_validator(mode="after")
    def reject_explicit_nulls(self) -> Self:
        for field_name in self.model_fields_set:
            if getattr(self, field_name) is None:
                raise ValueError(f"{_UPDATE_ARGUMENT_NAMES[field_name]} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Provided fields only, ready for ``BaseRepository.update``."""
        return self.model_dump(exclude_unset=True)

M = TypeVar("M", bound=BaseModel)


def parse_payload(
    model: type[M],
    argument_names: dict[str, str] | None = None,
    **data: Any,
) -> M:
    """Validate ``data`` into ``model`` or raise ValidationException.

    The first pydantic error becomes the message, prefixed with the GraphQL
    argument it came from.
    """
    names = argument_names or _ARGUMENT_NAMES
    try:
        return model.model_validate(data)
    except ValidationError as e:
        first = e.errors(include_url=False)[0]
        loc = first.get("loc") or ()
        field = names.get(str(loc[0]), str(loc[0])) if loc else None
        message = first["msg"].removeprefix("Value error, ")
        if field:
            message = f"{field}: {message}"
        raise ValidationException(
            message,
            extra={"field": field, "errors": e.error_count()},
        ) from e


def parse_book_update(**data: Any) -> BookUpdate:
    return parse_payload(BookUpdate, _UPDATE_ARGUMENT_NAMES, **data)


__all__ = [
    "AuthorCreate",
    "BookCreate",
    "BookUpdate",
    "parse_book_update",
    "parse_payload",
]
