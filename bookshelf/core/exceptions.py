"""Custom exception classes for the application.

Every error a resolver raises on purpose derives from AppException. The
``code`` ends up in ``errors[].extensions.code`` of GraphQL responses so
clients can branch on it without parsing messages.
"""

from __future__ import annotations

from typing import Any


class AppException(Exception):
    """Base application exception.

    Attributes:
        detail: Human-readable error message.
        code: Machine-readable error code (e.g. "NOT_FOUND").
        extra: Additional context-specific information about the error.

    Example:
        raise AppException(
            detail="Something went wrong",
            code="INTERNAL_ERROR",
            extra={"book_id": 3},
        )
    """

    code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        detail: str,
        code: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.detail = detail
        if code is not None:
            self.code = code
        self.extra = extra or {}
        super().__init__(detail)


class NotFoundException(AppException):
    """Exception raised when a resource is not found.

    Example:
        raise NotFoundException("Author not found", extra={"author_id": 42})
    """

    code = "NOT_FOUND"


class ValidationException(AppException):
    """Exception raised for invalid input.

    Example:
        raise ValidationException(
            "publicationDate must be an ISO date (YYYY-MM-DD)",
            extra={"field": "publicationDate", "value": "yesterday"},
        )
    """

    code = "VALIDATION_ERROR"


class ConflictException(AppException):
    """Exception raised when a write clashes with existing state.

    Covers duplicate titles/names and deletes blocked by dependent rows.
    """

    code = "CONFLICT"


class StoreException(AppException):
    """Exception raised when the underlying database call fails."""

    code = "INTERNAL_ERROR"


__all__ = [
    "AppException",
    "ConflictException",
    "NotFoundException",
    "StoreException",
    "ValidationException",
]
