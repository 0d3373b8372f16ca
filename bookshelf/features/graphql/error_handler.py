"""GraphQL error classification, logging and production masking.

Every execution error leaves with an ``extensions.code`` so clients can
branch on it without parsing messages:

    NOT_FOUND, CONFLICT, VALIDATION_ERROR  raised on purpose (AppException)
    INTERNAL_ERROR                         anything else, masked in production
"""

from __future__ import annotations

import logging
import traceback
from typing import TYPE_CHECKING, Any

from graphql import GraphQLError
from strawberry.extensions import SchemaExtension

from bookshelf.core.exceptions import AppException

if TYPE_CHECKING:
    from collections.abc import Iterator

    from strawberry.types import ExecutionContext

logger = logging.getLogger(__name__)

MASKED_ERROR_MESSAGE = "Unexpected error."


class ErrorCategory:
    """Error codes placed in ``extensions.code``."""

    VALIDATION = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    GRAPHQL_VALIDATION = "GRAPHQL_VALIDATION_FAILED"
    INTERNAL = "INTERNAL_ERROR"


def error_code(error: GraphQLError) -> str:
    """Code for ``error`` based on the exception that caused it.

    Errors without an original exception come from parsing or validating
    the document itself.
    """
    original = error.original_error
    if isinstance(original, AppException):
        return original.code
    if original is None:
        return ErrorCategory.GRAPHQL_VALIDATION
    return ErrorCategory.INTERNAL


def is_user_facing_error(error: GraphQLError) -> bool:
    """True for errors that are safe to show as-is."""
    original = error.original_error
    return original is None or isinstance(original, AppException)


def mask_internal_error(error: GraphQLError) -> GraphQLError:
    """Replace an internal error with a generic one, keeping its location and path."""
    return GraphQLError(
        message=MASKED_ERROR_MESSAGE,
        nodes=error.nodes,
        source=error.source,
        positions=error.positions,
        path=error.path,
        original_error=None,
        extensions={"code": ErrorCategory.INTERNAL},
    )


def log_error(error: GraphQLError, execution_context: ExecutionContext | None = None) -> None:
    """Log error with full details for server-side debugging.

    Expected application errors are logged at INFO, everything else at ERROR
    with the stack trace.
    """
    log_context: dict[str, Any] = {
        "error_message": error.message,
        "error_path": error.path,
        "error_code": error_code(error),
    }

    if execution_context is not None:
        if execution_context.operation_name:
            log_context["operation_name"] = execution_context.operation_name
        request_id = getattr(execution_context.context, "request_id", None)
        if request_id:
            log_context["request_id"] = request_id

    original = error.original_error
    if original is not None:
        log_context["exception_type"] = type(original).__name__
        if isinstance(original, AppException) and original.extra:
            log_context["error_extra"] = original.extra

    if is_user_facing_error(error):
        logger.info("GraphQL user-facing error", extra=log_context)
        return

    log_context["stack_trace"] = "".join(
        traceback.format_exception(type(original), original, original.__traceback__)
    )
    logger.error("GraphQL internal error", extra=log_context)


def process_graphql_errors(
    errors: list[GraphQLError],
    execution_context: ExecutionContext | None = None,
) -> None:
    """Log every error of an operation before extensions rewrite them."""
    for error in errors:
        log_error(error, execution_context)


class ErrorCodeExtension(SchemaExtension):
    """Attach ``extensions.code`` to every error and mask internal ones.

    Registered as a class so Strawberry creates one instance per operation.

    Usage:
        schema = strawberry.Schema(
            query=Query,
            extensions=[ErrorCodeExtension.configure(mask_internal_errors=True)],
        )
    """

    mask_internal_errors: bool = False

    @classmethod
    def configure(cls, *, mask_internal_errors: bool) -> type[ErrorCodeExtension]:
        return type(cls.__name__, (cls,), {"mask_internal_errors": mask_internal_errors})

    def on_operation(self) -> Iterator[None]:
        yield

        result = self.execution_context.result
        if result is None or not result.errors:
            return

        result.errors = [self._process(error) for error in result.errors]

    def _process(self, error: GraphQLError) -> GraphQLError:
        if self.mask_internal_errors and not is_user_facing_error(error):
            return mask_internal_error(error)

        error.extensions = {**(error.extensions or {}), "code": error_code(error)}
        return error


__all__ = [
    "MASKED_ERROR_MESSAGE",
    "ErrorCategory",
    "ErrorCodeExtension",
    "error_code",
    "is_user_facing_error",
    "log_error",
    "mask_internal_error",
    "process_graphql_errors",
]
