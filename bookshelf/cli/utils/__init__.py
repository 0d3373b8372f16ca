"""CLI utilities for running async operations and formatting output."""

from bookshelf.cli.utils.async_runner import coro
from bookshelf.cli.utils.formatters import error, info, success, warning

__all__ = ["coro", "error", "info", "success", "warning"]
