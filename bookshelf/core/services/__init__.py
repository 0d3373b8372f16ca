"""Service layer building blocks."""

from __future__ import annotations

from bookshelf.core.services.base import BaseService

__all__ = ["BaseService"]
