"""Helpers shared by test modules."""

from __future__ import annotations

import re


def count_selects(statements: list[str], table: str) -> int:
    """Number of captured SELECT statements reading from ``table``.

    ``book`` does not match ``book_category``.
    """
    pattern = re.compile(rf"\bFROM {re.escape(table)}\b(?!_)")
    return sum(
        1
        for statement in statements
        if statement.lstrip().upper().startswith("SELECT") and pattern.search(statement)
    )
