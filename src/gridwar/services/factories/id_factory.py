"""Utilities for creating creature identifiers."""
from __future__ import annotations

from typing import Callable

from gridwar.services.errors import FactoryError

MAX_SAFE_INTEGER = 9007199254740991


def create_numeric_uid_creator(starting_count: int = 0) -> Callable[[], str]:
    """
    Return a function producing "1", "2", ... after ``starting_count``.

    The counter stops at MAX_SAFE_INTEGER so ids stay portable to clients
    that store them as doubles.
    """
    count = starting_count

    def create_uid() -> str:
        nonlocal count
        if count >= MAX_SAFE_INTEGER:
            raise FactoryError("It can no longer create UIDs.")
        count += 1
        return str(count)

    return create_uid
