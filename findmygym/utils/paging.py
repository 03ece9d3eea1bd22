# findmygym/utils/paging.py
from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TypeVar

__all__ = ["paginate", "total_pages"]

T = TypeVar("T")


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed for ``total`` items at ``limit`` per page (0 when empty)."""
    if limit <= 0:
        raise ValueError("limit must be positive")
    return math.ceil(total / limit) if total > 0 else 0


def paginate(items: Sequence[T], *, page: int, limit: int) -> list[T]:
    """Slice one 1-based page out of an already filtered and sorted sequence.

    Pages past the end return an empty list rather than raising.
    """
    if page < 1:
        raise ValueError("page must be >= 1")
    if limit <= 0:
        raise ValueError("limit must be positive")
    offset = (page - 1) * limit
    return list(items[offset : offset + limit])
