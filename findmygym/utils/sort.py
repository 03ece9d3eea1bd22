# findmygym/utils/sort.py
from __future__ import annotations

from typing import Literal

__all__ = ["GymSortKey", "ReviewSortKey", "resolve_sort_key", "resolve_review_sort"]

GymSortKey = Literal["rating", "name", "newest", "price_low", "price_high", "distance"]
ReviewSortKey = Literal["recent", "highest", "lowest", "helpful"]


def resolve_sort_key(s: str | None) -> GymSortKey:
    """Normalize a user-supplied gym sort key.

    Behavior:
    - missing / empty / unknown -> ``rating``
    - ``price`` / ``price_asc`` -> ``price_low``; ``price_desc`` -> ``price_high``
    - ``nearby`` -> ``distance`` (an origin must be supplied by the caller)
    """
    if not s:
        return "rating"
    k = s.lower().strip()
    if k in {"rating", "top", "best"}:
        return "rating"
    if k in {"name", "alpha", "gym_name"}:
        return "name"
    if k in {"newest", "recent", "created_at"}:
        return "newest"
    if k in {"price_low", "price", "price_asc"}:
        return "price_low"
    if k in {"price_high", "price_desc"}:
        return "price_high"
    if k in {"distance", "nearby"}:
        return "distance"
    return "rating"


def resolve_review_sort(s: str | None) -> ReviewSortKey:
    if not s:
        return "recent"
    k = s.lower().strip()
    if k in {"highest", "lowest", "helpful"}:
        return k  # type: ignore[return-value]
    return "recent"
