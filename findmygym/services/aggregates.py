"""Derived values computed from already-fetched gym rows.

Every function here is pure: callers load hours/reviews/memberships first and
pass plain values or row-like objects in. Empty input yields the neutral value
(0, an all-zero histogram, ``None``) rather than an error.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from findmygym.utils.datetime import js_weekday
from findmygym.utils.geo import get_distance_km

__all__ = [
    "CategoryAverages",
    "OpenStatusResult",
    "average_rating",
    "category_ratings",
    "get_distance_km",
    "is_gym_open",
    "lowest_price",
    "rating_distribution",
]


class _CategoryRated(Protocol):
    cleanliness: float | None
    equipment: float | None
    staff: float | None
    value_for_money: float | None


class _HourRow(Protocol):
    day_of_week: int
    open_time: str
    close_time: str
    is_closed: bool


@dataclass(frozen=True)
class CategoryAverages:
    cleanliness: float = 0.0
    equipment: float = 0.0
    staff: float = 0.0
    value_for_money: float = 0.0


@dataclass(frozen=True)
class OpenStatusResult:
    is_open: bool
    closes_at: str | None = None
    opens_at: str | None = None


def _round1(value: float) -> float:
    # half-up, so 4.25 -> 4.3
    return math.floor(value * 10 + 0.5) / 10


def average_rating(ratings: Iterable[float]) -> float:
    values = [float(r) for r in ratings]
    if not values:
        return 0.0
    return _round1(sum(values) / len(values))


def category_ratings(reviews: Iterable[_CategoryRated]) -> CategoryAverages:
    totals = [0.0, 0.0, 0.0, 0.0]
    rated = 0
    for r in reviews:
        parts = (r.cleanliness, r.equipment, r.staff, r.value_for_money)
        # only reviews carrying all four categories count
        if any(p is None for p in parts):
            continue
        for i, p in enumerate(parts):
            totals[i] += float(p)
        rated += 1
    if rated == 0:
        return CategoryAverages()
    return CategoryAverages(*(_round1(t / rated) for t in totals))


def rating_distribution(ratings: Iterable[float]) -> list[int]:
    """Five buckets of review counts: index 0 holds 1-star ... index 4 holds 5-star."""
    buckets = [0, 0, 0, 0, 0]
    for rating in ratings:
        bucket = min(math.floor(rating), 5) - 1
        if bucket >= 0:
            buckets[bucket] += 1
    return buckets


def lowest_price(prices: Iterable[float]) -> float | None:
    values = [float(p) for p in prices]
    return min(values) if values else None


def is_gym_open(hours: Sequence[_HourRow], now: datetime) -> OpenStatusResult:
    """Decide whether ``now`` falls inside today's opening window.

    Times are "HH:MM" strings, so lexical comparison is chronological. When the
    gym is closed for the rest of today, the following days are searched (up to
    a full week) for the next opening time.
    """
    day = js_weekday(now)
    current = now.strftime("%H:%M")
    by_day = {int(h.day_of_week): h for h in hours}

    today = by_day.get(day)
    if today is not None and not today.is_closed:
        if today.open_time <= current < today.close_time:
            return OpenStatusResult(is_open=True, closes_at=today.close_time)
        if current < today.open_time:
            return OpenStatusResult(is_open=False, opens_at=today.open_time)

    for ahead in range(1, 8):
        nxt = by_day.get((day + ahead) % 7)
        if nxt is not None and not nxt.is_closed:
            return OpenStatusResult(is_open=False, opens_at=nxt.open_time)
    return OpenStatusResult(is_open=False)
