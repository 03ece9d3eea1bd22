# findmygym/utils/datetime.py
from __future__ import annotations

from datetime import UTC, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def utcnow() -> datetime:
    return datetime.now(UTC)


def local_now(tz_name: str) -> datetime:
    """Current wall-clock time in ``tz_name``; falls back to UTC for unknown zones."""
    try:
        tz = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        tz = UTC
    return datetime.now(tz)


def js_weekday(dt: datetime) -> int:
    # Sunday = 0 ... Saturday = 6 (the day_of_week convention used by gym hours)
    return (dt.weekday() + 1) % 7
