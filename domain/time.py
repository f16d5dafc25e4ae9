"""
Domain time utilities (pure).

Centralized timestamp validation and calendar-window helpers.

Behavior and error messages must remain consistent across the domain model.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Tuple

from .errors import ValidationError


def require_utc_timestamp(name: str, value: datetime) -> None:
    """
    Enforces that stored timestamps are UTC.

    Invariants:
    - Timestamps must be timezone-aware.
    - Timestamps must have UTC offset 0.
    """

    if not isinstance(value, datetime):
        raise ValidationError(f"{name} must be a datetime")
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValidationError(f"{name} must be timezone-aware (UTC)")
    if value.utcoffset() != timedelta(0):
        raise ValidationError(f"{name} must be a UTC timestamp (offset 0)")


def start_of_day_utc(day: date, tz: tzinfo = timezone.utc) -> datetime:
    """Midnight of `day` in `tz`, expressed as a UTC timestamp."""

    return datetime.combine(day, time.min, tzinfo=tz).astimezone(timezone.utc)


def day_window_utc(day: date, tz: tzinfo = timezone.utc) -> Tuple[datetime, datetime]:
    """
    Half-open window [midnight(day), midnight(day + 1)) in `tz`, as UTC.

    The end is computed from the next calendar date rather than by adding
    24 hours so that DST transitions produce 23 or 25 hour days.
    """

    return start_of_day_utc(day, tz), start_of_day_utc(day + timedelta(days=1), tz)


__all__ = ["require_utc_timestamp", "start_of_day_utc", "day_window_utc"]
