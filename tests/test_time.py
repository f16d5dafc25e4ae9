"""
Tests for `domain/time.py`.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from domain.errors import ValidationError
from domain.time import day_window_utc, require_utc_timestamp, start_of_day_utc


def test_day_window_is_half_open_and_utc() -> None:
    start, end = day_window_utc(date(2025, 1, 15))

    assert start == datetime(2025, 1, 15, tzinfo=timezone.utc)
    assert end == datetime(2025, 1, 16, tzinfo=timezone.utc)


def test_day_window_follows_local_midnight_across_dst() -> None:
    """Verify a DST change day in a local zone is 23 hours long."""

    start, end = day_window_utc(date(2025, 3, 9), ZoneInfo("America/New_York"))

    assert start == datetime(2025, 3, 9, 5, 0, tzinfo=timezone.utc)
    assert end == datetime(2025, 3, 10, 4, 0, tzinfo=timezone.utc)
    assert (end - start).total_seconds() == 23 * 3600


def test_start_of_day_is_expressed_in_utc() -> None:
    start = start_of_day_utc(date(2025, 1, 15), ZoneInfo("Europe/Madrid"))

    assert start == datetime(2025, 1, 14, 23, 0, tzinfo=timezone.utc)
    assert start.utcoffset() == timedelta(0)


@pytest.mark.parametrize(
    "value",
    [
        "2025-01-15T12:00:00Z",
        datetime(2025, 1, 15, 12, 0),
        datetime(2025, 1, 15, 12, 0, tzinfo=timezone(timedelta(hours=2))),
    ],
)
def test_require_utc_timestamp_rejects_non_utc(value) -> None:
    with pytest.raises(ValidationError):
        require_utc_timestamp("created_at", value)


def test_require_utc_timestamp_accepts_utc() -> None:
    require_utc_timestamp("created_at", datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc))
