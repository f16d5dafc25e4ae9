"""
Helpers shared by the Supabase-backed repositories.

Every adapter goes through `run_query` so that PostgREST and transport
failures reach the services as `StorageError` and nothing else.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Mapping, TypeVar

import httpx
from postgrest.exceptions import APIError

from domain.errors import StorageError
from domain.time import require_utc_timestamp

# PostgREST caps responses at 1000 rows unless told otherwise.
PAGE_SIZE: int = 1000

T = TypeVar("T")


def to_iso_utc(dt: datetime, *, name: str) -> str:
    """Serialize a UTC datetime to ISO-8601 (timezone-aware, offset 0)."""

    require_utc_timestamp(name, dt)
    return dt.astimezone(timezone.utc).isoformat()


def parse_utc_datetime(value: Any) -> datetime:
    """
    Parse a Supabase timestamp into a timezone-aware UTC datetime.

    Supabase commonly returns ISO-8601 strings, sometimes with a trailing 'Z'.
    """

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    else:
        raise TypeError(f"Unsupported timestamp type: {type(value)!r}")

    if dt.tzinfo is None or dt.utcoffset() is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_decimal(value: Any) -> Decimal:
    # numeric columns come back as int, float or str depending on the driver
    return Decimal(str(value))


def convert_row(convert: Callable[[Mapping[str, Any]], T], row: Mapping[str, Any], entity: str) -> T:
    """
    Turn a stored row into a domain record.

    Raises:
        StorageError: when the row is missing columns or holds values the
            domain record rejects.
    """

    try:
        return convert(row)
    except (KeyError, TypeError, ValueError, InvalidOperation) as exc:
        raise StorageError(f"Stored {entity} row could not be read: {exc!r}") from exc


def run_query(query: Any, action: str) -> List[Dict[str, Any]]:
    """
    Execute a PostgREST query builder and return its rows.

    Raises:
        StorageError: on API errors, transport errors or error responses.
    """

    try:
        response = query.execute()
    except APIError as exc:
        message = getattr(exc, "message", None) or str(exc)
        raise StorageError(f"Failed to {action}: {message}") from exc
    except httpx.HTTPError as exc:
        raise StorageError(f"Failed to {action}: {exc}") from exc

    error = getattr(response, "error", None)
    if error:
        raise StorageError(f"Failed to {action}: {error}")

    return getattr(response, "data", None) or []


def fetch_all_pages(build_query: Callable[[], Any], action: str) -> List[Dict[str, Any]]:
    """
    Collect every row of a query, PAGE_SIZE rows at a time.

    `build_query` must return a fresh, fully filtered and ordered builder on
    each call; the range is applied here.
    """

    all_rows: List[Dict[str, Any]] = []
    offset = 0

    while True:
        page_rows = run_query(build_query().range(offset, offset + PAGE_SIZE - 1), action)
        all_rows.extend(page_rows)
        if len(page_rows) < PAGE_SIZE:
            break
        offset += len(page_rows)

    return all_rows


__all__ = [
    "PAGE_SIZE",
    "to_iso_utc",
    "parse_utc_datetime",
    "parse_decimal",
    "convert_row",
    "run_query",
    "fetch_all_pages",
]
