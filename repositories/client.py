"""
Supabase client construction.

This module contains *only* the database connection setup. It does not keep a
shared client: callers build one with `create_supabase_client` and hand it to
the repositories that need it.
"""

from __future__ import annotations

# The dependency is `supabase` (supabase-py). If your editor can't resolve it,
# install it in your environment: `pip install supabase`.
from supabase import Client, create_client  # type: ignore[import-not-found]


def create_supabase_client(url: str | None, key: str | None) -> Client:
    """
    Build a Supabase client from explicit credentials.

    Raises:
        RuntimeError: if either credential is missing.
    """

    if not url:
        raise RuntimeError(
            "Missing environment variable: SUPABASE_URL. "
            "Set SUPABASE_URL to your Supabase project URL."
        )

    if not key:
        raise RuntimeError(
            "Missing environment variable: SUPABASE_KEY. "
            "Set SUPABASE_KEY to your Supabase API key."
        )

    return create_client(url, key)


__all__ = ["Client", "create_supabase_client"]
