"""
Application settings.

Read from the environment, with a `.env` file in the project root loaded
first. Secrets are never hard-coded.

Environment variables:
- POS_STORAGE_BACKEND: "supabase" (default) or "memory"
- SUPABASE_URL / SUPABASE_KEY: required for the supabase backend
- POS_REPORT_TIMEZONE: IANA zone used for calendar days (default: UTC)
- POS_LOG_LEVEL: logging level name (default: INFO)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

STORAGE_BACKENDS = frozenset({"supabase", "memory"})

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True, slots=True)
class Settings:
    storage_backend: str = "supabase"
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    report_timezone: str = "UTC"
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.storage_backend not in STORAGE_BACKENDS:
            raise RuntimeError(
                f"Invalid POS_STORAGE_BACKEND: {self.storage_backend!r}. "
                f"Expected one of {sorted(STORAGE_BACKENDS)}."
            )

    @property
    def tz(self) -> ZoneInfo:
        try:
            return ZoneInfo(self.report_timezone)
        except ZoneInfoNotFoundError as exc:
            raise RuntimeError(f"Unknown POS_REPORT_TIMEZONE: {self.report_timezone!r}") from exc


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from `environ` (default: the process environment after
    loading `.env`).
    """

    if environ is None:
        env_path = Path(__file__).parent.parent / ".env"
        load_dotenv(dotenv_path=env_path)
        environ = os.environ

    return Settings(
        storage_backend=environ.get("POS_STORAGE_BACKEND", "supabase").strip().lower(),
        supabase_url=environ.get("SUPABASE_URL"),
        supabase_key=environ.get("SUPABASE_KEY"),
        report_timezone=environ.get("POS_REPORT_TIMEZONE", "UTC"),
        log_level=environ.get("POS_LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=_LOG_FORMAT)


__all__ = ["Settings", "load_settings", "configure_logging"]
