"""
Audit repository (persistence).

Append-only writes to the `audit_log` table. Failures are raised as
`StorageError`; deciding to ignore them is the audit logger's job.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from domain.audit import AuditEntry
from repositories.client import Client
from repositories.supabase_support import run_query, to_iso_utc

_AUDIT_TABLE: str = "audit_log"


def _json_safe(value: Any) -> Any:
    """Make audit payload values JSON-serializable."""

    if isinstance(value, Decimal):
        return str(value)
    if hasattr(value, "isoformat"):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    return value


class SupabaseAuditRepository:
    def __init__(self, client: Client, table: str = _AUDIT_TABLE) -> None:
        self._client = client
        self._table = table

    def append(self, entry: AuditEntry) -> None:
        payload: dict[str, Any] = {
            "action": entry.action.value,
            "entity_type": entry.entity_type,
            "entity_id": entry.entity_id,
            "user_id": entry.user_id,
            "user_name": entry.user_name,
            "changes": _json_safe(dict(entry.changes)),
            "previous_data": _json_safe(dict(entry.previous_data)) if entry.previous_data is not None else None,
            "timestamp_utc": to_iso_utc(entry.timestamp, name="timestamp"),
        }
        run_query(self._client.table(self._table).insert(payload), "append audit entry")


__all__ = ["SupabaseAuditRepository"]
