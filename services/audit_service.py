"""
Audit logging service.

Every mutating action (sale created, product created or updated) is reported
here exactly once. Appends are fire-and-forget: a failing audit store is
logged for monitoring and never fails the action that triggered it.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional

from domain.audit import AuditAction, AuditEntry
from domain.errors import StorageError
from domain.identity import Identity
from repositories.interfaces import AuditRepository

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AuditLogger:
    def __init__(self, repository: AuditRepository, clock: Callable[[], datetime] = utc_now) -> None:
        self._repository = repository
        self._clock = clock

    def record(
        self,
        identity: Identity,
        action: AuditAction,
        entity_type: str,
        entity_id: str,
        changes: Mapping[str, Any],
        previous_data: Optional[Mapping[str, Any]] = None,
    ) -> Optional[AuditEntry]:
        """
        Append one audit entry for `action`.

        Returns the entry that was written, or None if the audit store
        rejected it.
        """

        entry = AuditEntry(
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            user_id=identity.user_id,
            user_name=identity.name,
            timestamp=self._clock(),
            changes=dict(changes),
            previous_data=dict(previous_data) if previous_data is not None else None,
        )

        try:
            self._repository.append(entry)
        except Exception as exc:
            # The action already happened; only the audit trail is lost.
            logger.warning(
                f"Audit entry for {action.value} on {entity_type} {entity_id} was not recorded",
                extra={
                    "action": action.value,
                    "entity_type": entity_type,
                    "entity_id": entity_id,
                    "user_id": identity.user_id,
                    "error": str(exc),
                },
                exc_info=not isinstance(exc, StorageError),
            )
            return None

        return entry


__all__ = ["AuditLogger", "utc_now"]
