"""
Domain: Audit trail entries.

Audit entries are append-only: they are written once for every mutating
action (sale created, product created or updated) and never read back by the
sales core.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional

from .errors import ValidationError
from .time import require_utc_timestamp


class AuditAction(str, Enum):
    CREATE_SALE = "CREATE_SALE"
    CREATE_PRODUCT = "CREATE_PRODUCT"
    UPDATE_PRODUCT = "UPDATE_PRODUCT"


@dataclass(frozen=True, slots=True)
class AuditEntry:
    action: AuditAction
    entity_type: str
    entity_id: str
    user_id: str
    user_name: str
    timestamp: datetime
    changes: Mapping[str, Any] = field(default_factory=dict)
    previous_data: Optional[Mapping[str, Any]] = None

    def __post_init__(self) -> None:
        if not isinstance(self.action, AuditAction):
            raise ValidationError(f"Unknown audit action: {self.action!r}")
        if not self.entity_type or not self.entity_id:
            raise ValidationError("entity_type and entity_id are required")
        if not self.user_id:
            raise ValidationError("user_id is required")
        require_utc_timestamp("timestamp", self.timestamp)


__all__ = ["AuditAction", "AuditEntry"]
