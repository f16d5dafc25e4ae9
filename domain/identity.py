"""
Domain: Caller identity.

The sales core never authenticates anyone. It receives an already
authenticated caller and uses it to stamp records and to apply the one
ownership rule it owns: a non-privileged caller may only view their own sales.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import ValidationError


class Role(str, Enum):
    ADMIN = "admin"
    WORKER = "worker"


@dataclass(frozen=True, slots=True)
class Identity:
    user_id: str
    name: str
    role: Role = Role.WORKER

    def __post_init__(self) -> None:
        if not self.user_id:
            raise ValidationError("user_id is required")
        if not isinstance(self.role, Role):
            raise ValidationError(f"Unknown role: {self.role!r}")

    @property
    def is_privileged(self) -> bool:
        """Admins see every seller's sales and may run reports."""
        return self.role is Role.ADMIN


__all__ = ["Role", "Identity"]
