"""
Domain: Error taxonomy.

Every failure raised by the services is one of these types. The API layer maps
each type onto an HTTP status; nothing below the API knows about HTTP.
"""

from __future__ import annotations

from typing import Optional


class PosError(Exception):
    """Base class for all point-of-sale domain errors."""

    code: str = "pos_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(PosError, ValueError):
    """Malformed, missing or non-positive input fields."""

    code = "validation_error"


class NotFoundError(PosError):
    """Unknown product or sale id."""

    code = "not_found"

    def __init__(self, message: str, entity_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.entity_id = entity_id


class InactiveResourceError(NotFoundError):
    """A deactivated product was referenced where an active one is required."""

    code = "inactive_resource"


class AuthorizationError(PosError):
    """Ownership or role check failed."""

    code = "forbidden"


class StorageError(PosError):
    """The storage collaborator failed to read or write."""

    code = "storage_error"


__all__ = [
    "PosError",
    "ValidationError",
    "NotFoundError",
    "InactiveResourceError",
    "AuthorizationError",
    "StorageError",
]
