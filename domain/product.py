"""
Domain: Catalog products.

Contract excerpts implemented here:
- A Product has a non-empty name and a non-negative price.
- Category defaults to "general".
- Products are never physically deleted; retiring a product sets active=False.
- Only active products may be referenced by a new sale.

This module contains only pure domain entities: no I/O, no database, no frameworks.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping, Optional

from .errors import ValidationError
from .time import require_utc_timestamp

DEFAULT_CATEGORY: str = "general"

# Fields a catalog update is allowed to touch.
UPDATABLE_FIELDS = frozenset({"name", "description", "price", "category", "image", "active"})


def require_money(name: str, value: Decimal) -> None:
    """Money amounts are finite, non-negative Decimals."""

    if not isinstance(value, Decimal):
        raise ValidationError(f"{name} must be a Decimal, got {type(value).__name__}")
    if not value.is_finite():
        raise ValidationError(f"{name} must be a finite amount")
    if value < 0:
        raise ValidationError(f"{name} must be non-negative")


@dataclass(frozen=True, slots=True)
class Product:
    """
    Catalog entry that can be sold.

    `price` is the current list price. Sales copy it at creation time, so
    editing it never affects sales already recorded.
    """

    product_id: str
    name: str
    price: Decimal
    description: str = ""
    category: str = DEFAULT_CATEGORY
    active: bool = True
    image: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    created_by: Optional[str] = None
    updated_by: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.product_id:
            raise ValidationError("product_id is required")
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValidationError("name is required")
        require_money("price", self.price)
        if not self.category:
            raise ValidationError("category must not be empty")
        if self.created_at is not None:
            require_utc_timestamp("created_at", self.created_at)
        if self.updated_at is not None:
            require_utc_timestamp("updated_at", self.updated_at)

    def with_changes(self, changes: Mapping[str, Any]) -> "Product":
        """Return a copy with `changes` applied; the original is untouched."""

        unknown = set(changes) - UPDATABLE_FIELDS - {"updated_at", "updated_by"}
        if unknown:
            raise ValidationError(f"Cannot update product fields: {sorted(unknown)}")
        return replace(self, **dict(changes))


__all__ = ["DEFAULT_CATEGORY", "UPDATABLE_FIELDS", "Product", "require_money"]
