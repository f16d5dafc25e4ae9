"""
Domain: Sale records.

Contract excerpts implemented here:
- A Sale is immutable once created; there is no update or delete path.
- SaleItem.product_name and SaleItem.unit_price are snapshots taken when the
  sale is recorded and never follow later product edits.
- SaleItem.subtotal == unit_price * quantity.
- Sale.total == sum of its items' subtotals.

All timestamps must be passed explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple

from .errors import ValidationError
from .product import require_money
from .time import require_utc_timestamp

DEFAULT_CUSTOMER_NAME: str = "General customer"
DEFAULT_PAYMENT_METHOD: str = "cash"


class SaleStatus(str, Enum):
    COMPLETED = "completed"


def require_positive_quantity(name: str, value: object) -> None:
    # bool is an int subclass; True must not count as a quantity of one
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer")
    if value <= 0:
        raise ValidationError(f"{name} must be greater than zero")


@dataclass(frozen=True, slots=True)
class SaleItem:
    """One line of a sale, with the product name and price frozen at sale time."""

    product_id: str
    product_name: str
    unit_price: Decimal
    quantity: int
    subtotal: Decimal

    def __post_init__(self) -> None:
        if not self.product_id:
            raise ValidationError("product_id is required")
        if not self.product_name:
            raise ValidationError("product_name is required")
        require_money("unit_price", self.unit_price)
        require_positive_quantity("quantity", self.quantity)
        require_money("subtotal", self.subtotal)
        if self.subtotal != self.unit_price * self.quantity:
            raise ValidationError(
                f"subtotal {self.subtotal} does not match {self.unit_price} x {self.quantity}"
            )

    @classmethod
    def snapshot(cls, product_id: str, product_name: str, unit_price: Decimal, quantity: int) -> "SaleItem":
        """Build a line from the product's current name and price."""

        require_positive_quantity("quantity", quantity)
        return cls(
            product_id=product_id,
            product_name=product_name,
            unit_price=unit_price,
            quantity=quantity,
            subtotal=unit_price * quantity,
        )


@dataclass(frozen=True, slots=True)
class Sale:
    """
    Immutable record of a completed transaction.

    Captures:
    - What was sold (items, in the order they were entered)
    - Who sold it (seller_id / seller_name, snapshotted)
    - When (created_at, set once by the server)
    - How much (total, always the sum of item subtotals)
    """

    sale_id: str
    items: Tuple[SaleItem, ...]
    total: Decimal
    seller_id: str
    seller_name: str
    created_at: datetime
    customer_name: str = DEFAULT_CUSTOMER_NAME
    payment_method: str = DEFAULT_PAYMENT_METHOD
    status: SaleStatus = SaleStatus.COMPLETED

    def __post_init__(self) -> None:
        if not self.sale_id:
            raise ValidationError("sale_id is required")
        if not isinstance(self.items, tuple):
            raise ValidationError("items must be a tuple of SaleItem")
        if not self.items:
            raise ValidationError("a sale requires at least one item")
        if not self.seller_id:
            raise ValidationError("seller_id is required")
        require_money("total", self.total)
        require_utc_timestamp("created_at", self.created_at)
        expected = sum((item.subtotal for item in self.items), Decimal("0"))
        if self.total != expected:
            raise ValidationError(f"total {self.total} does not match item subtotals {expected}")

    @property
    def item_count(self) -> int:
        """Number of lines on the sale (not units)."""
        return len(self.items)

    def is_owned_by(self, user_id: Optional[str]) -> bool:
        return user_id is not None and self.seller_id == user_id


__all__ = [
    "DEFAULT_CUSTOMER_NAME",
    "DEFAULT_PAYMENT_METHOD",
    "SaleStatus",
    "SaleItem",
    "Sale",
    "require_positive_quantity",
]
