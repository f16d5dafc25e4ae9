"""
Tests for `domain/product.py`.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from domain.errors import ValidationError
from domain.product import Product


def test_product_defaults() -> None:
    product = Product(product_id="p1", name="Cola", price=Decimal("2.50"))

    assert product.category == "general"
    assert product.active is True
    assert product.description == ""


@pytest.mark.parametrize(
    "kwargs",
    [
        {"product_id": "", "name": "Cola", "price": Decimal("1")},
        {"product_id": "p1", "name": "  ", "price": Decimal("1")},
        {"product_id": "p1", "name": "Cola", "price": Decimal("-0.01")},
        {"product_id": "p1", "name": "Cola", "price": 2.5},
        {"product_id": "p1", "name": "Cola", "price": Decimal("NaN")},
    ],
)
def test_product_rejects_invalid_fields(kwargs) -> None:
    """Verify required fields and non-negative Decimal prices are enforced."""

    with pytest.raises(ValidationError):
        Product(**kwargs)


def test_zero_price_is_allowed_by_the_record() -> None:
    assert Product(product_id="p1", name="Water refill", price=Decimal("0")).price == Decimal("0")


def test_with_changes_returns_new_instance() -> None:
    """Verify updates never mutate the original product."""

    original = Product(product_id="p1", name="Cola", price=Decimal("2.50"))
    updated = original.with_changes({"price": Decimal("3.00"), "active": False})

    assert original.price == Decimal("2.50")
    assert original.active is True
    assert updated.price == Decimal("3.00")
    assert updated.active is False


def test_with_changes_rejects_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        Product(product_id="p1", name="Cola", price=Decimal("2.50")).with_changes({"product_id": "p2"})
