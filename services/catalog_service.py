"""
Catalog service for managing sellable products.

Handles:
- Listing the active menu
- Creating products (name and a positive price are required)
- Partial updates, including retiring a product with active=False

Every create and update appends one audit entry. Products are never deleted.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Mapping, Optional
from uuid import uuid4

from domain.audit import AuditAction
from domain.errors import NotFoundError, ValidationError
from domain.identity import Identity
from domain.product import DEFAULT_CATEGORY, UPDATABLE_FIELDS, Product
from repositories.interfaces import ProductRepository
from services.audit_service import AuditLogger, utc_now

logger = logging.getLogger(__name__)


def _parse_price(value: Any) -> Decimal:
    """Coerce a price input to Decimal and require it to be positive."""

    if value is None or isinstance(value, bool):
        raise ValidationError("price is required")
    try:
        price = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as exc:
        raise ValidationError(f"price is not a valid amount: {value!r}") from exc
    if not price.is_finite() or price <= 0:
        raise ValidationError("price must be greater than 0")
    return price


def _require_name(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("name is required")
    return value.strip()


def _snapshot(product: Product) -> Dict[str, Any]:
    return asdict(product)


class CatalogService:
    def __init__(
        self,
        products: ProductRepository,
        audit: AuditLogger,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = lambda: str(uuid4()),
    ) -> None:
        self._products = products
        self._audit = audit
        self._clock = clock
        self._id_factory = id_factory

    def list_active_products(self) -> List[Product]:
        return self._products.list_active()

    def get_product(self, product_id: str) -> Product:
        product = self._products.get(product_id)
        if product is None:
            raise NotFoundError(f"Product {product_id} not found", entity_id=product_id)
        return product

    def create_product(
        self,
        identity: Identity,
        name: Any,
        price: Any,
        description: Optional[str] = None,
        category: Optional[str] = None,
        image: Optional[str] = None,
    ) -> Product:
        """
        Add a product to the catalog.

        Raises:
            ValidationError: missing name, missing or non-positive price
        """

        now = self._clock()
        product = Product(
            product_id=self._id_factory(),
            name=_require_name(name),
            price=_parse_price(price),
            description=description or "",
            category=category or DEFAULT_CATEGORY,
            active=True,
            image=image or "",
            created_at=now,
            updated_at=now,
            created_by=identity.user_id,
        )
        product = self._products.create(product)

        logger.info(
            f"Product {product.product_id} created",
            extra={"product_id": product.product_id, "user_id": identity.user_id},
        )

        self._audit.record(
            identity,
            AuditAction.CREATE_PRODUCT,
            "product",
            product.product_id,
            changes={"name": product.name, "price": product.price, "category": product.category},
        )
        return product

    def update_product(self, identity: Identity, product_id: str, changes: Mapping[str, Any]) -> Product:
        """
        Apply a partial update to a product.

        Only the fields present in `changes` are touched. The audit entry
        carries both the applied changes and the product as it was before.

        Raises:
            NotFoundError: unknown product id
            ValidationError: unknown field or invalid value
        """

        current = self._products.get(product_id)
        if current is None:
            raise NotFoundError(f"Product {product_id} not found", entity_id=product_id)

        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update product fields: {sorted(unknown)}")

        fields: Dict[str, Any] = {}
        for key, value in changes.items():
            if key == "name":
                fields["name"] = _require_name(value)
            elif key == "price":
                fields["price"] = _parse_price(value)
            elif key == "category":
                if not value:
                    raise ValidationError("category must not be empty")
                fields["category"] = value
            elif key == "active":
                if not isinstance(value, bool):
                    raise ValidationError("active must be true or false")
                fields["active"] = value
            else:
                fields[key] = value or ""

        fields["updated_at"] = self._clock()
        fields["updated_by"] = identity.user_id

        updated = self._products.update(product_id, fields)
        if updated is None:
            raise NotFoundError(f"Product {product_id} not found", entity_id=product_id)

        logger.info(
            f"Product {product_id} updated",
            extra={"product_id": product_id, "user_id": identity.user_id, "fields": sorted(changes)},
        )

        self._audit.record(
            identity,
            AuditAction.UPDATE_PRODUCT,
            "product",
            product_id,
            changes=fields,
            previous_data=_snapshot(current),
        )
        return updated


__all__ = ["CatalogService"]
