"""
Sale service for recording and viewing sales.

Handles:
- Validation of the requested lines before anything is written
- Price/name snapshotting from the catalog at sale time
- Server-side total computation (caller totals are never trusted)
- One sale write and one audit entry per recorded sale
- The ownership rule for viewing a sale
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone, tzinfo
from decimal import Decimal
from typing import Callable, List, Optional, Sequence
from uuid import uuid4

from domain.audit import AuditAction
from domain.errors import AuthorizationError, InactiveResourceError, NotFoundError, ValidationError
from domain.identity import Identity
from domain.sale import (
    DEFAULT_CUSTOMER_NAME,
    DEFAULT_PAYMENT_METHOD,
    Sale,
    SaleItem,
    SaleStatus,
    require_positive_quantity,
)
from domain.time import day_window_utc
from repositories.interfaces import ProductRepository, SaleRepository
from services.audit_service import AuditLogger, utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SaleLineRequest:
    """A requested (product, quantity) pair, as entered at the register."""

    product_id: str
    quantity: int


def _new_id() -> str:
    return str(uuid4())


def _validate_lines(lines: Optional[Sequence[SaleLineRequest]]) -> None:
    if not lines:
        raise ValidationError("At least one product is required")

    for position, line in enumerate(lines):
        if not isinstance(line, SaleLineRequest):
            raise ValidationError(f"Line {position} is not a product/quantity pair")
        if not isinstance(line.product_id, str) or not line.product_id.strip():
            raise ValidationError(f"Line {position}: a valid product id is required")
        try:
            require_positive_quantity("quantity", line.quantity)
        except ValidationError as exc:
            raise ValidationError(f"Line {position}: {exc.message}") from exc


class SaleService:
    def __init__(
        self,
        products: ProductRepository,
        sales: SaleRepository,
        audit: AuditLogger,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = _new_id,
        tz: tzinfo = timezone.utc,
    ) -> None:
        self._products = products
        self._sales = sales
        self._audit = audit
        self._clock = clock
        self._id_factory = id_factory
        self._tz = tz

    def record_sale(
        self,
        identity: Identity,
        lines: Sequence[SaleLineRequest],
        customer_name: Optional[str] = None,
        payment_method: Optional[str] = None,
    ) -> Sale:
        """
        Record a sale of the requested lines on behalf of `identity`.

        Process:
        1. Validate every line (non-empty list, product ids, positive quantities)
        2. Fetch each product in input order; unknown or inactive products
           abort the whole sale
        3. Snapshot name and price into the sale items and sum the subtotals
        4. Persist the sale (single write)
        5. Append one CREATE_SALE audit entry

        Raises:
            ValidationError: malformed or empty line list
            NotFoundError: a product id does not exist
            InactiveResourceError: a product is deactivated
            StorageError: the store failed; nothing is retried here

        Example:
            sale = service.record_sale(
                identity,
                [SaleLineRequest("burger", 2), SaleLineRequest("cola", 1)],
            )
            print(f"Sale {sale.sale_id}: {sale.total}")
        """

        _validate_lines(lines)

        items: List[SaleItem] = []
        total = Decimal("0")

        # Nothing is written until every line has been resolved.
        for line in lines:
            product = self._products.get(line.product_id)
            if product is None:
                raise NotFoundError(f"Product {line.product_id} not found", entity_id=line.product_id)
            if not product.active:
                raise InactiveResourceError(
                    f"Product {line.product_id} is inactive", entity_id=line.product_id
                )

            item = SaleItem.snapshot(product.product_id, product.name, product.price, line.quantity)
            total += item.subtotal
            items.append(item)

        sale = Sale(
            sale_id=self._id_factory(),
            items=tuple(items),
            total=total,
            seller_id=identity.user_id,
            seller_name=identity.name,
            created_at=self._clock(),
            customer_name=(customer_name or "").strip() or DEFAULT_CUSTOMER_NAME,
            payment_method=(payment_method or "").strip() or DEFAULT_PAYMENT_METHOD,
            status=SaleStatus.COMPLETED,
        )
        sale = self._sales.create(sale)

        logger.info(
            f"Sale {sale.sale_id} recorded",
            extra={
                "sale_id": sale.sale_id,
                "seller_id": sale.seller_id,
                "total": str(sale.total),
                "items_count": sale.item_count,
            },
        )

        self._audit.record(
            identity,
            AuditAction.CREATE_SALE,
            "sale",
            sale.sale_id,
            changes={"total": sale.total, "items_count": sale.item_count},
        )

        return sale

    def get_sale(self, identity: Identity, sale_id: str) -> Sale:
        """
        Fetch one sale.

        A non-privileged caller may only view a sale they sold themselves.
        """

        sale = self._sales.get(sale_id)
        if sale is None:
            raise NotFoundError(f"Sale {sale_id} not found", entity_id=sale_id)

        if not identity.is_privileged and not sale.is_owned_by(identity.user_id):
            raise AuthorizationError("You do not have permission to view this sale")

        return sale

    def list_sales_for_day(self, identity: Identity, day: Optional[date] = None) -> List[Sale]:
        """
        Sales recorded during `day` (default: today), newest first.

        Workers only see their own sales; admins see everyone's.
        """

        if day is None:
            day = self._clock().astimezone(self._tz).date()
        start, end = day_window_utc(day, self._tz)

        seller_id = None if identity.is_privileged else identity.user_id
        return self._sales.query_by_created_at(start, end, seller_id=seller_id)


__all__ = ["SaleLineRequest", "SaleService"]
