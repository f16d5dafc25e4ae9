"""
Storage contracts consumed by the services.

Services depend on these protocols, never on a concrete store. Two
implementations exist for each: a Supabase adapter for production and an
in-memory double for tests and local demos.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Mapping, Optional, Protocol, runtime_checkable

from domain.audit import AuditEntry
from domain.product import Product
from domain.sale import Sale


@runtime_checkable
class ProductRepository(Protocol):
    def get(self, product_id: str) -> Optional[Product]:
        """Return the product, or None if it does not exist."""
        ...

    def list_active(self) -> List[Product]:
        """Return active products ordered by name."""
        ...

    def create(self, product: Product) -> Product:
        """Insert a new product and return it as stored."""
        ...

    def update(self, product_id: str, fields: Mapping[str, Any]) -> Optional[Product]:
        """Apply a partial update; None if the product does not exist."""
        ...


@runtime_checkable
class SaleRepository(Protocol):
    def create(self, sale: Sale) -> Sale:
        """Insert a sale as a single write."""
        ...

    def get(self, sale_id: str) -> Optional[Sale]:
        ...

    def query_by_created_at(
        self,
        start: datetime,
        end: Optional[datetime] = None,
        seller_id: Optional[str] = None,
    ) -> List[Sale]:
        """
        Sales with start <= created_at < end, newest first.

        `end=None` leaves the window unbounded at the top.
        """
        ...


@runtime_checkable
class AuditRepository(Protocol):
    def append(self, entry: AuditEntry) -> None:
        ...


__all__ = ["ProductRepository", "SaleRepository", "AuditRepository"]
