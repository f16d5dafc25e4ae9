"""
In-memory repositories.

Same contracts as the Supabase adapters, held in plain dicts owned by each
instance. Used by the test suite and by the `memory` storage backend for
local demos. Nothing here is shared between instances.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional

from domain.audit import AuditEntry
from domain.product import Product
from domain.sale import Sale


class InMemoryProductRepository:
    def __init__(self, products: Iterable[Product] = ()) -> None:
        self._products: Dict[str, Product] = {p.product_id: p for p in products}

    def get(self, product_id: str) -> Optional[Product]:
        return self._products.get(product_id)

    def list_active(self) -> List[Product]:
        return sorted((p for p in self._products.values() if p.active), key=lambda p: p.name)

    def create(self, product: Product) -> Product:
        self._products[product.product_id] = product
        return product

    def update(self, product_id: str, fields: Mapping[str, Any]) -> Optional[Product]:
        current = self._products.get(product_id)
        if current is None:
            return None
        updated = current.with_changes(fields)
        self._products[product_id] = updated
        return updated


class InMemorySaleRepository:
    def __init__(self, sales: Iterable[Sale] = ()) -> None:
        self._sales: Dict[str, Sale] = {s.sale_id: s for s in sales}

    def create(self, sale: Sale) -> Sale:
        self._sales[sale.sale_id] = sale
        return sale

    def get(self, sale_id: str) -> Optional[Sale]:
        return self._sales.get(sale_id)

    def query_by_created_at(
        self,
        start: datetime,
        end: Optional[datetime] = None,
        seller_id: Optional[str] = None,
    ) -> List[Sale]:
        matches = [
            sale
            for sale in self._sales.values()
            if sale.created_at >= start
            and (end is None or sale.created_at < end)
            and (seller_id is None or sale.seller_id == seller_id)
        ]
        return sorted(matches, key=lambda s: s.created_at, reverse=True)

    def __len__(self) -> int:
        return len(self._sales)


class InMemoryAuditRepository:
    def __init__(self) -> None:
        self.entries: List[AuditEntry] = []

    def append(self, entry: AuditEntry) -> None:
        self.entries.append(entry)


__all__ = [
    "InMemoryProductRepository",
    "InMemorySaleRepository",
    "InMemoryAuditRepository",
]
