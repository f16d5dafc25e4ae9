"""
Product repository (persistence).

Supabase adapter for the `products` table. It only stores and fetches
catalog rows; price validation and audit logging live in the catalog service.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from domain.product import Product
from repositories.client import Client
from repositories.supabase_support import (
    convert_row,
    fetch_all_pages,
    parse_decimal,
    parse_utc_datetime,
    run_query,
    to_iso_utc,
)

# Supabase table name for catalog products.
# Keep this aligned with your database schema.
_PRODUCTS_TABLE: str = "products"


def _row_to_product(row: Mapping[str, Any]) -> Product:
    """Convert a Supabase row into a Product."""

    return Product(
        product_id=str(row["product_id"]),
        name=str(row["name"]),
        price=parse_decimal(row["price"]),
        description=row.get("description") or "",
        category=row.get("category") or "general",
        active=bool(row.get("active", True)),
        image=row.get("image") or "",
        created_at=parse_utc_datetime(row["created_at_utc"]) if row.get("created_at_utc") else None,
        updated_at=parse_utc_datetime(row["updated_at_utc"]) if row.get("updated_at_utc") else None,
        created_by=row.get("created_by"),
        updated_by=row.get("updated_by"),
    )


def _fields_to_payload(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Map Product field names onto column names and JSON-safe values."""

    payload: Dict[str, Any] = {}
    for key, value in fields.items():
        if key == "price":
            payload["price"] = str(value)
        elif key == "created_at":
            payload["created_at_utc"] = to_iso_utc(value, name="created_at") if value else None
        elif key == "updated_at":
            payload["updated_at_utc"] = to_iso_utc(value, name="updated_at") if value else None
        else:
            payload[key] = value
    return payload


class SupabaseProductRepository:
    """Catalog store backed by a Supabase table."""

    def __init__(self, client: Client, table: str = _PRODUCTS_TABLE) -> None:
        self._client = client
        self._table = table

    def get(self, product_id: str) -> Optional[Product]:
        rows = run_query(
            self._client.table(self._table)
            .select("*")
            .eq("product_id", product_id)
            .limit(1),
            "fetch product",
        )
        if not rows:
            return None
        return convert_row(_row_to_product, rows[0], "product")

    def list_active(self) -> List[Product]:
        rows = fetch_all_pages(
            lambda: self._client.table(self._table)
            .select("*")
            .eq("active", True)
            .order("name")
            .order("product_id"),
            "list products",
        )
        return [convert_row(_row_to_product, row, "product") for row in rows]

    def create(self, product: Product) -> Product:
        payload = _fields_to_payload(
            {
                "product_id": product.product_id,
                "name": product.name,
                "description": product.description,
                "price": product.price,
                "category": product.category,
                "image": product.image,
                "active": product.active,
                "created_at": product.created_at,
                "updated_at": product.updated_at,
                "created_by": product.created_by,
                "updated_by": product.updated_by,
            }
        )
        run_query(self._client.table(self._table).insert(payload), "create product")
        return product

    def update(self, product_id: str, fields: Mapping[str, Any]) -> Optional[Product]:
        rows = run_query(
            self._client.table(self._table)
            .update(_fields_to_payload(fields))
            .eq("product_id", product_id),
            "update product",
        )
        if not rows:
            return None
        return convert_row(_row_to_product, rows[0], "product")


__all__ = ["SupabaseProductRepository"]
