"""
Sale repository (persistence).

This module provides *only* persistence operations for the Sale domain
entity. It does not enforce business rules (e.g., active products, totals);
it only inserts and fetches sale records.

A sale and its items are stored as one row: items live in a JSON column so
that recording a sale is a single write.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from domain.sale import Sale, SaleItem, SaleStatus
from repositories.client import Client
from repositories.supabase_support import (
    convert_row,
    fetch_all_pages,
    parse_decimal,
    parse_utc_datetime,
    run_query,
    to_iso_utc,
)

# Supabase table name for sale records.
# Keep this aligned with your database schema.
_SALES_TABLE: str = "sales"


def _item_to_json(item: SaleItem) -> Dict[str, Any]:
    # Decimals are stored as strings to keep full precision in JSON
    return {
        "product_id": item.product_id,
        "product_name": item.product_name,
        "unit_price": str(item.unit_price),
        "quantity": item.quantity,
        "subtotal": str(item.subtotal),
    }


def _json_to_item(data: Mapping[str, Any]) -> SaleItem:
    return SaleItem(
        product_id=str(data["product_id"]),
        product_name=str(data["product_name"]),
        unit_price=parse_decimal(data["unit_price"]),
        quantity=int(data["quantity"]),
        subtotal=parse_decimal(data["subtotal"]),
    )


def _row_to_sale(row: Mapping[str, Any]) -> Sale:
    """Convert a Supabase row into a Sale."""

    return Sale(
        sale_id=str(row["sale_id"]),
        items=tuple(_json_to_item(item) for item in row.get("items") or []),
        total=parse_decimal(row["total"]),
        seller_id=str(row["seller_id"]),
        seller_name=str(row.get("seller_name") or ""),
        created_at=parse_utc_datetime(row["created_at_utc"]),
        customer_name=str(row.get("customer_name") or ""),
        payment_method=str(row.get("payment_method") or ""),
        status=SaleStatus(str(row.get("status", SaleStatus.COMPLETED.value))),
    )


class SupabaseSaleRepository:
    """Sales store backed by a Supabase table."""

    def __init__(self, client: Client, table: str = _SALES_TABLE) -> None:
        self._client = client
        self._table = table

    def create(self, sale: Sale) -> Sale:
        """Insert a new sale record."""

        payload: dict[str, Any] = {
            "sale_id": sale.sale_id,
            "items": [_item_to_json(item) for item in sale.items],
            "total": str(sale.total),
            "seller_id": sale.seller_id,
            "seller_name": sale.seller_name,
            "customer_name": sale.customer_name,
            "payment_method": sale.payment_method,
            "status": sale.status.value,
            "created_at_utc": to_iso_utc(sale.created_at, name="created_at"),
        }
        run_query(self._client.table(self._table).insert(payload), "record sale")
        return sale

    def get(self, sale_id: str) -> Optional[Sale]:
        """Retrieve a single sale record by its ID, or None if not found."""

        rows = run_query(
            self._client.table(self._table)
            .select("*")
            .eq("sale_id", sale_id)
            .limit(1),
            "get sale",
        )
        if not rows:
            return None
        return convert_row(_row_to_sale, rows[0], "sale")

    def query_by_created_at(
        self,
        start: datetime,
        end: Optional[datetime] = None,
        seller_id: Optional[str] = None,
    ) -> List[Sale]:
        """
        Retrieve sales created in [start, end), newest first.

        Args:
            start: inclusive lower bound (UTC)
            end: exclusive upper bound (UTC); None means no upper bound
            seller_id: restrict to one seller's sales

        Returns:
            List[Sale] (possibly empty)
        """

        start_iso = to_iso_utc(start, name="start")
        end_iso = to_iso_utc(end, name="end") if end is not None else None

        def build_query() -> Any:
            query = self._client.table(self._table).select("*").gte("created_at_utc", start_iso)
            if end_iso is not None:
                query = query.lt("created_at_utc", end_iso)
            if seller_id is not None:
                query = query.eq("seller_id", seller_id)
            # sale_id breaks timestamp ties so offset pages stay stable
            return query.order("created_at_utc", desc=True).order("sale_id")

        rows = fetch_all_pages(build_query, "list sales")
        return [convert_row(_row_to_sale, row, "sale") for row in rows]


__all__ = ["SupabaseSaleRepository"]
