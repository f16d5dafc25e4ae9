"""
Reporting service for sales rollups.

Read-only: every report is a fold over the sales returned by one store
query. Nothing is written and no partial report is returned when the query
fails.

Windows:
- Daily report: half-open [midnight(day), midnight(day + 1)) in the
  reporting time zone.
- Top products / seller performance: from midnight N days ago, with no
  upper bound ("since N days ago, through now").

Money is summed as Decimal at full precision; rounding for display happens
at the API boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone, tzinfo
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from domain.errors import ValidationError
from domain.sale import Sale
from domain.time import day_window_utc, start_of_day_utc
from repositories.interfaces import SaleRepository
from services.audit_service import utc_now

TOP_PRODUCTS_LIMIT: int = 10
DEFAULT_TOP_PRODUCTS_DAYS: int = 7
DEFAULT_SELLER_PERFORMANCE_DAYS: int = 30

_ZERO = Decimal("0")


def average(total: Decimal, count: int) -> Decimal:
    """total / count, or 0 when there is nothing to average."""
    return total / count if count > 0 else _ZERO


@dataclass(frozen=True, slots=True)
class SalesSummary:
    total_sales: int
    total_revenue: Decimal
    average_ticket: Decimal


@dataclass(frozen=True, slots=True)
class SellerStats:
    seller_id: str
    name: str
    sales: int
    revenue: Decimal


@dataclass(frozen=True, slots=True)
class ProductStats:
    product_id: str
    name: str
    quantity: int
    revenue: Decimal


@dataclass(frozen=True, slots=True)
class DailyReport:
    date: date
    summary: SalesSummary
    sales: List[Sale]
    seller_stats: List[SellerStats]
    product_stats: List[ProductStats]


@dataclass(frozen=True, slots=True)
class TopProduct:
    product_id: str
    name: str
    quantity: int
    revenue: Decimal
    sales: int  # number of sale lines naming the product


@dataclass(frozen=True, slots=True)
class TopProductsReport:
    days: int
    since: datetime
    top_products: List[TopProduct]

    @property
    def period(self) -> str:
        return f"Last {self.days} days"


@dataclass(frozen=True, slots=True)
class SellerPerformance:
    seller_id: str
    name: str
    sales: int
    revenue: Decimal
    items: int  # number of sale lines, not units
    average_ticket: Decimal


@dataclass(frozen=True, slots=True)
class SellerPerformanceReport:
    days: int
    since: datetime
    sellers: List[SellerPerformance]

    @property
    def period(self) -> str:
        return f"Last {self.days} days"


def _require_days(days: int) -> None:
    if isinstance(days, bool) or not isinstance(days, int) or days < 0:
        raise ValidationError("days must be a non-negative integer")


def fold_daily(sales: Iterable[Sale]) -> Tuple[SalesSummary, List[SellerStats], List[ProductStats]]:
    """
    Single pass over `sales` producing the summary, per-seller and
    per-product rollups. Product stats are sorted by quantity, highest first.
    """

    count = 0
    revenue = _ZERO
    sellers: Dict[str, List] = {}
    products: Dict[str, List] = {}

    for sale in sales:
        count += 1
        revenue += sale.total

        seller = sellers.setdefault(sale.seller_id, [sale.seller_name, 0, _ZERO])
        seller[1] += 1
        seller[2] += sale.total

        for item in sale.items:
            product = products.setdefault(item.product_id, [item.product_name, 0, _ZERO])
            product[1] += item.quantity
            product[2] += item.subtotal

    summary = SalesSummary(total_sales=count, total_revenue=revenue, average_ticket=average(revenue, count))
    seller_stats = [SellerStats(sid, name, n, total) for sid, (name, n, total) in sellers.items()]
    product_stats = sorted(
        (ProductStats(pid, name, qty, total) for pid, (name, qty, total) in products.items()),
        key=lambda p: p.quantity,
        reverse=True,
    )
    return summary, seller_stats, product_stats


def fold_top_products(sales: Iterable[Sale], limit: int = TOP_PRODUCTS_LIMIT) -> List[TopProduct]:
    products: Dict[str, List] = {}

    for sale in sales:
        for item in sale.items:
            product = products.setdefault(item.product_id, [item.product_name, 0, _ZERO, 0])
            product[1] += item.quantity
            product[2] += item.subtotal
            product[3] += 1

    ranked = sorted(
        (TopProduct(pid, name, qty, total, lines) for pid, (name, qty, total, lines) in products.items()),
        key=lambda p: p.quantity,
        reverse=True,
    )
    return ranked[:limit]


def fold_seller_performance(sales: Iterable[Sale]) -> List[SellerPerformance]:
    sellers: Dict[str, List] = {}

    for sale in sales:
        seller = sellers.setdefault(sale.seller_id, [sale.seller_name, 0, _ZERO, 0])
        seller[1] += 1
        seller[2] += sale.total
        seller[3] += sale.item_count

    return sorted(
        (
            SellerPerformance(sid, name, n, total, items, average(total, n))
            for sid, (name, n, total, items) in sellers.items()
        ),
        key=lambda s: s.revenue,
        reverse=True,
    )


class ReportService:
    def __init__(
        self,
        sales: SaleRepository,
        clock: Callable[[], datetime] = utc_now,
        tz: tzinfo = timezone.utc,
    ) -> None:
        self._sales = sales
        self._clock = clock
        self._tz = tz

    def today(self) -> date:
        return self._clock().astimezone(self._tz).date()

    def _lookback_start(self, days: int) -> datetime:
        return start_of_day_utc(self.today() - timedelta(days=days), self._tz)

    def daily_report(self, day: Optional[date] = None) -> DailyReport:
        """
        Sales summary for one calendar day (default: today).

        Example:
            report = service.daily_report(date(2025, 1, 15))
            print(report.summary.total_revenue, report.summary.average_ticket)
        """

        if day is None:
            day = self.today()
        start, end = day_window_utc(day, self._tz)

        sales = self._sales.query_by_created_at(start, end)
        summary, seller_stats, product_stats = fold_daily(sales)

        return DailyReport(
            date=day,
            summary=summary,
            sales=list(sales),
            seller_stats=seller_stats,
            product_stats=product_stats,
        )

    def top_products(self, days: int = DEFAULT_TOP_PRODUCTS_DAYS) -> TopProductsReport:
        """Best sellers by units since midnight `days` days ago (top 10)."""

        _require_days(days)
        since = self._lookback_start(days)
        sales = self._sales.query_by_created_at(since)
        return TopProductsReport(days=days, since=since, top_products=fold_top_products(sales))

    def seller_performance(self, days: int = DEFAULT_SELLER_PERFORMANCE_DAYS) -> SellerPerformanceReport:
        """Per-seller totals since midnight `days` days ago, highest revenue first."""

        _require_days(days)
        since = self._lookback_start(days)
        sales = self._sales.query_by_created_at(since)
        return SellerPerformanceReport(days=days, since=since, sellers=fold_seller_performance(sales))


__all__ = [
    "TOP_PRODUCTS_LIMIT",
    "SalesSummary",
    "SellerStats",
    "ProductStats",
    "DailyReport",
    "TopProduct",
    "TopProductsReport",
    "SellerPerformance",
    "SellerPerformanceReport",
    "ReportService",
    "average",
    "fold_daily",
    "fold_top_products",
    "fold_seller_performance",
]
