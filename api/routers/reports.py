"""
Reports API Endpoints.

Read-only sales rollups for administrators.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_report_service, require_admin
from api.models import (
    DailyReportResponse,
    ProductStatsResponse,
    SaleResponse,
    SalesSummaryResponse,
    SellerPerformanceResponse,
    SellerStatsResponse,
    SellersReportResponse,
    TopProductResponse,
    TopProductsResponse,
    money,
)
from domain.identity import Identity
from services.report_service import (
    DEFAULT_SELLER_PERFORMANCE_DAYS,
    DEFAULT_TOP_PRODUCTS_DAYS,
    ReportService,
)

router = APIRouter()


@router.get(
    "/reports/daily",
    response_model=DailyReportResponse,
    summary="Daily Sales Report",
    description="Totals, per-seller and per-product rollups for one calendar day."
)
def daily_report(
    day: Optional[date] = Query(None, alias="date", description="Day to report (YYYY-MM-DD); defaults to today"),
    _admin: Identity = Depends(require_admin),
    reports: ReportService = Depends(get_report_service),
):
    """
    Daily report.

    **Example usage:**
    - Today: `GET /api/v1/reports/daily`
    - A given day: `GET /api/v1/reports/daily?date=2025-01-15`
    """
    report = reports.daily_report(day)

    return DailyReportResponse(
        date=report.date,
        summary=SalesSummaryResponse(
            total_sales=report.summary.total_sales,
            total_revenue=money(report.summary.total_revenue),
            average_ticket=money(report.summary.average_ticket),
        ),
        sales=[SaleResponse.from_domain(sale) for sale in report.sales],
        seller_stats=[
            SellerStatsResponse(seller_id=s.seller_id, name=s.name, sales=s.sales, revenue=money(s.revenue))
            for s in report.seller_stats
        ],
        product_stats=[
            ProductStatsResponse(product_id=p.product_id, name=p.name, quantity=p.quantity, revenue=money(p.revenue))
            for p in report.product_stats
        ],
    )


@router.get(
    "/reports/top-products",
    response_model=TopProductsResponse,
    summary="Top Products",
    description="Ten best-selling products by units since N days ago."
)
def top_products(
    days: int = Query(DEFAULT_TOP_PRODUCTS_DAYS, ge=0, le=3650, description="Lookback in days"),
    _admin: Identity = Depends(require_admin),
    reports: ReportService = Depends(get_report_service),
):
    report = reports.top_products(days)

    return TopProductsResponse(
        period=report.period,
        since=report.since,
        top_products=[
            TopProductResponse(
                product_id=p.product_id,
                name=p.name,
                quantity=p.quantity,
                revenue=money(p.revenue),
                sales=p.sales,
            )
            for p in report.top_products
        ],
    )


@router.get(
    "/reports/sellers",
    response_model=SellersReportResponse,
    summary="Seller Performance",
    description="Per-seller sales, revenue and average ticket since N days ago, highest revenue first."
)
def seller_performance(
    days: int = Query(DEFAULT_SELLER_PERFORMANCE_DAYS, ge=0, le=3650, description="Lookback in days"),
    _admin: Identity = Depends(require_admin),
    reports: ReportService = Depends(get_report_service),
):
    report = reports.seller_performance(days)

    return SellersReportResponse(
        period=report.period,
        since=report.since,
        sellers=[
            SellerPerformanceResponse(
                seller_id=s.seller_id,
                name=s.name,
                sales=s.sales,
                revenue=money(s.revenue),
                items=s.items,
                average_ticket=money(s.average_ticket),
            )
            for s in report.sellers
        ],
    )
