"""
Sales API Endpoints.

Endpoints for recording sales and viewing recorded sales.
"""

from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_current_identity, get_sale_service
from api.models import SaleCreateRequest, SaleCreatedResponse, SaleItemResponse, SaleResponse, money
from domain.errors import NotFoundError
from domain.identity import Identity
from services.sale_service import SaleLineRequest, SaleService

router = APIRouter()


@router.post(
    "/sales",
    response_model=SaleCreatedResponse,
    status_code=201,
    summary="Record Sale",
    description="Record a sale. Prices and totals are taken from the catalog, never from the request."
)
def create_sale(
    request: SaleCreateRequest,
    identity: Identity = Depends(get_current_identity),
    service: SaleService = Depends(get_sale_service),
):
    """
    Record a sale for the signed-in seller.

    **Process:**
    1. Validates every line (product id, positive integer quantity)
    2. Looks up each product; unknown or inactive products reject the whole sale
    3. Snapshots product name and price into the sale
    4. Stores the sale and an audit entry

    No partial sale is ever stored.
    """
    lines = [
        SaleLineRequest(product_id=line.product_id, quantity=line.quantity)
        for line in (request.items or [])
    ]

    try:
        sale = service.record_sale(
            identity,
            lines,
            customer_name=request.customer_name,
            payment_method=request.payment_method,
        )
    except NotFoundError as e:
        # An unusable line is a bad request, not a missing resource.
        return JSONResponse(status_code=400, content={"error": e.code, "detail": e.message})

    return SaleCreatedResponse(
        message="Sale recorded successfully",
        sale_id=sale.sale_id,
        total=money(sale.total),
        items=[SaleItemResponse.from_domain(item) for item in sale.items],
    )


@router.get(
    "/sales/today",
    response_model=List[SaleResponse],
    summary="Today's Sales",
    description="Sales recorded today, newest first. Workers only see their own sales."
)
def list_today_sales(
    identity: Identity = Depends(get_current_identity),
    service: SaleService = Depends(get_sale_service),
):
    return [SaleResponse.from_domain(sale) for sale in service.list_sales_for_day(identity)]


@router.get(
    "/sales/{sale_id}",
    response_model=SaleResponse,
    summary="Sale Detail",
    description="A single sale. Workers may only view sales they recorded."
)
def get_sale(
    sale_id: str,
    identity: Identity = Depends(get_current_identity),
    service: SaleService = Depends(get_sale_service),
):
    return SaleResponse.from_domain(service.get_sale(identity, sale_id))
