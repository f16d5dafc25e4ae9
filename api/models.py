"""
API Request and Response Models.

Pydantic models for validating API requests and serializing responses.
Money leaves the API rounded to cents; the services keep full precision.
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from domain.product import Product
from domain.sale import Sale, SaleItem

_CENT = Decimal("0.01")


def money(value: Decimal) -> Decimal:
    """Round an amount to cents for display."""
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


# ============================================================================
# Product Models
# ============================================================================

class ProductResponse(BaseModel):
    """Single catalog product."""
    product_id: str
    name: str
    description: str
    price: Decimal
    category: str
    image: str
    active: bool

    @classmethod
    def from_domain(cls, product: Product) -> "ProductResponse":
        return cls(
            product_id=product.product_id,
            name=product.name,
            description=product.description,
            price=money(product.price),
            category=product.category,
            image=product.image,
            active=product.active,
        )

    class Config:
        json_schema_extra = {
            "example": {
                "product_id": "5f0c6a9e-7d1b-4d8e-9a53-6f1d2b7c8e90",
                "name": "Classic Burger",
                "description": "Beef patty, lettuce, tomato and cheese",
                "price": "12.50",
                "category": "burgers",
                "image": "",
                "active": True
            }
        }


class ProductCreateRequest(BaseModel):
    """Request to add a product to the catalog."""
    name: Optional[str] = Field(None, description="Display name (required)")
    price: Optional[Decimal] = Field(None, description="List price, must be greater than 0")
    description: Optional[str] = None
    category: Optional[str] = Field(None, description="Defaults to 'general'")
    image: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Classic Burger",
                "price": "12.50",
                "description": "Beef patty, lettuce, tomato and cheese",
                "category": "burgers"
            }
        }


class ProductUpdateRequest(BaseModel):
    """Partial product update. Only the fields sent are changed."""
    name: Optional[str] = None
    price: Optional[Decimal] = None
    description: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None
    active: Optional[bool] = Field(None, description="Set to false to retire the product")


# ============================================================================
# Sale Models
# ============================================================================

class SaleLine(BaseModel):
    """One requested line: which product, how many."""
    product_id: Optional[str] = None
    quantity: Optional[int] = None


class SaleCreateRequest(BaseModel):
    """Request to record a sale. Totals are always computed by the server."""
    items: Optional[List[SaleLine]] = Field(None, description="Products sold, in entry order")
    customer_name: Optional[str] = None
    payment_method: Optional[str] = Field(None, description="Defaults to 'cash'")

    class Config:
        json_schema_extra = {
            "example": {
                "items": [
                    {"product_id": "burger", "quantity": 2},
                    {"product_id": "cola", "quantity": 1}
                ],
                "customer_name": "Table 4",
                "payment_method": "card"
            }
        }


class SaleItemResponse(BaseModel):
    product_id: str
    product_name: str
    unit_price: Decimal
    quantity: int
    subtotal: Decimal

    @classmethod
    def from_domain(cls, item: SaleItem) -> "SaleItemResponse":
        return cls(
            product_id=item.product_id,
            product_name=item.product_name,
            unit_price=money(item.unit_price),
            quantity=item.quantity,
            subtotal=money(item.subtotal),
        )


class SaleResponse(BaseModel):
    sale_id: str
    items: List[SaleItemResponse]
    total: Decimal
    seller_id: str
    seller_name: str
    customer_name: str
    payment_method: str
    status: str
    created_at: datetime

    @classmethod
    def from_domain(cls, sale: Sale) -> "SaleResponse":
        return cls(
            sale_id=sale.sale_id,
            items=[SaleItemResponse.from_domain(item) for item in sale.items],
            total=money(sale.total),
            seller_id=sale.seller_id,
            seller_name=sale.seller_name,
            customer_name=sale.customer_name,
            payment_method=sale.payment_method,
            status=sale.status.value,
            created_at=sale.created_at,
        )


class SaleCreatedResponse(BaseModel):
    """Response after a sale is recorded."""
    message: str
    sale_id: str
    total: Decimal
    items: List[SaleItemResponse]

    class Config:
        json_schema_extra = {
            "example": {
                "message": "Sale recorded successfully",
                "sale_id": "0b6f3f0e-9a8f-4b3e-8a59-3c2c7d1e4f55",
                "total": "27.50",
                "items": [
                    {"product_id": "burger", "product_name": "Classic Burger",
                     "unit_price": "12.50", "quantity": 2, "subtotal": "25.00"},
                    {"product_id": "cola", "product_name": "Cola",
                     "unit_price": "2.50", "quantity": 1, "subtotal": "2.50"}
                ]
            }
        }


# ============================================================================
# Report Models
# ============================================================================

class SalesSummaryResponse(BaseModel):
    total_sales: int
    total_revenue: Decimal
    average_ticket: Decimal


class SellerStatsResponse(BaseModel):
    seller_id: str
    name: str
    sales: int
    revenue: Decimal


class ProductStatsResponse(BaseModel):
    product_id: str
    name: str
    quantity: int
    revenue: Decimal


class DailyReportResponse(BaseModel):
    date: date
    summary: SalesSummaryResponse
    sales: List[SaleResponse]
    seller_stats: List[SellerStatsResponse]
    product_stats: List[ProductStatsResponse]


class TopProductResponse(BaseModel):
    product_id: str
    name: str
    quantity: int
    revenue: Decimal
    sales: int


class TopProductsResponse(BaseModel):
    period: str
    since: datetime
    top_products: List[TopProductResponse]


class SellerPerformanceResponse(BaseModel):
    seller_id: str
    name: str
    sales: int
    revenue: Decimal
    items: int
    average_ticket: Decimal


class SellersReportResponse(BaseModel):
    period: str
    since: datetime
    sellers: List[SellerPerformanceResponse]


# ============================================================================
# Error Models
# ============================================================================

class ErrorResponse(BaseModel):
    """Body of every domain error response."""
    error: str
    detail: str
