"""
Products API Endpoints.

Endpoints for browsing and managing the catalog.
"""

from typing import List

from fastapi import APIRouter, Depends

from api.dependencies import get_catalog_service, get_current_identity, require_admin
from api.models import ProductCreateRequest, ProductResponse, ProductUpdateRequest
from domain.identity import Identity
from services.catalog_service import CatalogService

router = APIRouter()


@router.get(
    "/products",
    response_model=List[ProductResponse],
    summary="List Active Products",
    description="Active products ordered by name. Available to every signed-in user."
)
def list_products(
    _identity: Identity = Depends(get_current_identity),
    catalog: CatalogService = Depends(get_catalog_service),
):
    return [ProductResponse.from_domain(p) for p in catalog.list_active_products()]


@router.post(
    "/products",
    response_model=ProductResponse,
    status_code=201,
    summary="Create Product",
    description="Add a product to the catalog (admin only)."
)
def create_product(
    request: ProductCreateRequest,
    identity: Identity = Depends(require_admin),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """
    Create a product.

    `name` and a `price` greater than 0 are required; `category` defaults
    to "general".
    """
    product = catalog.create_product(
        identity,
        name=request.name,
        price=request.price,
        description=request.description,
        category=request.category,
        image=request.image,
    )
    return ProductResponse.from_domain(product)


@router.put(
    "/products/{product_id}",
    response_model=ProductResponse,
    summary="Update Product",
    description="Partially update a product (admin only). Send active=false to retire it."
)
def update_product(
    product_id: str,
    request: ProductUpdateRequest,
    identity: Identity = Depends(require_admin),
    catalog: CatalogService = Depends(get_catalog_service),
):
    changes = request.model_dump(exclude_unset=True)
    product = catalog.update_product(identity, product_id, changes)
    return ProductResponse.from_domain(product)
