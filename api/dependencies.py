"""
Service wiring and request dependencies.

The services are built once per application and kept on `app.state`;
routers reach them through the `get_*` dependencies below. Nothing is held
in module-level globals.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request

from api.settings import Settings
from domain.errors import ValidationError
from domain.identity import Identity, Role
from repositories.memory import (
    InMemoryAuditRepository,
    InMemoryProductRepository,
    InMemorySaleRepository,
)
from services.audit_service import AuditLogger
from services.catalog_service import CatalogService
from services.report_service import ReportService
from services.sale_service import SaleService

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Services:
    catalog: CatalogService
    sales: SaleService
    reports: ReportService


def build_services(settings: Settings) -> Services:
    """Create repositories for the configured backend and the services on top."""

    if settings.storage_backend == "memory":
        logger.warning("Using in-memory storage; data is lost when the process exits")
        products = InMemoryProductRepository()
        sales = InMemorySaleRepository()
        audit_log = InMemoryAuditRepository()
    else:
        from repositories.audit_repository import SupabaseAuditRepository
        from repositories.client import create_supabase_client
        from repositories.product_repository import SupabaseProductRepository
        from repositories.sale_repository import SupabaseSaleRepository

        client = create_supabase_client(settings.supabase_url, settings.supabase_key)
        products = SupabaseProductRepository(client)
        sales = SupabaseSaleRepository(client)
        audit_log = SupabaseAuditRepository(client)

    tz = settings.tz
    audit = AuditLogger(audit_log)
    return Services(
        catalog=CatalogService(products, audit),
        sales=SaleService(products, sales, audit, tz=tz),
        reports=ReportService(sales, tz=tz),
    )


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_catalog_service(services: Services = Depends(get_services)) -> CatalogService:
    return services.catalog


def get_sale_service(services: Services = Depends(get_services)) -> SaleService:
    return services.sales


def get_report_service(services: Services = Depends(get_services)) -> ReportService:
    return services.reports


def get_current_identity(
    x_user_id: Optional[str] = Header(None),
    x_user_name: Optional[str] = Header(None),
    x_user_role: Optional[str] = Header(None),
) -> Identity:
    """
    Caller identity as asserted by the upstream authentication layer.

    Requests without a user id are rejected with 401.
    """

    if not x_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")

    try:
        role = Role((x_user_role or Role.WORKER.value).lower())
    except ValueError:
        raise HTTPException(status_code=401, detail=f"Unknown role: {x_user_role}")

    try:
        return Identity(user_id=x_user_id, name=x_user_name or x_user_id, role=role)
    except ValidationError as e:
        raise HTTPException(status_code=401, detail=e.message)


def require_admin(identity: Identity = Depends(get_current_identity)) -> Identity:
    if not identity.is_privileged:
        raise HTTPException(status_code=403, detail="Access denied. Administrator role required")
    return identity


__all__ = [
    "Services",
    "build_services",
    "get_services",
    "get_catalog_service",
    "get_sale_service",
    "get_report_service",
    "get_current_identity",
    "require_admin",
]
