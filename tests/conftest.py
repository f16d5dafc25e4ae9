"""
Pytest configuration and shared fixtures.

This file adds the parent directory to the Python path so that tests
can import from the domain, repositories, services and api modules, and
builds every service on in-memory repositories with a controllable clock.
"""

import sys
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from itertools import count
from pathlib import Path

import pytest

# Add the project root to the Python path
# so tests can import domain, repositories, etc.
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from domain.identity import Identity, Role  # noqa: E402
from domain.product import Product  # noqa: E402
from repositories.memory import (  # noqa: E402
    InMemoryAuditRepository,
    InMemoryProductRepository,
    InMemorySaleRepository,
)
from services.audit_service import AuditLogger  # noqa: E402
from services.catalog_service import CatalogService  # noqa: E402
from services.report_service import ReportService  # noqa: E402
from services.sale_service import SaleService  # noqa: E402


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


def sequential_ids(prefix: str):
    counter = count(1)
    return lambda: f"{prefix}-{next(counter)}"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2025, 1, 15, 14, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def admin() -> Identity:
    return Identity(user_id="admin-1", name="Alice Admin", role=Role.ADMIN)


@pytest.fixture
def worker() -> Identity:
    return Identity(user_id="worker-1", name="Walter Worker", role=Role.WORKER)


@pytest.fixture
def other_worker() -> Identity:
    return Identity(user_id="worker-2", name="Wendy Worker", role=Role.WORKER)


@pytest.fixture
def product_repo() -> InMemoryProductRepository:
    return InMemoryProductRepository(
        [
            Product(product_id="burger", name="Classic Burger", price=Decimal("12.50"), category="burgers"),
            Product(product_id="cola", name="Cola", price=Decimal("2.50"), category="drinks"),
            Product(product_id="salad", name="Caesar Salad", price=Decimal("10.00"), category="salads"),
            Product(product_id="soup", name="Soup of the Day", price=Decimal("6.00"), active=False),
        ]
    )


@pytest.fixture
def sale_repo() -> InMemorySaleRepository:
    return InMemorySaleRepository()


@pytest.fixture
def audit_repo() -> InMemoryAuditRepository:
    return InMemoryAuditRepository()


@pytest.fixture
def audit_logger(audit_repo, clock) -> AuditLogger:
    return AuditLogger(audit_repo, clock=clock)


@pytest.fixture
def sale_service(product_repo, sale_repo, audit_logger, clock) -> SaleService:
    return SaleService(product_repo, sale_repo, audit_logger, clock=clock, id_factory=sequential_ids("sale"))


@pytest.fixture
def catalog_service(product_repo, audit_logger, clock) -> CatalogService:
    return CatalogService(product_repo, audit_logger, clock=clock, id_factory=sequential_ids("product"))


@pytest.fixture
def report_service(sale_repo, clock) -> ReportService:
    return ReportService(sale_repo, clock=clock)
