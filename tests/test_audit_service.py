"""
Tests for `services/audit_service.py`.

Covers:
- Entries are stamped with the acting user and the clock.
- A failing audit store is logged and never fails the originating action.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from domain.audit import AuditAction
from domain.errors import StorageError
from services.audit_service import AuditLogger
from services.sale_service import SaleLineRequest, SaleService


class FailingAuditRepository:
    def __init__(self) -> None:
        self.attempts = 0

    def append(self, entry) -> None:
        self.attempts += 1
        raise StorageError("audit_log unavailable")


class BrokenAuditRepository:
    def append(self, entry) -> None:
        raise RuntimeError("audit sink misconfigured")


def test_record_stamps_user_and_time(audit_logger, audit_repo, admin, clock) -> None:
    entry = audit_logger.record(admin, AuditAction.CREATE_PRODUCT, "product", "p1", {"name": "Cola"})

    assert audit_repo.entries == [entry]
    assert entry.user_id == "admin-1"
    assert entry.user_name == "Alice Admin"
    assert entry.timestamp == clock.now
    assert entry.previous_data is None


def test_record_swallows_storage_errors(admin, clock, caplog) -> None:
    repo = FailingAuditRepository()
    audit = AuditLogger(repo, clock=clock)

    with caplog.at_level(logging.WARNING, logger="services.audit_service"):
        result = audit.record(admin, AuditAction.CREATE_PRODUCT, "product", "p1", {})

    assert result is None
    assert repo.attempts == 1
    assert "CREATE_PRODUCT" in caplog.text


def test_sale_survives_audit_failure(product_repo, sale_repo, worker, clock) -> None:
    """The sale is still recorded and returned when the audit append fails."""

    repo = FailingAuditRepository()
    service = SaleService(product_repo, sale_repo, AuditLogger(repo, clock=clock), clock=clock)

    sale = service.record_sale(worker, [SaleLineRequest("cola", 2)])

    assert sale.total == Decimal("5.00")
    assert sale_repo.get(sale.sale_id) == sale
    assert repo.attempts == 1


def test_sale_survives_unexpected_audit_failure(product_repo, sale_repo, worker, clock, caplog) -> None:
    """Any audit sink failure after the sale is stored is logged, not raised."""

    service = SaleService(product_repo, sale_repo, AuditLogger(BrokenAuditRepository(), clock=clock), clock=clock)

    with caplog.at_level(logging.WARNING, logger="services.audit_service"):
        sale = service.record_sale(worker, [SaleLineRequest("cola", 1)])

    assert sale_repo.get(sale.sale_id) == sale
    assert len(sale_repo) == 1
    assert "audit sink misconfigured" in caplog.text
