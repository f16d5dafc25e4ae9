"""
Tests for the HTTP API (`api/`).

Runs the FastAPI app on in-memory repositories through TestClient.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api.dependencies import Services
from api.main import create_app
from api.settings import Settings
from domain.errors import StorageError

ADMIN = {"X-User-Id": "admin-1", "X-User-Name": "Alice Admin", "X-User-Role": "admin"}
WORKER = {"X-User-Id": "worker-1", "X-User-Name": "Walter Worker", "X-User-Role": "worker"}
OTHER_WORKER = {"X-User-Id": "worker-2", "X-User-Name": "Wendy Worker", "X-User-Role": "worker"}


@pytest.fixture
def client(catalog_service, sale_service, report_service) -> TestClient:
    services = Services(catalog=catalog_service, sales=sale_service, reports=report_service)
    app = create_app(Settings(storage_backend="memory"), services=services)
    return TestClient(app)


def _sell(client: TestClient, headers=WORKER, items=None):
    items = items if items is not None else [
        {"product_id": "burger", "quantity": 2},
        {"product_id": "cola", "quantity": 1},
    ]
    return client.post("/api/v1/sales", json={"items": items}, headers=headers)


def test_health(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_requests_without_identity_are_rejected(client) -> None:
    assert client.get("/api/v1/products").status_code == 401


def test_list_products(client) -> None:
    response = client.get("/api/v1/products", headers=WORKER)

    assert response.status_code == 200
    assert [p["product_id"] for p in response.json()] == ["salad", "burger", "cola"]


def test_create_sale(client) -> None:
    response = _sell(client)

    assert response.status_code == 201
    body = response.json()
    assert body["total"] == "27.50"
    assert [item["subtotal"] for item in body["items"]] == ["25.00", "2.50"]


def test_create_sale_ignores_client_totals(client) -> None:
    response = client.post(
        "/api/v1/sales",
        json={"items": [{"product_id": "cola", "quantity": 1}], "total": "0.01"},
        headers=WORKER,
    )

    assert response.json()["total"] == "2.50"


@pytest.mark.parametrize(
    "items",
    [
        [],
        None,
        [{"product_id": "cola", "quantity": 0}],
        [{"product_id": "cola"}],
        [{"product_id": "cola", "quantity": 2.5}],
        [{"product_id": "cola", "quantity": "abc"}],
        [{"product_id": 5, "quantity": 1}],
        "not-a-list",
    ],
)
def test_create_sale_rejects_malformed_lines(client, items) -> None:
    """Every malformed line is a 400 with the typed error body."""

    response = client.post("/api/v1/sales", json={"items": items}, headers=WORKER)

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"
    assert response.json()["detail"]


@pytest.mark.parametrize(
    "product_id, error",
    [("ghost", "not_found"), ("soup", "inactive_resource")],
)
def test_create_sale_rejects_unusable_products(client, product_id, error) -> None:
    """Unknown and inactive products are both 400s, told apart by the error code."""

    response = _sell(client, items=[{"product_id": product_id, "quantity": 1}])

    body = response.json()
    assert response.status_code == 400
    assert body["error"] == error
    assert product_id in body["detail"]


def test_sale_ownership(client) -> None:
    sale_id = _sell(client).json()["sale_id"]

    assert client.get(f"/api/v1/sales/{sale_id}", headers=WORKER).status_code == 200
    assert client.get(f"/api/v1/sales/{sale_id}", headers=ADMIN).status_code == 200

    forbidden = client.get(f"/api/v1/sales/{sale_id}", headers=OTHER_WORKER)
    assert forbidden.status_code == 403
    assert forbidden.json()["error"] == "forbidden"


def test_unknown_sale_is_404(client) -> None:
    assert client.get("/api/v1/sales/missing", headers=ADMIN).status_code == 404


def test_today_sales_scoped_to_worker(client) -> None:
    _sell(client, headers=WORKER)
    _sell(client, headers=OTHER_WORKER)

    mine = client.get("/api/v1/sales/today", headers=WORKER).json()
    everyone = client.get("/api/v1/sales/today", headers=ADMIN).json()

    assert {s["seller_id"] for s in mine} == {"worker-1"}
    assert len(everyone) == 2


def test_product_management_requires_admin(client) -> None:
    payload = {"name": "Lemonade", "price": "3.25"}

    assert client.post("/api/v1/products", json=payload, headers=WORKER).status_code == 403
    assert client.put("/api/v1/products/cola", json={"price": "3"}, headers=WORKER).status_code == 403


def test_create_and_update_product(client) -> None:
    created = client.post("/api/v1/products", json={"name": "Lemonade", "price": "3.25"}, headers=ADMIN)
    assert created.status_code == 201
    assert created.json()["category"] == "general"

    product_id = created.json()["product_id"]
    updated = client.put(f"/api/v1/products/{product_id}", json={"active": False}, headers=ADMIN)
    assert updated.status_code == 200
    assert updated.json()["active"] is False
    assert updated.json()["name"] == "Lemonade"


def test_create_product_without_price_is_400(client) -> None:
    response = client.post("/api/v1/products", json={"name": "Lemonade"}, headers=ADMIN)

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_update_unknown_product_is_404(client) -> None:
    assert client.put("/api/v1/products/ghost", json={"price": "3"}, headers=ADMIN).status_code == 404


def test_reports_require_admin(client) -> None:
    for path in ("/api/v1/reports/daily", "/api/v1/reports/top-products", "/api/v1/reports/sellers"):
        assert client.get(path, headers=WORKER).status_code == 403


def test_daily_report_empty_day(client) -> None:
    response = client.get("/api/v1/reports/daily", params={"date": "2025-01-10"}, headers=ADMIN)

    assert response.status_code == 200
    assert response.json()["summary"] == {
        "total_sales": 0,
        "total_revenue": "0.00",
        "average_ticket": "0.00",
    }


def test_daily_report_rounds_for_display(client) -> None:
    _sell(client)
    _sell(client, items=[{"product_id": "cola", "quantity": 1}])
    _sell(client, items=[{"product_id": "cola", "quantity": 1}])

    body = client.get("/api/v1/reports/daily", headers=ADMIN).json()

    assert body["date"] == "2025-01-15"
    # 32.50 / 3 = 10.8333...
    assert body["summary"]["average_ticket"] == "10.83"
    assert body["product_stats"][0]["product_id"] == "cola"


def test_top_products_and_sellers(client) -> None:
    _sell(client)

    top = client.get("/api/v1/reports/top-products", params={"days": 3}, headers=ADMIN).json()
    sellers = client.get("/api/v1/reports/sellers", headers=ADMIN).json()

    assert top["period"] == "Last 3 days"
    assert [p["product_id"] for p in top["top_products"]] == ["burger", "cola"]
    assert sellers["sellers"][0]["seller_id"] == "worker-1"
    assert sellers["sellers"][0]["average_ticket"] == "27.50"


def test_storage_errors_are_500_without_details(client, sale_service, monkeypatch) -> None:
    def broken(*args, **kwargs):
        raise StorageError("connection refused by db.internal:5432")

    monkeypatch.setattr(sale_service, "list_sales_for_day", broken)

    response = client.get("/api/v1/sales/today", headers=WORKER)

    assert response.status_code == 500
    assert response.json() == {"error": "storage_error", "detail": "Internal server error"}
