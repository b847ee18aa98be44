"""
Tests for the REST API (`api/main.py` and routers).

Uses FastAPI's TestClient with dependency overrides for the authenticated user,
settings and sale source, and the in-memory Supabase stand-in for persistence.
"""

from __future__ import annotations

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_current_user_id, get_sale_source, get_settings
from api.main import app
from config import Settings
from domain.sale import SaleRecord
from services.sale_source import SaleFetchError

SETTINGS = Settings(report_timezone="UTC")

SALES = [
    SaleRecord(sale_id="a", total_amount=100, sold_at=datetime(2024, 3, 15, 9, 0)),
    SaleRecord(sale_id="b", total_amount=50, sold_at=datetime(2024, 3, 8, 9, 0)),
    SaleRecord(sale_id="c", total_amount=200, sold_at=datetime(2024, 2, 1, 9, 0)),
]


class StaticSource:
    def __init__(self, sales):
        self.sales = sales

    def fetch_sales(self):
        return list(self.sales)


class FailingSource:
    def fetch_sales(self):
        raise SaleFetchError("Failed to fetch sales: database unavailable")


class BrokenSource:
    def fetch_sales(self):
        raise RuntimeError("unexpected row layout")


@pytest.fixture
def client(fake_supabase):
    app.dependency_overrides[get_current_user_id] = lambda: "u-1"
    app.dependency_overrides[get_settings] = lambda: SETTINGS
    app.dependency_overrides[get_sale_source] = lambda: StaticSource(SALES)
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health() -> None:
    response = TestClient(app).get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_missing_token_is_rejected() -> None:
    response = TestClient(app).get("/api/v1/reports/summary")

    assert response.status_code == 401
    assert response.json()["detail"] == "No authentication token found"


def test_report_summary(client) -> None:
    response = client.get("/api/v1/reports/summary", params={"now": "2024-03-15T10:00:00"})

    assert response.status_code == 200
    body = response.json()
    assert body["sale_count"] == 3
    assert body["daily_total"] == 100
    assert body["weekly_total"] == 150
    assert body["monthly_total"] == 150
    assert [e["label"] for e in body["monthly_breakdown"]] == ["Oct", "Nov", "Dec", "Jan", "Feb", "Mar"]
    assert body["monthly_breakdown"][4]["amount"] == 200
    assert len(body["charts"]) == 3
    assert body["charts"][0]["values"][0] == 0.1


def test_report_summary_fetch_failure_is_bad_gateway(client) -> None:
    app.dependency_overrides[get_sale_source] = lambda: FailingSource()

    response = client.get("/api/v1/reports/summary")

    assert response.status_code == 502


@pytest.mark.parametrize("path", ["/api/v1/reports/summary", "/api/v1/reports/dashboard", "/api/v1/reports/html", "/api/v1/reports/pdf"])
def test_report_routes_log_unexpected_errors(client, caplog, path: str) -> None:
    app.dependency_overrides[get_sale_source] = lambda: BrokenSource()

    with caplog.at_level("ERROR", logger="api.routers.reports"):
        response = client.get(path)

    assert response.status_code == 500
    assert response.json()["detail"].startswith("Failed to ")
    assert "unexpected row layout" in response.json()["detail"]
    assert any(record.exc_info for record in caplog.records)


def test_dashboard(client) -> None:
    response = client.get("/api/v1/reports/dashboard", params={"now": "2024-03-15T10:00:00"})

    assert response.json() == {"total_sales": 100, "order_count": 1}


def test_report_pdf_download(client) -> None:
    response = client.get("/api/v1/reports/pdf", params={"now": "2024-03-15T10:00:00"})

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == (
        "attachment; filename=vetra-sales-report-03-15-2024-10-00.pdf"
    )
    assert response.content.startswith(b"%PDF")


def test_report_html(client) -> None:
    response = client.get("/api/v1/reports/html", params={"now": "2024-03-15T10:00:00"})

    assert response.status_code == 200
    assert "Monthly Breakdown" in response.text


def test_product_lifecycle(client) -> None:
    created = client.post("/api/v1/products", json={"name": "Soap", "price": 30, "category": "Household"})
    assert created.status_code == 201
    product_id = created.json()["id"]

    client.post("/api/v1/products", json={"name": "Rice", "price": 50, "category": "Grocery"})

    listed = client.get("/api/v1/products", params={"sort_by": "price", "order": "desc"})
    assert [p["name"] for p in listed.json()] == ["Rice", "Soap"]
    assert client.get("/api/v1/products/categories").json() == ["Household", "Grocery"]

    updated = client.put(f"/api/v1/products/{product_id}", json={"price": 32.5})
    assert updated.json()["price"] == 32.5
    assert updated.json()["name"] == "Soap"

    deleted = client.delete(f"/api/v1/products/{product_id}")
    assert deleted.json() == {"message": "Product deleted successfully"}
    assert client.delete(f"/api/v1/products/{product_id}").status_code == 404


def test_update_missing_product_is_not_found(client) -> None:
    response = client.put("/api/v1/products/missing", json={"name": "X"})

    assert response.status_code == 404


def test_create_sale_and_receipt(client) -> None:
    product_id = client.post(
        "/api/v1/products", json={"name": "Soap", "price": 30, "category": "Household"}
    ).json()["id"]

    response = client.post(
        "/api/v1/sales",
        json={"items": [{"product_id": product_id, "quantity": 2, "unit_price": 30}]},
    )

    assert response.status_code == 201
    sale = response.json()
    assert sale["total_amount"] == 60
    assert sale["total_items"] == 2
    assert sale["items"][0]["product_name"] == "Soap"

    history = client.get("/api/v1/sales").json()
    assert [s["id"] for s in history] == [sale["id"]]

    receipt = client.get(f"/api/v1/sales/{sale['id']}/receipt")
    assert receipt.status_code == 200
    assert receipt.content.startswith(b"%PDF")
    assert receipt.headers["content-disposition"].startswith("attachment; filename=receipt_")


def test_create_sale_with_unknown_product(client) -> None:
    response = client.post(
        "/api/v1/sales",
        json={"items": [{"product_id": "missing", "quantity": 1, "unit_price": 10}]},
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Product not found: missing"


def test_create_sale_requires_items(client) -> None:
    response = client.post("/api/v1/sales", json={"items": []})

    assert response.status_code == 422


def test_receipt_for_unknown_sale(client) -> None:
    assert client.get("/api/v1/sales/missing/receipt").status_code == 404


def test_profile_not_found(client) -> None:
    assert client.get("/api/v1/users/profile").status_code == 404
