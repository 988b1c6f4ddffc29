"""Integration tests for Inventory API endpoints via TestClient."""

from unittest.mock import patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from inventory.api.routes import inventory_router, product_router
from inventory.product.product import Product
from inventory.stock.log import InventoryLogEntry
from protean import current_domain
from protean.integrations.fastapi import register_exception_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(product_router)
    app.include_router(inventory_router)
    register_exception_handlers(app)
    return TestClient(app)


def _add_product(client, **overrides):
    """Helper: POST /products and return the product_id."""
    defaults = {
        "name": "Trail Bottle",
        "price": 22.0,
        "stock": 10,
        "low_stock_threshold": 5,
        "sku": "BTL-TRL",
    }
    defaults.update(overrides)
    response = client.post("/products", json=defaults)
    assert response.status_code == 201
    return response.json()["product_id"]


class TestProductEndpoints:
    def test_add_and_get(self, client):
        product_id = _add_product(client)
        response = client.get(f"/products/{product_id}")
        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Trail Bottle"
        assert body["stock"] == 10
        assert body["stock_status"] == "in_stock"

    def test_update_details(self, client):
        product_id = _add_product(client)
        response = client.put(f"/products/{product_id}", json={"low_stock_threshold": 12})
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert client.get(f"/products/{product_id}").json()["stock_status"] == "low_stock"

    def test_discount_above_price_returns_400(self, client):
        response = client.post("/products", json={"name": "Bad", "price": 5.0, "discount_price": 9.0})
        assert response.status_code == 400

    def test_negative_price_returns_422(self, client):
        response = client.post("/products", json={"name": "Bad", "price": -1.0})
        assert response.status_code == 422

    def test_unknown_product_returns_404(self, client):
        assert client.get("/products/missing-product").status_code == 404


class TestStockEndpoints:
    def test_adjust(self, client):
        product_id = _add_product(client, stock=10)
        response = client.put(
            f"/products/{product_id}/stock/adjust",
            json={"current_stock": 10, "quantity_change": -4, "notes": "Sold at market"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["new_stock"] == 6
        assert body["change_type"] == "decrease"
        assert body["audit_logged"] is True
        assert body["warning"] is None

    def test_adjust_clamps(self, client):
        product_id = _add_product(client, stock=2)
        response = client.put(
            f"/products/{product_id}/stock/adjust",
            json={"current_stock": 2, "quantity_change": -10},
        )
        assert response.json()["new_stock"] == 0

    def test_set(self, client):
        product_id = _add_product(client, stock=10)
        response = client.put(f"/products/{product_id}/stock/set", json={"current_stock": 10, "stock": 40})
        assert response.status_code == 200
        assert response.json()["quantity_change"] == 30

    def test_quick(self, client):
        product_id = _add_product(client, stock=1)
        response = client.put(f"/products/{product_id}/stock/quick", json={"current_stock": 1, "step": -1})
        assert response.status_code == 200
        assert response.json()["new_stock"] == 0

    def test_quick_zero_step_returns_400(self, client):
        product_id = _add_product(client, stock=1)
        response = client.put(f"/products/{product_id}/stock/quick", json={"current_stock": 1, "step": 0})
        assert response.status_code == 400

    def test_non_integer_change_returns_422(self, client):
        product_id = _add_product(client, stock=1)
        response = client.put(
            f"/products/{product_id}/stock/adjust",
            json={"current_stock": 1, "quantity_change": "several"},
        )
        assert response.status_code == 422

    def test_unknown_product_returns_404(self, client):
        response = client.put("/products/missing-product/stock/adjust", json={"current_stock": 1, "quantity_change": 1})
        assert response.status_code == 404
        assert "not found" in response.json()["detail"]["message"]

    def test_stock_write_failure_returns_502(self, client):
        product_id = _add_product(client, stock=10)
        with patch.object(Product, "record_stock_level", side_effect=RuntimeError("replica is read-only")):
            response = client.put(
                f"/products/{product_id}/stock/adjust",
                json={"current_stock": 10, "quantity_change": 1},
            )
        assert response.status_code == 502
        assert response.json()["detail"] == {"message": "Failed to update stock", "error": "replica is read-only"}
        assert current_domain.repository_for(Product).get(product_id).stock == 10

    def test_log_failure_returns_warning(self, client):
        product_id = _add_product(client, stock=10)
        with patch.object(InventoryLogEntry, "record", side_effect=RuntimeError("audit table locked")):
            response = client.put(
                f"/products/{product_id}/stock/adjust",
                json={"current_stock": 10, "quantity_change": 1},
            )
        assert response.status_code == 200
        body = response.json()
        assert body["new_stock"] == 11
        assert body["audit_logged"] is False
        assert body["warning"] == "Failed to log inventory change"

    def test_inventory_logs(self, client):
        product_id = _add_product(client, stock=10)
        client.put(f"/products/{product_id}/stock/quick", json={"current_stock": 10, "step": 1})
        client.put(f"/products/{product_id}/stock/quick", json={"current_stock": 11, "step": 1})

        logs = client.get(f"/products/{product_id}/inventory-logs").json()["logs"]
        assert [log["new_stock"] for log in logs] == [12, 11]
        assert logs[0]["notes"] == "Quick increase of 1 units"


class TestInventoryEndpoints:
    def test_summary(self, client):
        _add_product(client, stock=0)
        _add_product(client, stock=50)
        body = client.get("/inventory/summary").json()
        assert body["total_products"] == 2
        assert body["out_of_stock"] == 1
        assert body["stock_health"] == 50.0
        assert body["active_alerts"][0]["alert_type"] == "out_of_stock"

    def test_alerts(self, client):
        _add_product(client, stock=3)
        alerts = client.get("/inventory/alerts").json()["alerts"]
        assert len(alerts) == 1
        assert alerts[0]["alert_type"] == "low_stock"
        assert alerts[0]["threshold_value"] == 5

    def test_export(self, client):
        _add_product(client)
        response = client.get("/inventory/export")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert response.text.startswith("id,name,sku,")

    def test_import(self, client):
        product_id = _add_product(client, stock=10)
        response = client.post(
            "/inventory/import",
            json={"csv_content": f"id,stock\r\n{product_id},7\r\nghost,1", "notes": "Cycle count"},
        )
        assert response.status_code == 200
        body = response.json()
        assert [u["new_stock"] for u in body["updated"]] == [7]
        assert body["rejected"] == [{"row": 2, "product_id": "ghost", "reason": "Unknown product"}]
        assert body["audit_warnings"] == 0
