"""Inventory load test scenarios.

Three journeys: an admin working the stock buttons on one product, a bulk
stock import over a small catalog, and a dashboard reader polling the
summary, alerts and export endpoints.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import adjustment_data, product_data, stock_import_csv
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import CatalogState, ProductStockState


class StockAdjustmentJourney(SequentialTaskSet):
    """Add Product -> Adjust -> Quick +/- -> Set -> Read Logs.

    Each stock call sends the stock value returned by the previous call,
    the way the admin screen does.
    """

    def on_start(self):
        self.state = ProductStockState()

    def _track(self, resp, label):
        if resp.status_code == 200:
            body = resp.json()
            self.state.current_stock = body["new_stock"]
            if not body["audit_logged"]:
                self.state.audit_warnings += 1
        else:
            resp.failure(f"{label} failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def add_product(self):
        payload = product_data(stock=random.randint(0, 50), low_stock_threshold=5)
        with self.client.post("/products", json=payload, catch_response=True, name="POST /products") as resp:
            if resp.status_code == 201:
                self.state.product_id = resp.json()["product_id"]
                self.state.current_stock = payload["stock"]
            else:
                resp.failure(f"Add product failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def adjust_stock(self):
        with self.client.put(
            f"/products/{self.state.product_id}/stock/adjust",
            json=adjustment_data(self.state.current_stock),
            catch_response=True,
            name="PUT /products/{id}/stock/adjust",
        ) as resp:
            self._track(resp, "Adjust stock")

    @task
    def quick_adjust(self):
        for _ in range(random.randint(1, 5)):
            with self.client.put(
                f"/products/{self.state.product_id}/stock/quick",
                json={"current_stock": self.state.current_stock, "step": random.choice([1, -1])},
                catch_response=True,
                name="PUT /products/{id}/stock/quick",
            ) as resp:
                self._track(resp, "Quick adjust")

    @task
    def set_stock(self):
        with self.client.put(
            f"/products/{self.state.product_id}/stock/set",
            json={"current_stock": self.state.current_stock, "stock": random.randint(0, 100)},
            catch_response=True,
            name="PUT /products/{id}/stock/set",
        ) as resp:
            self._track(resp, "Set stock")

    @task
    def read_logs(self):
        with self.client.get(
            f"/products/{self.state.product_id}/inventory-logs",
            catch_response=True,
            name="GET /products/{id}/inventory-logs",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Read logs failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class BulkImportJourney(SequentialTaskSet):
    """Add a handful of products, then re-stock them all through CSV import."""

    def on_start(self):
        self.state = CatalogState()

    @task
    def add_products(self):
        for _ in range(random.randint(3, 8)):
            payload = product_data()
            with self.client.post("/products", json=payload, catch_response=True, name="POST /products") as resp:
                if resp.status_code == 201:
                    self.state.stock_by_product[resp.json()["product_id"]] = payload["stock"]
                else:
                    resp.failure(f"Add product failed: {resp.status_code}: {extract_error_detail(resp)}")
        if not self.state.stock_by_product:
            self.interrupt()

    @task
    def import_stock(self):
        targets = {pid: random.randint(0, 300) for pid in self.state.stock_by_product}
        with self.client.post(
            "/inventory/import",
            json={"csv_content": stock_import_csv(targets), "notes": "Load test restock"},
            catch_response=True,
            name="POST /inventory/import",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Import failed: {resp.status_code}: {extract_error_detail(resp)}")
            elif resp.json()["rejected"]:
                resp.failure(f"Import rejected rows: {resp.json()['rejected']}")
            else:
                self.state.stock_by_product.update(targets)

    @task
    def done(self):
        self.interrupt()


class DashboardReadJourney(SequentialTaskSet):
    """Summary -> Alerts -> Export, as the admin dashboard loads them."""

    @task
    def summary(self):
        self.client.get("/inventory/summary", name="GET /inventory/summary")

    @task
    def alerts(self):
        self.client.get("/inventory/alerts", name="GET /inventory/alerts")

    @task
    def export(self):
        self.client.get("/inventory/export", name="GET /inventory/export")

    @task
    def done(self):
        self.interrupt()


class InventoryUser(HttpUser):
    """Simulates admin staff maintaining stock levels."""

    wait_time = between(0.5, 2)
    tasks = {
        StockAdjustmentJourney: 6,
        BulkImportJourney: 1,
        DashboardReadJourney: 3,
    }
