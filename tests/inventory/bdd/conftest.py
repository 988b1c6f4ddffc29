"""Shared BDD fixtures and step definitions for the Inventory domain."""

from unittest.mock import MagicMock

import pytest
from inventory.alerts.alert import InventoryAlert
from inventory.product.product import Product, StockStatus
from inventory.stock.analytics import recent_log_entries
from inventory.stock.ledger import StockLedger
from protean import current_domain
from pytest_bdd import given, parsers, then


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def ledger():
    return StockLedger()


def _product(product_id):
    return current_domain.repository_for(Product).get(product_id)


def _logs_oldest_first(product_id):
    return list(reversed(recent_log_entries(product_id=product_id)))


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(
    parsers.cfparse("a product with stock {stock:d} and low-stock threshold {threshold:d}"),
    target_fixture="product_id",
)
def _(stock, threshold):
    product = Product.add(name="Enamel Mug", price=14.0, stock=stock, low_stock_threshold=threshold)
    current_domain.repository_for(Product).add(product)
    return str(product.id)


@given("the inventory log store is unavailable", target_fixture="ledger")
def _():
    logs = MagicMock()
    logs.add.side_effect = RuntimeError("audit store offline")
    return StockLedger(logs=logs)


# ---------------------------------------------------------------------------
# Then steps: shared assertions
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the stock is {stock:d}"))
def _(product_id, stock):
    assert _product(product_id).stock == stock


@then("the product is out of stock")
def _(product_id):
    assert _product(product_id).stock_status == StockStatus.OUT_OF_STOCK


@then("the product is low on stock")
def _(product_id):
    assert _product(product_id).stock_status == StockStatus.LOW_STOCK


@then("the product is in stock")
def _(product_id):
    assert _product(product_id).stock_status == StockStatus.IN_STOCK


@then(parsers.cfparse("{count:d} inventory log entries exist"))
def _(product_id, count):
    assert len(recent_log_entries(product_id=product_id)) == count


@then(parsers.cfparse('the log change types are "{types}"'))
def _(product_id, types):
    expected = [t.strip() for t in types.split(",")]
    assert [e.change_type for e in _logs_oldest_first(product_id)] == expected


@then(parsers.cfparse('every log note reads "{note}"'))
def _(product_id, note):
    entries = _logs_oldest_first(product_id)
    assert entries
    assert all(e.notes == note for e in entries)


@then("no inventory alert is active")
def _(product_id):
    repo = current_domain.repository_for(InventoryAlert)
    alerts = repo._dao.query.filter(product_id=product_id).all().items
    assert not any(a.is_active for a in alerts)
