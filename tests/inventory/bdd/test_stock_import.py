"""BDD tests for bulk stock import."""

from inventory.catalog_io.bulk import export_products, import_stock
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/stock_import.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse("a sheet sets the product's stock to {stock:d}"), target_fixture="report")
def _(product_id, stock):
    return import_stock(f"id,stock\r\n{product_id},{stock}")


@when("the exported sheet is imported back", target_fixture="report")
def _():
    return import_stock(export_products())


@when("a sheet sets stock for an unknown product", target_fixture="report")
def _():
    return import_stock("id,stock\r\nno-such-product,4")


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the product is reported unchanged")
def _(report, product_id):
    assert report.unchanged == [product_id]
    assert report.updated == []


@then(parsers.cfparse('the row is rejected as "{reason}"'))
def _(report, reason):
    assert [r.reason for r in report.rejected] == [reason]
