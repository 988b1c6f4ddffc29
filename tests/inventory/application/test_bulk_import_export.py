"""Application tests for CSV export of products and bulk stock import."""

from unittest.mock import MagicMock

from inventory.catalog_io.bulk import PRODUCT_EXPORT_HEADERS, export_products, import_stock
from inventory.catalog_io.codec import decode
from inventory.product.product import Product
from inventory.stock.analytics import recent_log_entries
from inventory.stock.ledger import StockLedger
from inventory.stock.log import ChangeType
from protean import current_domain


def _add_product(stock=10, **overrides):
    product = Product.add(
        name=overrides.pop("name", "Ceramic Bowl"),
        price=overrides.pop("price", 12.5),
        stock=stock,
        low_stock_threshold=overrides.pop("low_stock_threshold", 5),
        **overrides,
    )
    current_domain.repository_for(Product).add(product)
    return str(product.id)


def _stock(product_id):
    return current_domain.repository_for(Product).get(product_id).stock


class TestExport:
    def test_header_row(self):
        assert export_products().split("\r\n")[0] == ",".join(PRODUCT_EXPORT_HEADERS)

    def test_one_row_per_product(self):
        first = _add_product(name='Bowl "Large"', sku="BWL-L", brand="Kiln & Co")
        second = _add_product(name="Plate", stock=0)

        rows = {row["id"]: row for row in decode(export_products())}
        assert set(rows) == {first, second}
        assert rows[first]["name"] == 'Bowl "Large"'
        assert rows[first]["stock"] == "10"
        assert rows[first]["is_featured"] == "false"
        assert rows[second]["sku"] == ""
        assert rows[second]["discount_price"] == ""

    def test_empty_catalog(self):
        assert decode(export_products()) == []


class TestImport:
    def test_sets_absolute_stock_and_logs(self):
        pid = _add_product(stock=10)
        report = import_stock(f"id,stock\r\n{pid},25")

        assert [a.product_id for a in report.updated] == [pid]
        assert _stock(pid) == 25
        entry = recent_log_entries(product_id=pid)[0]
        assert entry.change_type == ChangeType.INCREASE.value
        assert entry.notes == "Bulk import"

    def test_custom_note(self):
        pid = _add_product(stock=10)
        import_stock(f"id,stock\r\n{pid},3", note="Quarterly count")
        assert recent_log_entries(product_id=pid)[0].notes == "Quarterly count"

    def test_exported_file_reimports_unchanged(self):
        pid = _add_product(stock=10)
        report = import_stock(export_products())

        assert report.unchanged == [pid]
        assert report.updated == []
        assert recent_log_entries(product_id=pid) == []

    def test_negative_stock_clamps(self):
        pid = _add_product(stock=10)
        import_stock(f"id,stock\r\n{pid},-3")
        assert _stock(pid) == 0

    def test_bad_rows_rejected_and_batch_continues(self):
        good = _add_product(stock=10)
        text = "\r\n".join(
            [
                "id,stock",
                ",5",
                "unknown-product,5",
                f"{good},lots",
                f"{good},4",
            ]
        )
        report = import_stock(text)

        assert [(r.row, r.reason) for r in report.rejected] == [
            (1, "Missing product id"),
            (2, "Unknown product"),
            (3, "Stock must be an integer, got 'lots'"),
        ]
        assert [a.new_stock for a in report.updated] == [4]
        assert _stock(good) == 4

    def test_audit_warnings_counted(self):
        pid = _add_product(stock=10)
        logs = MagicMock()
        logs.add.side_effect = RuntimeError("audit table locked")

        report = import_stock(f"id,stock\r\n{pid},2", ledger=StockLedger(logs=logs))

        assert _stock(pid) == 2
        assert report.audit_warnings == 1

    def test_stock_write_failure_rejects_row(self):
        pid = _add_product(stock=10)
        real_products = current_domain.repository_for(Product)
        products = MagicMock()
        products.get.side_effect = real_products.get
        products.add.side_effect = RuntimeError("disk full")

        report = import_stock(f"id,stock\r\n{pid},2", ledger=StockLedger(products=products))

        assert report.updated == []
        assert report.rejected[0].reason == "Failed to update stock"
        assert _stock(pid) == 10

    def test_product_read_failure_rejects_row(self):
        pid = _add_product(stock=10)
        products = MagicMock()
        products.get.side_effect = ConnectionError("backend unreachable")

        report = import_stock(f"id,stock\r\n{pid},2", ledger=StockLedger(products=products))

        assert report.updated == []
        assert report.rejected[0].reason == "Failed to read product"
        assert _stock(pid) == 10

    def test_quoted_headers_are_recognised(self):
        pid = _add_product(stock=10)
        report = import_stock(f'"id","stock"\r\n{pid},4')

        assert report.rejected == []
        assert _stock(pid) == 4
