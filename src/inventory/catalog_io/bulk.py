"""Bulk product export and stock import for the admin import/export screen.

Import only moves stock, and only through the stock ledger (absolute sets),
so every imported change is audited like a manual one. Bad rows are reported
and skipped; they never abort the batch.
"""

from dataclasses import dataclass, field

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from inventory.catalog_io.codec import decode, encode
from inventory.product.product import Product
from inventory.stock.exceptions import StockLedgerError
from inventory.stock.ledger import StockLedger

logger = structlog.get_logger(__name__)

PRODUCT_EXPORT_HEADERS = [
    "id",
    "name",
    "sku",
    "brand",
    "price",
    "discount_price",
    "stock",
    "low_stock_threshold",
    "is_featured",
]


@dataclass
class RowRejection:
    row: int  # 1-based, counting decoded data rows
    product_id: str
    reason: str


@dataclass
class ImportReport:
    updated: list = field(default_factory=list)  # StockAdjustment per changed product
    unchanged: list = field(default_factory=list)  # product ids already at the target
    rejected: list = field(default_factory=list)

    @property
    def audit_warnings(self) -> int:
        return sum(1 for adjustment in self.updated if not adjustment.audit_logged)


def export_products() -> str:
    products = current_domain.repository_for(Product)._dao.query.all().items
    rows = [
        {
            "id": str(p.id),
            "name": p.name,
            "sku": p.sku,
            "brand": p.brand,
            "price": p.price,
            "discount_price": p.discount_price,
            "stock": p.stock,
            "low_stock_threshold": p.low_stock_threshold,
            "is_featured": p.is_featured,
        }
        for p in products
    ]
    return encode(PRODUCT_EXPORT_HEADERS, rows)


def import_stock(text: str, note: str | None = None, ledger: StockLedger | None = None) -> ImportReport:
    """Set each listed product's stock to the row's `stock` value."""
    if note is None:
        custom = current_domain.config.get("custom", {}) or {}
        note = custom.get("bulk_import_note", "Bulk import")
    ledger = ledger or StockLedger()
    report = ImportReport()

    for number, row in enumerate(decode(text), start=1):
        product_id = row.get("id", "")
        if not product_id:
            report.rejected.append(RowRejection(number, "", "Missing product id"))
            continue

        raw_stock = row.get("stock", "")
        try:
            target = int(raw_stock)
        except ValueError:
            report.rejected.append(RowRejection(number, product_id, f"Stock must be an integer, got {raw_stock!r}"))
            continue

        try:
            product = ledger.products.get(product_id)
        except ObjectNotFoundError:
            report.rejected.append(RowRejection(number, product_id, "Unknown product"))
            continue
        except Exception as exc:
            logger.warning("Stock import could not read product", product_id=product_id, error=str(exc))
            report.rejected.append(RowRejection(number, product_id, "Failed to read product"))
            continue

        if max(0, target) == product.stock:
            report.unchanged.append(product_id)
            continue

        try:
            report.updated.append(ledger.set_stock(product_id, product.stock, target, note=note))
        except StockLedgerError as exc:
            report.rejected.append(RowRejection(number, product_id, exc.message))

    logger.info(
        "Stock import finished",
        updated=len(report.updated),
        unchanged=len(report.unchanged),
        rejected=len(report.rejected),
        audit_warnings=report.audit_warnings,
    )
    return report
