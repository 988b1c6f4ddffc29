"""Stock ledger is the single entry point that mutates a product's stock.

Every adjustment issues two independent writes, in this order only:

    1. the product's new stock value    (must succeed, or the adjustment fails)
    2. one InventoryLogEntry            (best effort, a failure becomes a warning)

The two writes are not wrapped in one unit of work: a failed audit append
must never roll back a stock write that already succeeded.

Stock is adjusted relative to `current_known_stock`, the value the caller last
observed. Nothing is locked and the stored value is not re-read before the
write, so two adjustments made from the same stale observation race and the
later write wins.
"""

from dataclasses import dataclass
from enum import Enum

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from inventory.product.product import Product
from inventory.stock.exceptions import LogWriteFailure, ProductNotFound, StockWriteFailure
from inventory.stock.log import ChangeType, InventoryLogEntry, classify_change

logger = structlog.get_logger(__name__)


class AdjustmentMode(Enum):
    RELATIVE = "relative"  # value is a signed delta
    ABSOLUTE = "absolute"  # value is the target stock


def resolve_new_stock(current_known_stock: int, value: int, mode=AdjustmentMode.RELATIVE) -> int:
    """Effective stock after applying `value`, clamped at zero."""
    if AdjustmentMode(mode) == AdjustmentMode.ABSOLUTE:
        return max(0, value)
    return max(0, current_known_stock + value)


def _require_int(field, value, minimum=None):
    # bool is an int subclass; a checkbox value is never a quantity
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError({field: [f"{field} must be an integer, got {value!r}"]})
    if minimum is not None and value < minimum:
        raise ValidationError({field: [f"{field} must be at least {minimum}, got {value}"]})


@dataclass(frozen=True)
class StockAdjustment:
    """Outcome of a successful stock write."""

    product_id: str
    name: str
    new_stock: int
    previous_stock: int
    quantity_change: int
    change_type: ChangeType
    log_entry_id: str | None = None
    audit_error: LogWriteFailure | None = None

    @property
    def audit_logged(self) -> bool:
        return self.audit_error is None


class StockLedger:
    """Applies stock adjustments and appends their audit entries.

    Repositories default to the active domain's; pass replacements to run the
    ledger against other stores.
    """

    def __init__(self, products=None, logs=None):
        self._products = products
        self._logs = logs

    @property
    def products(self):
        if self._products is not None:
            return self._products
        return current_domain.repository_for(Product)

    @property
    def logs(self):
        if self._logs is not None:
            return self._logs
        return current_domain.repository_for(InventoryLogEntry)

    def adjust_stock(
        self,
        product_id,
        current_known_stock: int,
        delta_or_absolute: int,
        note: str | None = None,
        mode=AdjustmentMode.RELATIVE,
    ) -> StockAdjustment:
        """Write the clamped stock value, then append its audit entry.

        Raises ProductNotFound or StockWriteFailure when the stock write does
        not happen. An audit append failure is reported on the result.
        """
        _require_int("current_known_stock", current_known_stock, minimum=0)
        _require_int("delta_or_absolute", delta_or_absolute)

        new_stock = resolve_new_stock(current_known_stock, delta_or_absolute, mode)
        change_type = classify_change(current_known_stock, new_stock)

        product = self._write_stock(product_id, current_known_stock, new_stock)

        notes = note or f"Stock {change_type.value} via admin panel"
        log_entry_id, audit_error = self._append_log(product_id, current_known_stock, new_stock, notes)

        logger.info(
            "Stock updated",
            product_id=str(product_id),
            previous_stock=current_known_stock,
            new_stock=new_stock,
            change_type=change_type.value,
            audit_logged=audit_error is None,
        )

        return StockAdjustment(
            product_id=str(product.id),
            name=product.name,
            new_stock=new_stock,
            previous_stock=current_known_stock,
            quantity_change=new_stock - current_known_stock,
            change_type=change_type,
            log_entry_id=log_entry_id,
            audit_error=audit_error,
        )

    def set_stock(self, product_id, current_known_stock: int, target: int, note: str | None = None):
        """Set stock to an absolute value (clamped at zero)."""
        return self.adjust_stock(product_id, current_known_stock, target, note=note, mode=AdjustmentMode.ABSOLUTE)

    def quick_adjust(self, product_id, current_known_stock: int, step: int) -> StockAdjustment:
        """The +/- buttons: a relative adjustment with a generated note.

        The note names the requested direction; the logged change type names
        the effect, so a decrement at zero is logged as an adjustment.
        """
        _require_int("step", step)
        if step == 0:
            raise ValidationError({"step": ["Quick adjustment step cannot be 0"]})

        direction = ChangeType.INCREASE if step > 0 else ChangeType.DECREASE
        return self.adjust_stock(
            product_id,
            current_known_stock,
            step,
            note=f"Quick {direction.value} of {abs(step)} units",
        )

    def _write_stock(self, product_id, current_known_stock, new_stock):
        repo = self.products
        try:
            product = repo.get(product_id)
        except ObjectNotFoundError as exc:
            logger.warning("Stock update for unknown product", product_id=str(product_id))
            raise ProductNotFound(f"Product {product_id} not found", product_id=product_id, cause=exc) from exc
        except Exception as exc:
            logger.error("Stock update failed reading product", product_id=str(product_id), error=str(exc))
            raise StockWriteFailure("Failed to update stock", product_id=product_id, cause=exc) from exc

        try:
            product.record_stock_level(new_stock, observed_stock=current_known_stock)
            repo.add(product)
        except Exception as exc:
            logger.error("Stock update failed", product_id=str(product_id), error=str(exc))
            raise StockWriteFailure("Failed to update stock", product_id=product_id, cause=exc) from exc

        return product

    def _append_log(self, product_id, previous_stock, new_stock, notes):
        try:
            entry = InventoryLogEntry.record(
                product_id=product_id,
                previous_stock=previous_stock,
                new_stock=new_stock,
                notes=notes,
            )
            self.logs.add(entry)
        except Exception as exc:
            # The stock write stands; the missing audit row is only reported.
            logger.warning("Failed to log inventory change", product_id=str(product_id), error=str(exc))
            return None, LogWriteFailure("Failed to log inventory change", product_id=product_id, cause=exc)

        return str(entry.id), None


def adjust_stock(product_id, current_known_stock, delta_or_absolute, note=None, mode=AdjustmentMode.RELATIVE):
    """Adjust stock against the active domain's repositories."""
    return StockLedger().adjust_stock(product_id, current_known_stock, delta_or_absolute, note=note, mode=mode)
