"""Alert evaluation: reacts to stock and threshold changes on products.

Runs downstream of the stock ledger; the ledger itself never writes alerts.
With sync event processing this runs inside the product write's commit, so a
failed evaluation is logged and dropped rather than raised.

    stock == 0               -> out_of_stock active, low_stock inactive
    0 < stock <= threshold   -> low_stock active, out_of_stock inactive
    stock > threshold        -> both inactive
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from inventory.alerts.alert import AlertType, InventoryAlert
from inventory.domain import inventory
from inventory.product.events import ProductAdded, ProductDetailsUpdated, StockLevelChanged
from inventory.product.product import Product, StockStatus, stock_status_for

logger = structlog.get_logger(__name__)

_ALERT_FOR_STATUS = {
    StockStatus.OUT_OF_STOCK: AlertType.OUT_OF_STOCK,
    StockStatus.LOW_STOCK: AlertType.LOW_STOCK,
}


def evaluate_alerts(product_id, stock, threshold):
    """Bring the product's alerts in line with its stock. Returns the active alert type, if any."""
    repo = current_domain.repository_for(InventoryAlert)
    existing = {
        AlertType(alert.alert_type): alert
        for alert in repo._dao.query.filter(product_id=str(product_id)).all().items
    }
    wanted = _ALERT_FOR_STATUS.get(stock_status_for(stock, threshold))

    for alert_type, alert in existing.items():
        if alert_type != wanted and alert.is_active:
            alert.deactivate()
            repo.add(alert)

    if wanted is None:
        return None

    threshold_value = 0 if wanted == AlertType.OUT_OF_STOCK else threshold
    alert = existing.get(wanted)
    if alert is None:
        repo.add(InventoryAlert.open(product_id, wanted, threshold_value))
    elif not alert.is_active or alert.threshold_value != threshold_value:
        alert.activate(threshold_value)
        repo.add(alert)

    logger.info(
        "Inventory alert active",
        product_id=str(product_id),
        alert_type=wanted.value,
        stock=stock,
        threshold=threshold,
    )
    return wanted


def _evaluate_best_effort(product_id, stock, threshold):
    """Evaluate alerts, logging instead of raising when evaluation fails."""
    try:
        evaluate_alerts(product_id, stock, threshold)
    except Exception as exc:
        logger.warning("Alert evaluation failed", product_id=str(product_id), stock=stock, error=str(exc))


@inventory.event_handler(part_of=Product)
class StockAlertEvaluator:
    @handle(ProductAdded)
    def on_product_added(self, event: ProductAdded) -> None:
        _evaluate_best_effort(event.product_id, event.stock, event.low_stock_threshold)

    @handle(StockLevelChanged)
    def on_stock_level_changed(self, event: StockLevelChanged) -> None:
        _evaluate_best_effort(event.product_id, event.new_stock, event.low_stock_threshold)

    @handle(ProductDetailsUpdated)
    def on_product_details_updated(self, event: ProductDetailsUpdated) -> None:
        """The threshold may have moved; stock is read from the product."""
        try:
            product = current_domain.repository_for(Product).get(event.product_id)
        except ObjectNotFoundError:
            logger.warning("Product vanished before alert evaluation", product_id=str(event.product_id))
            return
        _evaluate_best_effort(event.product_id, product.stock, event.low_stock_threshold)
