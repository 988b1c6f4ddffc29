"""InventoryAlert aggregate: one alert per (product, alert type), toggled on and off."""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import Boolean, DateTime, Identifier, Integer, String

from inventory.domain import inventory


class AlertType(Enum):
    OUT_OF_STOCK = "out_of_stock"
    LOW_STOCK = "low_stock"


@inventory.aggregate
class InventoryAlert:
    product_id = Identifier(required=True)
    alert_type = String(required=True, choices=AlertType)
    threshold_value = Integer(min_value=0)
    is_active = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def open(cls, product_id, alert_type, threshold_value):
        now = datetime.now(UTC)
        return cls(
            product_id=str(product_id),
            alert_type=AlertType(alert_type).value,
            threshold_value=threshold_value,
            is_active=True,
            created_at=now,
            updated_at=now,
        )

    def activate(self, threshold_value):
        self.is_active = True
        self.threshold_value = threshold_value
        self.updated_at = datetime.now(UTC)

    def deactivate(self):
        self.is_active = False
        self.updated_at = datetime.now(UTC)
