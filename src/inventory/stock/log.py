"""InventoryLogEntry aggregate is the append-only audit trail of stock writes.

One entry is appended per successful stock write. Entries are never updated
or deleted; the aggregate exposes no mutators beyond its factory.

    new_stock == previous_stock + quantity_change
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String, Text

from inventory.domain import inventory


class ChangeType(Enum):
    INCREASE = "increase"
    DECREASE = "decrease"
    ADJUSTMENT = "adjustment"


def classify_change(previous_stock, new_stock) -> ChangeType:
    """Label a stock write by the direction it actually moved stock."""
    if new_stock > previous_stock:
        return ChangeType.INCREASE
    if new_stock < previous_stock:
        return ChangeType.DECREASE
    return ChangeType.ADJUSTMENT


@inventory.aggregate
class InventoryLogEntry:
    product_id = Identifier(required=True)
    change_type = String(required=True, choices=ChangeType)
    quantity_change = Integer(required=True)
    previous_stock = Integer(required=True, min_value=0)
    new_stock = Integer(required=True, min_value=0)
    notes = Text()
    created_at = DateTime(required=True)

    @invariant.post
    def quantity_change_must_match_stock_levels(self):
        if self.new_stock != self.previous_stock + self.quantity_change:
            raise ValidationError(
                {
                    "quantity_change": [
                        f"Stock moved {self.previous_stock} -> {self.new_stock}, "
                        f"which is not a change of {self.quantity_change}"
                    ]
                }
            )

    @classmethod
    def record(cls, product_id, previous_stock, new_stock, notes=None):
        return cls(
            product_id=str(product_id),
            change_type=classify_change(previous_stock, new_stock).value,
            quantity_change=new_stock - previous_stock,
            previous_stock=previous_stock,
            new_stock=new_stock,
            notes=notes,
            created_at=datetime.now(UTC),
        )
