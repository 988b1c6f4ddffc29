"""Product aggregate is the sellable catalog item whose stock the ledger mutates.

Stock Model:
    stock:               Sellable units on hand, never negative
    low_stock_threshold: At or below this (and above zero) the product is low
    stock_status:        Derived: out_of_stock / low_stock / in_stock
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from inventory.domain import inventory
from inventory.product.events import ProductAdded, ProductDetailsUpdated, StockLevelChanged

DEFAULT_LOW_STOCK_THRESHOLD = 10


class StockStatus(Enum):
    OUT_OF_STOCK = "out_of_stock"
    LOW_STOCK = "low_stock"
    IN_STOCK = "in_stock"


def stock_status_for(stock, threshold):
    """Classify a stock level against a low-stock threshold."""
    if stock == 0:
        return StockStatus.OUT_OF_STOCK
    if stock <= threshold:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


@inventory.aggregate
class Product:
    """Catalog product with its current stock level."""

    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    discount_price = Float(min_value=0.0)
    stock = Integer(default=0, min_value=0)
    low_stock_threshold = Integer(default=DEFAULT_LOW_STOCK_THRESHOLD, min_value=0)
    brand = String(max_length=100)
    sku = String(max_length=50)
    is_featured = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def discount_price_must_not_exceed_price(self):
        if self.discount_price is not None and self.price is not None and self.discount_price > self.price:
            raise ValidationError(
                {"discount_price": [f"Discount price ({self.discount_price}) cannot exceed price ({self.price})"]}
            )

    @property
    def stock_status(self) -> StockStatus:
        return stock_status_for(self.stock or 0, self.low_stock_threshold or 0)

    @property
    def effective_price(self) -> float:
        """Price a unit currently sells for."""
        return self.discount_price or self.price

    @classmethod
    def add(
        cls,
        name,
        price,
        stock=0,
        low_stock_threshold=DEFAULT_LOW_STOCK_THRESHOLD,
        discount_price=None,
        description=None,
        brand=None,
        sku=None,
        is_featured=False,
    ):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description,
            price=price,
            discount_price=discount_price,
            stock=stock,
            low_stock_threshold=low_stock_threshold,
            brand=brand,
            sku=sku,
            is_featured=is_featured,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=name,
                sku=sku,
                price=price,
                stock=product.stock,
                low_stock_threshold=product.low_stock_threshold,
                added_at=now,
            )
        )
        return product

    def update_details(
        self,
        name=None,
        description=None,
        price=None,
        discount_price=None,
        low_stock_threshold=None,
        brand=None,
        sku=None,
        is_featured=None,
    ):
        """Edit catalog fields. Stock only moves through the stock ledger."""
        with atomic_change(self):
            if name is not None:
                self.name = name
            if description is not None:
                self.description = description
            if price is not None:
                self.price = price
            if discount_price is not None:
                self.discount_price = discount_price
            if low_stock_threshold is not None:
                self.low_stock_threshold = low_stock_threshold
            if brand is not None:
                self.brand = brand
            if sku is not None:
                self.sku = sku
            if is_featured is not None:
                self.is_featured = is_featured

        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductDetailsUpdated(
                product_id=str(self.id),
                name=self.name,
                price=self.price,
                discount_price=self.discount_price,
                low_stock_threshold=self.low_stock_threshold,
                is_featured=self.is_featured,
                updated_at=self.updated_at,
            )
        )

    def record_stock_level(self, new_stock, observed_stock):
        """Overwrite stock with an already-clamped value.

        The write is unconditional (last write wins); `observed_stock` is only
        carried on the event for downstream consumers.
        """
        if new_stock < 0:
            raise ValidationError({"stock": [f"Stock cannot be negative: {new_stock}"]})

        self.stock = new_stock
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockLevelChanged(
                product_id=str(self.id),
                previous_stock=observed_stock,
                new_stock=new_stock,
                low_stock_threshold=self.low_stock_threshold,
                changed_at=self.updated_at,
            )
        )
