"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from inventory.domain import inventory


@inventory.event(part_of="Product")
class ProductAdded:
    """A product was added to the catalog."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    sku = String()
    price = Float(required=True)
    stock = Integer(required=True)
    low_stock_threshold = Integer(required=True)
    added_at = DateTime(required=True)


@inventory.event(part_of="Product")
class ProductDetailsUpdated:
    """Catalog fields (everything except stock) were edited."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    discount_price = Float()
    low_stock_threshold = Integer(required=True)
    is_featured = Boolean()
    updated_at = DateTime(required=True)


@inventory.event(part_of="Product")
class StockLevelChanged:
    """The product's stock was written by the stock ledger.

    `previous_stock` is the value the caller observed, not necessarily the
    value stored before the write. Alert evaluation keys off `new_stock` and
    `low_stock_threshold`.
    """

    __version__ = 1

    product_id = Identifier(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    low_stock_threshold = Integer(required=True)
    changed_at = DateTime(required=True)
