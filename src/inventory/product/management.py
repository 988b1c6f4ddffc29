"""Catalog maintenance: commands and handler for adding and editing products."""

from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from inventory.domain import inventory
from inventory.product.product import DEFAULT_LOW_STOCK_THRESHOLD, Product


@inventory.command(part_of="Product")
class AddProduct:
    """Add a product to the catalog with an opening stock level."""

    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    discount_price = Float(min_value=0.0)
    stock = Integer(default=0, min_value=0)
    low_stock_threshold = Integer(min_value=0)
    brand = String(max_length=100)
    sku = String(max_length=50)
    is_featured = Boolean(default=False)


@inventory.command(part_of="Product")
class UpdateProductDetails:
    """Edit catalog fields of an existing product. Stock is not editable here."""

    product_id = Identifier(required=True)
    name = String(max_length=255)
    description = Text()
    price = Float(min_value=0.0)
    discount_price = Float(min_value=0.0)
    low_stock_threshold = Integer(min_value=0)
    brand = String(max_length=100)
    sku = String(max_length=50)
    is_featured = Boolean()


def _default_threshold():
    custom = current_domain.config.get("custom", {}) or {}
    return custom.get("default_low_stock_threshold", DEFAULT_LOW_STOCK_THRESHOLD)


@inventory.command_handler(part_of=Product)
class ProductManagementHandler:
    @handle(AddProduct)
    def add_product(self, command):
        threshold = command.low_stock_threshold
        if threshold is None:
            threshold = _default_threshold()

        product = Product.add(
            name=command.name,
            description=command.description,
            price=command.price,
            discount_price=command.discount_price,
            stock=command.stock or 0,
            low_stock_threshold=threshold,
            brand=command.brand,
            sku=command.sku,
            is_featured=bool(command.is_featured),
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(UpdateProductDetails)
    def update_product_details(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            discount_price=command.discount_price,
            low_stock_threshold=command.low_stock_threshold,
            brand=command.brand,
            sku=command.sku,
            is_featured=command.is_featured,
        )
        repo.add(product)
