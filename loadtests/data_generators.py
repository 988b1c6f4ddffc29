"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the Inventory API's Pydantic
request schemas (non-negative prices and thresholds, discount below price).
"""

import random
import uuid

from faker import Faker

fake = Faker()


def valid_sku(prefix: str = "LT") -> str:
    """Generate SKUs like 'LT-A1B2C3D4', well within the 50-char limit."""
    return f"{prefix}-{uuid.uuid4().hex[:8].upper()}"


def product_data(stock: int | None = None, low_stock_threshold: int | None = None) -> dict:
    """Generate AddProductRequest payload matching schema field names."""
    price = round(random.uniform(5.0, 500.0), 2)
    payload = {
        "name": f"{fake.word().capitalize()} {fake.word().capitalize()}"[:255],
        "description": fake.paragraph(nb_sentences=2),
        "price": price,
        "stock": stock if stock is not None else random.randint(0, 200),
        "low_stock_threshold": low_stock_threshold if low_stock_threshold is not None else random.randint(1, 20),
        "brand": fake.company()[:100],
        "sku": valid_sku("PROD"),
        "is_featured": random.random() < 0.1,
    }
    if random.random() < 0.3:
        payload["discount_price"] = round(price * random.uniform(0.5, 0.95), 2)
    return payload


def adjustment_data(current_stock: int) -> dict:
    """Generate AdjustStockRequest payload; roughly a third of the changes overdraw."""
    return {
        "current_stock": current_stock,
        "quantity_change": random.randint(-current_stock - 10, 50),
        "notes": fake.sentence()[:200],
    }


def stock_import_csv(stock_by_product: dict[str, int]) -> str:
    """Build import text with the export header row and one row per product."""
    lines = ["id,name,stock"]
    for product_id, stock in stock_by_product.items():
        lines.append(f'{product_id},"{fake.word()}",{stock}')
    return "\r\n".join(lines)
