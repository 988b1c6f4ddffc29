"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state: no cross-user sharing.
State tracks product IDs and the last stock value the API reported, which
is what the stock endpoints expect as `current_stock`.
"""

from dataclasses import dataclass, field


@dataclass
class ProductStockState:
    """Tracks state for a single product's stock lifecycle."""

    product_id: str | None = None
    current_stock: int = 0
    audit_warnings: int = 0


@dataclass
class CatalogState:
    """Tracks the products a bulk-import user owns."""

    stock_by_product: dict[str, int] = field(default_factory=dict)
