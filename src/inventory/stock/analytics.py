"""Inventory analytics: stock health, value and recent movement for the admin dashboard."""

from dataclasses import dataclass, field

from protean.utils.globals import current_domain

from inventory.alerts.alert import InventoryAlert
from inventory.product.product import Product, StockStatus
from inventory.stock.log import InventoryLogEntry


@dataclass
class InventorySummary:
    total_products: int
    out_of_stock: int
    low_stock: int
    stock_health: float  # % of products adequately stocked
    total_value: float
    total_stock_movement: int
    recent_logs: list = field(default_factory=list)
    active_alerts: list = field(default_factory=list)


def recent_log_entries(product_id=None, limit=None):
    """Log entries, newest first, optionally for one product."""
    query = current_domain.repository_for(InventoryLogEntry)._dao.query
    if product_id is not None:
        query = query.filter(product_id=str(product_id))
    entries = sorted(query.all().items, key=lambda e: e.created_at, reverse=True)
    return entries[:limit] if limit else entries


def active_alerts():
    return current_domain.repository_for(InventoryAlert)._dao.query.filter(is_active=True).all().items


def inventory_summary(recent_limit=None) -> InventorySummary:
    if recent_limit is None:
        custom = current_domain.config.get("custom", {}) or {}
        recent_limit = custom.get("recent_log_limit", 10)

    products = current_domain.repository_for(Product)._dao.query.all().items
    statuses = [p.stock_status for p in products]

    total = len(products)
    out_of_stock = statuses.count(StockStatus.OUT_OF_STOCK)
    low_stock = statuses.count(StockStatus.LOW_STOCK)
    health = ((total - out_of_stock - low_stock) / total) * 100 if total else 100.0

    recent = recent_log_entries(limit=recent_limit)

    return InventorySummary(
        total_products=total,
        out_of_stock=out_of_stock,
        low_stock=low_stock,
        stock_health=round(health, 1),
        total_value=round(sum(p.effective_price * (p.stock or 0) for p in products), 2),
        total_stock_movement=sum(abs(e.quantity_change) for e in recent),
        recent_logs=recent,
        active_alerts=active_alerts(),
    )
