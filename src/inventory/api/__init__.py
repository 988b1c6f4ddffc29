from inventory.api.routes import inventory_router, product_router

__all__ = ["inventory_router", "product_router"]
