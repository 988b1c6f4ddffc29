"""Pydantic request/response schemas for the Inventory API.

These are external contracts (anti-corruption layer): separate from
internal Protean commands.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Product Request Schemas
# ---------------------------------------------------------------------------
class AddProductRequest(BaseModel):
    name: str
    description: str | None = None
    price: float = Field(ge=0)
    discount_price: float | None = Field(default=None, ge=0)
    stock: int = Field(ge=0, default=0)
    low_stock_threshold: int | None = Field(default=None, ge=0)
    brand: str | None = None
    sku: str | None = None
    is_featured: bool = False


class UpdateProductRequest(BaseModel):
    name: str | None = None
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    discount_price: float | None = Field(default=None, ge=0)
    low_stock_threshold: int | None = Field(default=None, ge=0)
    brand: str | None = None
    sku: str | None = None
    is_featured: bool | None = None


# ---------------------------------------------------------------------------
# Stock Request Schemas
# ---------------------------------------------------------------------------
class AdjustStockRequest(BaseModel):
    current_stock: int = Field(ge=0, description="Stock the caller last observed")
    quantity_change: int
    notes: str | None = None


class SetStockRequest(BaseModel):
    current_stock: int = Field(ge=0, description="Stock the caller last observed")
    stock: int
    notes: str | None = None


class QuickAdjustRequest(BaseModel):
    current_stock: int = Field(ge=0, description="Stock the caller last observed")
    step: int = Field(default=1, description="Usually +1 or -1")


class ImportStockRequest(BaseModel):
    csv_content: str
    notes: str | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ProductIdResponse(BaseModel):
    product_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class ProductResponse(BaseModel):
    product_id: str
    name: str
    description: str | None = None
    price: float
    discount_price: float | None = None
    stock: int
    low_stock_threshold: int
    stock_status: str
    brand: str | None = None
    sku: str | None = None
    is_featured: bool = False


class StockAdjustmentResponse(BaseModel):
    product_id: str
    name: str
    new_stock: int
    previous_stock: int
    quantity_change: int
    change_type: str
    audit_logged: bool
    warning: str | None = None


class InventoryLogResponse(BaseModel):
    log_id: str
    product_id: str
    change_type: str
    quantity_change: int
    previous_stock: int
    new_stock: int
    notes: str | None = None
    created_at: datetime


class InventoryLogListResponse(BaseModel):
    logs: list[InventoryLogResponse]


class InventoryAlertResponse(BaseModel):
    alert_id: str
    product_id: str
    alert_type: str
    threshold_value: int | None = None
    is_active: bool


class InventoryAlertListResponse(BaseModel):
    alerts: list[InventoryAlertResponse]


class InventorySummaryResponse(BaseModel):
    total_products: int
    out_of_stock: int
    low_stock: int
    stock_health: float
    total_value: float
    total_stock_movement: int
    recent_logs: list[InventoryLogResponse]
    active_alerts: list[InventoryAlertResponse]


class RowRejectionResponse(BaseModel):
    row: int
    product_id: str
    reason: str


class ImportReportResponse(BaseModel):
    updated: list[StockAdjustmentResponse]
    unchanged: list[str]
    rejected: list[RowRejectionResponse]
    audit_warnings: int
