"""FastAPI routes for the Inventory domain: products, stock ledger, alerts and bulk CSV."""

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response
from protean.utils.globals import current_domain

from inventory.api.schemas import (
    AddProductRequest,
    AdjustStockRequest,
    ImportReportResponse,
    ImportStockRequest,
    InventoryAlertListResponse,
    InventoryAlertResponse,
    InventoryLogListResponse,
    InventoryLogResponse,
    InventorySummaryResponse,
    ProductIdResponse,
    ProductResponse,
    QuickAdjustRequest,
    RowRejectionResponse,
    SetStockRequest,
    StatusResponse,
    StockAdjustmentResponse,
    UpdateProductRequest,
)
from inventory.catalog_io.bulk import export_products, import_stock
from inventory.product.management import AddProduct, UpdateProductDetails
from inventory.product.product import Product
from inventory.stock.analytics import active_alerts, inventory_summary, recent_log_entries
from inventory.stock.exceptions import ProductNotFound, StockWriteFailure
from inventory.stock.ledger import StockLedger


def _adjustment_response(adjustment) -> StockAdjustmentResponse:
    return StockAdjustmentResponse(
        product_id=adjustment.product_id,
        name=adjustment.name,
        new_stock=adjustment.new_stock,
        previous_stock=adjustment.previous_stock,
        quantity_change=adjustment.quantity_change,
        change_type=adjustment.change_type.value,
        audit_logged=adjustment.audit_logged,
        warning=adjustment.audit_error.message if adjustment.audit_error else None,
    )


def _log_response(entry) -> InventoryLogResponse:
    return InventoryLogResponse(
        log_id=str(entry.id),
        product_id=str(entry.product_id),
        change_type=entry.change_type,
        quantity_change=entry.quantity_change,
        previous_stock=entry.previous_stock,
        new_stock=entry.new_stock,
        notes=entry.notes,
        created_at=entry.created_at,
    )


def _alert_response(alert) -> InventoryAlertResponse:
    return InventoryAlertResponse(
        alert_id=str(alert.id),
        product_id=str(alert.product_id),
        alert_type=alert.alert_type,
        threshold_value=alert.threshold_value,
        is_active=alert.is_active,
    )


def _apply(operation, *args, **kwargs) -> StockAdjustmentResponse:
    """Run a ledger operation, translating its failures into HTTP errors."""
    try:
        adjustment = operation(*args, **kwargs)
    except ProductNotFound as exc:
        raise HTTPException(status_code=404, detail={"message": exc.message}) from exc
    except StockWriteFailure as exc:
        raise HTTPException(status_code=502, detail={"message": exc.message, "error": exc.detail}) from exc
    return _adjustment_response(adjustment)


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def add_product(body: AddProductRequest) -> ProductIdResponse:
    command = AddProduct(**body.model_dump(exclude_none=True))
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.put("/{product_id}", response_model=StatusResponse)
async def update_product(product_id: str, body: UpdateProductRequest) -> StatusResponse:
    command = UpdateProductDetails(product_id=product_id, **body.model_dump(exclude_none=True))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    product = current_domain.repository_for(Product).get(product_id)
    return ProductResponse(
        product_id=str(product.id),
        name=product.name,
        description=product.description,
        price=product.price,
        discount_price=product.discount_price,
        stock=product.stock,
        low_stock_threshold=product.low_stock_threshold,
        stock_status=product.stock_status.value,
        brand=product.brand,
        sku=product.sku,
        is_featured=bool(product.is_featured),
    )


@product_router.put("/{product_id}/stock/adjust", response_model=StockAdjustmentResponse)
async def adjust_stock(product_id: str, body: AdjustStockRequest) -> StockAdjustmentResponse:
    return _apply(StockLedger().adjust_stock, product_id, body.current_stock, body.quantity_change, note=body.notes)


@product_router.put("/{product_id}/stock/set", response_model=StockAdjustmentResponse)
async def set_stock(product_id: str, body: SetStockRequest) -> StockAdjustmentResponse:
    return _apply(StockLedger().set_stock, product_id, body.current_stock, body.stock, note=body.notes)


@product_router.put("/{product_id}/stock/quick", response_model=StockAdjustmentResponse)
async def quick_adjust(product_id: str, body: QuickAdjustRequest) -> StockAdjustmentResponse:
    return _apply(StockLedger().quick_adjust, product_id, body.current_stock, body.step)


@product_router.get("/{product_id}/inventory-logs", response_model=InventoryLogListResponse)
async def get_inventory_logs(product_id: str) -> InventoryLogListResponse:
    return InventoryLogListResponse(logs=[_log_response(e) for e in recent_log_entries(product_id=product_id)])


# ---------------------------------------------------------------------------
# Inventory Router
# ---------------------------------------------------------------------------
inventory_router = APIRouter(prefix="/inventory", tags=["inventory"])


@inventory_router.get("/summary", response_model=InventorySummaryResponse)
async def get_summary() -> InventorySummaryResponse:
    summary = inventory_summary()
    return InventorySummaryResponse(
        total_products=summary.total_products,
        out_of_stock=summary.out_of_stock,
        low_stock=summary.low_stock,
        stock_health=summary.stock_health,
        total_value=summary.total_value,
        total_stock_movement=summary.total_stock_movement,
        recent_logs=[_log_response(e) for e in summary.recent_logs],
        active_alerts=[_alert_response(a) for a in summary.active_alerts],
    )


@inventory_router.get("/alerts", response_model=InventoryAlertListResponse)
async def get_alerts() -> InventoryAlertListResponse:
    return InventoryAlertListResponse(alerts=[_alert_response(a) for a in active_alerts()])


@inventory_router.get("/export")
async def export_csv() -> Response:
    return Response(
        content=export_products(),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=products.csv"},
    )


@inventory_router.post("/import", response_model=ImportReportResponse)
async def import_csv(body: ImportStockRequest) -> ImportReportResponse:
    report = import_stock(body.csv_content, note=body.notes)
    return ImportReportResponse(
        updated=[_adjustment_response(a) for a in report.updated],
        unchanged=report.unchanged,
        rejected=[RowRejectionResponse(row=r.row, product_id=r.product_id, reason=r.reason) for r in report.rejected],
        audit_warnings=report.audit_warnings,
    )
