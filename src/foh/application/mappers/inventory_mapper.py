from __future__ import annotations

from foh.application.dto.responses import (
    PurchaseOrderLineResponse,
    PurchaseOrderResponse,
    StockItemResponse,
    StockUsageResponse,
    SupplierResponse,
)
from foh.application.mappers.money_mapper import to_money_response
from foh.domain.inventory.entities import PurchaseOrder, StockItem, StockUsageLog, Supplier


def to_supplier_response(supplier: Supplier) -> SupplierResponse:
    return SupplierResponse(
        supplierId=str(supplier.supplier_id),
        name=supplier.name,
        phone=supplier.phone,
        contactPerson=supplier.contact_person,
        email=supplier.email,
    )


def to_stock_item_response(item: StockItem) -> StockItemResponse:
    return StockItemResponse(
        stockItemId=str(item.stock_item_id),
        name=item.name,
        unit=item.unit.value,
        quantityInStock=item.quantity_in_stock,
        lowStockThreshold=item.low_stock_threshold,
        averageCostPerUnit=to_money_response(item.average_cost_per_unit),
        isLow=item.is_low,
    )


def to_stock_usage_response(log: StockUsageLog) -> StockUsageResponse:
    return StockUsageResponse(
        logId=str(log.log_id),
        stockItemId=str(log.stock_item_id),
        quantityUsed=log.quantity_used,
        category=log.category.value,
        notes=log.notes,
        createdAt=log.created_at,
    )


def to_purchase_order_response(purchase_order: PurchaseOrder) -> PurchaseOrderResponse:
    return PurchaseOrderResponse(
        purchaseOrderId=str(purchase_order.purchase_order_id),
        supplierId=str(purchase_order.supplier_id),
        lines=[
            PurchaseOrderLineResponse(
                stockItemId=str(line.stock_item_id),
                quantity=line.quantity,
                costPerUnit=to_money_response(line.cost_per_unit),
            )
            for line in purchase_order.lines
        ],
        status=purchase_order.status.value,
        totalCost=to_money_response(purchase_order.total_cost),
        createdAt=purchase_order.created_at,
    )
