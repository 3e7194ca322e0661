"""Inventory endpoints: suppliers, stock items, usage log and purchase orders."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from foh.api.dependencies import (
    MANAGEMENT,
    Repositories,
    get_repositories,
    get_settings,
    require_roles,
)
from foh.application.dto.requests import (
    PurchaseOrderRequest,
    PurchaseOrderStatusRequest,
    StockItemRequest,
    StockUsageRequest,
    SupplierRequest,
)
from foh.application.dto.responses import (
    PurchaseOrderResponse,
    StockItemResponse,
    StockUsageResponse,
    SupplierResponse,
)
from foh.application.use_cases.inventory import (
    ManagePurchaseOrders,
    ManageStock,
    ManageSuppliers,
    RecordStockUsage,
)
from foh.config import Settings
from foh.domain.common.ids import PurchaseOrderId, StockItemId, SupplierId

router = APIRouter(
    prefix="/api/inventory",
    tags=["inventory"],
    dependencies=[Depends(require_roles(*MANAGEMENT))],
)


def _stock(
    repos: Repositories = Depends(get_repositories),
    settings: Settings = Depends(get_settings),
) -> ManageStock:
    return ManageStock(repos.stock, currency=settings.currency)


def _purchase_orders(
    repos: Repositories = Depends(get_repositories),
    settings: Settings = Depends(get_settings),
) -> ManagePurchaseOrders:
    return ManagePurchaseOrders(
        repos.purchase_orders,
        supplier_repository=repos.suppliers,
        stock_repository=repos.stock,
        currency=settings.currency,
    )


@router.get("/suppliers", response_model=list[SupplierResponse])
def list_suppliers(repos: Repositories = Depends(get_repositories)) -> list[SupplierResponse]:
    return ManageSuppliers(repos.suppliers).list()


@router.post("/suppliers", response_model=SupplierResponse, status_code=status.HTTP_201_CREATED)
def create_supplier(
    request_dto: SupplierRequest,
    repos: Repositories = Depends(get_repositories),
) -> SupplierResponse:
    return ManageSuppliers(repos.suppliers).create(request_dto)


@router.put("/suppliers/{supplier_id}", response_model=SupplierResponse)
def update_supplier(
    supplier_id: str,
    request_dto: SupplierRequest,
    repos: Repositories = Depends(get_repositories),
) -> SupplierResponse:
    return ManageSuppliers(repos.suppliers).update(SupplierId(supplier_id), request_dto)


@router.delete("/suppliers/{supplier_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_supplier(supplier_id: str, repos: Repositories = Depends(get_repositories)) -> Response:
    ManageSuppliers(repos.suppliers).delete(SupplierId(supplier_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/stock", response_model=list[StockItemResponse])
def list_stock(low_only: bool = False, stock: ManageStock = Depends(_stock)) -> list[StockItemResponse]:
    return stock.list(low_only=low_only)


@router.post("/stock", response_model=StockItemResponse, status_code=status.HTTP_201_CREATED)
def create_stock_item(
    request_dto: StockItemRequest,
    stock: ManageStock = Depends(_stock),
) -> StockItemResponse:
    return stock.create(request_dto)


@router.put("/stock/{stock_item_id}", response_model=StockItemResponse)
def update_stock_item(
    stock_item_id: str,
    request_dto: StockItemRequest,
    stock: ManageStock = Depends(_stock),
) -> StockItemResponse:
    return stock.update(StockItemId(stock_item_id), request_dto)


@router.delete("/stock/{stock_item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_stock_item(stock_item_id: str, stock: ManageStock = Depends(_stock)) -> Response:
    stock.delete(StockItemId(stock_item_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/usage", response_model=list[StockUsageResponse])
def list_stock_usage(repos: Repositories = Depends(get_repositories)) -> list[StockUsageResponse]:
    return RecordStockUsage(repos.stock).list()


@router.post("/usage", response_model=StockUsageResponse, status_code=status.HTTP_201_CREATED)
def record_stock_usage(
    request_dto: StockUsageRequest,
    repos: Repositories = Depends(get_repositories),
) -> StockUsageResponse:
    return RecordStockUsage(repos.stock).execute(request_dto)


@router.get("/purchase-orders", response_model=list[PurchaseOrderResponse])
def list_purchase_orders(
    purchase_orders: ManagePurchaseOrders = Depends(_purchase_orders),
) -> list[PurchaseOrderResponse]:
    return purchase_orders.list()


@router.post(
    "/purchase-orders",
    response_model=PurchaseOrderResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_purchase_order(
    request_dto: PurchaseOrderRequest,
    purchase_orders: ManagePurchaseOrders = Depends(_purchase_orders),
) -> PurchaseOrderResponse:
    return purchase_orders.create(request_dto)


@router.patch("/purchase-orders/{purchase_order_id}/status", response_model=PurchaseOrderResponse)
def update_purchase_order_status(
    purchase_order_id: str,
    request_dto: PurchaseOrderStatusRequest,
    purchase_orders: ManagePurchaseOrders = Depends(_purchase_orders),
) -> PurchaseOrderResponse:
    return purchase_orders.update_status(PurchaseOrderId(purchase_order_id), request_dto.status)
