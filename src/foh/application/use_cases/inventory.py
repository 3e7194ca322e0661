from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from foh.application.dto.requests import (
    PurchaseOrderRequest,
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
from foh.application.mappers.inventory_mapper import (
    to_purchase_order_response,
    to_stock_item_response,
    to_stock_usage_response,
    to_supplier_response,
)
from foh.application.ports.repositories import (
    PurchaseOrderRepository,
    StockRepository,
    SupplierRepository,
)
from foh.domain.common.ids import (
    PurchaseOrderId,
    StockItemId,
    StockUsageLogId,
    SupplierId,
)
from foh.domain.common.money import Money
from foh.domain.inventory.entities import (
    PurchaseOrder,
    PurchaseOrderLine,
    PurchaseStatus,
    StockItem,
    StockUsageLog,
    Supplier,
)


class SupplierNotFoundError(Exception):
    pass


class StockItemNotFoundError(Exception):
    pass


class PurchaseOrderNotFoundError(Exception):
    pass


class ManageSuppliers:
    def __init__(self, repository: SupplierRepository) -> None:
        self._repository = repository

    def list(self) -> list[SupplierResponse]:
        suppliers = sorted(self._repository.list_all(), key=lambda supplier: supplier.name)
        return [to_supplier_response(supplier) for supplier in suppliers]

    def create(self, request_dto: SupplierRequest) -> SupplierResponse:
        supplier = _to_supplier(SupplierId(f"sup_{uuid4().hex[:12]}"), request_dto)
        self._repository.add(supplier)
        return to_supplier_response(supplier)

    def update(self, supplier_id: SupplierId, request_dto: SupplierRequest) -> SupplierResponse:
        if self._repository.get(supplier_id) is None:
            raise SupplierNotFoundError(f"supplier {supplier_id} not found")
        supplier = _to_supplier(supplier_id, request_dto)
        self._repository.update(supplier)
        return to_supplier_response(supplier)

    def delete(self, supplier_id: SupplierId) -> None:
        if self._repository.get(supplier_id) is None:
            raise SupplierNotFoundError(f"supplier {supplier_id} not found")
        self._repository.delete(supplier_id)


class ManageStock:
    def __init__(self, repository: StockRepository, currency: str) -> None:
        self._repository = repository
        self._currency = currency

    def list(self, low_only: bool = False) -> list[StockItemResponse]:
        items = sorted(self._repository.list_all(), key=lambda item: item.name)
        if low_only:
            items = [item for item in items if item.is_low]
        return [to_stock_item_response(item) for item in items]

    def create(self, request_dto: StockItemRequest) -> StockItemResponse:
        item = self._to_stock_item(StockItemId(f"stk_{uuid4().hex[:12]}"), request_dto)
        self._repository.add(item)
        return to_stock_item_response(item)

    def update(self, stock_item_id: StockItemId, request_dto: StockItemRequest) -> StockItemResponse:
        if self._repository.get(stock_item_id) is None:
            raise StockItemNotFoundError(f"stock item {stock_item_id} not found")
        item = self._to_stock_item(stock_item_id, request_dto)
        self._repository.update(item)
        return to_stock_item_response(item)

    def delete(self, stock_item_id: StockItemId) -> None:
        if self._repository.get(stock_item_id) is None:
            raise StockItemNotFoundError(f"stock item {stock_item_id} not found")
        self._repository.delete(stock_item_id)

    def _to_stock_item(self, stock_item_id: StockItemId, request_dto: StockItemRequest) -> StockItem:
        return StockItem(
            stock_item_id=stock_item_id,
            name=request_dto.name.strip(),
            unit=request_dto.unit,
            quantity_in_stock=request_dto.quantity_in_stock,
            low_stock_threshold=request_dto.low_stock_threshold,
            average_cost_per_unit=Money(
                amount_cents=request_dto.average_cost_per_unit_cents,
                currency=self._currency,
            ),
        )


class RecordStockUsage:
    def __init__(self, repository: StockRepository) -> None:
        self._repository = repository

    def execute(self, request_dto: StockUsageRequest) -> StockUsageResponse:
        stock_item_id = StockItemId(request_dto.stock_item_id)
        if self._repository.get(stock_item_id) is None:
            raise StockItemNotFoundError(f"stock item {stock_item_id} not found")

        log = StockUsageLog(
            log_id=StockUsageLogId(f"use_{uuid4().hex[:12]}"),
            stock_item_id=stock_item_id,
            quantity_used=request_dto.quantity_used,
            category=request_dto.category,
            notes=request_dto.notes,
            created_at=datetime.now(timezone.utc),
        )
        self._repository.add_usage(log)
        self._repository.adjust_quantity(stock_item_id, -request_dto.quantity_used)
        return to_stock_usage_response(log)

    def list(self) -> list[StockUsageResponse]:
        logs = sorted(self._repository.list_usage(), key=lambda log: log.created_at, reverse=True)
        return [to_stock_usage_response(log) for log in logs]


class ManagePurchaseOrders:
    def __init__(
        self,
        repository: PurchaseOrderRepository,
        supplier_repository: SupplierRepository,
        stock_repository: StockRepository,
        currency: str,
    ) -> None:
        self._repository = repository
        self._supplier_repository = supplier_repository
        self._stock_repository = stock_repository
        self._currency = currency

    def list(self) -> list[PurchaseOrderResponse]:
        orders = sorted(self._repository.list_all(), key=lambda po: po.created_at, reverse=True)
        return [to_purchase_order_response(po) for po in orders]

    def create(self, request_dto: PurchaseOrderRequest) -> PurchaseOrderResponse:
        supplier_id = SupplierId(request_dto.supplier_id)
        if self._supplier_repository.get(supplier_id) is None:
            raise SupplierNotFoundError(f"supplier {supplier_id} not found")

        lines = [
            PurchaseOrderLine(
                stock_item_id=StockItemId(line.stock_item_id),
                quantity=line.quantity,
                cost_per_unit=Money(amount_cents=line.cost_per_unit_cents, currency=self._currency),
            )
            for line in request_dto.lines
        ]
        known = self._stock_repository.get_many([line.stock_item_id for line in lines])
        for line in lines:
            if str(line.stock_item_id) not in known:
                raise StockItemNotFoundError(f"stock item {line.stock_item_id} not found")

        purchase_order = PurchaseOrder(
            purchase_order_id=PurchaseOrderId(f"po_{uuid4().hex[:12]}"),
            supplier_id=supplier_id,
            lines=lines,
            status=PurchaseStatus.ORDERED,
            created_at=datetime.now(timezone.utc),
        )
        self._repository.add(purchase_order)
        return to_purchase_order_response(purchase_order)

    def update_status(
        self,
        purchase_order_id: PurchaseOrderId,
        status: PurchaseStatus,
    ) -> PurchaseOrderResponse:
        """Receive or cancel an open purchase order.

        Receiving adds every line to stock and folds its cost into the stock
        item's weighted average cost. PurchaseOrderStateError propagates when
        the order is no longer open.
        """
        purchase_order = self._repository.get(purchase_order_id)
        if purchase_order is None:
            raise PurchaseOrderNotFoundError(f"purchase order {purchase_order_id} not found")

        if status == PurchaseStatus.RECEIVED:
            updated = purchase_order.receive()
            for line in updated.lines:
                stock_item = self._stock_repository.get(line.stock_item_id)
                if stock_item is None:
                    raise StockItemNotFoundError(f"stock item {line.stock_item_id} not found")
                self._stock_repository.update(stock_item.receive(line.quantity, line.cost_per_unit))
        elif status == PurchaseStatus.CANCELLED:
            updated = purchase_order.cancel()
        else:
            updated = purchase_order

        self._repository.update(updated)
        return to_purchase_order_response(updated)


def _to_supplier(supplier_id: SupplierId, request_dto: SupplierRequest) -> Supplier:
    return Supplier(
        supplier_id=supplier_id,
        name=request_dto.name.strip(),
        phone=request_dto.phone.strip(),
        contact_person=request_dto.contact_person,
        email=request_dto.email,
    )
