from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from foh.application.dto.requests import (
    PurchaseOrderLineRequest,
    PurchaseOrderRequest,
    StockItemRequest,
    StockUsageRequest,
    SupplierRequest,
)
from foh.application.use_cases.inventory import (
    ManagePurchaseOrders,
    ManageStock,
    ManageSuppliers,
    RecordStockUsage,
    StockItemNotFoundError,
    SupplierNotFoundError,
)
from foh.domain.common.ids import PurchaseOrderId, StockItemId, SupplierId
from foh.domain.common.money import Money
from foh.domain.inventory.entities import (
    PurchaseOrderStateError,
    PurchaseStatus,
    StockUnit,
    UsageCategory,
)


def _purchase_orders(store) -> ManagePurchaseOrders:
    return ManagePurchaseOrders(
        store.purchase_orders,
        supplier_repository=store.suppliers,
        stock_repository=store.stock,
        currency="INR",
    )


def _supplier(store) -> str:
    return ManageSuppliers(store.suppliers).create(
        SupplierRequest(name="Fresh Farms", phone="9876543210", contactPerson="Meena")
    ).supplierId


def test_receive_is_weighted_average(store) -> None:
    item = store.add_stock_item(quantity=10.0, average_cost_cents=40000)

    received = item.receive(10.0, Money(amount_cents=50000, currency="INR"))

    assert received.quantity_in_stock == 20.0
    assert received.average_cost_per_unit.amount_cents == 45000


def test_supplier_crud(store) -> None:
    suppliers = ManageSuppliers(store.suppliers)
    supplier_id = _supplier(store)

    updated = suppliers.update(
        SupplierId(supplier_id),
        SupplierRequest(name="Fresh Farms Ltd", phone="9876543210"),
    )
    assert updated.name == "Fresh Farms Ltd"
    assert [row.supplierId for row in suppliers.list()] == [supplier_id]

    suppliers.delete(SupplierId(supplier_id))
    assert suppliers.list() == []
    with pytest.raises(SupplierNotFoundError):
        suppliers.delete(SupplierId(supplier_id))


def test_stock_low_filter(store) -> None:
    stock = ManageStock(store.stock, currency="INR")
    stock.create(
        StockItemRequest(
            name="Basmati Rice",
            unit=StockUnit.KG,
            quantityInStock=1,
            lowStockThreshold=5,
            averageCostPerUnitCents=9000,
        )
    )
    stock.create(
        StockItemRequest(
            name="Milk",
            unit=StockUnit.L,
            quantityInStock=20,
            lowStockThreshold=5,
            averageCostPerUnitCents=6000,
        )
    )

    low = stock.list(low_only=True)

    assert [row.name for row in low] == ["Basmati Rice"]
    assert low[0].isLow is True
    assert len(stock.list()) == 2


def test_usage_decrements_stock(store) -> None:
    store.add_stock_item("stk_001", quantity=10.0)

    log = RecordStockUsage(store.stock).execute(
        StockUsageRequest(stockItemId="stk_001", quantityUsed=1.5, category=UsageCategory.SPILLAGE)
    )

    assert log.category == "spillage"
    assert store.stock.get(StockItemId("stk_001")).quantity_in_stock == pytest.approx(8.5)
    assert len(RecordStockUsage(store.stock).list()) == 1


def test_usage_for_unknown_stock_item(store) -> None:
    with pytest.raises(StockItemNotFoundError):
        RecordStockUsage(store.stock).execute(
            StockUsageRequest(stockItemId="stk_404", quantityUsed=1, category=UsageCategory.OTHER)
        )


def test_purchase_order_receive_adds_stock(store) -> None:
    store.add_stock_item("stk_001", quantity=10.0, average_cost_cents=40000)
    supplier_id = _supplier(store)
    purchase_orders = _purchase_orders(store)

    created = purchase_orders.create(
        PurchaseOrderRequest(
            supplierId=supplier_id,
            lines=[PurchaseOrderLineRequest(stockItemId="stk_001", quantity=10, costPerUnitCents=50000)],
        )
    )
    assert created.status == "ordered"
    assert created.totalCost.amountCents == 500000

    received = purchase_orders.update_status(
        PurchaseOrderId(created.purchaseOrderId), PurchaseStatus.RECEIVED
    )

    assert received.status == "received"
    item = store.stock.get(StockItemId("stk_001"))
    assert item.quantity_in_stock == 20.0
    assert item.average_cost_per_unit.amount_cents == 45000

    with pytest.raises(PurchaseOrderStateError):
        purchase_orders.update_status(
            PurchaseOrderId(created.purchaseOrderId), PurchaseStatus.CANCELLED
        )


def test_purchase_order_requires_known_supplier_and_stock(store) -> None:
    supplier_id = _supplier(store)
    purchase_orders = _purchase_orders(store)

    with pytest.raises(SupplierNotFoundError):
        purchase_orders.create(
            PurchaseOrderRequest(
                supplierId="sup_404",
                lines=[PurchaseOrderLineRequest(stockItemId="stk_001", quantity=1, costPerUnitCents=1)],
            )
        )
    with pytest.raises(StockItemNotFoundError):
        purchase_orders.create(
            PurchaseOrderRequest(
                supplierId=supplier_id,
                lines=[PurchaseOrderLineRequest(stockItemId="stk_404", quantity=1, costPerUnitCents=1)],
            )
        )
