from __future__ import annotations

import sys
from datetime import timedelta
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from fakes import NOW

from foh.application.use_cases.billing import (
    CreateBillForTable,
    ListBills,
    MarkBillPaid,
    NoServedOrdersError,
)
from foh.application.use_cases.context import TraceContext
from foh.application.use_cases.transition_order import OrderConflictError
from foh.domain.billing.entities import BillAlreadyPaidError, BillStatus, create_bill
from foh.domain.common.ids import BillId, OrderId, StockItemId, TableId
from foh.domain.menu.entities import Ingredient
from foh.domain.order.entities import OrderStatus
from foh.domain.table.entities import TableStatus

TRACE = TraceContext.empty()


class StaleReadOrders:
    """Order repository whose table read goes stale: one order changes right after it."""

    def __init__(self, inner, changed_order_id: str) -> None:
        self._inner = inner
        self._changed_order_id = OrderId(changed_order_id)

    def list_for_table(self, table_number, status=None):
        orders = self._inner.list_for_table(table_number, status)
        current = self._inner.get(self._changed_order_id)
        self._inner.update_with_version(current, current.version)
        return orders

    def __getattr__(self, name):
        return getattr(self._inner, name)


def _create_bill(store, table_number: int = 1):
    return CreateBillForTable(
        order_repository=store.orders,
        bill_repository=store.bills,
        refresher=store.refresher(),
    ).execute(table_number, TRACE)


def _pay(store, bill_id: str):
    return MarkBillPaid(
        bill_repository=store.bills,
        order_repository=store.orders,
        menu_repository=store.menu,
        stock_repository=store.stock,
        releaser=store.releaser(),
        refresher=store.refresher(),
    ).execute(BillId(bill_id), TRACE)


def test_create_bill_rejects_non_served_orders(store) -> None:
    order = store.add_order(status=OrderStatus.SERVED)
    with pytest.raises(ValueError):
        create_bill(BillId("bil_1"), 2, [order], now=order.created_at)

    pending = store.add_order("ord_2", status=OrderStatus.PENDING)
    with pytest.raises(ValueError):
        create_bill(BillId("bil_1"), 1, [pending], now=pending.created_at)


def test_bill_covers_served_orders_tax_inclusive(store) -> None:
    store.add_order("ord_1", status=OrderStatus.SERVED, lines=[("itm_001", 2, 25000)])
    store.add_order("ord_2", status=OrderStatus.SERVED, lines=[("itm_002", 1, 9000)])
    store.add_order("ord_3", status=OrderStatus.PENDING)
    store.add_order("ord_4", table_number=2, status=OrderStatus.SERVED)

    bill = _create_bill(store)

    assert sorted(bill.orderIds) == ["ord_1", "ord_2"]
    assert bill.subtotal.amountCents == 59000
    assert bill.tax.amountCents == 0
    assert bill.total.amountCents == 59000
    assert bill.status == "unpaid"
    assert store.orders.get(OrderId("ord_1")).status == OrderStatus.BILLED
    assert store.orders.get(OrderId("ord_3")).status == OrderStatus.PENDING
    assert "views:admin" in store.publisher.channels


def test_bill_requires_served_orders(store) -> None:
    store.add_order(status=OrderStatus.PREPARED)

    with pytest.raises(NoServedOrdersError):
        _create_bill(store)


def test_paying_bill_releases_table_and_depletes_stock(store) -> None:
    store.add_table(1, waiter_id="wtr_001")
    store.add_stock_item("stk_001", quantity=10.0)
    store.add_menu_item(
        "itm_001",
        ingredients=[Ingredient(stock_item_id=StockItemId("stk_001"), quantity=0.25)],
    )
    store.add_order("ord_1", status=OrderStatus.SERVED, lines=[("itm_001", 4, 25000)])
    bill = _create_bill(store)

    paid = _pay(store, bill.billId)

    assert paid.status == BillStatus.PAID.value
    assert store.tables.get(TableId("tbl_001")).status == TableStatus.AVAILABLE
    assert store.stock.get(StockItemId("stk_001")).quantity_in_stock == pytest.approx(9.0)


def test_paying_twice_is_rejected(store) -> None:
    store.add_order(status=OrderStatus.SERVED)
    bill = _create_bill(store)
    _pay(store, bill.billId)

    with pytest.raises(BillAlreadyPaidError):
        _pay(store, bill.billId)


def test_list_bills_returns_every_bill(store) -> None:
    store.add_order("ord_1", status=OrderStatus.SERVED)
    first = _create_bill(store)
    store.add_order("ord_2", status=OrderStatus.SERVED)
    second = _create_bill(store)

    listed = [bill.billId for bill in ListBills(store.bills).execute()]

    assert sorted(listed) == sorted([first.billId, second.billId])


def test_conflicting_order_leaves_nothing_billed(store) -> None:
    store.add_order("ord_1", status=OrderStatus.SERVED, created_at=NOW - timedelta(minutes=5))
    store.add_order("ord_2", status=OrderStatus.SERVED)

    with pytest.raises(OrderConflictError):
        CreateBillForTable(
            order_repository=StaleReadOrders(store.orders, "ord_2"),
            bill_repository=store.bills,
            refresher=store.refresher(),
        ).execute(1, TRACE)

    assert store.orders.get(OrderId("ord_1")).status == OrderStatus.SERVED
    assert store.orders.get(OrderId("ord_2")).status == OrderStatus.SERVED
    assert store.bills.list_all() == []
    assert store.publisher.channels == []

    retried = _create_bill(store)
    assert sorted(retried.orderIds) == ["ord_1", "ord_2"]
