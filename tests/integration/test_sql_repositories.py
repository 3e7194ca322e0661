from __future__ import annotations

from datetime import datetime, timezone

import pytest

from foh.application.ports.repositories import OptimisticConcurrencyError
from foh.domain.billing.entities import create_bill
from foh.domain.common.ids import BillId, MenuItemId, OrderId, StockItemId, TableId, WaiterId
from foh.domain.common.money import Money
from foh.domain.inventory.entities import StockItem, StockUnit
from foh.domain.order.entities import Order, OrderItem, OrderStatus
from foh.domain.table.entities import Table, TableStatus
from foh.infrastructure.db.repositories.bill_repo import SqlAlchemyBillRepository
from foh.infrastructure.db.repositories.inventory_repo import SqlAlchemyStockRepository
from foh.infrastructure.db.repositories.order_repo import SqlAlchemyOrderRepository
from foh.infrastructure.db.repositories.table_repo import SqlAlchemyTableRepository

CREATED_AT = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)


def _order(order_id: str = "ord_001", status: OrderStatus = OrderStatus.PENDING) -> Order:
    return Order(
        order_id=OrderId(order_id),
        table_number=1,
        waiter_id=WaiterId("wtr_001"),
        status=status,
        items=[
            OrderItem(
                menu_item_id=MenuItemId("itm_001"),
                quantity=2,
                price=Money(amount_cents=1250, currency="INR"),
            ),
            OrderItem(
                menu_item_id=MenuItemId("itm_002"),
                quantity=1,
                price=Money(amount_cents=250, currency="INR"),
            ),
        ],
        created_at=CREATED_AT,
    )


def _occupied_table(tables: SqlAlchemyTableRepository) -> None:
    tables.add(
        Table(
            table_id=TableId("tbl_001"),
            table_number=1,
            status=TableStatus.OCCUPIED,
            waiter_id=WaiterId("wtr_001"),
        )
    )


def test_order_items_round_trip(database) -> None:
    orders = SqlAlchemyOrderRepository(database)
    orders.add(_order())

    stored = orders.get(OrderId("ord_001"))

    assert stored is not None
    assert [(str(item.menu_item_id), item.quantity) for item in stored.items] == [
        ("itm_001", 2),
        ("itm_002", 1),
    ]
    assert stored.total.amount_cents == 2750
    assert stored.created_at == CREATED_AT
    assert stored.version == 1


def test_update_with_stale_version_conflicts(database) -> None:
    orders = SqlAlchemyOrderRepository(database)
    orders.add(_order())
    loaded = orders.get(OrderId("ord_001"))

    approved = orders.update_with_version(loaded.transition_to(OrderStatus.APPROVED), 1)
    assert approved.version == 2
    assert approved.status == OrderStatus.APPROVED

    with pytest.raises(OptimisticConcurrencyError):
        orders.update_with_version(loaded.cancel("guest left early"), 1)


def test_release_if_idle_waits_for_active_orders(database) -> None:
    orders = SqlAlchemyOrderRepository(database)
    tables = SqlAlchemyTableRepository(database)
    _occupied_table(tables)
    orders.add(_order(status=OrderStatus.APPROVED))

    assert tables.release_if_idle(1, WaiterId("wtr_001")) is False
    assert tables.get_by_number(1).status == TableStatus.OCCUPIED

    orders.delete(OrderId("ord_001"))
    orders.add(_order("ord_002", status=OrderStatus.SERVED))

    assert tables.release_if_idle(1, WaiterId("wtr_001")) is True
    released = tables.get_by_number(1)
    assert released.status == TableStatus.AVAILABLE
    assert released.waiter_id is None
    # already available: nothing left to release
    assert tables.release_if_idle(1, WaiterId("wtr_001")) is False


def test_stock_adjustments_are_relative(database) -> None:
    stock = SqlAlchemyStockRepository(database)
    stock.add(
        StockItem(
            stock_item_id=StockItemId("stk_001"),
            name="Mozzarella",
            unit=StockUnit.KG,
            quantity_in_stock=5.0,
            low_stock_threshold=1.0,
            average_cost_per_unit=Money(amount_cents=60000, currency="INR"),
        )
    )

    stock.adjust_quantity(StockItemId("stk_001"), -1.5)
    stock.adjust_quantity(StockItemId("stk_001"), -0.5)

    assert stock.get(StockItemId("stk_001")).quantity_in_stock == pytest.approx(3.0)


def test_bill_and_order_statuses_commit_together(database) -> None:
    orders = SqlAlchemyOrderRepository(database)
    bills = SqlAlchemyBillRepository(database)
    orders.add(_order("ord_001", status=OrderStatus.SERVED))
    orders.add(_order("ord_002", status=OrderStatus.SERVED))
    served = orders.list_for_table(1, status=OrderStatus.SERVED)
    bill = create_bill(BillId("bil_001"), 1, served, now=CREATED_AT)

    # another writer touches ord_002 after it was read
    stale = orders.get(OrderId("ord_002"))
    orders.update_with_version(stale, stale.version)

    with pytest.raises(OptimisticConcurrencyError):
        bills.add_with_orders(bill, [order.transition_to(OrderStatus.BILLED) for order in served])

    assert {order.status for order in orders.list_all()} == {OrderStatus.SERVED}
    assert bills.list_all() == []

    fresh = orders.list_for_table(1, status=OrderStatus.SERVED)
    bills.add_with_orders(bill, [order.transition_to(OrderStatus.BILLED) for order in fresh])

    assert {order.status for order in orders.list_all()} == {OrderStatus.BILLED}
    assert [stored.bill_id for stored in bills.list_all()] == [BillId("bil_001")]
