from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest
from fakes import FailingPublisher

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from foh.application.dto.requests import (
    CreateOrderRequest,
    OrderItemRequest,
    UpdateOrderItemsRequest,
)
from foh.application.use_cases.cancel_order import CancelOrder
from foh.application.use_cases.context import TraceContext
from foh.application.use_cases.create_order import (
    CreateOrder,
    MenuItemUnavailableError,
    TableNotFoundError,
    WaiterNotFoundError,
)
from foh.application.use_cases.delete_order import DeleteOrder
from foh.application.use_cases.get_order import InvalidStatusFilterError, ListOrders
from foh.application.use_cases.transition_order import (
    InvalidOrderTransitionError,
    OrderConflictError,
    OrderNotFoundError,
    TransitionOrder,
)
from foh.application.use_cases.update_order_items import UpdateOrderItems
from foh.application.use_cases.view_refresh import ViewRefresher
from foh.domain.common.ids import OrderId, TableId, WaiterId
from foh.domain.order.entities import InvalidCancellationReasonError
from foh.domain.table.entities import TableStatus

TRACE = TraceContext(trace_id="trace-1", request_id="req-1")


def _create_order(store, table_id: str = "tbl_001", waiter_id: str | None = "wtr_001", quantity: int = 2):
    return CreateOrder(
        menu_repository=store.menu,
        table_repository=store.tables,
        waiter_repository=store.waiters,
        order_repository=store.orders,
        refresher=store.refresher(),
    ).execute(
        CreateOrderRequest(
            tableId=table_id,
            waiterId=waiter_id,
            items=[OrderItemRequest(menuItemId="itm_001", quantity=quantity)],
        ),
        acting_user_id=None,
        trace_ctx=TRACE,
    )


def _transition(store, order_id: str, status: str):
    return TransitionOrder(
        order_repository=store.orders,
        releaser=store.releaser(),
        refresher=store.refresher(),
    ).execute(OrderId(order_id), status, TRACE)


def _serve(store, order_id: str):
    for status in ("approved", "prepared", "served"):
        response = _transition(store, order_id, status)
    return response


@pytest.fixture
def floor(store):
    store.add_waiter("wtr_001", "Priya", "usr_w1")
    store.add_waiter("wtr_002", "Rahul", "usr_w2")
    store.add_table(1)
    store.add_menu_item("itm_001", price_cents=25000)
    return store


def test_create_order_snapshots_price_and_occupies_table(floor) -> None:
    response = _create_order(floor)

    assert response.status == "pending"
    assert response.total.amountCents == 50000
    table = floor.tables.get(TableId("tbl_001"))
    assert table.status == TableStatus.OCCUPIED
    assert table.waiter_id == WaiterId("wtr_001")
    assert floor.publisher.channels == ["views:waiter", "views:manager"]
    envelope = json.loads(floor.publisher.messages[0][1])
    assert envelope["event_type"] == "order.placed"
    assert envelope["request_id"] == "req-1"


def test_menu_price_change_does_not_touch_existing_orders(floor) -> None:
    response = _create_order(floor)
    floor.add_menu_item("itm_001", price_cents=99900)

    stored = floor.orders.get(OrderId(response.orderId))
    assert stored.total.amount_cents == 50000


def test_new_order_by_other_waiter_takes_over_table(floor) -> None:
    _create_order(floor, waiter_id="wtr_001")
    _create_order(floor, waiter_id="wtr_002")

    assert floor.tables.get(TableId("tbl_001")).waiter_id == WaiterId("wtr_002")


def test_create_order_resolves_waiter_from_acting_user(floor) -> None:
    response = CreateOrder(
        menu_repository=floor.menu,
        table_repository=floor.tables,
        waiter_repository=floor.waiters,
        order_repository=floor.orders,
        refresher=floor.refresher(),
    ).execute(
        CreateOrderRequest(tableId="tbl_001", items=[OrderItemRequest(menuItemId="itm_001", quantity=1)]),
        acting_user_id="usr_w2",
        trace_ctx=TRACE,
    )
    assert response.waiterId == "wtr_002"


def test_create_order_rejects_unknown_references(floor) -> None:
    with pytest.raises(TableNotFoundError):
        _create_order(floor, table_id="tbl_404")
    with pytest.raises(WaiterNotFoundError):
        _create_order(floor, waiter_id="wtr_404")
    assert floor.orders.orders == {}


def test_create_order_rejects_unavailable_item(floor) -> None:
    floor.add_menu_item("itm_001", is_available=False)

    with pytest.raises(MenuItemUnavailableError):
        _create_order(floor)
    assert floor.tables.get(TableId("tbl_001")).status == TableStatus.AVAILABLE


def test_serving_last_active_order_releases_table(floor) -> None:
    order = _create_order(floor)

    served = _serve(floor, order.orderId)

    assert served.status == "served"
    table = floor.tables.get(TableId("tbl_001"))
    assert table.status == TableStatus.AVAILABLE
    assert table.waiter_id is None


def test_serving_keeps_table_while_pair_has_active_orders(floor) -> None:
    first = _create_order(floor)
    _create_order(floor)

    _serve(floor, first.orderId)

    table = floor.tables.get(TableId("tbl_001"))
    assert table.status == TableStatus.OCCUPIED
    assert table.waiter_id == WaiterId("wtr_001")


def test_transition_rejects_skipping_states(floor) -> None:
    order = _create_order(floor)

    with pytest.raises(InvalidOrderTransitionError):
        _transition(floor, order.orderId, "served")
    with pytest.raises(InvalidOrderTransitionError):
        _transition(floor, order.orderId, "cancelled")
    with pytest.raises(InvalidOrderTransitionError):
        _transition(floor, order.orderId, "eaten")


def test_repeating_current_status_is_a_no_op(floor) -> None:
    order = _create_order(floor)
    approved = _transition(floor, order.orderId, "approved")
    published = len(floor.publisher.messages)

    again = _transition(floor, order.orderId, "approved")

    assert again.version == approved.version
    assert len(floor.publisher.messages) == published


def test_ready_alias_moves_order_to_prepared(floor) -> None:
    order = _create_order(floor)
    _transition(floor, order.orderId, "approved")

    assert _transition(floor, order.orderId, "ready").status == "prepared"


def test_transition_unknown_order(floor) -> None:
    with pytest.raises(OrderNotFoundError):
        _transition(floor, "ord_missing", "approved")


def test_version_conflict_raises(floor) -> None:
    order = _create_order(floor)

    class RacingRepository:
        def __init__(self, inner) -> None:
            self._inner = inner

        def get(self, order_id):
            return self._inner.get(order_id)

        def update_with_version(self, order, expected_version):
            # another request wrote the order in between
            current = self._inner.get(order.order_id)
            self._inner.update_with_version(current, current.version)
            return self._inner.update_with_version(order, expected_version)

    use_case = TransitionOrder(
        order_repository=RacingRepository(floor.orders),
        releaser=floor.releaser(),
        refresher=floor.refresher(),
    )
    _transition(floor, order.orderId, "approved")
    with pytest.raises(OrderConflictError):
        use_case.execute(OrderId(order.orderId), "prepared", TRACE)


def test_cancel_requires_reason_and_keeps_table(floor) -> None:
    order = _create_order(floor)
    use_case = CancelOrder(
        order_repository=floor.orders,
        releaser=floor.releaser(),
        refresher=floor.refresher(),
    )

    with pytest.raises(InvalidCancellationReasonError):
        use_case.execute(OrderId(order.orderId), "nope", TRACE)

    cancelled = use_case.execute(OrderId(order.orderId), "Guest changed their mind", TRACE)

    assert cancelled.status == "cancelled"
    assert cancelled.cancellationReason == "Guest changed their mind"
    assert floor.tables.get(TableId("tbl_001")).status == TableStatus.OCCUPIED


def test_cancel_can_release_table_when_enabled(floor) -> None:
    order = _create_order(floor)

    CancelOrder(
        order_repository=floor.orders,
        releaser=floor.releaser(),
        refresher=floor.refresher(),
        release_table=True,
    ).execute(OrderId(order.orderId), "Guest changed their mind", TRACE)

    assert floor.tables.get(TableId("tbl_001")).status == TableStatus.AVAILABLE


def test_served_order_cannot_be_cancelled(floor) -> None:
    order = _create_order(floor)
    _serve(floor, order.orderId)

    with pytest.raises(InvalidOrderTransitionError):
        CancelOrder(
            order_repository=floor.orders,
            releaser=floor.releaser(),
            refresher=floor.refresher(),
        ).execute(OrderId(order.orderId), "Guest changed their mind", TRACE)


def test_update_items_resnapshots_prices(floor) -> None:
    order = _create_order(floor, quantity=1)
    floor.add_menu_item("itm_001", price_cents=30000)

    updated = UpdateOrderItems(
        menu_repository=floor.menu,
        order_repository=floor.orders,
        refresher=floor.refresher(),
    ).execute(
        OrderId(order.orderId),
        UpdateOrderItemsRequest(items=[OrderItemRequest(menuItemId="itm_001", quantity=3)]),
        TRACE,
    )

    assert updated.total.amountCents == 90000
    assert updated.version == order.version + 1


def test_delete_order_releases_idle_table(floor) -> None:
    order = _create_order(floor)

    DeleteOrder(
        order_repository=floor.orders,
        releaser=floor.releaser(),
        refresher=floor.refresher(),
    ).execute(OrderId(order.orderId), TRACE)

    assert floor.orders.get(OrderId(order.orderId)) is None
    assert floor.tables.get(TableId("tbl_001")).status == TableStatus.AVAILABLE


def test_list_orders_filters_by_status(floor) -> None:
    first = _create_order(floor)
    _create_order(floor)
    _transition(floor, first.orderId, "approved")

    approved = ListOrders(floor.orders).execute(status="approved")

    assert [order.orderId for order in approved] == [first.orderId]
    assert len(ListOrders(floor.orders).execute()) == 2


def test_unknown_status_filter_is_rejected(floor) -> None:
    _create_order(floor)

    with pytest.raises(InvalidStatusFilterError):
        ListOrders(floor.orders).execute(status="eaten")
    assert len(ListOrders(floor.orders).execute(status="ready")) == 0


def test_broker_failure_does_not_fail_the_write(floor) -> None:
    response = CreateOrder(
        menu_repository=floor.menu,
        table_repository=floor.tables,
        waiter_repository=floor.waiters,
        order_repository=floor.orders,
        refresher=ViewRefresher(FailingPublisher()),
    ).execute(
        CreateOrderRequest(
            tableId="tbl_001",
            waiterId="wtr_001",
            items=[OrderItemRequest(menuItemId="itm_001", quantity=1)],
        ),
        acting_user_id=None,
        trace_ctx=TRACE,
    )

    assert floor.orders.get(OrderId(response.orderId)) is not None
