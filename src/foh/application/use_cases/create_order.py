from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from foh.application.dto.requests import CreateOrderRequest, OrderItemRequest
from foh.application.dto.responses import OrderResponse
from foh.application.mappers.event_envelope import serialize_order_placed_event
from foh.application.mappers.order_mapper import to_order_response
from foh.application.metrics.order_lifecycle import record_order_created, record_table_occupied
from foh.application.ports.repositories import (
    MenuRepository,
    OrderRepository,
    TableRepository,
    WaiterRepository,
)
from foh.application.use_cases.context import TraceContext
from foh.application.use_cases.view_refresh import MANAGER_VIEW, WAITER_VIEW, ViewRefresher
from foh.domain.common.ids import MenuItemId, OrderId, TableId, UserId, WaiterId
from foh.domain.menu.entities import MenuItem
from foh.domain.order.entities import OrderItem, create_pending_order
from foh.domain.order.events import OrderPlaced
from foh.domain.user.entities import Waiter


class TableNotFoundError(Exception):
    pass


class WaiterNotFoundError(Exception):
    pass


class MenuItemUnavailableError(Exception):
    pass


def snapshot_items(
    requested: list[OrderItemRequest],
    menu_repository: MenuRepository,
) -> list[OrderItem]:
    """Copy current menu prices into order items; later menu edits leave them alone."""
    items: list[OrderItem] = []
    for request_item in requested:
        menu_item: MenuItem | None = menu_repository.get(MenuItemId(request_item.menu_item_id))
        if menu_item is None:
            raise MenuItemUnavailableError(f"menu item {request_item.menu_item_id} does not exist")
        if not menu_item.is_available:
            raise MenuItemUnavailableError(f"menu item {request_item.menu_item_id} is unavailable")
        items.append(
            OrderItem(
                menu_item_id=menu_item.item_id,
                quantity=request_item.quantity,
                price=menu_item.price,
            )
        )
    return items


class CreateOrder:
    def __init__(
        self,
        menu_repository: MenuRepository,
        table_repository: TableRepository,
        waiter_repository: WaiterRepository,
        order_repository: OrderRepository,
        refresher: ViewRefresher,
    ) -> None:
        self._menu_repository = menu_repository
        self._table_repository = table_repository
        self._waiter_repository = waiter_repository
        self._order_repository = order_repository
        self._refresher = refresher

    def execute(
        self,
        request_dto: CreateOrderRequest,
        acting_user_id: str | None,
        trace_ctx: TraceContext,
    ) -> OrderResponse:
        table = self._table_repository.get(TableId(request_dto.table_id))
        if table is None:
            raise TableNotFoundError(f"table {request_dto.table_id} not found")

        waiter = self._resolve_waiter(request_dto.waiter_id, acting_user_id)
        items = snapshot_items(request_dto.items, self._menu_repository)

        now = datetime.now(timezone.utc)
        order = create_pending_order(
            order_id=OrderId(f"ord_{uuid4().hex[:12]}"),
            table_number=table.table_number,
            waiter_id=waiter.waiter_id,
            items=items,
            now=now,
        )
        self._order_repository.add(order)
        # last writer wins: whoever placed the newest order owns the table
        self._table_repository.update(table.occupy(waiter.waiter_id))

        record_order_created()
        record_table_occupied()
        event = OrderPlaced(
            order_id=order.order_id,
            table_number=order.table_number,
            waiter_id=order.waiter_id,
            total=order.total,
            created_at=order.created_at,
        )
        self._refresher.notify(
            (WAITER_VIEW, MANAGER_VIEW),
            serialize_order_placed_event(event, trace_ctx),
        )
        return to_order_response(order)

    def _resolve_waiter(self, waiter_id: str | None, acting_user_id: str | None) -> Waiter:
        if waiter_id:
            waiter = self._waiter_repository.get(WaiterId(waiter_id))
            if waiter is None:
                raise WaiterNotFoundError(f"waiter {waiter_id} not found")
            return waiter
        if acting_user_id:
            waiter = self._waiter_repository.get_by_user_id(UserId(acting_user_id))
            if waiter is not None:
                return waiter
        raise WaiterNotFoundError("no waiter profile for the current user")
