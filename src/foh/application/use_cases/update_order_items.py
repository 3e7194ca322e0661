from __future__ import annotations

from datetime import datetime, timezone

from foh.application.dto.requests import UpdateOrderItemsRequest
from foh.application.dto.responses import OrderResponse
from foh.application.mappers.event_envelope import serialize_event
from foh.application.mappers.order_mapper import to_order_response
from foh.application.ports.repositories import (
    MenuRepository,
    OptimisticConcurrencyError,
    OrderRepository,
)
from foh.application.use_cases.context import TraceContext
from foh.application.use_cases.create_order import snapshot_items
from foh.application.use_cases.transition_order import (
    InvalidOrderTransitionError,
    OrderConflictError,
    OrderNotFoundError,
)
from foh.application.use_cases.view_refresh import (
    KITCHEN_VIEW,
    MANAGER_VIEW,
    WAITER_VIEW,
    ViewRefresher,
)
from foh.domain.common.ids import OrderId
from foh.domain.order.entities import OrderTransitionError


class UpdateOrderItems:
    def __init__(
        self,
        menu_repository: MenuRepository,
        order_repository: OrderRepository,
        refresher: ViewRefresher,
    ) -> None:
        self._menu_repository = menu_repository
        self._order_repository = order_repository
        self._refresher = refresher

    def execute(
        self,
        order_id: OrderId,
        request_dto: UpdateOrderItemsRequest,
        trace_ctx: TraceContext,
    ) -> OrderResponse:
        order = self._order_repository.get(order_id)
        if order is None:
            raise OrderNotFoundError(f"order {order_id} not found")

        items = snapshot_items(request_dto.items, self._menu_repository)
        try:
            updated = order.with_items(items)
        except OrderTransitionError as exc:
            raise InvalidOrderTransitionError(str(exc)) from exc

        try:
            persisted = self._order_repository.update_with_version(
                updated,
                expected_version=order.version,
            )
        except OptimisticConcurrencyError as exc:
            raise OrderConflictError(f"order {order_id} items update conflict") from exc

        self._refresher.notify(
            (WAITER_VIEW, MANAGER_VIEW, KITCHEN_VIEW),
            serialize_event(
                event_type="order.items_updated",
                occurred_at=datetime.now(timezone.utc),
                trace_ctx=trace_ctx,
                payload={"orderId": str(persisted.order_id), "tableNumber": persisted.table_number},
            ),
        )
        return to_order_response(persisted)
