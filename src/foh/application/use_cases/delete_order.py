from __future__ import annotations

from datetime import datetime, timezone

from foh.application.mappers.event_envelope import serialize_event
from foh.application.ports.repositories import OrderRepository
from foh.application.use_cases.context import TraceContext
from foh.application.use_cases.table_release import TableReleaser
from foh.application.use_cases.transition_order import OrderNotFoundError
from foh.application.use_cases.view_refresh import (
    KITCHEN_VIEW,
    MANAGER_VIEW,
    WAITER_VIEW,
    ViewRefresher,
)
from foh.domain.common.ids import OrderId


class DeleteOrder:
    def __init__(
        self,
        order_repository: OrderRepository,
        releaser: TableReleaser,
        refresher: ViewRefresher,
    ) -> None:
        self._order_repository = order_repository
        self._releaser = releaser
        self._refresher = refresher

    def execute(self, order_id: OrderId, trace_ctx: TraceContext) -> None:
        order = self._order_repository.get(order_id)
        if order is None:
            raise OrderNotFoundError(f"order {order_id} not found")

        self._order_repository.delete(order_id)
        self._releaser.release_if_idle(order.table_number, order.waiter_id, trigger="deleted")
        self._refresher.notify(
            (WAITER_VIEW, MANAGER_VIEW, KITCHEN_VIEW),
            serialize_event(
                event_type="order.deleted",
                occurred_at=datetime.now(timezone.utc),
                trace_ctx=trace_ctx,
                payload={"orderId": str(order_id), "tableNumber": order.table_number},
            ),
        )
