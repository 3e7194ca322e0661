from __future__ import annotations

from datetime import datetime, timezone

from foh.application.dto.responses import OrderResponse
from foh.application.mappers.event_envelope import serialize_order_status_event
from foh.application.mappers.order_mapper import to_order_response
from foh.application.metrics.order_lifecycle import record_time_to_serve, record_transition
from foh.application.ports.repositories import OptimisticConcurrencyError, OrderRepository
from foh.application.use_cases.context import TraceContext
from foh.application.use_cases.table_release import TableReleaser
from foh.application.use_cases.view_refresh import (
    KITCHEN_VIEW,
    MANAGER_VIEW,
    WAITER_VIEW,
    ViewRefresher,
)
from foh.domain.common.ids import OrderId
from foh.domain.order.entities import Order, OrderStatus, OrderTransitionError
from foh.domain.order.events import OrderStatusChanged


class OrderNotFoundError(Exception):
    pass


class InvalidOrderTransitionError(Exception):
    pass


class OrderConflictError(Exception):
    pass


def parse_status(raw_status: str) -> OrderStatus:
    try:
        return OrderStatus(raw_status)
    except ValueError as exc:
        raise InvalidOrderTransitionError(f"unknown order status {raw_status!r}") from exc


class TransitionOrder:
    def __init__(
        self,
        order_repository: OrderRepository,
        releaser: TableReleaser,
        refresher: ViewRefresher,
    ) -> None:
        self._order_repository = order_repository
        self._releaser = releaser
        self._refresher = refresher

    def execute(self, order_id: OrderId, raw_status: str, trace_ctx: TraceContext) -> OrderResponse:
        new_status = parse_status(raw_status)
        if new_status == OrderStatus.CANCELLED:
            raise InvalidOrderTransitionError("use the cancel operation to cancel an order")

        order = self._get(order_id)
        if order.status == new_status:
            return to_order_response(order)

        try:
            moved = order.transition_to(new_status)
        except OrderTransitionError as exc:
            raise InvalidOrderTransitionError(str(exc)) from exc

        try:
            persisted = self._order_repository.update_with_version(
                moved,
                expected_version=order.version,
            )
        except OptimisticConcurrencyError:
            current = self._get(order_id)
            if current.status == new_status:
                return to_order_response(current)
            raise OrderConflictError(f"order {order_id} status update conflict")

        now = datetime.now(timezone.utc)
        record_transition(from_status=order.status, to_status=new_status)
        if new_status == OrderStatus.SERVED:
            record_time_to_serve(persisted, now=now)
            self._releaser.release_if_idle(
                persisted.table_number,
                persisted.waiter_id,
                trigger="served",
            )

        event = OrderStatusChanged(
            order_id=persisted.order_id,
            table_number=persisted.table_number,
            from_status=order.status,
            to_status=new_status,
            occurred_at=now,
        )
        self._refresher.notify(
            (WAITER_VIEW, MANAGER_VIEW, KITCHEN_VIEW),
            serialize_order_status_event(event, trace_ctx),
        )
        return to_order_response(persisted)

    def _get(self, order_id: OrderId) -> Order:
        order = self._order_repository.get(order_id)
        if order is None:
            raise OrderNotFoundError(f"order {order_id} not found")
        return order
