from __future__ import annotations

from datetime import datetime, timezone

from foh.application.dto.responses import OrderResponse
from foh.application.mappers.event_envelope import serialize_order_cancelled_event
from foh.application.mappers.order_mapper import to_order_response
from foh.application.metrics.order_lifecycle import record_cancellation
from foh.application.ports.repositories import OptimisticConcurrencyError, OrderRepository
from foh.application.use_cases.context import TraceContext
from foh.application.use_cases.table_release import TableReleaser
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
from foh.domain.order.events import OrderCancelled


class CancelOrder:
    """Cancel an order that has not been served yet.

    The table stays occupied unless `release_table` is set.
    """

    def __init__(
        self,
        order_repository: OrderRepository,
        releaser: TableReleaser,
        refresher: ViewRefresher,
        release_table: bool = False,
    ) -> None:
        self._order_repository = order_repository
        self._releaser = releaser
        self._refresher = refresher
        self._release_table = release_table

    def execute(self, order_id: OrderId, reason: str, trace_ctx: TraceContext) -> OrderResponse:
        order = self._order_repository.get(order_id)
        if order is None:
            raise OrderNotFoundError(f"order {order_id} not found")

        # InvalidCancellationReasonError propagates as a validation failure
        try:
            cancelled = order.cancel(reason)
        except OrderTransitionError as exc:
            raise InvalidOrderTransitionError(str(exc)) from exc

        try:
            persisted = self._order_repository.update_with_version(
                cancelled,
                expected_version=order.version,
            )
        except OptimisticConcurrencyError as exc:
            raise OrderConflictError(f"order {order_id} status update conflict") from exc

        record_cancellation(from_status=order.status)
        if self._release_table:
            self._releaser.release_if_idle(
                persisted.table_number,
                persisted.waiter_id,
                trigger="cancelled",
            )

        event = OrderCancelled(
            order_id=persisted.order_id,
            table_number=persisted.table_number,
            reason=persisted.cancellation_reason or "",
            occurred_at=datetime.now(timezone.utc),
        )
        self._refresher.notify(
            (WAITER_VIEW, MANAGER_VIEW, KITCHEN_VIEW),
            serialize_order_cancelled_event(event, trace_ctx),
        )
        return to_order_response(persisted)
