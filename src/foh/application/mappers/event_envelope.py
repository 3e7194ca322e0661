from __future__ import annotations

import json
from datetime import datetime
from typing import Any
from uuid import uuid4

from foh.application.use_cases.context import TraceContext
from foh.domain.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged


def serialize_event(
    *,
    event_type: str,
    occurred_at: datetime,
    payload: dict[str, Any],
    trace_ctx: TraceContext,
) -> str:
    envelope = {
        "event_id": str(uuid4()),
        "event_type": event_type,
        "occurred_at": occurred_at.isoformat(),
        "request_id": trace_ctx.request_id,
        "trace_id": trace_ctx.trace_id,
        "payload": payload,
    }
    return json.dumps(envelope, separators=(",", ":"), ensure_ascii=False)


def serialize_order_placed_event(event: OrderPlaced, trace_ctx: TraceContext) -> str:
    return serialize_event(
        event_type="order.placed",
        occurred_at=event.created_at,
        trace_ctx=trace_ctx,
        payload={
            "orderId": str(event.order_id),
            "tableNumber": event.table_number,
            "waiterId": str(event.waiter_id),
            "total": {
                "amountCents": event.total.amount_cents,
                "currency": event.total.currency,
            },
        },
    )


def serialize_order_status_event(event: OrderStatusChanged, trace_ctx: TraceContext) -> str:
    return serialize_event(
        event_type="order.status_changed",
        occurred_at=event.occurred_at,
        trace_ctx=trace_ctx,
        payload={
            "orderId": str(event.order_id),
            "tableNumber": event.table_number,
            "from": event.from_status.value,
            "to": event.to_status.value,
        },
    )


def serialize_order_cancelled_event(event: OrderCancelled, trace_ctx: TraceContext) -> str:
    return serialize_event(
        event_type="order.cancelled",
        occurred_at=event.occurred_at,
        trace_ctx=trace_ctx,
        payload={
            "orderId": str(event.order_id),
            "tableNumber": event.table_number,
            "reason": event.reason,
        },
    )
