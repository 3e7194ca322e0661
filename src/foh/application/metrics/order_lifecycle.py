from __future__ import annotations

from datetime import datetime, timezone

from prometheus_client import Counter, Histogram

from foh.domain.order.entities import Order, OrderStatus

ORDERS_CREATED_TOTAL = Counter(
    "foh_orders_created_total",
    "Total number of orders created.",
)

ORDER_TRANSITION_TOTAL = Counter(
    "foh_order_transition_total",
    "Total number of order lifecycle transitions.",
    ["from", "to"],
)

ORDER_CANCELLED_TOTAL = Counter(
    "foh_order_cancelled_total",
    "Total number of cancelled orders by the status they were cancelled from.",
    ["from"],
)

ORDER_TIME_TO_SERVE_SECONDS = Histogram(
    "foh_order_time_to_serve_seconds",
    "Time between order creation and serving.",
)

TABLES_OCCUPIED_TOTAL = Counter(
    "foh_tables_occupied_total",
    "Total number of table assignments made by order creation.",
)

TABLES_RELEASED_TOTAL = Counter(
    "foh_tables_released_total",
    "Total number of tables released.",
    ["trigger"],
)

TABLE_RELEASE_SKIPPED_TOTAL = Counter(
    "foh_table_release_skipped_total",
    "Total number of release checks that left the table occupied.",
    ["trigger"],
)

BILLS_PAID_TOTAL = Counter(
    "foh_bills_paid_total",
    "Total number of bills marked paid.",
)


def record_order_created() -> None:
    ORDERS_CREATED_TOTAL.inc()


def record_transition(from_status: OrderStatus, to_status: OrderStatus) -> None:
    ORDER_TRANSITION_TOTAL.labels(**{"from": from_status.value, "to": to_status.value}).inc()


def record_cancellation(from_status: OrderStatus) -> None:
    ORDER_CANCELLED_TOTAL.labels(**{"from": from_status.value}).inc()


def record_time_to_serve(order: Order, now: datetime | None = None) -> None:
    current = now or datetime.now(timezone.utc)
    created_at = order.created_at
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    ORDER_TIME_TO_SERVE_SECONDS.observe(max((current - created_at).total_seconds(), 0.0))


def record_table_occupied() -> None:
    TABLES_OCCUPIED_TOTAL.inc()


def record_table_release(trigger: str, released: bool) -> None:
    if released:
        TABLES_RELEASED_TOTAL.labels(trigger=trigger).inc()
    else:
        TABLE_RELEASE_SKIPPED_TOTAL.labels(trigger=trigger).inc()


def record_bill_paid() -> None:
    BILLS_PAID_TOTAL.inc()
