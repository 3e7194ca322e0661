from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from foh.domain.common.ids import MenuItemId, OrderId, WaiterId
from foh.domain.common.money import Money

CANCELLATION_REASON_MIN_LENGTH = 10


class OrderStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    PREPARED = "prepared"
    SERVED = "served"
    BILLED = "billed"
    CANCELLED = "cancelled"

    @classmethod
    def _missing_(cls, value: object) -> OrderStatus | None:
        if not isinstance(value, str):
            return None
        normalized = value.strip().lower()
        # waiter screens call the prepared state "ready"
        if normalized == "ready":
            return cls.PREPARED
        for member in cls:
            if member.value == normalized:
                return member
        return None


# Orders in these states keep their table occupied.
ACTIVE_STATUSES = frozenset({OrderStatus.PENDING, OrderStatus.APPROVED, OrderStatus.PREPARED})

_ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.APPROVED, OrderStatus.CANCELLED}),
    OrderStatus.APPROVED: frozenset({OrderStatus.PREPARED, OrderStatus.CANCELLED}),
    OrderStatus.PREPARED: frozenset({OrderStatus.SERVED, OrderStatus.CANCELLED}),
    OrderStatus.SERVED: frozenset({OrderStatus.BILLED}),
    OrderStatus.BILLED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


def can_transition(from_status: OrderStatus, to_status: OrderStatus) -> bool:
    return to_status in _ALLOWED_TRANSITIONS[from_status]


def validate_cancellation_reason(reason: str) -> str:
    cleaned = reason.strip()
    if len(cleaned) < CANCELLATION_REASON_MIN_LENGTH:
        raise InvalidCancellationReasonError(
            f"cancellation reason must be at least {CANCELLATION_REASON_MIN_LENGTH} characters"
        )
    return cleaned


@dataclass(frozen=True)
class OrderItem:
    menu_item_id: MenuItemId
    quantity: int
    price: Money

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("quantity must be >= 1")

    @property
    def line_total(self) -> Money:
        return self.price.times(self.quantity)


@dataclass(frozen=True)
class Order:
    order_id: OrderId
    table_number: int
    waiter_id: WaiterId
    status: OrderStatus
    items: list[OrderItem]
    created_at: datetime
    cancellation_reason: str | None = None
    version: int = 1

    def __post_init__(self) -> None:
        if not self.items:
            raise ValueError("order must contain at least one item")
        if self.table_number < 1:
            raise ValueError("table_number must be >= 1")
        currencies = {item.price.currency for item in self.items}
        if len(currencies) != 1:
            raise ValueError("order items must share one currency")

    @property
    def currency(self) -> str:
        return self.items[0].price.currency

    @property
    def total(self) -> Money:
        total = Money.zero(self.currency)
        for item in self.items:
            total = total + item.line_total
        return total

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    def transition_to(self, new_status: OrderStatus) -> Order:
        if new_status == OrderStatus.CANCELLED:
            raise OrderTransitionError("cancellation requires a reason")
        if not can_transition(self.status, new_status):
            raise OrderTransitionError(
                f"cannot move order from status={self.status.value} to status={new_status.value}"
            )
        return replace(self, status=new_status)

    def cancel(self, reason: str) -> Order:
        cleaned = validate_cancellation_reason(reason)
        if not can_transition(self.status, OrderStatus.CANCELLED):
            raise OrderTransitionError(f"cannot cancel order from status={self.status.value}")
        return replace(self, status=OrderStatus.CANCELLED, cancellation_reason=cleaned)

    def with_items(self, items: list[OrderItem]) -> Order:
        if not self.is_active:
            raise OrderTransitionError(
                f"cannot change items of order in status={self.status.value}"
            )
        return replace(self, items=items)


def create_pending_order(
    order_id: OrderId,
    table_number: int,
    waiter_id: WaiterId,
    items: list[OrderItem],
    now: datetime,
) -> Order:
    if not items:
        raise ValueError("order must contain at least one item")

    return Order(
        order_id=order_id,
        table_number=table_number,
        waiter_id=waiter_id,
        status=OrderStatus.PENDING,
        items=items,
        created_at=now,
    )


class OrderTransitionError(Exception):
    pass


class InvalidCancellationReasonError(ValueError):
    pass
