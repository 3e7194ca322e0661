from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from foh.domain.common.ids import OrderId, WaiterId
from foh.domain.common.money import Money
from foh.domain.order.entities import OrderStatus


@dataclass(frozen=True)
class OrderPlaced:
    order_id: OrderId
    table_number: int
    waiter_id: WaiterId
    total: Money
    created_at: datetime


@dataclass(frozen=True)
class OrderStatusChanged:
    order_id: OrderId
    table_number: int
    from_status: OrderStatus
    to_status: OrderStatus
    occurred_at: datetime


@dataclass(frozen=True)
class OrderCancelled:
    order_id: OrderId
    table_number: int
    reason: str
    occurred_at: datetime
