from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from foh.domain.common.ids import BillId, OrderId, WaiterId
from foh.domain.common.money import Money
from foh.domain.order.entities import Order, OrderStatus


class BillStatus(str, Enum):
    UNPAID = "unpaid"
    PAID = "paid"


@dataclass(frozen=True)
class Bill:
    bill_id: BillId
    table_number: int
    order_ids: list[OrderId]
    waiter_id: WaiterId | None
    subtotal: Money
    tax: Money
    total: Money
    status: BillStatus
    created_at: datetime

    def __post_init__(self) -> None:
        if not self.order_ids:
            raise ValueError("bill must cover at least one order")
        if self.total.amount_cents != self.subtotal.amount_cents + self.tax.amount_cents:
            raise ValueError("bill total must equal subtotal + tax")

    def mark_paid(self) -> Bill:
        if self.status == BillStatus.PAID:
            raise BillAlreadyPaidError(f"bill {self.bill_id} is already paid")
        return replace(self, status=BillStatus.PAID)


def create_bill(
    bill_id: BillId,
    table_number: int,
    orders: list[Order],
    now: datetime,
) -> Bill:
    """Bill the served orders of one table.

    Menu prices are tax inclusive, so tax is always zero.
    """
    if not orders:
        raise ValueError("bill must cover at least one order")
    for order in orders:
        if order.status != OrderStatus.SERVED:
            raise ValueError(f"order {order.order_id} is not served")
        if order.table_number != table_number:
            raise ValueError(f"order {order.order_id} belongs to another table")

    subtotal = Money.zero(orders[0].currency)
    for order in orders:
        subtotal = subtotal + order.total
    tax = Money.zero(subtotal.currency)
    return Bill(
        bill_id=bill_id,
        table_number=table_number,
        order_ids=[order.order_id for order in orders],
        waiter_id=orders[0].waiter_id,
        subtotal=subtotal,
        tax=tax,
        total=subtotal + tax,
        status=BillStatus.UNPAID,
        created_at=now,
    )


class BillAlreadyPaidError(Exception):
    pass
