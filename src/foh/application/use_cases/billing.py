from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime, timezone
from uuid import uuid4

from foh.application.dto.responses import BillResponse
from foh.application.mappers.bill_mapper import to_bill_response
from foh.application.mappers.event_envelope import serialize_event
from foh.application.metrics.order_lifecycle import record_bill_paid, record_transition
from foh.application.ports.repositories import (
    BillRepository,
    MenuRepository,
    OptimisticConcurrencyError,
    OrderRepository,
    StockRepository,
)
from foh.application.use_cases.context import TraceContext
from foh.application.use_cases.table_release import TableReleaser
from foh.application.use_cases.transition_order import OrderConflictError
from foh.application.use_cases.view_refresh import (
    ADMIN_VIEW,
    MANAGER_VIEW,
    WAITER_VIEW,
    ViewRefresher,
)
from foh.domain.billing.entities import Bill, create_bill
from foh.domain.common.ids import BillId, StockItemId
from foh.domain.order.entities import OrderStatus

logger = logging.getLogger(__name__)


class NoServedOrdersError(Exception):
    pass


class BillNotFoundError(Exception):
    pass


class CreateBillForTable:
    def __init__(
        self,
        order_repository: OrderRepository,
        bill_repository: BillRepository,
        refresher: ViewRefresher,
    ) -> None:
        self._order_repository = order_repository
        self._bill_repository = bill_repository
        self._refresher = refresher

    def execute(self, table_number: int, trace_ctx: TraceContext) -> BillResponse:
        served = self._order_repository.list_for_table(table_number, status=OrderStatus.SERVED)
        if not served:
            raise NoServedOrdersError(f"table {table_number} has no served orders to bill")

        now = datetime.now(timezone.utc)
        bill = create_bill(
            bill_id=BillId(f"bil_{uuid4().hex[:12]}"),
            table_number=table_number,
            orders=sorted(served, key=lambda order: order.created_at),
            now=now,
        )
        try:
            # orders keep the version they were read at; the repository checks it
            self._bill_repository.add_with_orders(
                bill,
                [order.transition_to(OrderStatus.BILLED) for order in served],
            )
        except OptimisticConcurrencyError as exc:
            raise OrderConflictError(
                f"orders on table {table_number} changed while billing"
            ) from exc
        for order in served:
            record_transition(from_status=order.status, to_status=OrderStatus.BILLED)

        self._refresher.notify(
            (WAITER_VIEW, MANAGER_VIEW, ADMIN_VIEW),
            serialize_event(
                event_type="bill.created",
                occurred_at=now,
                trace_ctx=trace_ctx,
                payload={"billId": str(bill.bill_id), "tableNumber": table_number},
            ),
        )
        return to_bill_response(bill)


class MarkBillPaid:
    """Settle a bill, free its table and take sold ingredients out of stock."""

    def __init__(
        self,
        bill_repository: BillRepository,
        order_repository: OrderRepository,
        menu_repository: MenuRepository,
        stock_repository: StockRepository,
        releaser: TableReleaser,
        refresher: ViewRefresher,
    ) -> None:
        self._bill_repository = bill_repository
        self._order_repository = order_repository
        self._menu_repository = menu_repository
        self._stock_repository = stock_repository
        self._releaser = releaser
        self._refresher = refresher

    def execute(self, bill_id: BillId, trace_ctx: TraceContext) -> BillResponse:
        bill = self._bill_repository.get(bill_id)
        if bill is None:
            raise BillNotFoundError(f"bill {bill_id} not found")

        # BillAlreadyPaidError propagates to the caller
        paid = bill.mark_paid()
        self._bill_repository.update(paid)
        record_bill_paid()

        if paid.waiter_id is not None:
            self._releaser.release_if_idle(paid.table_number, paid.waiter_id, trigger="paid")
        self._deplete_stock(paid)

        self._refresher.notify(
            (WAITER_VIEW, MANAGER_VIEW, ADMIN_VIEW),
            serialize_event(
                event_type="bill.paid",
                occurred_at=datetime.now(timezone.utc),
                trace_ctx=trace_ctx,
                payload={"billId": str(paid.bill_id), "tableNumber": paid.table_number},
            ),
        )
        return to_bill_response(paid)

    def _deplete_stock(self, bill: Bill) -> None:
        sold: dict[str, int] = defaultdict(int)
        for order_id in bill.order_ids:
            order = self._order_repository.get(order_id)
            if order is None:
                continue
            for item in order.items:
                sold[str(item.menu_item_id)] += item.quantity

        usage: dict[str, float] = defaultdict(float)
        for menu_item in self._menu_repository.list_all():
            quantity = sold.get(str(menu_item.item_id))
            if not quantity:
                continue
            for ingredient in menu_item.ingredients:
                usage[str(ingredient.stock_item_id)] += ingredient.quantity * quantity

        for stock_item_id, used in usage.items():
            self._stock_repository.adjust_quantity(StockItemId(stock_item_id), -used)
        if usage:
            logger.info("stock_depleted", extra={"bill_id": str(bill.bill_id), "items": len(usage)})


class ListBills:
    def __init__(self, bill_repository: BillRepository) -> None:
        self._bill_repository = bill_repository

    def execute(self) -> list[BillResponse]:
        bills = sorted(self._bill_repository.list_all(), key=lambda bill: bill.created_at, reverse=True)
        return [to_bill_response(bill) for bill in bills]
