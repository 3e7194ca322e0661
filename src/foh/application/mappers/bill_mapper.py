from __future__ import annotations

from foh.application.dto.responses import BillResponse
from foh.application.mappers.money_mapper import to_money_response
from foh.domain.billing.entities import Bill


def to_bill_response(bill: Bill) -> BillResponse:
    return BillResponse(
        billId=str(bill.bill_id),
        tableNumber=bill.table_number,
        orderIds=[str(order_id) for order_id in bill.order_ids],
        waiterId=str(bill.waiter_id) if bill.waiter_id is not None else None,
        subtotal=to_money_response(bill.subtotal),
        tax=to_money_response(bill.tax),
        total=to_money_response(bill.total),
        status=bill.status.value,
        createdAt=bill.created_at,
    )
