from __future__ import annotations

from typing import Mapping

from foh.application.dto.responses import (
    OrderDetailItemResponse,
    OrderDetailResponse,
    OrderItemResponse,
    OrderResponse,
)
from foh.application.mappers.money_mapper import to_money_response
from foh.domain.order.entities import Order
from foh.domain.reporting.aggregation import UNKNOWN_ITEM, UNKNOWN_WAITER


def to_order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        orderId=str(order.order_id),
        tableNumber=order.table_number,
        waiterId=str(order.waiter_id),
        status=order.status.value,
        items=[
            OrderItemResponse(
                menuItemId=str(item.menu_item_id),
                quantity=item.quantity,
                price=to_money_response(item.price),
                lineTotal=to_money_response(item.line_total),
            )
            for item in order.items
        ],
        total=to_money_response(order.total),
        createdAt=order.created_at,
        cancellationReason=order.cancellation_reason,
        version=order.version,
    )


def to_order_detail_response(
    order: Order,
    waiter_names: Mapping[str, str],
    item_names: Mapping[str, str],
    unknown_waiter: str = UNKNOWN_WAITER,
) -> OrderDetailResponse:
    """Order with waiter and item names resolved; dangling references get placeholders."""
    return OrderDetailResponse(
        orderId=str(order.order_id),
        tableNumber=order.table_number,
        waiterId=str(order.waiter_id),
        waiterName=waiter_names.get(str(order.waiter_id), unknown_waiter),
        status=order.status.value,
        items=[
            OrderDetailItemResponse(
                menuItemId=str(item.menu_item_id),
                itemName=item_names.get(str(item.menu_item_id), UNKNOWN_ITEM),
                quantity=item.quantity,
                price=to_money_response(item.price),
            )
            for item in order.items
        ],
        total=to_money_response(order.total),
        createdAt=order.created_at,
        cancellationReason=order.cancellation_reason,
    )
