from __future__ import annotations

from foh.application.dto.responses import OrderResponse
from foh.application.mappers.order_mapper import to_order_response
from foh.application.ports.repositories import OrderRepository
from foh.application.use_cases.transition_order import OrderNotFoundError
from foh.domain.common.ids import OrderId
from foh.domain.order.entities import OrderStatus


class InvalidStatusFilterError(Exception):
    pass


class GetOrder:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self, order_id: OrderId) -> OrderResponse:
        order = self._order_repository.get(order_id)
        if order is None:
            raise OrderNotFoundError(f"order {order_id} not found")
        return to_order_response(order)


class ListOrders:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self, status: str | None = None) -> list[OrderResponse]:
        wanted = _status_filter(status) if status else None
        orders = self._order_repository.list_all(status=wanted)
        orders.sort(key=lambda order: order.created_at, reverse=True)
        return [to_order_response(order) for order in orders]


def _status_filter(raw: str) -> OrderStatus:
    try:
        return OrderStatus(raw)
    except ValueError as exc:
        choices = ", ".join(status.value for status in OrderStatus)
        raise InvalidStatusFilterError(
            f"unknown order status {raw!r}, expected one of {choices}"
        ) from exc
