from __future__ import annotations

from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from foh.application.ports.repositories import OptimisticConcurrencyError, OrderRepository
from foh.domain.common.ids import MenuItemId, OrderId, WaiterId
from foh.domain.common.money import Money
from foh.domain.order.entities import Order, OrderItem, OrderStatus
from foh.infrastructure.db.database import Database
from foh.infrastructure.db.models.order import OrderModel
from foh.infrastructure.db.repositories.common import ensure_utc


class SqlAlchemyOrderRepository(OrderRepository):
    def __init__(self, database: Database) -> None:
        self._database = database

    def add(self, order: Order) -> None:
        with Session(self._database.engine) as session:
            session.add(self._to_model(order))
            session.commit()

    def get(self, order_id: OrderId) -> Order | None:
        with Session(self._database.engine) as session:
            model = session.get(OrderModel, str(order_id))
            if model is None:
                return None
            return self._to_domain(model)

    def list_all(self, status: OrderStatus | None = None) -> list[Order]:
        statement = select(OrderModel).order_by(OrderModel.created_at, OrderModel.id)
        if status is not None:
            statement = statement.where(OrderModel.status == status.value)
        with Session(self._database.engine) as session:
            return [self._to_domain(model) for model in session.execute(statement).scalars()]

    def list_for_table(self, table_number: int, status: OrderStatus | None = None) -> list[Order]:
        statement = (
            select(OrderModel)
            .where(OrderModel.table_number == table_number)
            .order_by(OrderModel.created_at, OrderModel.id)
        )
        if status is not None:
            statement = statement.where(OrderModel.status == status.value)
        with Session(self._database.engine) as session:
            return [self._to_domain(model) for model in session.execute(statement).scalars()]

    def update_with_version(self, order: Order, expected_version: int) -> Order:
        statement = (
            update(OrderModel)
            .where(
                OrderModel.id == str(order.order_id),
                OrderModel.version == expected_version,
            )
            .values(
                status=order.status.value,
                items=_items_to_json(order),
                total_cents=order.total.amount_cents,
                currency=order.currency,
                cancellation_reason=order.cancellation_reason,
                version=OrderModel.version + 1,
            )
        )
        with Session(self._database.engine) as session:
            result = session.execute(statement)
            if result.rowcount != 1:
                session.rollback()
                raise OptimisticConcurrencyError(f"order {order.order_id} version conflict")
            session.commit()

        updated = self.get(order.order_id)
        if updated is None:
            raise RuntimeError(f"order {order.order_id} not found after update")
        return updated

    def delete(self, order_id: OrderId) -> None:
        with Session(self._database.engine) as session:
            session.execute(delete(OrderModel).where(OrderModel.id == str(order_id)))
            session.commit()

    def _to_model(self, order: Order) -> OrderModel:
        return OrderModel(
            id=str(order.order_id),
            table_number=order.table_number,
            waiter_id=str(order.waiter_id),
            status=order.status.value,
            items=_items_to_json(order),
            total_cents=order.total.amount_cents,
            currency=order.currency,
            created_at=order.created_at,
            cancellation_reason=order.cancellation_reason,
            version=order.version,
        )

    def _to_domain(self, model: OrderModel) -> Order:
        items = [
            OrderItem(
                menu_item_id=MenuItemId(row["menuItemId"]),
                quantity=int(row["quantity"]),
                price=Money(amount_cents=int(row["priceCents"]), currency=model.currency),
            )
            for row in model.items
        ]
        return Order(
            order_id=OrderId(model.id),
            table_number=model.table_number,
            waiter_id=WaiterId(model.waiter_id),
            status=OrderStatus(model.status),
            items=items,
            created_at=ensure_utc(model.created_at),
            cancellation_reason=model.cancellation_reason,
            version=model.version,
        )


def _items_to_json(order: Order) -> list[dict[str, Any]]:
    return [
        {
            "menuItemId": str(item.menu_item_id),
            "quantity": item.quantity,
            "priceCents": item.price.amount_cents,
        }
        for item in order.items
    ]
