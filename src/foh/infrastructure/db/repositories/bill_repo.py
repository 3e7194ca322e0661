from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from foh.application.ports.repositories import BillRepository, OptimisticConcurrencyError
from foh.domain.billing.entities import Bill, BillStatus
from foh.domain.common.ids import BillId, OrderId, WaiterId
from foh.domain.common.money import Money
from foh.domain.order.entities import Order
from foh.infrastructure.db.database import Database
from foh.infrastructure.db.models.billing import BillModel
from foh.infrastructure.db.models.order import OrderModel
from foh.infrastructure.db.repositories.common import ensure_utc


class SqlAlchemyBillRepository(BillRepository):
    def __init__(self, database: Database) -> None:
        self._database = database

    def add(self, bill: Bill) -> None:
        with Session(self._database.engine) as session:
            session.add(_to_model(bill))
            session.commit()

    def add_with_orders(self, bill: Bill, orders: list[Order]) -> None:
        with Session(self._database.engine) as session:
            for order in orders:
                result = session.execute(
                    update(OrderModel)
                    .where(
                        OrderModel.id == str(order.order_id),
                        OrderModel.version == order.version,
                    )
                    .values(status=order.status.value, version=OrderModel.version + 1)
                )
                if result.rowcount != 1:
                    session.rollback()
                    raise OptimisticConcurrencyError(f"order {order.order_id} version conflict")
            session.add(_to_model(bill))
            session.commit()

    def get(self, bill_id: BillId) -> Bill | None:
        with Session(self._database.engine) as session:
            model = session.get(BillModel, str(bill_id))
            if model is None:
                return None
            return self._to_domain(model)

    def list_all(self) -> list[Bill]:
        statement = select(BillModel).order_by(BillModel.created_at)
        with Session(self._database.engine) as session:
            return [self._to_domain(model) for model in session.execute(statement).scalars()]

    def update(self, bill: Bill) -> None:
        # only the settlement status changes after creation
        statement = (
            update(BillModel).where(BillModel.id == str(bill.bill_id)).values(status=bill.status.value)
        )
        with Session(self._database.engine) as session:
            session.execute(statement)
            session.commit()

    def _to_domain(self, model: BillModel) -> Bill:
        return Bill(
            bill_id=BillId(model.id),
            table_number=model.table_number,
            order_ids=[OrderId(order_id) for order_id in model.order_ids],
            waiter_id=WaiterId(model.waiter_id) if model.waiter_id is not None else None,
            subtotal=Money(amount_cents=model.subtotal_cents, currency=model.currency),
            tax=Money(amount_cents=model.tax_cents, currency=model.currency),
            total=Money(amount_cents=model.total_cents, currency=model.currency),
            status=BillStatus(model.status),
            created_at=ensure_utc(model.created_at),
        )


def _to_model(bill: Bill) -> BillModel:
    return BillModel(
        id=str(bill.bill_id),
        table_number=bill.table_number,
        order_ids=[str(order_id) for order_id in bill.order_ids],
        waiter_id=str(bill.waiter_id) if bill.waiter_id is not None else None,
        subtotal_cents=bill.subtotal.amount_cents,
        tax_cents=bill.tax.amount_cents,
        total_cents=bill.total.amount_cents,
        currency=bill.total.currency,
        status=bill.status.value,
        created_at=bill.created_at,
    )
