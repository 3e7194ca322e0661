from __future__ import annotations

from sqlalchemy import exists, func, select, update
from sqlalchemy.orm import Session

from foh.application.ports.repositories import TableRepository
from foh.domain.common.ids import TableId, WaiterId
from foh.domain.order.entities import ACTIVE_STATUSES
from foh.domain.table.entities import Table, TableStatus
from foh.infrastructure.db.database import Database
from foh.infrastructure.db.models.order import OrderModel
from foh.infrastructure.db.models.table import TableModel


class SqlAlchemyTableRepository(TableRepository):
    def __init__(self, database: Database) -> None:
        self._database = database

    def get(self, table_id: TableId) -> Table | None:
        with Session(self._database.engine) as session:
            model = session.get(TableModel, str(table_id))
            if model is None:
                return None
            return self._to_domain(model)

    def get_by_number(self, table_number: int) -> Table | None:
        statement = select(TableModel).where(TableModel.table_number == table_number).limit(1)
        with Session(self._database.engine) as session:
            model = session.execute(statement).scalar_one_or_none()
            if model is None:
                return None
            return self._to_domain(model)

    def list_all(self) -> list[Table]:
        statement = select(TableModel).order_by(TableModel.table_number)
        with Session(self._database.engine) as session:
            return [self._to_domain(model) for model in session.execute(statement).scalars()]

    def add(self, table: Table) -> None:
        with Session(self._database.engine) as session:
            session.add(
                TableModel(
                    id=str(table.table_id),
                    table_number=table.table_number,
                    status=table.status.value,
                    waiter_id=str(table.waiter_id) if table.waiter_id is not None else None,
                )
            )
            session.commit()

    def update(self, table: Table) -> None:
        statement = (
            update(TableModel)
            .where(TableModel.id == str(table.table_id))
            .values(
                status=table.status.value,
                waiter_id=str(table.waiter_id) if table.waiter_id is not None else None,
            )
        )
        with Session(self._database.engine) as session:
            session.execute(statement)
            session.commit()

    def release_if_idle(self, table_number: int, waiter_id: WaiterId) -> bool:
        active_order = exists().where(
            OrderModel.table_number == table_number,
            OrderModel.waiter_id == str(waiter_id),
            OrderModel.status.in_([status.value for status in ACTIVE_STATUSES]),
        )
        statement = (
            update(TableModel)
            .where(
                TableModel.table_number == table_number,
                TableModel.status == TableStatus.OCCUPIED.value,
                ~active_order,
            )
            .values(status=TableStatus.AVAILABLE.value, waiter_id=None)
        )
        with Session(self._database.engine) as session:
            result = session.execute(statement)
            session.commit()
        return result.rowcount == 1

    def count(self) -> int:
        with Session(self._database.engine) as session:
            return session.execute(select(func.count()).select_from(TableModel)).scalar_one()

    def _to_domain(self, model: TableModel) -> Table:
        return Table(
            table_id=TableId(model.id),
            table_number=model.table_number,
            status=TableStatus(model.status),
            waiter_id=WaiterId(model.waiter_id) if model.waiter_id is not None else None,
        )
