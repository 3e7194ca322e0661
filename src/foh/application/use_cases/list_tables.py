from __future__ import annotations

from foh.application.dto.responses import TableResponse
from foh.application.mappers.table_mapper import to_table_response
from foh.application.ports.repositories import TableRepository, WaiterRepository


class ListTables:
    def __init__(
        self,
        table_repository: TableRepository,
        waiter_repository: WaiterRepository,
    ) -> None:
        self._table_repository = table_repository
        self._waiter_repository = waiter_repository

    def execute(self) -> list[TableResponse]:
        waiter_names = {
            str(waiter.waiter_id): waiter.name for waiter in self._waiter_repository.list_all()
        }
        tables = sorted(self._table_repository.list_all(), key=lambda table: table.table_number)
        return [to_table_response(table, waiter_names) for table in tables]
