from __future__ import annotations

from typing import Mapping

from foh.application.dto.responses import TableResponse
from foh.domain.reporting.aggregation import UNKNOWN_WAITER
from foh.domain.table.entities import Table


def to_table_response(table: Table, waiter_names: Mapping[str, str]) -> TableResponse:
    waiter_name = None
    if table.waiter_id is not None:
        waiter_name = waiter_names.get(str(table.waiter_id), UNKNOWN_WAITER)
    return TableResponse(
        tableId=str(table.table_id),
        tableNumber=table.table_number,
        status=table.status.value,
        waiterId=str(table.waiter_id) if table.waiter_id is not None else None,
        waiterName=waiter_name,
    )
