from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from foh.domain.common.ids import TableId, WaiterId


class TableStatus(str, Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"


@dataclass(frozen=True)
class Table:
    table_id: TableId
    table_number: int
    status: TableStatus
    waiter_id: WaiterId | None

    def __post_init__(self) -> None:
        if self.table_number < 1:
            raise ValueError("table_number must be >= 1")
        if self.status == TableStatus.OCCUPIED and self.waiter_id is None:
            raise ValueError("waiter_id must be set when table status is occupied")
        if self.status == TableStatus.AVAILABLE and self.waiter_id is not None:
            raise ValueError("waiter_id must be cleared when table status is available")

    def occupy(self, waiter_id: WaiterId) -> Table:
        # last writer wins: a table taken over by another waiter is reassigned
        return replace(self, status=TableStatus.OCCUPIED, waiter_id=waiter_id)

    def release(self) -> Table:
        return replace(self, status=TableStatus.AVAILABLE, waiter_id=None)
