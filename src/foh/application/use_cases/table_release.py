from __future__ import annotations

import logging

from foh.application.metrics.order_lifecycle import record_table_release
from foh.application.ports.repositories import TableRepository
from foh.domain.common.ids import WaiterId

logger = logging.getLogger(__name__)


class TableReleaser:
    def __init__(self, table_repository: TableRepository) -> None:
        self._table_repository = table_repository

    def release_if_idle(self, table_number: int, waiter_id: WaiterId, trigger: str) -> bool:
        """Free the table unless the waiter still has an active order on it.

        The check and the write happen in one statement in the repository, so
        an order created concurrently for the same pair keeps the table occupied.
        """
        released = self._table_repository.release_if_idle(table_number, waiter_id)
        record_table_release(trigger=trigger, released=released)
        logger.info(
            "table_release_checked",
            extra={
                "table_number": table_number,
                "waiter_id": str(waiter_id),
                "released": released,
                "trigger": trigger,
            },
        )
        return released
