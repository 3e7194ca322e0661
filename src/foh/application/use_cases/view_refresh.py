from __future__ import annotations

import logging
from typing import Iterable

from foh.application.ports.publisher import EventPublisher

logger = logging.getLogger(__name__)

WAITER_VIEW = "waiter"
MANAGER_VIEW = "manager"
KITCHEN_VIEW = "kitchen"
ADMIN_VIEW = "admin"

VIEWS = (WAITER_VIEW, MANAGER_VIEW, KITCHEN_VIEW, ADMIN_VIEW)
VIEW_CHANNEL_PREFIX = "views:"


def view_channel(view: str) -> str:
    return f"{VIEW_CHANNEL_PREFIX}{view}"


class ViewRefresher:
    """Tells connected dashboards that their data changed.

    Publishing is best effort: a broken broker is logged and the caller's
    write still succeeds.
    """

    def __init__(self, publisher: EventPublisher) -> None:
        self._publisher = publisher

    def notify(self, views: Iterable[str], message: str) -> None:
        for view in views:
            try:
                self._publisher.publish(channel=view_channel(view), message=message)
            except Exception:
                logger.warning("view_refresh_publish_failed", extra={"view": view}, exc_info=True)
