from __future__ import annotations

import asyncio
import logging
from collections import defaultdict

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Websocket clients grouped by the view they are watching."""

    def __init__(self) -> None:
        self._connections: dict[str, set[WebSocket]] = defaultdict(set)
        self._socket_to_view: dict[WebSocket, str] = {}
        self._lock = asyncio.Lock()

    async def register(self, websocket: WebSocket, view: str, user_id: str) -> None:
        await websocket.accept()
        async with self._lock:
            self._connections[view].add(websocket)
            self._socket_to_view[websocket] = view
        logger.info("ws_client_connected", extra={"view": view, "user_id": user_id})

    async def unregister(self, websocket: WebSocket) -> None:
        async with self._lock:
            view = self._socket_to_view.pop(websocket, None)
            if view is None:
                return
            sockets = self._connections.get(view)
            if sockets is not None:
                sockets.discard(websocket)
                if not sockets:
                    self._connections.pop(view, None)
        logger.info("ws_client_disconnected", extra={"view": view})

    def connection_count(self, view: str) -> int:
        return len(self._connections.get(view, ()))

    async def broadcast(self, view: str, message: str) -> None:
        async with self._lock:
            targets = list(self._connections.get(view, set()))

        stale: list[WebSocket] = []
        for websocket in targets:
            try:
                await websocket.send_text(message)
            except Exception:
                stale.append(websocket)

        for websocket in stale:
            await self.unregister(websocket)
        if stale:
            logger.info("ws_stale_clients_dropped", extra={"view": view, "count": len(stale)})
