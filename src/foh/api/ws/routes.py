from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from foh.api.ws.manager import ConnectionManager
from foh.application.ports.security import SessionTokenCodec
from foh.application.use_cases.view_refresh import VIEWS
from foh.domain.access.policy import required_roles
from foh.infrastructure.security.tokens import SESSION_COOKIE_NAME

router = APIRouter()
logger = logging.getLogger(__name__)


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    view = websocket.query_params.get("view")
    if view not in VIEWS:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason="unknown view")
        return

    codec: SessionTokenCodec = websocket.app.state.codec
    token = websocket.cookies.get(SESSION_COOKIE_NAME)
    session = codec.decode(token) if token else None
    allowed = required_roles("/" + view)
    if session is None or (allowed is not None and session.role not in allowed):
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason="not allowed")
        return

    manager: ConnectionManager = websocket.app.state.ws_manager
    await manager.register(websocket=websocket, view=view, user_id=session.user_id)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await manager.unregister(websocket)
    except Exception:
        logger.exception("ws_connection_error", extra={"view": view})
        await manager.unregister(websocket)
