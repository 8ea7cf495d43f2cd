"""WebSocket handler for real-time play."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from snake_arena.server.session_manager import SessionManager
from snake_arena.snake import Direction

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


def _parse_direction(raw: str) -> tuple[bool, Direction | None]:
    """Return ``(valid, direction)`` for a client message.

    ``{"direction": null}`` releases the held key.
    """
    try:
        msg = json.loads(raw)
    except json.JSONDecodeError:
        return False, None
    if not isinstance(msg, dict) or "direction" not in msg:
        return False, None

    value = msg["direction"]
    if value is None:
        return True, None
    if not isinstance(value, str):
        return False, None
    try:
        return True, Direction.from_name(value)
    except ValueError:
        return False, None


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Send directions, receive tick events and state after every move."""
    session = _get_manager(websocket).get_session(session_id)
    if session is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    session.sockets.append(websocket)
    logger.info("Client connected to session %s.", session_id)

    # Initial snapshot so the client can draw before the first tick.
    await websocket.send_text(
        json.dumps(
            {"tick": session.engine.tick, "events": [],
             "state": session.engine.get_state()},
            separators=(",", ":"),
        ),
    )

    try:
        while True:
            raw = await websocket.receive_text()
            valid, direction = _parse_direction(raw)
            if valid:
                session.engine.set_direction(direction)
    except WebSocketDisconnect:
        logger.info("Client disconnected from session %s.", session_id)
    finally:
        if websocket in session.sockets:
            session.sockets.remove(websocket)
