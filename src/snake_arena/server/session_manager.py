"""In-memory session registry and per-session tick drivers."""

from __future__ import annotations

import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from snake_arena.config import GameConfig
from snake_arena.engine import GameEngine
from snake_arena.events import TickResult
from snake_arena.scheduler import TickDriver
from snake_arena.server.models import SessionSummary

logger = logging.getLogger(__name__)

_MAX_SESSIONS = 100


@dataclass
class GameSession:
    """All state for a single running game."""

    session_id: str
    engine: GameEngine
    driver: TickDriver | None = None
    sockets: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)

    def summary(self) -> SessionSummary:
        cfg = self.engine.config
        return SessionSummary(
            session_id=self.session_id,
            tick=self.engine.tick,
            score=self.engine.score,
            deaths=self.engine.deaths,
            arena_width=cfg.arena_width,
            arena_height=cfg.arena_height,
            move_interval_ms=round(cfg.move_interval * 1000),
            running=self.driver is not None and self.driver.running,
        )


class SessionManager:
    """Central registry managing all game sessions."""

    def __init__(self, max_sessions: int = _MAX_SESSIONS) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1.")
        self._sessions: dict[str, GameSession] = {}
        self._max_sessions = max_sessions

    def create_session(
        self, config: GameConfig | None = None, start: bool = True,
    ) -> GameSession:
        """Create a session and, when *start* is set, start its driver.

        Starting requires a running event loop.
        """
        if len(self._sessions) >= self._max_sessions:
            raise ValueError("Session limit reached. Try again later.")

        session_id = uuid.uuid4().hex[:12]
        session = GameSession(session_id=session_id, engine=GameEngine(config))

        async def _on_tick(result: TickResult) -> None:
            await self._broadcast(session, result)

        session.driver = TickDriver(session.engine, on_tick=_on_tick)
        if start:
            session.driver.start()
        self._sessions[session_id] = session
        logger.info("Session %s created.", session_id)
        return session

    def get_session(self, session_id: str) -> GameSession | None:
        return self._sessions.get(session_id)

    def list_sessions(self) -> list[SessionSummary]:
        return [s.summary() for s in self._sessions.values()]

    async def remove_session(self, session_id: str) -> None:
        """Stop a session's driver, close its sockets, and forget it."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        await self._shutdown(session)
        logger.info("Session %s removed.", session_id)

    async def _shutdown(self, session: GameSession) -> None:
        if session.driver is not None:
            await session.driver.stop()
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Session closed.")
            except Exception:
                logger.warning(
                    "Failed closing socket in session %s.", session.session_id,
                )
        session.sockets.clear()

    async def _broadcast(self, session: GameSession, result: TickResult) -> None:
        """Send the tick summary and state to every connected socket."""
        payload = json.dumps(
            {
                "tick": result.tick,
                "events": [e.to_dict() for e in result.events],
                "state": session.engine.get_state(),
            },
            separators=(",", ":"),
        )
        dead: list[WebSocket] = []

        # Iterate over a snapshot so disconnect handlers can mutate the list.
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in session.sockets:
                session.sockets.remove(ws)

    async def cleanup(self) -> None:
        """Stop every session's driver."""
        sessions = list(self._sessions.values())
        self._sessions.clear()
        for session in sessions:
            await self._shutdown(session)
        logger.info("SessionManager cleanup complete.")
