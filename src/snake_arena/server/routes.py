"""REST API route handlers for session lifecycle and input."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response

from snake_arena.config import GameConfig
from snake_arena.server.models import (
    CreateSessionRequest,
    DirectionRequest,
    SessionSummary,
)
from snake_arena.snake import Direction

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _get_manager(request: Request):
    return request.app.state.session_manager


def _get_session(request: Request, session_id: str):
    session = _get_manager(request).get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found.")
    return session


@router.post("", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a session and start its tick driver."""
    try:
        config = GameConfig(
            arena_width=body.arena_width,
            arena_height=body.arena_height,
            move_interval=body.move_interval_ms / 1000.0,
            food_interval=body.food_interval_ms / 1000.0,
            max_food=body.max_food,
            food_avoids_snake=body.food_avoids_snake,
            seed=body.seed,
        )
        session = _get_manager(request).create_session(config)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return session.summary()


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List all sessions."""
    return _get_manager(request).list_sessions()


@router.get("/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Get session metadata and full game state."""
    session = _get_session(request, session_id)
    return {
        **session.summary().model_dump(),
        "state": session.engine.get_state(),
    }


@router.post("/{session_id}/direction")
async def set_direction(
    session_id: str, body: DirectionRequest, request: Request,
) -> dict:
    """Set (or release, with ``null``) the held direction key."""
    session = _get_session(request, session_id)
    direction = None
    if body.direction is not None:
        try:
            direction = Direction.from_name(body.direction)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
    session.engine.set_direction(direction)
    return {
        "session_id": session_id,
        "direction": direction.name.lower() if direction else None,
    }


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: str, request: Request) -> Response:
    """Stop and remove a session."""
    try:
        await _get_manager(request).remove_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return Response(status_code=204)
