"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    arena_width: int = Field(default=10, ge=4, le=100)
    arena_height: int = Field(default=10, ge=4, le=100)
    move_interval_ms: int = Field(default=500, ge=20, le=5000)
    food_interval_ms: int = Field(default=1000, ge=20, le=10000)
    max_food: int = Field(default=1, ge=1)
    food_avoids_snake: bool = False
    seed: int | None = None


class DirectionRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/direction."""

    direction: str | None = None


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    tick: int
    score: int
    deaths: int
    arena_width: int
    arena_height: int
    move_interval_ms: int
    running: bool
