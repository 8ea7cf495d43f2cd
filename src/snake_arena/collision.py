"""Boundary and self-collision checks for a proposed head position."""

from __future__ import annotations

import enum
from collections.abc import Iterable

from snake_arena.grid import GridPosition


class CollisionKind(enum.Enum):
    """Outcome of a collision check."""

    NONE = "none"
    WALL = "wall"
    SELF = "self"


def in_wall(pos: GridPosition, arena_width: int, arena_height: int) -> bool:
    """Check whether *pos* lies outside the arena."""
    return (
        pos.x < 0
        or pos.y < 0
        or pos.x >= arena_width
        or pos.y >= arena_height
    )


def hits_body(pos: GridPosition, body: Iterable[GridPosition]) -> bool:
    """Check whether *pos* overlaps any of *body*."""
    return pos in set(body)


def check(
    new_head: GridPosition,
    body: Iterable[GridPosition],
    arena_width: int,
    arena_height: int,
) -> CollisionKind:
    """Classify the head position produced by a step.

    *body* must be the segments excluding the head as they stood before the
    step shifted them. The tail cell about to be vacated still counts.
    When the head is both out of bounds and on the body only ``WALL`` is
    reported, so a tick yields at most one collision.
    """
    if in_wall(new_head, arena_width, arena_height):
        return CollisionKind.WALL
    if hits_body(new_head, body):
        return CollisionKind.SELF
    return CollisionKind.NONE
