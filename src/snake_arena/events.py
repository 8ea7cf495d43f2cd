"""Signals produced by the engine on each tick."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from snake_arena.collision import CollisionKind
from snake_arena.grid import GridPosition
from snake_arena.snake import Direction


@dataclass(frozen=True)
class GameOverEvent:
    """Fired once on a tick where the head hit a wall or the body."""

    tick: int
    kind: CollisionKind
    length: int
    score: int

    def to_dict(self) -> dict:
        return {
            "type": "game_over",
            "tick": self.tick,
            "kind": self.kind.value,
            "length": self.length,
            "score": self.score,
        }


@dataclass(frozen=True)
class GrowthEvent:
    """Fired once on a tick where the head landed on food."""

    tick: int
    position: GridPosition
    length: int

    def to_dict(self) -> dict:
        return {
            "type": "growth",
            "tick": self.tick,
            "position": list(self.position),
            "length": self.length,
        }


Event = GameOverEvent | GrowthEvent
EventListener = Callable[[Event], None]


@dataclass(frozen=True)
class TickResult:
    """Summary of a single :meth:`GameEngine.advance` call."""

    tick: int
    heading: Direction
    head: GridPosition
    collision: CollisionKind = CollisionKind.NONE
    grew: bool = False
    events: tuple[Event, ...] = field(default_factory=tuple)

    @property
    def game_over(self) -> bool:
        return self.collision is not CollisionKind.NONE

    def to_dict(self) -> dict:
        """Serialize the tick summary to a dictionary."""
        return {
            "tick": self.tick,
            "heading": self.heading.name.lower(),
            "head": list(self.head),
            "collision": self.collision.value,
            "grew": self.grew,
            "events": [e.to_dict() for e in self.events],
        }
