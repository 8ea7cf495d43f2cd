"""Tick-based game engine composing snake, collision, and food logic."""

from __future__ import annotations

import enum
import logging

import numpy as np

from snake_arena import collision
from snake_arena.collision import CollisionKind
from snake_arena.config import GameConfig
from snake_arena.events import (
    Event,
    EventListener,
    GameOverEvent,
    GrowthEvent,
    TickResult,
)
from snake_arena.food import FoodSpawner
from snake_arena.grid import Arena, GridPosition
from snake_arena.snake import Direction, InvariantViolation, Snake, resolve_heading

logger = logging.getLogger(__name__)


class GameState(enum.Enum):
    """States of the engine's restart cycle."""

    RUNNING = "running"
    GAME_OVER = "game_over"


class GameEngine:
    """Single-snake, tick-based game engine.

    The engine owns the arena, snake, food spawner and the transient growth
    bookkeeping. Each call to :meth:`advance` runs one tick in a fixed
    order: input, step, collision, eating, growth. A collision resets the
    session within the same tick, so the engine is always ``RUNNING``
    between ticks.
    """

    def __init__(self, config: GameConfig | None = None) -> None:
        cfg = config or GameConfig()
        self.config = cfg
        self.arena = Arena(width=cfg.arena_width, height=cfg.arena_height)
        self.rng = np.random.default_rng(cfg.seed)
        self.food = FoodSpawner(
            self.arena,
            max_food=cfg.max_food,
            rng=self.rng,
            avoid_snake=cfg.food_avoids_snake,
        )

        self.tick = 0
        self.deaths = 0
        self.state = GameState.RUNNING
        self._listeners: list[EventListener] = []
        self._new_life()

    def _new_life(self) -> None:
        """(Re)create the starting snake and clear per-life state."""
        cfg = self.config
        self.snake = Snake.spawn(
            cfg.start_position, cfg.start_heading, cfg.start_length,
        )
        self.score = 0
        self.pending_growth = 0
        self.last_tail_position: GridPosition | None = None
        self._held_direction: Direction | None = None

    # ------------------------------------------------------------------
    # Input and subscriptions
    # ------------------------------------------------------------------

    def set_direction(self, direction: Direction | None) -> None:
        """Record the currently held direction key (``None`` = no key).

        The value is sampled once at the start of the next tick; later calls
        before that tick overwrite earlier ones.
        """
        self._held_direction = direction

    def subscribe(self, listener: EventListener) -> None:
        """Register a callable invoked with every emitted event."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def advance(self) -> TickResult:
        """Advance the game by one tick and return what happened."""
        self.tick += 1

        # 1. input
        heading = resolve_heading(self.snake.heading, self._held_direction)

        # 2. step; the body is captured before the shift for collision checks.
        pre_shift_body = self.snake.body
        new_head, vacated = self.snake.step(heading)
        self.last_tail_position = vacated

        # 3. collision
        kind = collision.check(
            new_head, pre_shift_body, self.arena.width, self.arena.height,
        )
        if kind is not CollisionKind.NONE:
            return self._game_over(kind, heading, new_head)

        events: list[Event] = []

        # 4-5. eating
        eaten = self.food.consume_at(new_head)
        if eaten:
            self.pending_growth += eaten
            self.score += eaten

        # 6. growth
        grew = False
        if self.pending_growth > 0:
            self._apply_growth()
            grew = True

        if eaten:
            events.append(
                GrowthEvent(tick=self.tick, position=new_head, length=len(self.snake)),
            )
            logger.debug(
                "Food eaten at (%d, %d) on tick %d; length %d.",
                new_head.x, new_head.y, self.tick, len(self.snake),
            )

        result = TickResult(
            tick=self.tick,
            heading=heading,
            head=new_head,
            grew=grew,
            events=tuple(events),
        )
        self._emit(result.events)
        return result

    def _apply_growth(self) -> None:
        """Append one segment at the tail cell vacated by this tick's step."""
        if self.last_tail_position is None:
            raise InvariantViolation(
                "Growth requested without a vacated tail position.",
            )
        self.snake.grow(self.last_tail_position)
        self.pending_growth -= 1
        self.last_tail_position = None

    def _game_over(
        self, kind: CollisionKind, heading: Direction, new_head: GridPosition,
    ) -> TickResult:
        """Enter ``GAME_OVER``, emit one event, and restart immediately."""
        self.state = GameState.GAME_OVER
        event = GameOverEvent(
            tick=self.tick, kind=kind, length=len(self.snake), score=self.score,
        )
        self.deaths += 1
        logger.info(
            "Game over (%s) at tick %d with score %d and length %d.",
            kind.value, self.tick, self.score, len(self.snake),
        )
        self.reset()
        result = TickResult(
            tick=self.tick,
            heading=heading,
            head=new_head,
            collision=kind,
            events=(event,),
        )
        self._emit(result.events)
        return result

    def reset(self) -> None:
        """Clear all food and body state and return to ``RUNNING``."""
        self.food.clear()
        self._new_life()
        self.state = GameState.RUNNING

    def _emit(self, events: tuple[Event, ...]) -> None:
        for event in events:
            for listener in list(self._listeners):
                listener(event)

    # ------------------------------------------------------------------
    # Food cadence and state
    # ------------------------------------------------------------------

    def spawn_food(self) -> list[GridPosition]:
        """Place food if below the cap. Called on the food cadence."""
        return self.food.spawn(occupied=self.snake.segments)

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        cells = self.arena.snapshot(self.snake.segments, self.food.positions)
        return {
            "tick": self.tick,
            "state": self.state.value,
            "score": self.score,
            "deaths": self.deaths,
            "pending_growth": self.pending_growth,
            "arena": {**self.arena.to_dict(), "cells": cells.tolist()},
            "snake": self.snake.to_dict(),
            "food": self.food.to_dict(),
        }
