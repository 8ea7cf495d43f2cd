"""Food placement and eating checks."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np

from snake_arena.grid import GridPosition

if TYPE_CHECKING:
    from snake_arena.grid import Arena

logger = logging.getLogger(__name__)


def check_eating(head: GridPosition, food_position: GridPosition) -> bool:
    """Return True when the head sits exactly on the food cell."""
    return head == food_position


class FoodSpawner:
    """Manages food placement in the arena.

    Positions are drawn uniformly at random from a seeded NumPy RNG. By
    default the snake's cells are not excluded, so food may land under the
    body; pass ``avoid_snake=True`` to draw only from free cells.
    """

    def __init__(
        self,
        arena: Arena,
        max_food: int = 1,
        rng: np.random.Generator | None = None,
        avoid_snake: bool = False,
    ) -> None:
        if max_food < 1:
            raise ValueError("max_food must be at least 1.")
        self.arena = arena
        self.max_food = max_food
        self.rng = rng if rng is not None else np.random.default_rng()
        self.avoid_snake = avoid_snake
        self.positions: list[GridPosition] = []

    def spawn(
        self, occupied: Iterable[GridPosition] = (),
    ) -> list[GridPosition]:
        """Place one food if below the cap.

        Returns the list of newly spawned positions (empty or one item).
        """
        if len(self.positions) >= self.max_food:
            return []

        if self.avoid_snake:
            candidates = self.arena.free_cells(list(occupied) + self.positions)
            if not candidates:
                logger.warning("No free cells available for food spawning.")
                return []
            pos = candidates[int(self.rng.integers(len(candidates)))]
        else:
            pos = GridPosition(
                int(self.rng.integers(self.arena.width)),
                int(self.rng.integers(self.arena.height)),
            )

        self.positions.append(pos)
        logger.debug("Food spawned at (%d, %d).", pos.x, pos.y)
        return [pos]

    def consume_at(self, head: GridPosition) -> int:
        """Remove every food under *head*. Returns how many were eaten."""
        eaten = [p for p in self.positions if check_eating(head, p)]
        for pos in eaten:
            self.positions.remove(pos)
        return len(eaten)

    def remove(self, pos: GridPosition) -> bool:
        """Remove a food at the given position. Returns True if removed."""
        if pos in self.positions:
            self.positions.remove(pos)
            return True
        return False

    def clear(self) -> None:
        """Remove all food."""
        self.positions.clear()

    def to_dict(self) -> dict:
        """Serialize food state to a dictionary."""
        return {
            "positions": [list(p) for p in self.positions],
            "max_food": self.max_food,
        }
