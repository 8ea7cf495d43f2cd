"""Arena bounds, cell coordinates, and occupancy snapshots."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from typing import TYPE_CHECKING, NamedTuple

import numpy as np

if TYPE_CHECKING:
    from snake_arena.snake import Direction


class GridPosition(NamedTuple):
    """An integer (x, y) cell coordinate. ``y`` grows upwards."""

    x: int
    y: int

    def translate(self, direction: Direction) -> GridPosition:
        """Return the neighbouring cell one step along *direction*."""
        dx, dy = direction.value
        return GridPosition(self.x + dx, self.y + dy)

    def is_adjacent(self, other: GridPosition) -> bool:
        """Check whether *other* shares an edge with this cell."""
        return abs(self.x - other.x) + abs(self.y - other.y) == 1


class CellType(enum.IntEnum):
    """Integer codes stored in an arena snapshot."""

    EMPTY = 0
    BODY = 1
    HEAD = 2
    FOOD = 3


class Arena:
    """Fixed-size discrete arena of ``width`` × ``height`` cells.

    Snapshots are NumPy arrays indexed ``[y, x]`` so that row 0 is the
    bottom edge of the arena.
    """

    def __init__(self, width: int = 10, height: int = 10) -> None:
        if width < 4 or height < 4:
            raise ValueError("Arena dimensions must be at least 4×4.")
        self.width = width
        self.height = height

    def in_bounds(self, pos: GridPosition) -> bool:
        """Check whether a coordinate lies within the arena."""
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def cells(self) -> list[GridPosition]:
        """Return every cell of the arena in row-major order."""
        return [
            GridPosition(x, y)
            for y in range(self.height)
            for x in range(self.width)
        ]

    def free_cells(self, occupied: Iterable[GridPosition]) -> list[GridPosition]:
        """Return the cells not present in *occupied*."""
        taken = set(occupied)
        return [pos for pos in self.cells() if pos not in taken]

    def snapshot(
        self,
        segments: Iterable[GridPosition],
        food: Iterable[GridPosition] = (),
    ) -> np.ndarray:
        """Paint snake segments and food into a fresh occupancy array.

        The head is the first segment. Cells outside the arena are skipped.
        """
        cells = np.full((self.height, self.width), CellType.EMPTY, dtype=np.int8)
        for pos in food:
            if self.in_bounds(pos):
                cells[pos.y, pos.x] = CellType.FOOD
        for i, pos in enumerate(segments):
            if self.in_bounds(pos):
                cells[pos.y, pos.x] = CellType.HEAD if i == 0 else CellType.BODY
        return cells

    def to_dict(self) -> dict:
        """Serialize arena dimensions to a dictionary."""
        return {"width": self.width, "height": self.height}
