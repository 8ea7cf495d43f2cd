"""Tests for the grid module."""

import numpy as np
import pytest

from snake_arena.grid import Arena, CellType, GridPosition
from snake_arena.snake import Direction


class TestGridPosition:
    def test_value_semantics(self):
        assert GridPosition(3, 4) == GridPosition(3, 4)
        assert hash(GridPosition(3, 4)) == hash(GridPosition(3, 4))
        assert len({GridPosition(1, 1), GridPosition(1, 1)}) == 1

    def test_translate(self):
        pos = GridPosition(5, 5)
        assert pos.translate(Direction.LEFT) == (4, 5)
        assert pos.translate(Direction.RIGHT) == (6, 5)
        assert pos.translate(Direction.UP) == (5, 6)
        assert pos.translate(Direction.DOWN) == (5, 4)

    def test_is_adjacent(self):
        pos = GridPosition(2, 2)
        assert pos.is_adjacent(GridPosition(2, 3))
        assert pos.is_adjacent(GridPosition(1, 2))
        assert not pos.is_adjacent(GridPosition(3, 3))
        assert not pos.is_adjacent(pos)


class TestArenaInit:
    def test_default_dimensions(self):
        arena = Arena()
        assert arena.width == 10
        assert arena.height == 10

    def test_minimum_size_enforced(self):
        with pytest.raises(ValueError, match="at least 4"):
            Arena(width=3, height=4)
        with pytest.raises(ValueError, match="at least 4"):
            Arena(width=4, height=3)


class TestArenaOperations:
    def test_in_bounds(self):
        arena = Arena(width=5, height=6)
        assert arena.in_bounds(GridPosition(0, 0))
        assert arena.in_bounds(GridPosition(4, 5))
        assert not arena.in_bounds(GridPosition(-1, 0))
        assert not arena.in_bounds(GridPosition(5, 0))
        assert not arena.in_bounds(GridPosition(0, 6))

    def test_cells_and_free_cells(self):
        arena = Arena(width=4, height=4)
        assert len(arena.cells()) == 16
        free = arena.free_cells([GridPosition(0, 0), GridPosition(1, 1)])
        assert len(free) == 14
        assert GridPosition(0, 0) not in free

    def test_snapshot_indexes_by_y_then_x(self):
        arena = Arena(width=5, height=4)
        cells = arena.snapshot(
            [GridPosition(3, 1), GridPosition(2, 1)], [GridPosition(0, 3)],
        )
        assert cells.shape == (4, 5)
        assert cells[1, 3] == CellType.HEAD
        assert cells[1, 2] == CellType.BODY
        assert cells[3, 0] == CellType.FOOD
        assert np.count_nonzero(cells) == 3

    def test_snapshot_skips_out_of_bounds(self):
        arena = Arena(width=4, height=4)
        cells = arena.snapshot([GridPosition(4, 0)])
        assert np.all(cells == CellType.EMPTY)

    def test_to_dict(self):
        assert Arena(width=6, height=7).to_dict() == {"width": 6, "height": 7}
