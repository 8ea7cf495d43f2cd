"""Snake representation and movement logic."""

from __future__ import annotations

import enum
from collections.abc import Iterable

from snake_arena.grid import GridPosition


class InvariantViolation(RuntimeError):
    """Raised when engine state would become corrupt.

    This signals a programming defect, never a game-rule outcome.
    """


class Direction(enum.Enum):
    """Cardinal headings with (dx, dy) deltas. ``UP`` increases ``y``."""

    LEFT = (-1, 0)
    UP = (0, 1)
    RIGHT = (1, 0)
    DOWN = (0, -1)

    @property
    def opposite(self) -> Direction:
        """Return the 180° reversed heading."""
        return _OPPOSITES[self]

    @classmethod
    def from_name(cls, name: str) -> Direction:
        """Parse a heading name such as ``"up"`` or ``"LEFT"``."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown direction: {name!r}.") from None


_OPPOSITES: dict[Direction, Direction] = {
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
}


def resolve_heading(
    current: Direction, requested: Direction | None,
) -> Direction:
    """Adopt *requested* unless it is missing or reverses *current*."""
    if requested is None or requested is current.opposite:
        return current
    return requested


class Snake:
    """A snake represented as an ordered list of body segments.

    The head is ``segments[0]``; the tail is ``segments[-1]``. The list is
    only mutated through :meth:`step` and :meth:`grow`.
    """

    def __init__(
        self,
        segments: Iterable[GridPosition],
        heading: Direction = Direction.UP,
    ) -> None:
        self.segments: list[GridPosition] = [GridPosition(*p) for p in segments]
        if not self.segments:
            raise ValueError("Snake must have at least one segment.")
        self.heading = heading

    @classmethod
    def spawn(
        cls,
        start: GridPosition,
        heading: Direction = Direction.UP,
        length: int = 2,
    ) -> Snake:
        """Build a straight snake whose body trails opposite to *heading*."""
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        dx, dy = heading.value
        return cls(
            (GridPosition(start.x - dx * i, start.y - dy * i) for i in range(length)),
            heading,
        )

    def __len__(self) -> int:
        return len(self.segments)

    @property
    def head(self) -> GridPosition:
        """Return the head coordinate."""
        return self.segments[0]

    @property
    def tail(self) -> GridPosition:
        """Return the tail coordinate."""
        return self.segments[-1]

    @property
    def body(self) -> tuple[GridPosition, ...]:
        """Return every segment except the head."""
        return tuple(self.segments[1:])

    def step(
        self, heading: Direction | None = None,
    ) -> tuple[GridPosition, GridPosition]:
        """Move the snake exactly one cell.

        Returns ``(new_head, vacated_tail)``. The vacated tail is captured
        before any segment moves. Length is unchanged.
        """
        if heading is not None:
            self.heading = heading
        vacated = self.segments[-1]
        new_head = self.segments[0].translate(self.heading)
        # Each segment takes its predecessor's old cell; the old tail drops off.
        self.segments[1:] = self.segments[:-1]
        self.segments[0] = new_head
        return new_head, vacated

    def grow(self, at: GridPosition) -> None:
        """Append a new tail segment at *at*.

        *at* must be the tail cell vacated by the most recent :meth:`step`,
        which is always adjacent to the current tail.
        """
        at = GridPosition(*at)
        if not at.is_adjacent(self.tail):
            raise InvariantViolation(
                f"Cannot grow at {tuple(at)}: not adjacent to tail "
                f"{tuple(self.tail)}.",
            )
        self.segments.append(at)

    def occupies(self, pos: GridPosition) -> bool:
        """Check whether the snake occupies a given cell."""
        return pos in self.segments

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "segments": [list(seg) for seg in self.segments],
            "heading": self.heading.name.lower(),
            "length": len(self.segments),
        }
