"""Game configuration with JSON persistence."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from snake_arena.grid import GridPosition
from snake_arena.snake import Direction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Arena, starting snake, cadence and food settings for a session.

    Supports JSON serialization for reproducibility.
    """

    # Arena
    arena_width: int = 10
    arena_height: int = 10

    # Starting snake
    start_x: int = 3
    start_y: int = 3
    start_length: int = 2
    start_heading: Direction = Direction.UP

    # Cadences, in seconds
    move_interval: float = 0.5
    food_interval: float = 1.0

    # Food
    max_food: int = 1
    food_avoids_snake: bool = False
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.arena_width < 4 or self.arena_height < 4:
            raise ValueError("arena_width and arena_height must each be at least 4.")
        if self.start_length < 1:
            raise ValueError("start_length must be at least 1.")
        if self.max_food < 1:
            raise ValueError("max_food must be at least 1.")
        if self.move_interval <= 0 or self.food_interval <= 0:
            raise ValueError("move_interval and food_interval must be positive.")

        dx, dy = self.start_heading.value
        for i in range(self.start_length):
            x = self.start_x - dx * i
            y = self.start_y - dy * i
            if not (0 <= x < self.arena_width and 0 <= y < self.arena_height):
                raise ValueError(
                    "start snake does not fit the configured arena; adjust "
                    "start_x/start_y or reduce start_length."
                )

    @property
    def start_position(self) -> GridPosition:
        return GridPosition(self.start_x, self.start_y)

    def to_dict(self) -> dict:
        """Serialize to a plain dict (heading stored by name)."""
        d = asdict(self)
        d["start_heading"] = self.start_heading.name.lower()
        return d

    @classmethod
    def from_dict(cls, raw: dict) -> GameConfig:
        """Build a config from a plain dict, parsing the heading name."""
        data = dict(raw)
        if isinstance(data.get("start_heading"), str):
            data["start_heading"] = Direction.from_name(data["start_heading"])
        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        return cls.from_dict(json.loads(Path(path).read_text()))
