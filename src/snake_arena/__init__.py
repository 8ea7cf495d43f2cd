"""Snake Arena — grid movement, growth, and collision engine."""

from snake_arena.collision import CollisionKind
from snake_arena.config import GameConfig
from snake_arena.engine import GameEngine, GameState
from snake_arena.events import GameOverEvent, GrowthEvent, TickResult
from snake_arena.food import FoodSpawner, check_eating
from snake_arena.grid import Arena, GridPosition
from snake_arena.scheduler import TickDriver
from snake_arena.snake import Direction, InvariantViolation, Snake, resolve_heading

__all__ = [
    "Arena",
    "CollisionKind",
    "Direction",
    "FoodSpawner",
    "GameConfig",
    "GameEngine",
    "GameOverEvent",
    "GameState",
    "GridPosition",
    "GrowthEvent",
    "InvariantViolation",
    "Snake",
    "TickDriver",
    "TickResult",
    "check_eating",
    "resolve_heading",
]
