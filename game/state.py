"""Core value types shared by the Snake engine, controller and renderers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Point:
    """A single grid cell."""

    x: int
    y: int

    def __add__(self, other: tuple[int, int]) -> Point:
        dx, dy = other
        return Point(self.x + dx, self.y + dy)

    def in_bounds(self, grid_size: int) -> bool:
        return 0 <= self.x < grid_size and 0 <= self.y < grid_size

    def to_dict(self) -> dict[str, int]:
        return {"x": self.x, "y": self.y}


class Direction(str, Enum):
    """Movement directions."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> tuple[int, int]:
        return DIRECTION_VECTORS[self]

    @property
    def opposite(self) -> Direction:
        return OPPOSITE_DIRECTIONS[self]


# Direction vectors: (dx, dy), y grows downwards
DIRECTION_VECTORS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

OPPOSITE_DIRECTIONS: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class GameStatus(str, Enum):
    """Lifecycle of a single run."""

    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass
class GameState:
    """Snapshot of a Snake game, as handed to renderers."""

    snake: list[Point]  # Head first
    food: Point
    direction: Direction = Direction.UP
    status: GameStatus = GameStatus.IDLE
    score: int = 0
    high_score: int = 0
    speed: int = 150  # Tick period in milliseconds
    commentary: str | None = None
    commentary_pending: bool = False
    grid_size: int = 20

    @property
    def head(self) -> Point:
        return self.snake[0]

    def to_dict(self) -> dict:
        """Convert GameState to a dictionary for JSON serialization."""
        return {
            "snake": [p.to_dict() for p in self.snake],
            "food": self.food.to_dict(),
            "direction": self.direction.value,
            "status": self.status.value,
            "score": self.score,
            "high_score": self.high_score,
            "speed": self.speed,
            "commentary": self.commentary,
            "commentary_pending": self.commentary_pending,
            "grid_size": self.grid_size,
        }
