"""Game configuration loading and validation."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, model_validator

from game.state import Direction, Point

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "configs" / "default.yaml"


class GameConfig(BaseModel):
    """Tunable constants for a Snake run.

    Speeds are tick periods in milliseconds, so a smaller value is faster.
    """

    grid_size: int = 20
    initial_snake: list[tuple[int, int]] = [(10, 10), (10, 11), (10, 12)]
    initial_direction: Direction = Direction.UP
    initial_speed: int = 150
    min_speed: int = 60
    speed_decrement: int = 2

    @model_validator(mode="after")
    def _check_consistency(self) -> GameConfig:
        if self.grid_size < 2:
            raise ValueError("grid_size must be at least 2")
        if self.min_speed <= 0 or self.speed_decrement < 0:
            raise ValueError("min_speed must be positive and speed_decrement non-negative")
        if self.initial_speed < self.min_speed:
            raise ValueError(
                f"initial_speed ({self.initial_speed}) is below min_speed ({self.min_speed})"
            )

        cells = self.snake_points()
        if not cells:
            raise ValueError("initial_snake must contain at least one cell")
        if len(set(cells)) != len(cells):
            raise ValueError("initial_snake cells must be distinct")
        for cell in cells:
            if not cell.in_bounds(self.grid_size):
                raise ValueError(f"initial_snake cell {cell} is outside the grid")
        for a, b in zip(cells, cells[1:]):
            if abs(a.x - b.x) + abs(a.y - b.y) != 1:
                raise ValueError("initial_snake cells must be orthogonally adjacent")
        if len(cells) > 1 and cells[0] + self.initial_direction.delta == cells[1]:
            raise ValueError(
                f"initial_direction {self.initial_direction.value} points back into the snake"
            )
        return self

    def snake_points(self) -> list[Point]:
        return [Point(x, y) for x, y in self.initial_snake]

    @property
    def initial_length(self) -> int:
        return len(self.initial_snake)


def load_config(path: str | Path | None = None) -> GameConfig:
    """Load configuration from a YAML file.

    Falls back to ``$SNAKE_CONFIG`` and then to ``configs/default.yaml``.
    A missing default file yields the built-in defaults.
    """
    if path is None:
        env_path = os.environ.get("SNAKE_CONFIG")
        path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH
        if not env_path and not path.exists():
            return GameConfig()

    with open(path) as f:
        data: dict[str, Any] = yaml.safe_load(f) or {}

    return GameConfig.model_validate(data.get("game", data))
