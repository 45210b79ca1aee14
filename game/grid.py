"""Board projections of a GameState for renderers."""

from __future__ import annotations

from enum import IntEnum

import numpy as np

from .state import GameState, GameStatus


class Cell(IntEnum):
    EMPTY = 0
    BODY = 1
    HEAD = 2
    FOOD = 3


CELL_GLYPHS = {
    Cell.EMPTY: ".",
    Cell.BODY: "o",
    Cell.HEAD: "@",
    Cell.FOOD: "*",
}


def to_grid(state: GameState) -> np.ndarray:
    """Convert a snapshot to a (grid_size, grid_size) cell matrix indexed [y, x].

    Head wins over body and body over food when cells overlap.
    """
    grid = np.full((state.grid_size, state.grid_size), Cell.EMPTY, dtype=np.int8)

    food = state.food
    if food.in_bounds(state.grid_size):
        grid[food.y, food.x] = Cell.FOOD

    for part in state.snake[1:]:
        if part.in_bounds(state.grid_size):
            grid[part.y, part.x] = Cell.BODY

    if state.snake and state.head.in_bounds(state.grid_size):
        grid[state.head.y, state.head.x] = Cell.HEAD

    return grid


def render_text(state: GameState) -> str:
    """Render the board as text, one row per line, with a status footer."""
    grid = to_grid(state)
    rows = ["".join(CELL_GLYPHS[Cell(int(v))] for v in row) for row in grid]

    footer = f"score {state.score}  best {state.high_score}"
    if state.status != GameStatus.PLAYING:
        footer += f"  [{state.status.value}]"
    return "\n".join(rows + [footer])
