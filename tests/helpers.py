from __future__ import annotations

import asyncio
import random
from collections.abc import Sequence
from typing import Any

from game.config import GameConfig
from game.engine import SnakeGame
from game.state import Direction, Point


def make_game(
    snake: Sequence[tuple[int, int]],
    direction: Direction,
    food: tuple[int, int],
    *,
    seed: int = 0,
    **config: Any,
) -> SnakeGame:
    """Return a playing game with the board forced into a given layout."""
    game = SnakeGame(GameConfig(**config), rng=random.Random(seed))
    game.start()
    game.snake = [Point(x, y) for x, y in snake]
    game.direction = direction
    game.directions.reset(direction)
    game.food = Point(*food)
    return game


class FakeCommentator:
    """Commentator that answers immediately and records its calls."""

    def __init__(self, text: str = "nice try") -> None:
        self.text = text
        self.calls: list[tuple[int, int]] = []

    async def generate(self, score: int, high_score: int) -> str:
        self.calls.append((score, high_score))
        return self.text


class GatedCommentator:
    """Commentator that only answers once ``release()`` is called."""

    def __init__(self, text: str = "late remark") -> None:
        self.text = text
        self.calls: list[tuple[int, int]] = []
        self._gate = asyncio.Event()

    def release(self) -> None:
        self._gate.set()

    async def generate(self, score: int, high_score: int) -> str:
        self.calls.append((score, high_score))
        await self._gate.wait()
        return self.text


class RaisingCommentator:
    """Commentator that breaks its never-raise contract."""

    def __init__(self) -> None:
        self.calls: list[tuple[int, int]] = []

    async def generate(self, score: int, high_score: int) -> str:
        self.calls.append((score, high_score))
        raise RuntimeError("service exploded")
