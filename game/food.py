import random
from collections.abc import Iterable
from typing import Optional

from .state import Point


class FoodSpawner:
    """Places food on a random free cell of a square grid."""

    def __init__(self, grid_size: int, rng: Optional[random.Random] = None):
        self.grid_size = grid_size
        self.rng = rng or random.Random()

    def spawn(self, occupied: Iterable[Point]) -> Point:
        """Draw random cells until one is not occupied.

        The caller guarantees the grid is not full, otherwise this never returns.
        """
        taken = set(occupied)
        while True:
            candidate = Point(
                self.rng.randrange(self.grid_size),
                self.rng.randrange(self.grid_size),
            )
            if candidate not in taken:
                return candidate
