"""Player input handling: reversal filtering and keyboard bindings."""

from __future__ import annotations

from .state import Direction

# Keyboard bindings, matched against KeyboardEvent.key values
KEY_DIRECTIONS: dict[str, Direction] = {
    "ArrowUp": Direction.UP,
    "w": Direction.UP,
    "W": Direction.UP,
    "ArrowDown": Direction.DOWN,
    "s": Direction.DOWN,
    "S": Direction.DOWN,
    "ArrowLeft": Direction.LEFT,
    "a": Direction.LEFT,
    "A": Direction.LEFT,
    "ArrowRight": Direction.RIGHT,
    "d": Direction.RIGHT,
    "D": Direction.RIGHT,
}
START_KEYS = {"Enter", " "}
PAUSE_KEYS = {"p", "P"}


class DirectionFilter:
    """Buffers direction requests between ticks.

    Reversal checks compare against the direction the last tick actually
    applied, so several quick requests between two ticks cannot chain
    into a 180-degree turn.
    """

    def __init__(self, direction: Direction = Direction.UP):
        self.pending = direction
        self.last_processed = direction

    def reset(self, direction: Direction) -> None:
        self.pending = direction
        self.last_processed = direction

    def request(self, direction: Direction) -> bool:
        """Queue a direction for the next tick.

        Returns:
            False if the request was rejected as a reversal
        """
        if direction == self.last_processed.opposite:
            return False
        self.pending = direction
        return True

    def consume(self) -> Direction:
        """Return the pending direction and mark it as processed."""
        self.last_processed = self.pending
        return self.pending
