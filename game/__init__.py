"""Snake game core: state machine, input filtering and run lifecycle."""

from game.config import GameConfig, load_config
from game.engine import SnakeGame, TickEvent
from game.lifecycle import GameController
from game.state import Direction, GameState, GameStatus, Point

__all__ = [
    "Direction",
    "GameConfig",
    "GameController",
    "GameState",
    "GameStatus",
    "Point",
    "SnakeGame",
    "TickEvent",
    "load_config",
]
