import random
from enum import Enum
from typing import Optional, Tuple

from .config import GameConfig
from .controls import DirectionFilter
from .food import FoodSpawner
from .state import Direction, GameState, GameStatus, Point


class TickEvent(str, Enum):
    """What a single tick did."""

    SKIPPED = "skipped"  # Not playing, nothing happened
    MOVED = "moved"
    ATE = "ate"
    HIT_WALL = "hit_wall"
    HIT_SELF = "hit_self"

    @property
    def fatal(self) -> bool:
        return self in (TickEvent.HIT_WALL, TickEvent.HIT_SELF)


class SnakeGame:
    """Snake state machine driven one tick at a time."""

    def __init__(self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None):
        """Initialize the game in the idle state.

        Args:
            config: Grid size, starting snake and speed settings
            rng: Random source for food placement
        """
        self.config = config or GameConfig()
        self.grid_size = self.config.grid_size
        self.spawner = FoodSpawner(self.grid_size, rng)
        self.directions = DirectionFilter(self.config.initial_direction)
        self.snake: list[Point] = []
        self.food: Point = Point(0, 0)
        self.direction: Direction = self.config.initial_direction
        self.score: int = 0
        self.speed: int = self.config.initial_speed
        self.status: GameStatus = GameStatus.IDLE
        self._lay_out()

    def _lay_out(self) -> None:
        """Put the starting snake, direction, score and speed in place."""
        self.snake = self.config.snake_points()
        self.direction = self.config.initial_direction
        self.directions.reset(self.direction)
        self.score = 0
        self.speed = self.config.initial_speed
        self.food = self.spawner.spawn(self.snake)

    def start(self) -> bool:
        """Begin a new run from Idle or GameOver.

        Returns:
            False if a run is already in progress (nothing changes)
        """
        if self.status not in (GameStatus.IDLE, GameStatus.GAME_OVER):
            return False

        self._lay_out()
        self.status = GameStatus.PLAYING
        return True

    def toggle_pause(self) -> GameStatus:
        """Switch between Playing and Paused. Other states are left alone."""
        if self.status == GameStatus.PLAYING:
            self.status = GameStatus.PAUSED
        elif self.status == GameStatus.PAUSED:
            self.status = GameStatus.PLAYING
        return self.status

    def request_direction(self, direction: Direction) -> bool:
        """Queue a direction change for the next tick, refusing reversals."""
        return self.directions.request(direction)

    def _check_collision(self, position: Point) -> Optional[TickEvent]:
        if not position.in_bounds(self.grid_size):
            return TickEvent.HIT_WALL

        # Compared against the whole body, tail included, even though
        # the tail would move away on a non-growing tick
        if position in self.snake:
            return TickEvent.HIT_SELF

        return None

    def tick(self) -> Tuple[GameState, TickEvent]:
        """Advance the snake by one cell.

        Returns:
            Tuple of (GameState, TickEvent). A fatal move switches the
            game to GameOver and leaves the snake where it was.
        """
        if self.status != GameStatus.PLAYING:
            return self.get_state(), TickEvent.SKIPPED

        # Recorded as processed even when the move turns out fatal
        self.direction = self.directions.consume()
        new_head = self.snake[0] + self.direction.delta

        collision = self._check_collision(new_head)
        if collision is not None:
            self.status = GameStatus.GAME_OVER
            return self.get_state(), collision

        self.snake.insert(0, new_head)

        if new_head == self.food:
            self.score += 1
            self.speed = max(self.config.min_speed, self.speed - self.config.speed_decrement)
            self.food = self.spawner.spawn(self.snake)
            return self.get_state(), TickEvent.ATE

        self.snake.pop()
        return self.get_state(), TickEvent.MOVED

    def get_state(self) -> GameState:
        """Get the current game state.

        High score and commentary are not tracked here and keep their
        defaults; the lifecycle controller fills them in.
        """
        return GameState(
            snake=list(self.snake),
            food=self.food,
            direction=self.direction,
            status=self.status,
            score=self.score,
            speed=self.speed,
            grid_size=self.grid_size,
        )
