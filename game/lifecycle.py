"""Run lifecycle: start/pause/restart, high scores and game-over commentary."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import replace
from typing import Protocol

from services.commentary import ERROR_MESSAGE
from services.storage import HIGH_SCORE_KEY, ScoreStore, load_high_score

from .controls import KEY_DIRECTIONS, PAUSE_KEYS, START_KEYS
from .engine import SnakeGame, TickEvent
from .state import Direction, GameState, GameStatus

Listener = Callable[[GameState], None]


class Commentator(Protocol):
    async def generate(self, score: int, high_score: int) -> str: ...


class GameController:
    """Drives a SnakeGame through its lifecycle.

    Owns the high score and the commentary for the last finished run,
    and notifies listeners with a full snapshot after every change.
    Must be used from inside a running asyncio event loop once a run
    can end, since commentary is fetched in a background task.
    """

    def __init__(self, game: SnakeGame, store: ScoreStore, commentator: Commentator):
        self.game = game
        self.store = store
        self.commentator = commentator
        self.high_score = load_high_score(store)
        self.commentary: str | None = None
        self.commentary_pending = False
        self.run_id = 0
        self._commentary_task: asyncio.Task | None = None
        self._listeners: list[Listener] = []

    @property
    def status(self) -> GameStatus:
        return self.game.status

    @property
    def speed(self) -> int:
        return self.game.speed

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _notify(self) -> GameState:
        state = self.snapshot()
        for listener in self._listeners:
            listener(state)
        return state

    def snapshot(self) -> GameState:
        return replace(
            self.game.get_state(),
            high_score=self.high_score,
            commentary=self.commentary,
            commentary_pending=self.commentary_pending,
        )

    def start(self) -> bool:
        """Start a new run (also used for restart after game over)."""
        if not self.game.start():
            return False

        # Any commentary still in flight belongs to the previous run
        self.run_id += 1
        self.commentary = None
        self.commentary_pending = False
        self._notify()
        return True

    def toggle_pause(self) -> GameStatus:
        before = self.game.status
        status = self.game.toggle_pause()
        if status != before:
            self._notify()
        return status

    def request_direction(self, direction: Direction) -> bool:
        """Forward a direction intent while a run is in progress.

        Accepted while paused too, so a button press made during a pause
        applies on resume.
        """
        if self.game.status not in (GameStatus.PLAYING, GameStatus.PAUSED):
            return False
        return self.game.request_direction(direction)

    def handle_key(self, key: str) -> bool:
        """Apply a keyboard key. Returns True if it had any effect."""
        if self.game.status in (GameStatus.IDLE, GameStatus.GAME_OVER):
            return key in START_KEYS and self.start()

        if key in PAUSE_KEYS:
            self.toggle_pause()
            return True

        # Arrow keys only steer while the snake is moving
        direction = KEY_DIRECTIONS.get(key)
        if direction is None or self.game.status != GameStatus.PLAYING:
            return False
        return self.request_direction(direction)

    def tick(self) -> tuple[GameState, TickEvent]:
        """Run one simulation step and publish the result."""
        _, event = self.game.tick()
        if event == TickEvent.SKIPPED:
            return self.snapshot(), event

        if event.fatal:
            self.on_game_over()
        return self._notify(), event

    def on_game_over(self) -> None:
        """Commit the high score and ask for commentary on the finished run."""
        final_score = self.game.score
        if final_score > self.high_score:
            self.high_score = final_score
            self.store.set(HIGH_SCORE_KEY, final_score)

        self.commentary = None
        self.commentary_pending = True
        loop = asyncio.get_running_loop()
        self._commentary_task = loop.create_task(
            self._deliver_commentary(self.run_id, final_score, self.high_score)
        )

    async def _deliver_commentary(self, run_id: int, score: int, high_score: int) -> None:
        try:
            text = await self.commentator.generate(score, high_score)
        except Exception as e:
            print(f"Error generating commentary: {e}")
            text = ERROR_MESSAGE

        if run_id != self.run_id:
            # A newer run started while we were waiting
            return

        self.commentary = text
        self.commentary_pending = False
        self._notify()

    async def wait_for_commentary(self) -> None:
        """Wait for the outstanding commentary request, if any."""
        if self._commentary_task is not None:
            await self._commentary_task

    def close(self) -> None:
        """Drop listeners and cancel any outstanding commentary request."""
        self._listeners.clear()
        if self._commentary_task is not None and not self._commentary_task.done():
            self._commentary_task.cancel()
