"""Fixed-period tick loop on top of asyncio."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Optional

from .engine import TickEvent
from .lifecycle import GameController
from .state import GameState, GameStatus

TickCallback = Callable[[GameState, TickEvent], None]


class TickDriver:
    """Calls ``controller.tick()`` once per period while a run is playing.

    The timer is keyed on the (status, period) pair. Whenever either
    changes it is re-armed: stopped outside Playing, restarted with the
    new period otherwise. ``sync()`` must be called after any lifecycle
    call made from outside the loop (start, pause); speed changes from
    ticks are picked up by the loop itself.
    """

    def __init__(self, controller: GameController, on_tick: Optional[TickCallback] = None):
        self.controller = controller
        self.on_tick = on_tick
        self._task: Optional[asyncio.Task] = None
        self._armed: Optional[tuple[GameStatus, int]] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def _key(self) -> tuple[GameStatus, int]:
        return self.controller.status, self.controller.speed

    def sync(self) -> None:
        """Re-arm the timer if status or period changed since it was armed."""
        key = self._key()
        if key == self._armed and (self.running or key[0] != GameStatus.PLAYING):
            return

        self.stop()
        if key[0] == GameStatus.PLAYING:
            self._armed = key
            self._task = asyncio.get_running_loop().create_task(self._run(key[1]))

    def stop(self) -> None:
        if self._task is not None and not self._task.done():
            if self._task is not asyncio.current_task():
                self._task.cancel()
        self._task = None
        self._armed = None

    async def _run(self, period_ms: int) -> None:
        while True:
            await asyncio.sleep(period_ms / 1000)
            state, event = self.controller.tick()
            if self.on_tick is not None:
                self.on_tick(state, event)

            key = self._key()
            if key[0] != GameStatus.PLAYING:
                self._task = None
                self._armed = None
                return
            if key[1] != period_ms:
                # Food sped the game up, next wait uses the new period
                self._armed = key
                period_ms = key[1]
