from __future__ import annotations

import asyncio
import random

from game.config import GameConfig
from game.driver import TickDriver
from game.engine import SnakeGame, TickEvent
from game.lifecycle import GameController
from game.state import GameStatus, Point
from services.storage import MemoryStore
from tests.helpers import FakeCommentator

FAST = GameConfig(initial_speed=5, min_speed=1, speed_decrement=2)


def _controller(seed: int = 0) -> GameController:
    return GameController(SnakeGame(FAST, rng=random.Random(seed)), MemoryStore(), FakeCommentator())


async def _wait_until(predicate, timeout: float = 5.0) -> None:
    async def poll() -> None:
        while not predicate():
            await asyncio.sleep(0.001)

    await asyncio.wait_for(poll(), timeout)


def test_driver_ticks_until_game_over_then_stops() -> None:
    async def scenario() -> None:
        controller = _controller()
        events: list[TickEvent] = []
        driver = TickDriver(controller, on_tick=lambda state, event: events.append(event))

        controller.start()
        driver.sync()
        assert driver.running

        await _wait_until(lambda: controller.status == GameStatus.GAME_OVER)
        await asyncio.sleep(0)

        assert not driver.running
        assert events[-1].fatal
        assert all(not e.fatal for e in events[:-1])

        await controller.wait_for_commentary()

    asyncio.run(scenario())


def test_pause_stops_the_timer_and_resume_rearms_it() -> None:
    async def scenario() -> None:
        controller = _controller()
        ticks: list[TickEvent] = []
        driver = TickDriver(controller, on_tick=lambda state, event: ticks.append(event))

        controller.start()
        driver.sync()
        await _wait_until(lambda: len(ticks) >= 1)

        controller.toggle_pause()
        driver.sync()
        assert not driver.running
        count = len(ticks)
        await asyncio.sleep(0.03)
        assert len(ticks) == count

        controller.toggle_pause()
        driver.sync()
        assert driver.running
        driver.stop()
        assert not driver.running

    asyncio.run(scenario())


def test_timer_picks_up_new_speed_after_eating() -> None:
    async def scenario() -> None:
        controller = _controller()
        driver = TickDriver(controller)

        controller.start()
        controller.game.food = Point(10, 9)
        driver.sync()

        await _wait_until(lambda: controller.game.score >= 1 or not driver.running)
        assert controller.speed < FAST.initial_speed
        if driver.running:
            assert driver._armed == (GameStatus.PLAYING, controller.speed)

        driver.stop()

    asyncio.run(scenario())


def test_sync_is_idempotent_while_key_is_unchanged() -> None:
    async def scenario() -> None:
        controller = _controller()
        driver = TickDriver(controller)
        controller.start()

        driver.sync()
        task = driver._task
        driver.sync()
        assert driver._task is task

        driver.stop()

    asyncio.run(scenario())
