"""Fixed-timestep asyncio driver for the movement and food cadences."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from snake_arena.engine import GameEngine
from snake_arena.events import TickResult

logger = logging.getLogger(__name__)

TickCallback = Callable[[TickResult], Awaitable[None]]


class TickDriver:
    """Runs an engine on two independent periodic tasks.

    The movement task advances the engine every ``move_interval`` seconds
    and then awaits ``on_tick``; the food task spawns food every
    ``food_interval`` seconds. Both run on the current event loop, and no
    engine call awaits, so ticks never interleave.
    """

    def __init__(
        self,
        engine: GameEngine,
        move_interval: float | None = None,
        food_interval: float | None = None,
        on_tick: TickCallback | None = None,
    ) -> None:
        self.engine = engine
        self.move_interval = (
            move_interval if move_interval is not None
            else engine.config.move_interval
        )
        self.food_interval = (
            food_interval if food_interval is not None
            else engine.config.food_interval
        )
        if self.move_interval <= 0 or self.food_interval <= 0:
            raise ValueError("Tick intervals must be positive.")
        self.on_tick = on_tick
        self._tasks: list[asyncio.Task] = []

    @property
    def running(self) -> bool:
        return any(not t.done() for t in self._tasks)

    def start(self) -> None:
        """Schedule both cadences on the running event loop."""
        if self.running:
            raise RuntimeError("TickDriver is already running.")
        self._tasks = [
            asyncio.create_task(self._movement_loop()),
            asyncio.create_task(self._food_loop()),
        ]
        logger.info(
            "TickDriver started (move=%.3fs, food=%.3fs).",
            self.move_interval, self.food_interval,
        )

    async def stop(self) -> None:
        """Cancel both cadences and wait for them to finish."""
        for task in self._tasks:
            if not task.done():
                task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []
        logger.info("TickDriver stopped at tick %d.", self.engine.tick)

    async def _movement_loop(self) -> None:
        try:
            while True:
                await asyncio.sleep(self.move_interval)
                result = self.engine.advance()
                if self.on_tick is not None:
                    await self.on_tick(result)
        except asyncio.CancelledError:
            logger.debug("Movement cadence cancelled.")
            raise
        except Exception:
            logger.exception("Movement cadence failed at tick %d.", self.engine.tick)
            self._cancel_others()

    async def _food_loop(self) -> None:
        try:
            while True:
                await asyncio.sleep(self.food_interval)
                self.engine.spawn_food()
        except asyncio.CancelledError:
            logger.debug("Food cadence cancelled.")
            raise
        except Exception:
            logger.exception("Food cadence failed.")
            self._cancel_others()

    def _cancel_others(self) -> None:
        current = asyncio.current_task()
        for task in self._tasks:
            if task is not current and not task.done():
                task.cancel()
