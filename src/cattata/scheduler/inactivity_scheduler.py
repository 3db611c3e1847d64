"""Periodic inactivity check.

Fires a job on a fixed interval for the lifetime of the process and hands
each successful result to a notifier. A tick that fails is logged and the
schedule carries on. Only one job runs at a time: a tick that fires while
the previous one is still running is skipped.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Generic, TypeVar

from cattata.util.logger import get_logger

logger = get_logger("inactivity_scheduler")

T = TypeVar("T")


class InactivityScheduler(Generic[T]):
    """
    Fixed-interval runner for the inactivity check.

    Args:
        job: Async callable producing the evaluation result.
        on_result: Async callable receiving each successful result, or ``None``
            to discard results.
        get_interval: Callable returning the interval in seconds (called at start).
        name: Tag used in log messages.
    """

    def __init__(
        self,
        job: Callable[[], Awaitable[T]],
        on_result: Callable[[T], Awaitable[None]] | None,
        get_interval: Callable[[], float],
        name: str = "INACTIVITY",
    ) -> None:
        self._job = job
        self._on_result = on_result
        self._get_interval = get_interval
        self._name = name
        self._task: asyncio.Task | None = None
        self._tick_task: asyncio.Task | None = None
        self._running = asyncio.Lock()

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def tick_in_progress(self) -> bool:
        return self._running.locked()

    async def run_once(self) -> bool:
        """Run one tick now.

        Returns:
            True if the job and notifier completed, False if the tick was
            skipped or failed.
        """
        if self._running.locked():
            logger.warning("[%s] Previous check still running; skipping this tick", self._name)
            return False

        async with self._running:
            try:
                result = await self._job()
                if self._on_result is not None:
                    await self._on_result(result)
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("[%s] Error during scheduled inactive user check", self._name)
                return False
        return True

    async def _run_loop(self, interval: float) -> None:
        """Sleep until the next fire time, start a tick, repeat."""
        loop = asyncio.get_running_loop()
        next_fire = loop.time() + interval
        logger.info("[%s] Starting periodic check (interval=%.1fs)", self._name, interval)
        try:
            while True:
                await asyncio.sleep(max(0.0, next_fire - loop.time()))
                next_fire += interval
                if self._tick_task is not None and not self._tick_task.done():
                    logger.warning("[%s] Previous check still running; skipping this tick", self._name)
                    continue
                # Ticks run beside the loop so a slow check cannot delay the next fire time
                self._tick_task = asyncio.create_task(self.run_once())
        except asyncio.CancelledError:
            logger.info("[%s] Periodic check cancelled", self._name)
            raise

    def start(self) -> None:
        """Start the background loop unless it is already running."""
        if self.is_running:
            logger.warning("[%s] Scheduler already running", self._name)
            return
        interval = self._get_interval()
        if interval <= 0:
            raise ValueError(f"Scheduler interval must be positive, got {interval}")
        self._task = asyncio.create_task(self._run_loop(interval))

    async def shutdown(self) -> None:
        """Cancel the loop and any in-flight tick."""
        for task in (self._task, self._tick_task):
            if task and not task.done():
                task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    pass
        self._task = None
        self._tick_task = None
        logger.info("[%s] Scheduler shutdown complete", self._name)
