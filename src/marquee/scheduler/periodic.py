# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""PeriodicTask: a cancellable asyncio loop that runs a callable on an interval.

Used for housekeeping such as the cache expiry sweep and periodic stats
logging.  Cadence is best effort; nothing may rely on a tick happening at a
precise time.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable

from marquee.core.exceptions import ConfigurationError

logger = logging.getLogger("marquee.scheduler.periodic")


class PeriodicTask:
    """Run ``func`` every ``interval`` seconds between ``start()`` and ``stop()``."""

    def __init__(self, name: str, interval: float, func: Callable[[], object]) -> None:
        if interval <= 0:
            raise ConfigurationError(f"{name} interval must be positive, got {interval}")
        self._name = name
        self._interval = interval
        self._func = func
        self._task: asyncio.Task[None] | None = None
        self._running = False
        self._ticks = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._running

    @property
    def ticks(self) -> int:
        """Number of completed ticks, failed ones included."""
        return self._ticks

    async def start(self) -> None:
        """Start the background loop."""
        if self._running:
            return
        self._running = True
        self._task = asyncio.create_task(self._loop(), name=f"periodic:{self._name}")
        logger.info("Periodic task %s started (interval=%ss)", self._name, self._interval)

    async def stop(self) -> None:
        """Cancel the loop and wait for it to finish."""
        self._running = False
        if self._task is not None:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
            logger.info("Periodic task %s stopped", self._name)

    async def _loop(self) -> None:
        while self._running:
            await asyncio.sleep(self._interval)
            self.run_once()

    def run_once(self) -> None:
        """Run a single tick; failures are logged, never raised."""
        try:
            self._func()
        except Exception:
            logger.exception("Periodic task %s failed", self._name)
        finally:
            self._ticks += 1
