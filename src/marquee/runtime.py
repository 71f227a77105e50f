# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Composition root wiring the shared cache and subscription registry.

The application builds exactly one :class:`Runtime` at startup and passes
``runtime.cache`` and ``runtime.registry`` to whatever needs them.  The
runtime owns the background housekeeping tasks and the process-exit hook
that cancels any subscription still alive.

Typical use::

    runtime = build_runtime()
    async with runtime:
        ...  # serve the application
"""

from __future__ import annotations

import atexit
import logging

from marquee.cache.manager import CacheManager
from marquee.core.config import Settings, get_settings
from marquee.core.logging import configure_logging
from marquee.scheduler.periodic import PeriodicTask
from marquee.subscriptions.registry import SubscriptionRegistry

logger = logging.getLogger("marquee.runtime")


class Runtime:
    """Owns the process-wide cache, registry and their lifecycle."""

    def __init__(
        self,
        cache: CacheManager,
        registry: SubscriptionRegistry,
        settings: Settings,
    ) -> None:
        self.cache = cache
        self.registry = registry
        self.settings = settings
        self._tasks: list[PeriodicTask] = [
            PeriodicTask("cache-cleanup", settings.cache_cleanup_interval, cache.cleanup),
        ]
        if settings.cache_log_stats:
            self._tasks.append(
                PeriodicTask("cache-stats", settings.cache_stats_interval, cache.log_stats)
            )
        self._teardown_installed = False

    @property
    def tasks(self) -> list[PeriodicTask]:
        return list(self._tasks)

    @property
    def running(self) -> bool:
        return any(task.running for task in self._tasks)

    def install_teardown_hook(self) -> None:
        """Cancel all subscriptions at interpreter exit.

        Installed at most once per runtime and never removed.
        """
        if self._teardown_installed:
            return
        atexit.register(self.registry.cancel_all)
        self._teardown_installed = True
        logger.debug("Process-exit subscription teardown installed")

    async def start(self) -> None:
        """Start housekeeping tasks and install the teardown hook."""
        self.install_teardown_hook()
        for task in self._tasks:
            await task.start()
        logger.info("Runtime started with %d housekeeping tasks", len(self._tasks))

    async def stop(self, *, cancel_subscriptions: bool = True) -> None:
        """Stop housekeeping tasks, optionally cancelling live subscriptions."""
        for task in self._tasks:
            await task.stop()
        if cancel_subscriptions:
            self.registry.cancel_all()
        logger.info("Runtime stopped")

    async def __aenter__(self) -> Runtime:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()


def build_runtime(settings: Settings | None = None, *, setup_logs: bool = True) -> Runtime:
    """Create a :class:`Runtime` from :class:`Settings`.

    Unless *setup_logs* is false, the ``marquee`` logger is configured from
    ``settings.log_level`` and ``settings.log_format`` first.
    """
    settings = settings or get_settings()
    if setup_logs:
        configure_logging(settings)
    cache = CacheManager(
        max_size=settings.cache_max_size,
        default_ttl=settings.cache_default_ttl,
    )
    return Runtime(cache=cache, registry=SubscriptionRegistry(), settings=settings)
