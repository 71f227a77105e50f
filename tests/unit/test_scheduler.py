# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for the periodic housekeeping task."""

from __future__ import annotations

import asyncio
import logging

import pytest

from marquee.core.exceptions import ConfigurationError
from marquee.scheduler.periodic import PeriodicTask


class TestPeriodicTask:
    @pytest.mark.parametrize("interval", [0, -1.5])
    def test_rejects_non_positive_interval(self, interval: float) -> None:
        with pytest.raises(ConfigurationError, match="bad interval must be positive"):
            PeriodicTask("bad", interval, lambda: None)

    def test_run_once(self) -> None:
        calls: list[int] = []
        task = PeriodicTask("sweep", 60, lambda: calls.append(1))
        task.run_once()
        assert calls == [1]
        assert task.ticks == 1

    def test_run_once_logs_failures(self, caplog: pytest.LogCaptureFixture) -> None:
        def explode() -> None:
            raise RuntimeError("sweep failed")

        task = PeriodicTask("sweep", 60, explode)
        with caplog.at_level(logging.ERROR, logger="marquee.scheduler.periodic"):
            task.run_once()
        assert task.ticks == 1
        assert "Periodic task sweep failed" in caplog.text

    async def test_runs_on_interval_until_stopped(self) -> None:
        calls: list[int] = []
        task = PeriodicTask("sweep", 0.01, lambda: calls.append(1))

        await task.start()
        assert task.running is True
        await asyncio.sleep(0.1)
        await task.stop()

        assert task.running is False
        seen = len(calls)
        assert seen >= 2
        await asyncio.sleep(0.05)
        assert len(calls) == seen

    async def test_start_is_idempotent(self) -> None:
        task = PeriodicTask("sweep", 10, lambda: None)
        await task.start()
        first = task._task
        await task.start()
        assert task._task is first
        await task.stop()

    async def test_stop_without_start(self) -> None:
        task = PeriodicTask("sweep", 10, lambda: None)
        await task.stop()
        assert task.running is False

    async def test_failing_tick_keeps_loop_alive(self) -> None:
        calls: list[int] = []

        def flaky() -> None:
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("first tick fails")

        task = PeriodicTask("flaky", 0.01, flaky)
        await task.start()
        await asyncio.sleep(0.1)
        await task.stop()
        assert len(calls) >= 2
