from __future__ import annotations

import asyncio

import pytest

from gateway_bridge.runtime.memory import MemoryWatchdog, current_memory_mb


@pytest.mark.asyncio
async def test_watchdog_fires_once_above_ceiling() -> None:
    fired = asyncio.Event()
    calls = 0

    def on_exceeded() -> None:
        nonlocal calls
        calls += 1
        fired.set()

    watchdog = MemoryWatchdog(
        max_memory_mb=100,
        tick_s=0.01,
        on_exceeded=on_exceeded,
        usage_fn=lambda: 150.0,
    )
    task = watchdog.start()
    assert task is not None

    await asyncio.wait_for(fired.wait(), timeout=1.0)
    await asyncio.wait_for(task, timeout=1.0)
    assert calls == 1

    await watchdog.stop()


@pytest.mark.asyncio
async def test_watchdog_stays_quiet_below_ceiling() -> None:
    calls = 0

    def on_exceeded() -> None:
        nonlocal calls
        calls += 1

    watchdog = MemoryWatchdog(
        max_memory_mb=100,
        tick_s=0.01,
        on_exceeded=on_exceeded,
        usage_fn=lambda: 50.0,
    )
    watchdog.start()
    await asyncio.sleep(0.05)
    await watchdog.stop()

    assert calls == 0


@pytest.mark.asyncio
async def test_zero_ceiling_disables_watchdog() -> None:
    watchdog = MemoryWatchdog(max_memory_mb=0, tick_s=0.01, on_exceeded=lambda: None)

    assert watchdog.start() is None
    await watchdog.stop()


def test_current_memory_is_positive() -> None:
    assert current_memory_mb() > 0
