"""Process memory ceiling enforcement."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from collections.abc import Callable

import psutil

from gateway_bridge.config.limits import BYTES_PER_MB

logger = logging.getLogger(__name__)

UsageFn = Callable[[], float]


def current_memory_mb() -> float:
    return psutil.Process().memory_info().rss / BYTES_PER_MB


class MemoryWatchdog:
    """Periodically compare resident memory with a ceiling.

    When the ceiling is exceeded the watchdog logs a warning, calls
    ``on_exceeded`` once and exits; restarting the process is left to whatever
    supervises it. A ceiling of 0 disables the check.
    """

    def __init__(
        self,
        *,
        max_memory_mb: int,
        tick_s: float,
        on_exceeded: Callable[[], None],
        usage_fn: UsageFn | None = None,
    ) -> None:
        self._max_memory_mb = max(0, int(max_memory_mb))
        self._tick_s = float(tick_s)
        self._on_exceeded = on_exceeded
        self._usage_fn = usage_fn or current_memory_mb
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task | None = None

    def start(self) -> asyncio.Task | None:
        if self._max_memory_mb <= 0:
            return None
        if self._task is None:
            self._task = asyncio.create_task(self._watchdog_loop())
        return self._task

    async def stop(self) -> None:
        self._stop_event.set()
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await self._task
        self._task = None

    async def _watchdog_loop(self) -> None:
        try:
            while not self._stop_event.is_set():
                await asyncio.sleep(self._tick_s)
                if self._stop_event.is_set():
                    break
                usage_mb = self._usage_fn()
                if usage_mb > self._max_memory_mb:
                    logger.warning(
                        "Memory limit (%dMB) exceeded (%.1fMB), restarting...",
                        self._max_memory_mb,
                        usage_mb,
                    )
                    self._stop_event.set()
                    self._on_exceeded()
                    break
        except asyncio.CancelledError:
            return
        except Exception:
            logger.debug("memory watchdog exiting due to unexpected error", exc_info=True)


__all__ = ["MemoryWatchdog", "current_memory_mb"]
