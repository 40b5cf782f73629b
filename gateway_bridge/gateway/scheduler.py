"""Timer capability backed by the running asyncio loop."""

from __future__ import annotations

import asyncio
from collections.abc import Callable


class LoopScheduler:
    """Creates cancellable timers on the event loop.

    The connection and heartbeat code only ever call ``call_later``, so tests
    can swap in a virtual clock with the same method.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self._get_loop().call_later(max(0.0, float(delay_s)), callback)


__all__ = ["LoopScheduler"]
