"""In-memory stand-ins for the socket, the connector and the timer scheduler."""

from __future__ import annotations

import json
import asyncio
from typing import Any
from collections.abc import Callable


class FakeTimer:
    def __init__(self, when: float, delay: float, callback: Callable[[], None]) -> None:
        self.when = when
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    @property
    def active(self) -> bool:
        return not self.cancelled and not self.fired

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Virtual clock: timers fire only when the test calls ``advance``."""

    def __init__(self) -> None:
        self.time = 0.0
        self.timers: list[FakeTimer] = []

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(self.time + delay_s, delay_s, callback)
        self.timers.append(timer)
        return timer

    def active_timers(self) -> list[FakeTimer]:
        return [t for t in self.timers if t.active]

    def advance(self, seconds: float) -> None:
        target = self.time + seconds
        while True:
            due = [t for t in self.timers if t.active and t.when <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.when)
            self.time = timer.when
            timer.fired = True
            timer.callback()
        self.time = target


class FakeSocket:
    def __init__(self) -> None:
        self.sent: list[str] = []
        self.closed = False
        self.close_code: int | None = None
        self.close_reason: str | None = None
        self._incoming: asyncio.Queue[str | None] = asyncio.Queue()

    def feed(self, frame: dict[str, Any]) -> None:
        self._incoming.put_nowait(json.dumps(frame))

    def feed_raw(self, raw: str) -> None:
        self._incoming.put_nowait(raw)

    def server_close(self, code: int = 1006, reason: str = "") -> None:
        self.close_code = code
        self.close_reason = reason
        self._incoming.put_nowait(None)

    def sent_frames(self) -> list[dict[str, Any]]:
        return [json.loads(s) for s in self.sent]

    def sent_ops(self) -> list[int]:
        return [f["op"] for f in self.sent_frames()]

    async def send(self, text: str) -> None:
        if self.closed:
            raise ConnectionError("socket is closed")
        self.sent.append(text)

    async def close(self, *, code: int = 1000, reason: str = "") -> None:
        if self.closed:
            return
        self.closed = True
        self.close_code = code
        self.close_reason = reason
        self._incoming.put_nowait(None)

    def __aiter__(self) -> FakeSocket:
        return self

    async def __anext__(self) -> str:
        item = await self._incoming.get()
        if item is None:
            raise StopAsyncIteration
        return item


class FakeConnector:
    def __init__(self, *, failures: int = 0) -> None:
        self.failures = failures
        self.urls: list[str] = []
        self.sockets: list[FakeSocket] = []

    @property
    def latest(self) -> FakeSocket:
        return self.sockets[-1]

    async def __call__(self, url: str) -> FakeSocket:
        self.urls.append(url)
        if self.failures > 0:
            self.failures -= 1
            raise OSError("connection refused")
        sock = FakeSocket()
        self.sockets.append(sock)
        return sock


async def drain(manager: Any, rounds: int = 3) -> None:
    """Let driver and close tasks run, then apply whatever they posted."""
    for _ in range(rounds):
        for _ in range(5):
            await asyncio.sleep(0)
        await manager.process_pending()


def hello(interval_ms: int = 45000) -> dict[str, Any]:
    return {"op": 10, "d": {"heartbeat_interval": interval_ms}, "s": None, "t": None}


def dispatch(name: str, data: Any, seq: int) -> dict[str, Any]:
    return {"op": 0, "d": data, "s": seq, "t": name}


def ready(seq: int = 1, session_id: str = "sess-1", resume_url: str = "wss://resume.example") -> dict[str, Any]:
    return dispatch("READY", {"session_id": session_id, "resume_gateway_url": resume_url}, seq)


def heartbeat_ack() -> dict[str, Any]:
    return {"op": 11, "d": None, "s": None, "t": None}


__all__ = [
    "FakeConnector",
    "FakeScheduler",
    "FakeSocket",
    "FakeTimer",
    "dispatch",
    "drain",
    "heartbeat_ack",
    "hello",
    "ready",
]
