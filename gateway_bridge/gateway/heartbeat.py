"""Gateway keepalive: jittered first beat, periodic beats, ack tracking."""

from __future__ import annotations

import random
import logging
from typing import Any
from collections.abc import Callable

from gateway_bridge.state.heartbeat import HeartbeatState


class HeartbeatMonitor:
    """Owns the single heartbeat timer of a connection.

    The monitor never sends anything itself. On each tick it either reports a
    beat (``on_beat``) after marking the beat unacknowledged, or, when the
    previous beat was never acknowledged, stops and reports the connection as
    stale (``on_stale``).
    """

    def __init__(
        self,
        scheduler: Any,
        *,
        on_beat: Callable[[], None],
        on_stale: Callable[[], None],
        rng: random.Random | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._on_beat = on_beat
        self._on_stale = on_stale
        self._rng = rng or random.Random()
        self._logger = logger or logging.getLogger(__name__)
        self.state: HeartbeatState | None = None

    @property
    def running(self) -> bool:
        return self.state is not None and self.state.timer is not None

    def start(self, interval_ms: int) -> None:
        self.stop()
        state = HeartbeatState(interval_ms=int(interval_ms))
        self.state = state
        # Spread first beats across clients that connected together.
        first_delay_s = (state.interval_ms * self._rng.random()) / 1000.0
        state.timer = self._scheduler.call_later(first_delay_s, self._on_timer)
        self._logger.debug("heartbeat: first beat in %.3fs, then every %dms", first_delay_s, state.interval_ms)

    def stop(self) -> None:
        state = self.state
        if state is None:
            return
        if state.timer is not None:
            state.timer.cancel()
            state.timer = None
        self.state = None

    def ack(self) -> None:
        if self.state is not None:
            self.state.acked = True

    def _on_timer(self) -> None:
        state = self.state
        if state is None:
            return
        state.timer = self._scheduler.call_later(state.interval_ms / 1000.0, self._on_timer)

        if not state.acked:
            self._logger.warning("Heartbeat not acknowledged; treating connection as stale")
            self.stop()
            self._on_stale()
            return
        state.acked = False
        self._on_beat()


__all__ = ["HeartbeatMonitor"]
