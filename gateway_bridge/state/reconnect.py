"""Reconnect attempt counter driving exponential backoff."""

from __future__ import annotations

from dataclasses import dataclass

from gateway_bridge.config.gateway import RECONNECT_BACKOFF_MAX_S, RECONNECT_BACKOFF_BASE_S


@dataclass(slots=True)
class ReconnectState:
    attempts: int = 0

    def next_delay(self) -> float:
        """Count a failed connection and return the delay before the next attempt."""
        self.attempts += 1
        return float(min(RECONNECT_BACKOFF_BASE_S**self.attempts, RECONNECT_BACKOFF_MAX_S))

    def reset(self) -> None:
        self.attempts = 0


__all__ = ["ReconnectState"]
