"""Keepalive state for one physical Gateway connection."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass


@dataclass(slots=True)
class HeartbeatState:
    interval_ms: int
    acked: bool = True
    # Pending timer handle (first jittered beat, then the periodic one).
    timer: Any = None


__all__ = ["HeartbeatState"]
