"""Inbox messages consumed by the connection processing loop.

The socket driver and the timers never touch connection state directly; they
post one of these onto the manager's queue and the single processing loop
applies them in order.
"""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SocketOpened:
    socket: Any


@dataclass(frozen=True, slots=True)
class FrameReceived:
    socket: Any
    raw: str | bytes


@dataclass(frozen=True, slots=True)
class SocketClosed:
    socket: Any
    code: int | None = None
    reason: str = ""


@dataclass(frozen=True, slots=True)
class ConnectFailed:
    error: BaseException


@dataclass(frozen=True, slots=True)
class HeartbeatDue:
    socket: Any


@dataclass(frozen=True, slots=True)
class HeartbeatStale:
    socket: Any


@dataclass(frozen=True, slots=True)
class ReconnectDue:
    pass


@dataclass(frozen=True, slots=True)
class StopRequested:
    pass


GatewaySignal = (
    SocketOpened
    | FrameReceived
    | SocketClosed
    | ConnectFailed
    | HeartbeatDue
    | HeartbeatStale
    | ReconnectDue
    | StopRequested
)

__all__ = [
    "SocketOpened",
    "FrameReceived",
    "SocketClosed",
    "ConnectFailed",
    "HeartbeatDue",
    "HeartbeatStale",
    "ReconnectDue",
    "StopRequested",
    "GatewaySignal",
]
