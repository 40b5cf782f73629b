"""Gateway connection state machine states."""

from __future__ import annotations

import enum


class ConnectionState(enum.Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    AWAITING_HELLO = "awaiting_hello"
    AUTHENTICATING = "authenticating"
    READY = "ready"
    CLOSING = "closing"


__all__ = ["ConnectionState"]
