from .frame import GatewayFrame
from .events import OutboundEvent
from .runtime import RuntimeDeps
from .session import SessionState
from .settings import AppSettings
from .heartbeat import HeartbeatState
from .reconnect import ReconnectState
from .connection import ConnectionState

__all__ = [
    "AppSettings",
    "ConnectionState",
    "GatewayFrame",
    "HeartbeatState",
    "OutboundEvent",
    "ReconnectState",
    "RuntimeDeps",
    "SessionState",
]
