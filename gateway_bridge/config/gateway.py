"""Discord Gateway protocol configuration and constants."""

from __future__ import annotations

GATEWAY_VERSION = 10
GATEWAY_ENCODING = "json"
GATEWAY_QUERY = f"/?v={GATEWAY_VERSION}&encoding={GATEWAY_ENCODING}"

ENV_DISCORD_GATEWAY_URL = "DISCORD_GATEWAY_URL"
DEFAULT_DISCORD_GATEWAY_URL = f"wss://gateway.discord.gg{GATEWAY_QUERY}"

# Frame keys
FRAME_KEY_OP = "op"
FRAME_KEY_DATA = "d"
FRAME_KEY_SEQUENCE = "s"
FRAME_KEY_EVENT = "t"

# Opcodes
OP_DISPATCH = 0
OP_HEARTBEAT = 1
OP_IDENTIFY = 2
OP_RESUME = 6
OP_RECONNECT = 7
OP_INVALID_SESSION = 9
OP_HELLO = 10
OP_HEARTBEAT_ACK = 11

# Session lifecycle dispatch names (consumed, never forwarded)
EVENT_READY = "READY"
EVENT_RESUMED = "RESUMED"

FORWARDED_EVENTS: frozenset[str] = frozenset({
    "MESSAGE_CREATE",
    "MESSAGE_UPDATE",
    "MESSAGE_DELETE",
    "MESSAGE_REACTION_ADD",
    "MESSAGE_REACTION_REMOVE",
})

# GUILD_MESSAGES (1<<9), GUILD_MESSAGE_REACTIONS (1<<10), MESSAGE_CONTENT (1<<15)
ENV_DISCORD_GATEWAY_INTENTS = "DISCORD_GATEWAY_INTENTS"
DEFAULT_DISCORD_GATEWAY_INTENTS = (1 << 9) | (1 << 10) | (1 << 15)

CLIENT_NAME = "gateway-bridge"

DEFAULT_HEARTBEAT_INTERVAL_MS = 41250

# Reconnect policy
RECONNECT_BACKOFF_BASE_S = 2
RECONNECT_BACKOFF_MAX_S = 60
INVALID_SESSION_DELAY_MIN_S = 1.0
INVALID_SESSION_DELAY_MAX_S = 5.0

# Close codes. Anything other than 1000/1001 keeps the session resumable.
WS_CLOSE_NORMAL_CODE = 1000
WS_CLOSE_RESUMABLE_CODE = 4000
WS_CLOSE_STALE_REASON = "heartbeat not acknowledged"
WS_CLOSE_RECONNECT_REASON = "server requested reconnect"
WS_CLOSE_INVALID_SESSION_REASON = "invalid session"
WS_CLOSE_SHUTDOWN_REASON = "shutdown"

WS_MAX_MESSAGE_BYTES = 16 * 1024 * 1024

__all__ = [
    "GATEWAY_VERSION",
    "GATEWAY_ENCODING",
    "GATEWAY_QUERY",
    "ENV_DISCORD_GATEWAY_URL",
    "DEFAULT_DISCORD_GATEWAY_URL",
    "FRAME_KEY_OP",
    "FRAME_KEY_DATA",
    "FRAME_KEY_SEQUENCE",
    "FRAME_KEY_EVENT",
    "OP_DISPATCH",
    "OP_HEARTBEAT",
    "OP_IDENTIFY",
    "OP_RESUME",
    "OP_RECONNECT",
    "OP_INVALID_SESSION",
    "OP_HELLO",
    "OP_HEARTBEAT_ACK",
    "EVENT_READY",
    "EVENT_RESUMED",
    "FORWARDED_EVENTS",
    "ENV_DISCORD_GATEWAY_INTENTS",
    "DEFAULT_DISCORD_GATEWAY_INTENTS",
    "CLIENT_NAME",
    "DEFAULT_HEARTBEAT_INTERVAL_MS",
    "RECONNECT_BACKOFF_BASE_S",
    "RECONNECT_BACKOFF_MAX_S",
    "INVALID_SESSION_DELAY_MIN_S",
    "INVALID_SESSION_DELAY_MAX_S",
    "WS_CLOSE_NORMAL_CODE",
    "WS_CLOSE_RESUMABLE_CODE",
    "WS_CLOSE_STALE_REASON",
    "WS_CLOSE_RECONNECT_REASON",
    "WS_CLOSE_INVALID_SESSION_REASON",
    "WS_CLOSE_SHUTDOWN_REASON",
    "WS_MAX_MESSAGE_BYTES",
]
