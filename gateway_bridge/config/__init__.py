"""Configuration module exports (env names and protocol constants only)."""

from .gateway import (
    FORWARDED_EVENTS,
    DEFAULT_DISCORD_GATEWAY_URL,
)

__all__ = [
    "DEFAULT_DISCORD_GATEWAY_URL",
    "FORWARDED_EVENTS",
]
