"""Secrets and authentication configuration."""

from __future__ import annotations

ENV_DISCORD_BOT_TOKEN = "DISCORD_BOT_TOKEN"
ENV_DISCORD_GATEWAY_SECRET = "DISCORD_GATEWAY_SECRET"


__all__ = [
    "ENV_DISCORD_BOT_TOKEN",
    "ENV_DISCORD_GATEWAY_SECRET",
]
