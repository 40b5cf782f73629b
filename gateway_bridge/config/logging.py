"""Logging configuration."""

from __future__ import annotations

import os

LOG_LEVEL = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

ENV_SHOW_CLIENT_LOGS = "SHOW_CLIENT_LOGS"
# Third-party client loggers kept at WARNING unless SHOW_CLIENT_LOGS is set.
NOISY_CLIENT_LOGGERS = ("httpx", "httpcore", "websockets")

__all__ = ["LOG_LEVEL", "LOG_FORMAT", "ENV_SHOW_CLIENT_LOGS", "NOISY_CLIENT_LOGGERS"]
