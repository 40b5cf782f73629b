"""Logging initialization."""

from __future__ import annotations

import os
import logging

from gateway_bridge.config.logging import LOG_LEVEL, LOG_FORMAT, NOISY_CLIENT_LOGGERS, ENV_SHOW_CLIENT_LOGS


def configure_logging(level: str | None = None) -> None:
    # httpx logs every request at INFO; keep client libraries quiet unless asked.
    if (os.getenv(ENV_SHOW_CLIENT_LOGS) or "").strip().lower() not in {"1", "true", "yes"}:
        for name in NOISY_CLIENT_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)


__all__ = ["configure_logging"]
