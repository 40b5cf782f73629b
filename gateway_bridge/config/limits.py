"""Process resource limits (memory ceiling watchdog)."""

from __future__ import annotations

ENV_GATEWAY_MAX_MEMORY_MB = "GATEWAY_MAX_MEMORY_MB"
DEFAULT_GATEWAY_MAX_MEMORY_MB = 128

ENV_GATEWAY_MEMORY_CHECK_INTERVAL_S = "GATEWAY_MEMORY_CHECK_INTERVAL_S"
DEFAULT_GATEWAY_MEMORY_CHECK_INTERVAL_S = 15.0

BYTES_PER_MB = 1024 * 1024

__all__ = [
    "ENV_GATEWAY_MAX_MEMORY_MB",
    "DEFAULT_GATEWAY_MAX_MEMORY_MB",
    "ENV_GATEWAY_MEMORY_CHECK_INTERVAL_S",
    "DEFAULT_GATEWAY_MEMORY_CHECK_INTERVAL_S",
    "BYTES_PER_MB",
]
