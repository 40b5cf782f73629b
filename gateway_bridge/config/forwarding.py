"""Outbound HTTP relay configuration."""

from __future__ import annotations

ENV_GATEWAY_FORWARD_URL = "GATEWAY_FORWARD_URL"

ENV_GATEWAY_FORWARD_TIMEOUT_S = "GATEWAY_FORWARD_TIMEOUT_S"
DEFAULT_GATEWAY_FORWARD_TIMEOUT_S = 10.0

# Upper bound on waiting for in-flight forwards at shutdown.
ENV_GATEWAY_FORWARD_DRAIN_TIMEOUT_S = "GATEWAY_FORWARD_DRAIN_TIMEOUT_S"
DEFAULT_GATEWAY_FORWARD_DRAIN_TIMEOUT_S = 5.0

FORWARD_SOURCE_TAG = "discord-gateway"
FORWARD_BODY_TYPE = "gateway_event"

HEADER_GATEWAY_SOURCE = "X-Gateway-Source"
HEADER_GATEWAY_SECRET = "X-Gateway-Secret"
HEADER_CONTENT_TYPE = "Content-Type"
CONTENT_TYPE_JSON = "application/json"

__all__ = [
    "ENV_GATEWAY_FORWARD_URL",
    "ENV_GATEWAY_FORWARD_TIMEOUT_S",
    "DEFAULT_GATEWAY_FORWARD_TIMEOUT_S",
    "ENV_GATEWAY_FORWARD_DRAIN_TIMEOUT_S",
    "DEFAULT_GATEWAY_FORWARD_DRAIN_TIMEOUT_S",
    "FORWARD_SOURCE_TAG",
    "FORWARD_BODY_TYPE",
    "HEADER_GATEWAY_SOURCE",
    "HEADER_GATEWAY_SECRET",
    "HEADER_CONTENT_TYPE",
    "CONTENT_TYPE_JSON",
]
