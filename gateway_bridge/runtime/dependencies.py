"""Runtime dependency construction (HTTP client, forwarder, gateway connection)."""

from __future__ import annotations

import logging

import httpx

from gateway_bridge.state import RuntimeDeps
from gateway_bridge.state.settings import AppSettings
from gateway_bridge.forwarding.forwarder import EventForwarder
from gateway_bridge.gateway.connection import ConnectionManager

logger = logging.getLogger(__name__)


def build_runtime_deps(settings: AppSettings, *, http_client: httpx.AsyncClient | None = None) -> RuntimeDeps:
    client = http_client or httpx.AsyncClient(timeout=settings.forwarding.timeout_s)

    forwarder = EventForwarder(
        endpoint_url=settings.forwarding.endpoint_url,
        gateway_secret=settings.auth.gateway_secret,
        client=client,
        timeout_s=settings.forwarding.timeout_s,
        drain_timeout_s=settings.forwarding.drain_timeout_s,
        logger=logging.getLogger("gateway_bridge.forwarder"),
    )

    connection = ConnectionManager(
        token=settings.auth.bot_token,
        intents=settings.gateway.intents,
        on_event=forwarder.submit,
        gateway_url=settings.gateway.gateway_url,
        logger=logging.getLogger("gateway_bridge.gateway"),
    )

    return RuntimeDeps(
        connection=connection,
        forwarder=forwarder,
        settings=settings,
        _http_client=client,
    )


__all__ = ["RuntimeDeps", "build_runtime_deps"]
