"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    import httpx

    from gateway_bridge.state.settings import AppSettings
    from gateway_bridge.gateway.connection import ConnectionManager
    from gateway_bridge.forwarding.forwarder import EventForwarder


@dataclass(slots=True)
class RuntimeDeps:
    connection: ConnectionManager
    forwarder: EventForwarder
    settings: AppSettings
    _http_client: httpx.AsyncClient

    async def shutdown(self) -> None:
        try:
            await self.forwarder.aclose()
        except Exception:
            logger.exception("forwarder shutdown failed")
        try:
            await self._http_client.aclose()
        except Exception:
            logger.exception("http client shutdown failed")


__all__ = ["RuntimeDeps"]
