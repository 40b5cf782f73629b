"""Best-effort HTTP relay of accepted Gateway events."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx
import orjson

from gateway_bridge.state.events import OutboundEvent
from gateway_bridge.config.forwarding import (
    FORWARD_BODY_TYPE,
    CONTENT_TYPE_JSON,
    FORWARD_SOURCE_TAG,
    HEADER_CONTENT_TYPE,
    HEADER_GATEWAY_SECRET,
    HEADER_GATEWAY_SOURCE,
    DEFAULT_GATEWAY_FORWARD_TIMEOUT_S,
    DEFAULT_GATEWAY_FORWARD_DRAIN_TIMEOUT_S,
)


class EventForwarder:
    """POST each event once to the configured endpoint; never retry.

    Delivery is at-most-once: timeouts, connection errors and non-2xx
    responses are logged and the event is dropped.
    """

    def __init__(
        self,
        *,
        endpoint_url: str,
        gateway_secret: str,
        client: httpx.AsyncClient,
        source: str = FORWARD_SOURCE_TAG,
        timeout_s: float = DEFAULT_GATEWAY_FORWARD_TIMEOUT_S,
        drain_timeout_s: float = DEFAULT_GATEWAY_FORWARD_DRAIN_TIMEOUT_S,
        logger: logging.Logger | None = None,
    ) -> None:
        self._endpoint_url = endpoint_url
        self._client = client
        self._timeout_s = float(timeout_s)
        self._drain_timeout_s = float(drain_timeout_s)
        self._logger = logger or logging.getLogger(__name__)
        self._headers = {
            HEADER_GATEWAY_SOURCE: source,
            HEADER_GATEWAY_SECRET: gateway_secret,
            HEADER_CONTENT_TYPE: CONTENT_TYPE_JSON,
        }
        self._inflight: set[asyncio.Task] = set()

    @property
    def inflight(self) -> int:
        return len(self._inflight)

    def submit(self, event: OutboundEvent) -> asyncio.Task:
        """Schedule ``forward`` as its own task so the caller never waits on HTTP."""
        task = asyncio.create_task(self.forward(event))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        return task

    async def forward(self, event: OutboundEvent) -> bool:
        body: dict[str, Any] = {
            "type": FORWARD_BODY_TYPE,
            "event": event.event_name,
            "data": event.payload,
        }
        try:
            response = await self._client.post(
                self._endpoint_url,
                content=orjson.dumps(body),
                headers=self._headers,
                timeout=self._timeout_s,
            )
        except httpx.HTTPError as exc:
            self._logger.error("Failed to forward %s: %s", event.event_name, exc)
            return False
        except Exception:
            self._logger.exception("Failed to forward %s", event.event_name)
            return False

        if not response.is_success:
            self._logger.warning(
                "Forward of %s rejected: HTTP %s",
                event.event_name,
                response.status_code,
            )
            return False
        self._logger.debug("Forwarded %s (HTTP %s)", event.event_name, response.status_code)
        return True

    async def aclose(self) -> None:
        pending = list(self._inflight)
        if not pending:
            return
        _done, still_running = await asyncio.wait(pending, timeout=self._drain_timeout_s)
        if still_running:
            self._logger.warning("Dropping %d in-flight forwards at shutdown", len(still_running))
            for task in still_running:
                task.cancel()
            await asyncio.gather(*still_running, return_exceptions=True)


__all__ = ["EventForwarder"]
