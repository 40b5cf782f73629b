"""OS signal wiring for graceful shutdown."""

from __future__ import annotations

import signal
import asyncio
import logging

logger = logging.getLogger(__name__)


def install_signal_handlers(stop_event: asyncio.Event) -> None:
    """Set ``stop_event`` on SIGINT/SIGTERM."""
    loop = asyncio.get_running_loop()

    def _request_stop(sig: signal.Signals) -> None:
        if stop_event.is_set():
            return
        logger.info("Received %s, shutting down", sig.name)
        stop_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _request_stop, sig)
        except (NotImplementedError, RuntimeError):
            # No loop signal support (e.g. Windows); fall back to the process handler.
            try:
                signal.signal(sig, lambda *_args, _sig=sig: loop.call_soon_threadsafe(_request_stop, _sig))
            except (ValueError, AttributeError):
                continue


__all__ = ["install_signal_handlers"]
