"""Process entry point for the Discord Gateway bridge."""

from __future__ import annotations

import asyncio
import logging
import argparse

from gateway_bridge.errors import ConfigurationError
from gateway_bridge.state.settings import AppSettings
from gateway_bridge.runtime.memory import MemoryWatchdog
from gateway_bridge.runtime.settings import load_settings
from gateway_bridge.runtime.logging import configure_logging
from gateway_bridge.runtime.signals import install_signal_handlers
from gateway_bridge.runtime.dependencies import build_runtime_deps

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run the Discord Gateway WebSocket bridge")
    p.add_argument(
        "--max-memory",
        type=int,
        default=None,
        help="Maximum memory usage in MB before restart (default: GATEWAY_MAX_MEMORY_MB or 128)",
    )
    return p.parse_args(argv)


async def run_bridge(settings: AppSettings, stop_event: asyncio.Event | None = None) -> None:
    stop_event = stop_event or asyncio.Event()
    deps = build_runtime_deps(settings)

    watchdog = MemoryWatchdog(
        max_memory_mb=settings.limits.max_memory_mb,
        tick_s=settings.limits.memory_check_interval_s,
        on_exceeded=stop_event.set,
    )

    logger.info("Discord Gateway bridge starting...")
    logger.info("Forwarding events to: %s", settings.forwarding.endpoint_url)
    watchdog.start()
    try:
        await deps.connection.run(stop_event)
    finally:
        await watchdog.stop()
        await deps.shutdown()
    logger.info("Discord Gateway bridge stopped.")


async def _main(settings: AppSettings) -> None:
    stop_event = asyncio.Event()
    install_signal_handlers(stop_event)
    await run_bridge(settings, stop_event)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging()
    try:
        settings = load_settings(max_memory_mb=args.max_memory)
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return 1

    asyncio.run(_main(settings))
    return 0


__all__ = ["main", "parse_args", "run_bridge"]
