"""Environment parsing for runtime settings."""

from __future__ import annotations

import os

from gateway_bridge.errors import ConfigurationError
from gateway_bridge.config.secrets import ENV_DISCORD_BOT_TOKEN, ENV_DISCORD_GATEWAY_SECRET
from gateway_bridge.state.settings import (
    AppSettings,
    AuthSettings,
    LimitsSettings,
    GatewaySettings,
    ForwardingSettings,
)
from gateway_bridge.config.gateway import (
    ENV_DISCORD_GATEWAY_URL,
    DEFAULT_DISCORD_GATEWAY_URL,
    ENV_DISCORD_GATEWAY_INTENTS,
    DEFAULT_DISCORD_GATEWAY_INTENTS,
)
from gateway_bridge.config.limits import (
    ENV_GATEWAY_MAX_MEMORY_MB,
    DEFAULT_GATEWAY_MAX_MEMORY_MB,
    ENV_GATEWAY_MEMORY_CHECK_INTERVAL_S,
    DEFAULT_GATEWAY_MEMORY_CHECK_INTERVAL_S,
)
from gateway_bridge.config.forwarding import (
    ENV_GATEWAY_FORWARD_URL,
    ENV_GATEWAY_FORWARD_TIMEOUT_S,
    DEFAULT_GATEWAY_FORWARD_TIMEOUT_S,
    ENV_GATEWAY_FORWARD_DRAIN_TIMEOUT_S,
    DEFAULT_GATEWAY_FORWARD_DRAIN_TIMEOUT_S,
)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip(), 0)
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _required_env(name: str) -> str:
    value = (os.getenv(name) or "").strip()
    if not value:
        raise ConfigurationError(setting=name, message="is not configured")
    return value


def _load_auth_settings() -> AuthSettings:
    return AuthSettings(
        bot_token=_required_env(ENV_DISCORD_BOT_TOKEN),
        gateway_secret=_required_env(ENV_DISCORD_GATEWAY_SECRET),
    )


def _load_gateway_settings() -> GatewaySettings:
    return GatewaySettings(
        gateway_url=_str_env(ENV_DISCORD_GATEWAY_URL, DEFAULT_DISCORD_GATEWAY_URL),
        intents=_int_env(ENV_DISCORD_GATEWAY_INTENTS, DEFAULT_DISCORD_GATEWAY_INTENTS),
    )


def _load_forwarding_settings() -> ForwardingSettings:
    endpoint_url = _required_env(ENV_GATEWAY_FORWARD_URL)
    if not endpoint_url.startswith(("http://", "https://")):
        raise ConfigurationError(setting=ENV_GATEWAY_FORWARD_URL, message="must be an http(s) URL")

    timeout_s = _float_env(ENV_GATEWAY_FORWARD_TIMEOUT_S, DEFAULT_GATEWAY_FORWARD_TIMEOUT_S)
    if timeout_s <= 0:
        timeout_s = DEFAULT_GATEWAY_FORWARD_TIMEOUT_S
    drain_timeout_s = max(
        0.0, _float_env(ENV_GATEWAY_FORWARD_DRAIN_TIMEOUT_S, DEFAULT_GATEWAY_FORWARD_DRAIN_TIMEOUT_S)
    )

    return ForwardingSettings(
        endpoint_url=endpoint_url,
        timeout_s=timeout_s,
        drain_timeout_s=drain_timeout_s,
    )


def _load_limits_settings(max_memory_mb: int | None) -> LimitsSettings:
    if max_memory_mb is None:
        max_memory_mb = _int_env(ENV_GATEWAY_MAX_MEMORY_MB, DEFAULT_GATEWAY_MAX_MEMORY_MB)
    check_interval = _float_env(ENV_GATEWAY_MEMORY_CHECK_INTERVAL_S, DEFAULT_GATEWAY_MEMORY_CHECK_INTERVAL_S)
    if check_interval <= 0:
        check_interval = DEFAULT_GATEWAY_MEMORY_CHECK_INTERVAL_S

    return LimitsSettings(
        max_memory_mb=max(0, int(max_memory_mb)),
        memory_check_interval_s=check_interval,
    )


def load_settings(*, max_memory_mb: int | None = None) -> AppSettings:
    """Resolve settings from the environment.

    Raises ConfigurationError when the bot token, the gateway secret or the
    forwarding URL is missing; the bridge must not connect without them.
    ``max_memory_mb`` (from the command line) overrides GATEWAY_MAX_MEMORY_MB.
    """
    return AppSettings(
        auth=_load_auth_settings(),
        gateway=_load_gateway_settings(),
        forwarding=_load_forwarding_settings(),
        limits=_load_limits_settings(max_memory_mb),
    )


__all__ = ["load_settings"]
