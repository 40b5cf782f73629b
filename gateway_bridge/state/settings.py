"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AuthSettings:
    bot_token: str
    gateway_secret: str


@dataclass(frozen=True, slots=True)
class GatewaySettings:
    gateway_url: str
    intents: int


@dataclass(frozen=True, slots=True)
class ForwardingSettings:
    endpoint_url: str
    timeout_s: float
    drain_timeout_s: float


@dataclass(frozen=True, slots=True)
class LimitsSettings:
    max_memory_mb: int
    memory_check_interval_s: float


@dataclass(frozen=True, slots=True)
class AppSettings:
    auth: AuthSettings
    gateway: GatewaySettings
    forwarding: ForwardingSettings
    limits: LimitsSettings


__all__ = [
    "AppSettings",
    "AuthSettings",
    "ForwardingSettings",
    "GatewaySettings",
    "LimitsSettings",
]
