"""Shared error types for the Gateway bridge."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ConfigurationError(Exception):
    """Raised at startup when a required setting is missing or unusable."""

    setting: str
    message: str

    def __str__(self) -> str:
        return f"{self.setting}: {self.message}"


__all__ = ["ConfigurationError"]
