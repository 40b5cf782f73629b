"""Decoded Gateway wire frame."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GatewayFrame:
    op: int
    d: Any = None
    s: int | None = None
    t: str | None = None


__all__ = ["GatewayFrame"]
