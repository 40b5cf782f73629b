"""Events accepted for relay to the HTTP sink."""

from __future__ import annotations

from typing import Any
from dataclasses import field, dataclass


@dataclass(frozen=True, slots=True)
class OutboundEvent:
    event_name: str
    # The dispatch `d` as received.
    payload: Any = field(default_factory=dict)


__all__ = ["OutboundEvent"]
