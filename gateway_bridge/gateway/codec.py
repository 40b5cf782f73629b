"""JSON codec for Gateway frames ({op, d, s, t})."""

from __future__ import annotations

import platform
from typing import Any

import orjson

from gateway_bridge.state.frame import GatewayFrame
from gateway_bridge.config.gateway import (
    OP_RESUME,
    CLIENT_NAME,
    OP_IDENTIFY,
    FRAME_KEY_OP,
    OP_HEARTBEAT,
    FRAME_KEY_DATA,
    FRAME_KEY_EVENT,
    FRAME_KEY_SEQUENCE,
)


def decode_frame(raw: str | bytes) -> GatewayFrame:
    try:
        msg = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON: {exc}") from exc

    if not isinstance(msg, dict):
        raise ValueError("frame must be a JSON object")

    op = msg.get(FRAME_KEY_OP)
    # bool is an int subclass; a frame with "op": true is malformed.
    if not isinstance(op, int) or isinstance(op, bool):
        raise ValueError("frame missing integer 'op'")

    seq = msg.get(FRAME_KEY_SEQUENCE)
    if seq is not None and (not isinstance(seq, int) or isinstance(seq, bool)):
        raise ValueError("frame 's' must be an integer or null")

    event = msg.get(FRAME_KEY_EVENT)
    if event is not None and not isinstance(event, str):
        raise ValueError("frame 't' must be a string or null")

    return GatewayFrame(op=op, d=msg.get(FRAME_KEY_DATA), s=seq, t=event)


def encode_frame(frame: GatewayFrame) -> str:
    data: dict[str, Any] = {FRAME_KEY_OP: frame.op, FRAME_KEY_DATA: frame.d}
    if frame.s is not None:
        data[FRAME_KEY_SEQUENCE] = frame.s
    if frame.t is not None:
        data[FRAME_KEY_EVENT] = frame.t
    return orjson.dumps(data).decode("utf-8")


def client_properties(client_name: str = CLIENT_NAME) -> dict[str, str]:
    # Descriptive only; the Gateway does not act on these.
    return {
        "os": platform.system() or "unknown",
        "browser": client_name,
        "device": client_name,
    }


def build_identify(token: str, intents: int, *, properties: dict[str, str] | None = None) -> GatewayFrame:
    return GatewayFrame(
        op=OP_IDENTIFY,
        d={
            "token": token,
            "intents": int(intents),
            "properties": properties if properties is not None else client_properties(),
        },
    )


def build_resume(token: str, session_id: str, last_sequence: int | None) -> GatewayFrame:
    return GatewayFrame(
        op=OP_RESUME,
        d={"token": token, "session_id": session_id, "seq": last_sequence},
    )


def build_heartbeat(last_sequence: int | None) -> GatewayFrame:
    return GatewayFrame(op=OP_HEARTBEAT, d=last_sequence)


__all__ = [
    "build_heartbeat",
    "build_identify",
    "build_resume",
    "client_properties",
    "decode_frame",
    "encode_frame",
]
