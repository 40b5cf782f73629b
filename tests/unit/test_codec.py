from __future__ import annotations

import json

import pytest

from gateway_bridge.state.frame import GatewayFrame
from gateway_bridge.gateway.codec import (
    build_resume,
    decode_frame,
    encode_frame,
    build_identify,
    build_heartbeat,
)


def test_identify_round_trip_keeps_token() -> None:
    raw = encode_frame(build_identify("secret-token", 34304))
    frame = decode_frame(raw)
    assert frame.op == 2
    assert frame.d["token"] == "secret-token"
    assert frame.d["intents"] == 34304
    assert frame.d["properties"]["browser"] == frame.d["properties"]["device"]


def test_decode_dispatch_frame() -> None:
    raw = json.dumps({"op": 0, "d": {"id": "1"}, "s": 42, "t": "MESSAGE_CREATE"})
    frame = decode_frame(raw)
    assert frame == GatewayFrame(op=0, d={"id": "1"}, s=42, t="MESSAGE_CREATE")


def test_decode_accepts_bytes() -> None:
    frame = decode_frame(b'{"op": 11}')
    assert frame.op == 11
    assert frame.s is None
    assert frame.t is None


def test_heartbeat_carries_sequence_even_when_null() -> None:
    assert json.loads(encode_frame(build_heartbeat(None))) == {"op": 1, "d": None}
    assert json.loads(encode_frame(build_heartbeat(7))) == {"op": 1, "d": 7}


def test_resume_payload() -> None:
    frame = build_resume("tok", "sess", 12)
    assert frame.op == 6
    assert frame.d == {"token": "tok", "session_id": "sess", "seq": 12}


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        json.dumps([]),
        json.dumps({"d": {}}),
        json.dumps({"op": "0"}),
        json.dumps({"op": True}),
        json.dumps({"op": 0, "s": "3"}),
        json.dumps({"op": 0, "t": 5}),
    ],
)
def test_decode_rejects_malformed(raw: str) -> None:
    with pytest.raises(ValueError):
        decode_frame(raw)
