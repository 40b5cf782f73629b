from __future__ import annotations

from gateway_bridge.state.session import SessionState
from gateway_bridge.state.reconnect import ReconnectState


def test_backoff_doubles_then_caps() -> None:
    state = ReconnectState()

    delays = [state.next_delay() for _ in range(8)]

    assert delays == [2.0, 4.0, 8.0, 16.0, 32.0, 60.0, 60.0, 60.0]
    assert state.attempts == 8


def test_backoff_reset() -> None:
    state = ReconnectState()
    state.next_delay()
    state.next_delay()

    state.reset()

    assert state.attempts == 0
    assert state.next_delay() == 2.0


def test_resume_requires_session_id() -> None:
    session = SessionState(should_resume=True)
    assert session.can_resume() is False

    session.session_id = "abc"
    assert session.can_resume() is True

    session.should_resume = False
    assert session.can_resume() is False


def test_invalidate_clears_resume_facts() -> None:
    session = SessionState(
        session_id="abc",
        resume_url="wss://resume.example",
        last_sequence=12,
        should_resume=True,
    )

    session.invalidate()

    assert session.session_id is None
    assert session.last_sequence is None
    assert session.should_resume is False
    assert session.resume_url is None
