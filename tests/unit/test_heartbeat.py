from __future__ import annotations

import random

import pytest

from tests.fakes import FakeScheduler
from gateway_bridge.gateway.heartbeat import HeartbeatMonitor


class _Recorder:
    def __init__(self) -> None:
        self.beats = 0
        self.stale = 0

    def beat(self) -> None:
        self.beats += 1

    def mark_stale(self) -> None:
        self.stale += 1


def _monitor(scheduler: FakeScheduler, recorder: _Recorder, seed: int = 3) -> HeartbeatMonitor:
    return HeartbeatMonitor(
        scheduler,
        on_beat=recorder.beat,
        on_stale=recorder.mark_stale,
        rng=random.Random(seed),
    )


def test_first_beat_is_jittered_within_interval() -> None:
    scheduler = FakeScheduler()
    recorder = _Recorder()
    monitor = _monitor(scheduler, recorder, seed=3)

    monitor.start(40000)

    expected = 40.0 * random.Random(3).random()
    (timer,) = scheduler.active_timers()
    assert timer.delay == pytest.approx(expected)
    assert 0.0 <= timer.delay < 40.0
    assert recorder.beats == 0


def test_periodic_beats_while_acknowledged() -> None:
    scheduler = FakeScheduler()
    recorder = _Recorder()
    monitor = _monitor(scheduler, recorder)
    monitor.start(10000)

    scheduler.advance(10.0)
    assert recorder.beats == 1
    assert monitor.state is not None and monitor.state.acked is False

    for expected in range(2, 6):
        monitor.ack()
        scheduler.advance(10.0)
        assert recorder.beats == expected

    assert recorder.stale == 0
    (timer,) = scheduler.active_timers()
    assert timer.delay == pytest.approx(10.0)


def test_missing_ack_reports_stale_and_stops() -> None:
    scheduler = FakeScheduler()
    recorder = _Recorder()
    monitor = _monitor(scheduler, recorder)
    monitor.start(10000)

    scheduler.advance(10.0)
    assert recorder.beats == 1

    scheduler.advance(10.0)
    assert recorder.stale == 1
    assert recorder.beats == 1
    assert monitor.running is False
    assert scheduler.active_timers() == []

    scheduler.advance(100.0)
    assert recorder.beats == 1
    assert recorder.stale == 1


def test_ack_is_unconditional() -> None:
    scheduler = FakeScheduler()
    recorder = _Recorder()
    monitor = _monitor(scheduler, recorder)
    monitor.start(10000)

    monitor.ack()
    monitor.ack()
    assert monitor.state is not None and monitor.state.acked is True


def test_restart_keeps_a_single_timer() -> None:
    scheduler = FakeScheduler()
    recorder = _Recorder()
    monitor = _monitor(scheduler, recorder)

    monitor.start(10000)
    monitor.start(20000)

    assert len(scheduler.active_timers()) == 1
    assert monitor.state is not None and monitor.state.interval_ms == 20000


def test_stop_cancels_timer() -> None:
    scheduler = FakeScheduler()
    recorder = _Recorder()
    monitor = _monitor(scheduler, recorder)
    monitor.start(10000)

    monitor.stop()
    scheduler.advance(60.0)

    assert recorder.beats == 0
    assert monitor.state is None
    assert monitor.running is False
