import threading
from datetime import timedelta

import pytest

from rpiforecast.scheduling import IntervalTimer, to_interval


def test_to_interval_accepts_seconds_and_timedelta() -> None:
    assert to_interval(90) == timedelta(seconds=90)
    assert to_interval(timedelta(minutes=10)) == timedelta(minutes=10)


@pytest.mark.parametrize("value", [0, -1, timedelta(0), timedelta(seconds=-5)])
def test_to_interval_rejects_non_positive(value: timedelta | float) -> None:
    with pytest.raises(ValueError):
        to_interval(value)


def test_timer_fires_immediately_then_repeats() -> None:
    ticks = threading.Semaphore(0)
    timer = IntervalTimer(ticks.release)
    try:
        timer.start(0.05)
        assert timer.is_active
        assert timer.interval == timedelta(seconds=0.05)
        for _ in range(3):
            assert ticks.acquire(timeout=2)
    finally:
        timer.stop()
    assert not timer.is_active


def test_stop_prevents_further_ticks() -> None:
    count = 0
    first = threading.Event()

    def tick() -> None:
        nonlocal count
        count += 1
        first.set()

    timer = IntervalTimer(tick)
    timer.start(60)
    assert first.wait(timeout=2)
    timer.stop()
    timer.stop()

    assert count == 1
    assert not timer.is_active


def test_stop_before_start_is_harmless() -> None:
    timer = IntervalTimer(lambda: None)
    timer.stop()
    assert not timer.is_active


def test_restart_replaces_previous_run() -> None:
    ticks = threading.Semaphore(0)
    timer = IntervalTimer(ticks.release)
    try:
        timer.start(60)
        assert ticks.acquire(timeout=2)
        timer.start(30)
        assert ticks.acquire(timeout=2)
        assert timer.interval == timedelta(seconds=30)
    finally:
        timer.stop()


def test_failing_callback_keeps_timer_running(caplog: pytest.LogCaptureFixture) -> None:
    calls = threading.Semaphore(0)

    def tick() -> None:
        calls.release()
        raise RuntimeError("tick failed")

    timer = IntervalTimer(tick, name="flaky")
    try:
        timer.start(0.05)
        assert calls.acquire(timeout=2)
        assert calls.acquire(timeout=2)
    finally:
        timer.stop()

    assert "Timer 'flaky' callback failed" in caplog.text


def test_stop_from_callback_does_not_deadlock() -> None:
    done = threading.Event()
    timer: IntervalTimer

    def tick() -> None:
        timer.stop()
        done.set()

    timer = IntervalTimer(tick)
    timer.start(0.05)

    assert done.wait(timeout=2)
    assert not timer.is_active
