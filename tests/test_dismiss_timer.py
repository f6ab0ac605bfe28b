import time

import pytest

from feedback_overlay import scheduling
from feedback_overlay.errors import FeedbackConfigError
from feedback_overlay.scheduling import ArcadeScheduler, FrameScheduler
from feedback_overlay.timer import DEFAULT_DURATION, DismissTimer


def test_frame_scheduler_fires_in_deadline_order():
    scheduler = FrameScheduler()
    fired = []
    scheduler.call_later(2.0, lambda: fired.append("b"))
    scheduler.call_later(1.0, lambda: fired.append("a"))
    scheduler.update(0.5)
    assert fired == []
    scheduler.update(2.0)
    assert fired == ["a", "b"]
    assert scheduler.pending_count() == 0


def test_cancelled_handle_never_fires():
    scheduler = FrameScheduler()
    fired = []
    handle = scheduler.call_later(1.0, lambda: fired.append(1))
    handle.cancel()
    scheduler.update(5.0)
    assert fired == []
    assert handle.cancelled
    # A late tick delivered directly is still ignored
    assert handle.fire() is False


def test_frame_scheduler_rejects_negative_values():
    scheduler = FrameScheduler()
    with pytest.raises(ValueError):
        scheduler.call_later(-1.0, lambda: None)
    with pytest.raises(ValueError):
        scheduler.update(-0.1)


def test_dismiss_timer_elapses_after_duration():
    scheduler = FrameScheduler()
    elapsed = []
    timer = DismissTimer(scheduler, on_elapse=lambda: elapsed.append(scheduler.now))
    assert timer.duration == DEFAULT_DURATION

    timer.restart()
    scheduler.update(3.5)
    assert timer.pending
    assert elapsed == []
    scheduler.update(0.5)
    assert elapsed == [4.0]
    assert not timer.pending


def test_restart_keeps_a_single_pending_dismissal():
    scheduler = FrameScheduler()
    elapsed = []
    timer = DismissTimer(scheduler, duration=1.0, on_elapse=lambda: elapsed.append(scheduler.now))

    first = timer.restart()
    scheduler.update(0.5)
    second = timer.restart()

    assert first.cancelled
    assert second.active
    assert scheduler.pending_count() == 1

    scheduler.update(0.75)
    assert elapsed == []
    scheduler.update(0.25)
    assert elapsed == [1.5]


def test_duration_must_be_positive():
    with pytest.raises(FeedbackConfigError):
        DismissTimer(FrameScheduler(), duration=0)


class FakeArcadeClock:
    """Stands in for the arcade module's scheduling functions."""

    def __init__(self) -> None:
        self.scheduled = []
        self.unscheduled = []

    def schedule_once(self, fn, delay: float) -> None:
        self.scheduled.append((fn, delay))

    def unschedule(self, fn) -> None:
        self.unscheduled.append(fn)


@pytest.fixture
def fake_clock(monkeypatch) -> FakeArcadeClock:
    clock = FakeArcadeClock()
    monkeypatch.setattr(scheduling, "arcade", clock)
    return clock


def test_arcade_scheduler_restart_unschedules_previous_tick(fake_clock):
    elapsed = []
    timer = DismissTimer(ArcadeScheduler(), duration=2.0, on_elapse=lambda: elapsed.append(True))

    timer.restart()
    timer.restart()

    first_tick, first_delay = fake_clock.scheduled[0]
    second_tick, _ = fake_clock.scheduled[1]
    assert first_delay == 2.0
    assert fake_clock.unscheduled == [first_tick]

    # The pyglet clock could still deliver the stale tick; it must do nothing
    first_tick(2.0)
    assert elapsed == []
    assert timer.pending

    second_tick(2.0)
    assert elapsed == [True]
    assert not timer.pending


def test_arcade_scheduler_tick_after_cancel_is_ignored(fake_clock):
    fired = []
    handle = ArcadeScheduler().call_later(1.0, lambda: fired.append(1))
    tick, _ = fake_clock.scheduled[0]
    assert handle.deadline > time.monotonic()

    handle.cancel()
    tick(1.0)

    assert fired == []
    assert fake_clock.unscheduled == [tick]


def test_arcade_scheduler_requires_arcade(monkeypatch):
    monkeypatch.setattr(scheduling, "arcade", None)
    with pytest.raises(RuntimeError):
        ArcadeScheduler().call_later(1.0, lambda: None)
