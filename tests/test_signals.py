import pytest

from feedback_overlay.signals import Property, Subject


def test_subject_emits_only_after_subscription():
    subject = Subject()
    subject.emit(1)
    seen = []
    unsubscribe = subject.subscribe(seen.append)
    subject.emit(2)
    subject.emit(3)
    unsubscribe()
    subject.emit(4)
    assert seen == [2, 3]


def test_property_replays_current_value_and_emits_every_set():
    rating = Property(0)
    seen = []
    rating.subscribe(seen.append)
    rating.value = 3
    rating.set(3)
    assert seen == [0, 3, 3]
    assert rating.value == 3


def test_operators_shape_the_stream():
    rating = Property(0)
    seen = []
    rating.filter(lambda r: r > 0).map(lambda r: f"{r} stars").subscribe(seen.append)
    rating.value = 2
    rating.value = 0
    rating.value = 5
    assert seen == ["2 stars", "5 stars"]


def test_compact_drops_none():
    error = Property(None)
    seen = []
    unsubscribe = error.compact().subscribe(seen.append)
    err = ValueError("x")
    error.value = err
    error.value = None
    assert seen == [err]

    unsubscribe()
    assert error.subscriber_count == 0


def test_subscribe_requires_callable():
    with pytest.raises(TypeError):
        Subject().subscribe("nope")  # type: ignore[arg-type]
