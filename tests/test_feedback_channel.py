from typing import List

from feedback_overlay.channel import FeedbackChannel
from feedback_overlay.models import Feedback


def test_publish_notifies_subscribers_in_order():
    channel = FeedbackChannel()
    seen_a: List[Feedback] = []
    seen_b: List[Feedback] = []
    channel.subscribe(seen_a.append)
    channel.subscribe(seen_b.append)

    f1 = Feedback.success("saved")
    f2 = Feedback.error("oops")
    channel.publish(f1)
    channel.publish(f2)

    assert seen_a == [f1, f2]
    assert seen_b == [f1, f2]
    assert channel.current == f2


def test_no_replay_for_late_subscribers():
    channel = FeedbackChannel()
    channel.publish(Feedback.success("early"))

    seen: List[Feedback] = []
    channel.subscribe(seen.append)
    assert seen == []

    late = Feedback.success("late")
    channel.publish(late)
    assert seen == [late]


def test_duplicate_publishes_are_not_batched():
    channel = FeedbackChannel()
    seen: List[Feedback] = []
    channel.subscribe(seen.append)
    fb = Feedback.success("same")
    channel.publish(fb)
    channel.publish(fb)
    assert seen == [fb, fb]


def test_unsubscribe_stops_delivery_and_is_idempotent():
    channel = FeedbackChannel()
    seen: List[Feedback] = []
    unsubscribe = channel.subscribe(seen.append)
    unsubscribe()
    unsubscribe()
    channel.publish(Feedback.success("ignored"))
    assert seen == []
    assert channel.subscriber_count == 0


def test_failing_subscriber_does_not_block_others(caplog):
    channel = FeedbackChannel()
    seen: List[Feedback] = []

    def broken(_fb: Feedback) -> None:
        raise RuntimeError("boom")

    channel.subscribe(broken)
    channel.subscribe(seen.append)
    fb = Feedback.success("ok")
    with caplog.at_level("ERROR"):
        channel.publish(fb)
    assert seen == [fb]
    assert "Unhandled exception in feedback subscriber" in caplog.text


def test_clear_empties_slot_without_notifying():
    channel = FeedbackChannel()
    seen: List[Feedback] = []
    channel.subscribe(seen.append)
    channel.publish(Feedback.success("x"))
    channel.clear()
    assert channel.current is None
    assert len(seen) == 1
