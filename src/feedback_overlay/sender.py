from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from . import adapters
from .container import FeedbackScope
from .errors import MissingContainerError
from .models import Feedback, Result
from .signals import Signal, Unsubscribe, as_signal

logger = logging.getLogger(__name__)

Adapter = Callable[[Any], Optional[Feedback]]


class FeedbackSender:
    """Forwards one producer signal to a container's channel through an adapter.

    Usage:
        sender = FeedbackSender(view_model.rating, lambda r: adapters.from_value("rated"), scope)
        sender.start()
        ...
        sender.stop()

    or as a context manager. Senders started against a scope are also stopped
    when the owning container closes.
    """

    def __init__(self, producer: Signal[Any], adapter: Adapter, scope: Optional[FeedbackScope]) -> None:
        if as_signal(producer) is None:
            raise TypeError(f"producer must be a signal, got {type(producer).__name__}")
        self.producer = producer
        self.adapter = adapter
        self.scope = scope
        self._unsubscribe: Optional[Unsubscribe] = None

    @property
    def active(self) -> bool:
        return self._unsubscribe is not None

    def start(self) -> "FeedbackSender":
        if self.scope is None or self.scope.closed:
            raise MissingContainerError(
                "feedback sender used outside a feedback container; wrap the view with feedback_container()"
            )
        if self.active:
            return self
        self.scope.register(self)
        self._unsubscribe = self.producer.subscribe(self._on_output)
        logger.debug("Feedback sender started for %s", self.producer)
        return self

    def stop(self) -> None:
        if self._unsubscribe is None:
            return
        self._unsubscribe()
        self._unsubscribe = None
        if self.scope is not None:
            self.scope.forget(self)
        logger.debug("Feedback sender stopped for %s", self.producer)

    def __enter__(self) -> "FeedbackSender":
        return self.start()

    def __exit__(self, *exc_info: Any) -> None:
        self.stop()

    def _on_output(self, output: Any) -> None:
        if self.scope is None or self.scope.closed:
            return
        feedback = self.adapter(output)
        if feedback is None:
            logger.debug("No feedback for output %r", output)
            return
        self.scope.channel.publish(feedback)


def send_feedback(
    scope: Optional[FeedbackScope],
    producer: Signal[Any],
    to_feedback: Callable[[Any], Optional[Feedback]],
) -> FeedbackSender:
    """Send whatever ``to_feedback`` builds from each output (None skips)."""
    return FeedbackSender(producer, lambda output: adapters.from_feedback(output, to_feedback), scope).start()


def send_message(
    scope: Optional[FeedbackScope],
    producer: Signal[Any],
    to_message: Callable[[Any], Optional[str]],
) -> FeedbackSender:
    """Send success feedback; None outputs and None messages are skipped."""
    return FeedbackSender(producer, lambda output: adapters.from_optional(output, to_message), scope).start()


def send_error(scope: Optional[FeedbackScope], producer: Signal[Any]) -> FeedbackSender:
    """Send error feedback for each non-None error emitted."""
    return FeedbackSender(producer, adapters.from_error, scope).start()


def send_result(
    scope: Optional[FeedbackScope],
    producer: Signal[Result],
    to_message: Callable[[Any], Optional[str]],
) -> FeedbackSender:
    """Send success feedback for ``Ok`` (may be skipped) and error feedback for ``Err``."""
    return FeedbackSender(producer, lambda result: adapters.from_result(result, to_message), scope).start()
