from __future__ import annotations

import logging
from threading import RLock
from typing import Callable, Dict, Optional

from .models import Feedback
from .signals import Unsubscribe

logger = logging.getLogger(__name__)

FeedbackHandler = Callable[[Feedback], None]


class FeedbackChannel:
    """Single-slot publish/subscribe relay between senders and one container.

    Every publish overwrites the slot and notifies each current subscriber exactly
    once, synchronously and in publish order. There is no replay: a handler only
    sees feedback published after it subscribed.
    """

    def __init__(self) -> None:
        self._handlers: Dict[object, FeedbackHandler] = {}
        self._current: Optional[Feedback] = None
        self._lock = RLock()

    @property
    def current(self) -> Optional[Feedback]:
        """Most recently published feedback (None before the first publish)."""
        with self._lock:
            return self._current

    def subscribe(self, handler: FeedbackHandler) -> Unsubscribe:
        """Register a handler for every later publish.

        Args:
            handler: Callable receiving the published Feedback.

        Returns:
            A callable removing the handler; calling it twice is harmless.
        """
        if not callable(handler):
            raise TypeError("handler must be callable")
        token = object()
        with self._lock:
            self._handlers[token] = handler
        logger.debug("Subscribed %s to feedback channel", getattr(handler, "__name__", str(handler)))

        def unsubscribe() -> None:
            with self._lock:
                if self._handlers.pop(token, None) is not None:
                    logger.debug("Unsubscribed %s from feedback channel", getattr(handler, "__name__", str(handler)))

        return unsubscribe

    def publish(self, feedback: Feedback) -> None:
        """Store ``feedback`` as the current value and notify subscribers."""
        with self._lock:
            self._current = feedback
            handlers = list(self._handlers.values())
        if not handlers:
            logger.debug("Publishing %s with no subscribers; it will not be shown", feedback)
            return
        logger.debug("Publishing %s to %d subscribers", feedback, len(handlers))
        for handler in handlers:
            try:
                handler(feedback)
            except Exception:  # pragma: no cover - guard rail
                logger.exception("Unhandled exception in feedback subscriber %s", handler)

    def clear(self) -> None:
        """Empty the slot without notifying anyone."""
        with self._lock:
            self._current = None

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._handlers)
