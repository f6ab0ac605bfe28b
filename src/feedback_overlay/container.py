from __future__ import annotations

import logging
import threading
from collections import deque
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Deque, List, Optional, TypeVar

from .channel import FeedbackChannel
from .models import Feedback
from .scheduling import FrameScheduler, Scheduler
from .settings import FeedbackSettings
from .timer import DismissTimer
from .ui.banner import BannerRenderer

if TYPE_CHECKING:  # pragma: no cover
    from .sender import FeedbackSender

logger = logging.getLogger(__name__)

V = TypeVar("V")


class ContainerState(str, Enum):
    IDLE = "idle"
    SHOWING = "showing"


class FeedbackScope:
    """What nested content receives to reach its container's channel.

    Passed down explicitly at construction time; there is no global channel, so
    independent containers never see each other's feedback.
    """

    def __init__(self, container: "FeedbackContainer") -> None:
        self._container = container

    @property
    def channel(self) -> FeedbackChannel:
        return self._container.channel

    @property
    def closed(self) -> bool:
        return self._container.closed

    def register(self, sender: "FeedbackSender") -> None:
        self._container._senders.append(sender)

    def forget(self, sender: "FeedbackSender") -> None:
        if sender in self._container._senders:
            self._container._senders.remove(sender)


class FeedbackContainer:
    """Wraps a content view and shows the latest feedback as a timed banner.

    State machine:
    - IDLE: nothing displayed, no timer pending.
    - SHOWING: a feedback is displayed and its dismissal is pending.

    Every notification from the channel replaces the displayed feedback and
    restarts the countdown; when it elapses the banner is cleared. Publishes from
    a thread other than the one that created the container are queued and
    applied on the next ``on_update``.

    Integration (arcade-style host):
        container = feedback_container(lambda scope: GameView(scope), renderer=ArcadeBannerRenderer())

        def on_update(self, dt):
            container.on_update(dt)

        def on_draw(self):
            container.on_draw()

    The container advances its own scheduler in ``on_update``; give each
    container its own FrameScheduler.
    """

    def __init__(
        self,
        content: Any = None,
        *,
        renderer: Optional[BannerRenderer] = None,
        scheduler: Optional[Scheduler] = None,
        settings: Optional[FeedbackSettings] = None,
    ) -> None:
        self.settings = settings or FeedbackSettings()
        self.content = content
        self.renderer = renderer
        self.scheduler: Scheduler = scheduler or FrameScheduler()
        self.channel = FeedbackChannel()
        self.scope = FeedbackScope(self)

        self._timer = DismissTimer(self.scheduler, self.settings.duration, on_elapse=self._on_timer_elapsed)
        self._displayed: Optional[Feedback] = None
        self._closed = False
        self._senders: List["FeedbackSender"] = []
        self._owner_thread = threading.get_ident()
        self._inbox: Deque[Feedback] = deque()
        self._inbox_lock = threading.Lock()
        self._unsubscribe = self.channel.subscribe(self._on_feedback)
        logger.debug("Feedback container created (duration=%.2fs)", self.settings.duration)

    # ---------------------
    # State
    # ---------------------
    @property
    def displayed(self) -> Optional[Feedback]:
        return self._displayed

    @property
    def state(self) -> ContainerState:
        return ContainerState.SHOWING if self._displayed is not None else ContainerState.IDLE

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def timer_pending(self) -> bool:
        return self._timer.pending

    # ---------------------
    # Composition
    # ---------------------
    def mount(self, build: Callable[[FeedbackScope], V]) -> V:
        """Build the wrapped content with this container's scope."""
        self.content = build(self.scope)
        return self.content

    # ---------------------
    # Frame loop
    # ---------------------
    def on_update(self, dt: float) -> None:
        if self._closed:
            return
        self._drain_inbox()
        self.scheduler.update(dt)
        if self.content is not None and hasattr(self.content, "on_update"):
            self.content.on_update(dt)

    def on_draw(self) -> None:
        if self.content is not None and hasattr(self.content, "on_draw"):
            self.content.on_draw()
        view = self.render()
        if view is not None and self.renderer is not None:
            self.renderer.draw_banner(self._displayed.message, self._displayed.type)

    def render(self) -> Optional[dict]:
        """Return what the banner should show, ``{"message", "type"}``, or None."""
        if self._displayed is None:
            return None
        return self._displayed.to_dict()

    def close(self) -> None:
        """Tear down: cancel the pending dismissal and stop listening."""
        if self._closed:
            return
        self._closed = True
        self._timer.cancel()
        self._unsubscribe()
        for sender in list(self._senders):
            sender.stop()
        self._senders.clear()
        with self._inbox_lock:
            self._inbox.clear()
        self._displayed = None
        self.channel.clear()
        logger.debug("Feedback container closed")

    def __enter__(self) -> "FeedbackContainer":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ---------------------
    # Internals
    # ---------------------
    def _on_feedback(self, feedback: Feedback) -> None:
        if self._closed:
            return
        if threading.get_ident() != self._owner_thread:
            with self._inbox_lock:
                self._inbox.append(feedback)
            logger.debug("Queued %s from foreign thread", feedback)
            return
        # Older foreign-thread events must not land on top of this one
        with self._inbox_lock:
            backlog = bool(self._inbox)
            if backlog:
                self._inbox.append(feedback)
        if backlog:
            self._drain_inbox()
            return
        self._show(feedback)

    def _drain_inbox(self) -> None:
        with self._inbox_lock:
            pending = list(self._inbox)
            self._inbox.clear()
        for feedback in pending:
            self._show(feedback)

    def _show(self, feedback: Feedback) -> None:
        self._displayed = feedback
        self._timer.restart()
        logger.debug("Showing %s", feedback)

    def _on_timer_elapsed(self) -> None:
        if self._closed:
            return
        logger.debug("Dismissing %s", self._displayed)
        if self.channel.current == self._displayed:
            self.channel.clear()
        self._displayed = None


def feedback_container(build: Callable[[FeedbackScope], Any], **kwargs: Any) -> FeedbackContainer:
    """Create a container and mount the content built by ``build`` inside it."""
    container = FeedbackContainer(**kwargs)
    container.mount(build)
    return container
