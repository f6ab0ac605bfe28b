from __future__ import annotations

import logging
from typing import Callable, Optional

from .errors import FeedbackConfigError
from .scheduling import Scheduler, TimerHandle

logger = logging.getLogger(__name__)

DEFAULT_DURATION = 4.0  # seconds


class DismissTimer:
    """Restartable single-shot countdown.

    At most one dismissal is pending: ``restart`` cancels the previous handle
    before scheduling a new one, so a superseded countdown can never fire.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        duration: float = DEFAULT_DURATION,
        on_elapse: Optional[Callable[[], None]] = None,
    ) -> None:
        if duration <= 0:
            raise FeedbackConfigError(f"dismiss duration must be positive, got {duration}")
        self.scheduler = scheduler
        self.duration = float(duration)
        self.on_elapse = on_elapse
        self._handle: Optional[TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None and self._handle.active

    def restart(self) -> TimerHandle:
        self.cancel()
        self._handle = self.scheduler.call_later(self.duration, self._elapse)
        logger.debug("Dismiss timer started (%.2fs)", self.duration)
        return self._handle

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            logger.debug("Dismiss timer cancelled")
        self._handle = None

    def _elapse(self) -> None:
        self._handle = None
        logger.debug("Dismiss timer elapsed")
        if self.on_elapse is not None:
            self.on_elapse()
