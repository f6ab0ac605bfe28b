from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional, Protocol

try:  # Optional Arcade clock
    import arcade  # type: ignore
except Exception:  # pragma: no cover - no arcade / no GL
    arcade = None  # type: ignore

logger = logging.getLogger(__name__)

# Float slack when comparing accumulated frame time against deadlines
_EPSILON = 1e-9


class TimerHandle:
    """Cancellable token for one scheduled callback.

    A handle fires at most once. Once cancelled it never fires, even if the
    underlying clock still delivers the tick.
    """

    def __init__(
        self,
        callback: Callable[[], None],
        deadline: float,
        on_cancel: Optional[Callable[[], None]] = None,
    ) -> None:
        self._callback = callback
        self.deadline = deadline
        self._on_cancel = on_cancel
        self._cancelled = False
        self._fired = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def fired(self) -> bool:
        return self._fired

    @property
    def active(self) -> bool:
        return not (self._cancelled or self._fired)

    def cancel(self) -> None:
        if not self.active:
            return
        self._cancelled = True
        if self._on_cancel is not None:
            self._on_cancel()

    def fire(self) -> bool:
        """Run the callback unless cancelled or already fired. Returns True if it ran."""
        if not self.active:
            logger.debug("Ignoring tick for inactive timer handle %s", self)
            return False
        self._fired = True
        self._callback()
        return True


class Scheduler(Protocol):
    """Clock abstraction used by the dismiss timer."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        ...

    def update(self, dt: float) -> None:
        ...


class FrameScheduler:
    """Deterministic scheduler driven by the host's per-frame ``update(dt)``.

    Due callbacks run in deadline order; ties keep scheduling order.
    """

    def __init__(self) -> None:
        self._now = 0.0
        self._pending: List[TimerHandle] = []

    @property
    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        if delay < 0:
            raise ValueError("delay must be non-negative")
        handle = TimerHandle(callback, deadline=self._now + delay)
        self._pending.append(handle)
        return handle

    def update(self, dt: float) -> None:
        if dt < 0:
            raise ValueError("dt must be non-negative")
        self._now += dt
        due = sorted(
            (h for h in self._pending if h.active and h.deadline <= self._now + _EPSILON),
            key=lambda h: h.deadline,
        )
        # Callbacks may schedule new timers, so rebuild the list before firing
        self._pending = [h for h in self._pending if h.active and h not in due]
        for handle in due:
            handle.fire()

    def pending_count(self) -> int:
        return sum(1 for h in self._pending if h.active)


class ArcadeScheduler:
    """Scheduler backed by the pyglet clock through ``arcade.schedule_once``.

    The window's event loop drives the callbacks, so ``update`` does nothing.
    Deadlines are ``time.monotonic()`` seconds.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        if arcade is None:
            raise RuntimeError("arcade is required for ArcadeScheduler")
        if delay < 0:
            raise ValueError("delay must be non-negative")

        def _tick(_delta_time: float) -> None:
            # handle is bound below, before the clock can deliver a tick
            handle.fire()

        handle = TimerHandle(
            callback,
            deadline=time.monotonic() + delay,
            on_cancel=lambda: arcade.unschedule(_tick),
        )
        arcade.schedule_once(_tick, delay)
        return handle

    def update(self, dt: float) -> None:
        pass
