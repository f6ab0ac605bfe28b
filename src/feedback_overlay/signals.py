from __future__ import annotations

import logging
from threading import RLock
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")

Unsubscribe = Callable[[], None]

_SKIP = object()


class Signal(Generic[T]):
    """Something producers expose and senders observe.

    Subclasses implement ``subscribe``; the operator helpers return derived signals
    which subscribe lazily to their source, so unsubscribing from a derived signal
    releases the underlying subscription as well.
    """

    def subscribe(self, handler: Callable[[T], None]) -> Unsubscribe:  # pragma: no cover - interface
        raise NotImplementedError

    def map(self, fn: Callable[[T], U]) -> "Signal[U]":
        return _DerivedSignal(self, fn)

    def filter(self, predicate: Callable[[T], bool]) -> "Signal[T]":
        return _DerivedSignal(self, lambda value: value if predicate(value) else _SKIP)

    def compact(self) -> "Signal[Any]":
        """Drop ``None`` emissions (for signals of optional values)."""
        return _DerivedSignal(self, lambda value: _SKIP if value is None else value)


class _DerivedSignal(Signal[U]):
    def __init__(self, source: Signal[Any], step: Callable[[Any], Any]) -> None:
        self._source = source
        self._step = step

    def subscribe(self, handler: Callable[[U], None]) -> Unsubscribe:
        def forward(value: Any) -> None:
            out = self._step(value)
            if out is not _SKIP:
                handler(out)

        return self._source.subscribe(forward)


class Subject(Signal[T]):
    """Fire-on-emit signal. Late subscribers see only later emissions.

    Handlers are called synchronously in subscription order. A failing handler is
    logged and does not stop delivery to the rest.
    """

    def __init__(self) -> None:
        self._handlers: Dict[object, Callable[[T], None]] = {}
        self._lock = RLock()

    def subscribe(self, handler: Callable[[T], None]) -> Unsubscribe:
        if not callable(handler):
            raise TypeError("handler must be callable")
        token = object()
        with self._lock:
            self._handlers[token] = handler
        logger.debug("Subscribed %s to %s", getattr(handler, "__name__", str(handler)), self)

        def unsubscribe() -> None:
            with self._lock:
                removed = self._handlers.pop(token, None)
            if removed is not None:
                logger.debug("Unsubscribed %s from %s", getattr(handler, "__name__", str(handler)), self)

        return unsubscribe

    def emit(self, value: T) -> None:
        with self._lock:
            handlers = list(self._handlers.values())
        for handler in handlers:
            self._dispatch(handler, value)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._handlers)

    def _dispatch(self, handler: Callable[[T], None], value: T) -> None:
        try:
            handler(value)
        except Exception:  # pragma: no cover - guard rail
            logger.exception("Unhandled exception in signal subscriber %s", handler)


class Property(Subject[T]):
    """Observable value: replays the current value on subscribe, emits on every set.

    Assigning the same value twice emits twice; consumers that care about
    duplicates filter them out themselves.
    """

    def __init__(self, initial: T) -> None:
        super().__init__()
        self._value = initial

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, new_value: T) -> None:
        self.set(new_value)

    def set(self, new_value: T) -> None:
        self._value = new_value
        self.emit(new_value)

    def subscribe(self, handler: Callable[[T], None]) -> Unsubscribe:
        unsubscribe = super().subscribe(handler)
        self._dispatch(handler, self._value)
        return unsubscribe


def as_signal(source: Any) -> Optional[Signal[Any]]:
    """Return ``source`` if it behaves like a signal, else None."""
    if isinstance(source, Signal):
        return source
    if callable(getattr(source, "subscribe", None)):
        return source
    return None
