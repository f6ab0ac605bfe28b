"""Pure mappings from producer output to feedback.

Each function handles one producer shape. ``None`` means "nothing to show" and is
never published; callers evaluate the adapter once per emission, so duplicate
upstream values are judged independently.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional, TypeVar

from .models import ERROR_DEFAULT, Err, Feedback, Ok, Result

logger = logging.getLogger(__name__)

T = TypeVar("T")

MessageFn = Callable[[T], Optional[str]]


def describe_error(err: BaseException) -> str:
    """Return the display description of ``err`` or the fallback message key."""
    description = getattr(err, "localized_description", None)
    if isinstance(description, str) and description:
        return description
    return ERROR_DEFAULT


def from_value(message: str) -> Feedback:
    return Feedback.success(message)


def from_feedback(output: T, to_feedback: Callable[[T], Optional[Feedback]]) -> Optional[Feedback]:
    """Generic form: ``to_feedback`` builds the whole Feedback or returns None."""
    return to_feedback(output)


def from_optional(output: Optional[T], to_message: MessageFn[T]) -> Optional[Feedback]:
    """Success feedback from an optional output.

    Nothing is produced when ``output`` is None or ``to_message`` returns None,
    which lets senders ignore initial or uninteresting values.
    """
    if output is None:
        return None
    message = to_message(output)
    if message is None:
        return None
    return Feedback.success(message)


def from_error(err: Optional[BaseException]) -> Optional[Feedback]:
    if err is None:
        return None
    message = describe_error(err)
    if message == ERROR_DEFAULT:
        logger.debug("Error %r has no display description; using '%s'", err, ERROR_DEFAULT)
    return Feedback.error(message)


def from_result(result: Result, to_message: MessageFn[Any]) -> Optional[Feedback]:
    """Map an ``Ok``/``Err`` outcome.

    The success branch may be suppressed by ``to_message``; the failure branch
    always yields an error feedback.
    """
    if isinstance(result, Ok):
        return from_optional(result.value, to_message)
    if isinstance(result, Err):
        return from_error(result.error)
    raise TypeError(f"expected Ok or Err, got {type(result).__name__}")
