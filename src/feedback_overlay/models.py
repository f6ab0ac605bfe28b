from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar, Union

T = TypeVar("T")

# Message key shown when an error carries no display description
ERROR_DEFAULT = "error_default"


class FeedbackKind(str, Enum):
    """Kind of feedback; only affects how the banner is styled."""

    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Feedback:
    """A transient user-facing message.

    Attributes:
        message: Localisable message key (or literal text).
        type: Whether this is a success or an error notification.
    """

    message: str
    type: FeedbackKind

    @classmethod
    def success(cls, message: str) -> "Feedback":
        return cls(message=message, type=FeedbackKind.SUCCESS)

    @classmethod
    def error(cls, message: str) -> "Feedback":
        return cls(message=message, type=FeedbackKind.ERROR)

    def to_dict(self) -> dict:
        return {"message": self.message, "type": self.type.value}


class LocalizedError(Exception):
    """Producer-side error that knows how it should be shown to the player.

    Any exception exposing a non-empty ``localized_description`` string is treated
    the same way; subclassing this is just the convenient path.
    """

    def __init__(self, localized_description: Optional[str] = None) -> None:
        super().__init__(localized_description or self.__class__.__name__)
        self.localized_description = localized_description


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome of an operation."""

    value: T


@dataclass(frozen=True)
class Err:
    """Failed outcome of an operation."""

    error: BaseException


Result = Union[Ok[Any], Err]
