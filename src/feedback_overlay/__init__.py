"""
Timed overlay feedback for games and tools.

Producers expose signals, senders map their output to Feedback through the
adapters, and a FeedbackContainer shows the most recent one as a banner that
dismisses itself after a fixed duration.
"""
from .adapters import describe_error, from_error, from_feedback, from_optional, from_result, from_value
from .channel import FeedbackChannel
from .container import ContainerState, FeedbackContainer, FeedbackScope, feedback_container
from .errors import FeedbackConfigError, FeedbackError, MissingContainerError
from .models import ERROR_DEFAULT, Err, Feedback, FeedbackKind, LocalizedError, Ok, Result
from .scheduling import ArcadeScheduler, FrameScheduler, Scheduler, TimerHandle
from .sender import FeedbackSender, send_error, send_feedback, send_message, send_result
from .settings import FeedbackSettings
from .signals import Property, Signal, Subject
from .timer import DEFAULT_DURATION, DismissTimer

__all__ = [
    "ArcadeScheduler",
    "ContainerState",
    "DEFAULT_DURATION",
    "DismissTimer",
    "ERROR_DEFAULT",
    "Err",
    "Feedback",
    "FeedbackChannel",
    "FeedbackConfigError",
    "FeedbackContainer",
    "FeedbackError",
    "FeedbackKind",
    "FeedbackScope",
    "FeedbackSender",
    "FeedbackSettings",
    "FrameScheduler",
    "LocalizedError",
    "MissingContainerError",
    "Ok",
    "Property",
    "Result",
    "Scheduler",
    "Signal",
    "Subject",
    "TimerHandle",
    "describe_error",
    "feedback_container",
    "from_error",
    "from_feedback",
    "from_optional",
    "from_result",
    "from_value",
    "send_error",
    "send_feedback",
    "send_message",
    "send_result",
]
