class FeedbackError(Exception):
    """Base error for feedback overlay exceptions."""


class MissingContainerError(FeedbackError):
    """Raised when a sender is bound without a live feedback container scope."""


class FeedbackConfigError(FeedbackError):
    """Raised when feedback settings are invalid (e.g. non-positive duration)."""
