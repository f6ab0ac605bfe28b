import logging
import os
from typing import Optional

PACKAGE_LOGGER = "feedback_overlay"


def configure_logging(default_level: int = logging.INFO, package_level: Optional[int] = None) -> None:
    """Configure root logger with the project format.

    FEEDBACK_LOG_LEVEL overrides ``default_level``. ``package_level`` tunes only the
    feedback_overlay loggers, e.g. DEBUG to trace publishes and timer restarts
    without flooding the host game's output.
    """
    level_name = os.getenv("FEEDBACK_LOG_LEVEL")
    level = default_level
    if level_name:
        level = getattr(logging, level_name.upper(), default_level)
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
    )
    if package_level is not None:
        logging.getLogger(PACKAGE_LOGGER).setLevel(package_level)
