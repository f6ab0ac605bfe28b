from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml
from platformdirs import user_config_dir

from .errors import FeedbackConfigError
from .timer import DEFAULT_DURATION
from .ui.banner import BannerStyle

logger = logging.getLogger(__name__)

APP_NAME = "feedback_overlay"
ENV_DURATION = "FEEDBACK_DISMISS_SECONDS"

_COLOR_FIELDS = ("success_color", "error_color", "text_color")
_INT_FIELDS = ("font_size", "height", "margin", "padding")


def default_user_path() -> Path:
    return Path(user_config_dir(APP_NAME)) / "feedback.yaml"


def _parse_color(name: str, value: Any) -> Tuple[int, int, int, int]:
    if isinstance(value, str):
        raise FeedbackConfigError(f"{name} must be a list of 4 integers, got {value!r}")
    try:
        color = tuple(int(c) for c in value)
    except (TypeError, ValueError) as exc:
        raise FeedbackConfigError(f"{name} must be a list of 4 integers, got {value!r}") from exc
    if len(color) != 4 or any(not 0 <= c <= 255 for c in color):
        raise FeedbackConfigError(f"{name} must be RGBA in 0-255, got {value!r}")
    return color  # type: ignore[return-value]


def _parse_non_negative_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise FeedbackConfigError(f"{name} must be an integer, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise FeedbackConfigError(f"{name} must be an integer, got {value!r}") from exc
    if number < 0:
        raise FeedbackConfigError(f"{name} must be non-negative, got {number}")
    return number


@dataclass
class FeedbackSettings:
    """Tunables for a feedback container.

    ``duration`` is fixed per container once it is created.
    """

    duration: float = DEFAULT_DURATION
    style: BannerStyle = field(default_factory=BannerStyle)

    @staticmethod
    def _load_yaml(path: Path) -> dict:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise FeedbackConfigError(f"{path} must contain a mapping, got {type(data).__name__}")
        return data

    @classmethod
    def _deep_merge(cls, base: dict, overlay: dict) -> dict:
        merged = dict(base)
        for k, v in (overlay or {}).items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                merged[k] = cls._deep_merge(base[k], v)
            else:
                merged[k] = v
        return merged

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FeedbackSettings":
        """Build settings from a plain mapping, validating as we go."""
        try:
            duration = float(data.get("duration", DEFAULT_DURATION))
        except (TypeError, ValueError) as exc:
            raise FeedbackConfigError(f"duration must be a number: {data.get('duration')!r}") from exc
        if duration <= 0:
            raise FeedbackConfigError(f"duration must be positive, got {duration}")

        style = data.get("style") or {}
        if not isinstance(style, dict):
            raise FeedbackConfigError(f"style must be a mapping, got {type(style).__name__}")
        raw_style = dict(style)
        known = {f.name for f in dataclasses.fields(BannerStyle)}
        unknown = sorted(set(raw_style) - known)
        if unknown:
            raise FeedbackConfigError(f"unknown banner style keys: {', '.join(unknown)}")
        for name in _COLOR_FIELDS:
            if name in raw_style:
                raw_style[name] = _parse_color(name, raw_style[name])
        for name in _INT_FIELDS:
            if name in raw_style:
                raw_style[name] = _parse_non_negative_int(name, raw_style[name])
        return cls(duration=duration, style=BannerStyle(**raw_style))

    @classmethod
    def load(cls, user_path: Optional[Path] = None) -> "FeedbackSettings":
        """Load settings from built-in defaults, a user override file and the environment.

        If ``user_path`` is None the platform config directory is checked.
        ``FEEDBACK_DISMISS_SECONDS`` overrides the duration last.
        """
        try:
            with resources.files("feedback_overlay.defaults").joinpath("feedback.yaml").open("r", encoding="utf-8") as f:
                default_data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning("Default feedback settings not found; falling back to dataclass defaults.")
            default_data = dataclasses.asdict(FeedbackSettings())

        path = user_path if user_path is not None else default_user_path()
        user_data: dict = {}
        if path.exists():
            user_data = cls._load_yaml(path)
            logger.info("Loaded feedback settings from %s", path)
        else:
            logger.debug("No user feedback settings at %s", path)

        merged = cls._deep_merge(default_data, user_data)
        env_duration = os.getenv(ENV_DURATION)
        if env_duration:
            logger.info("Overriding dismiss duration from %s=%s", ENV_DURATION, env_duration)
            merged["duration"] = env_duration
        return cls.from_dict(merged)
