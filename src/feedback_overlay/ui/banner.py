from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Tuple

from ..models import FeedbackKind

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int, int]  # RGBA 0-255


class BannerRenderer(Protocol):
    """Presentational sink for the overlay banner. Keeps Arcade out of the core.

    Called once per frame while feedback is displayed, never otherwise.
    """

    def draw_banner(self, message: str, kind: FeedbackKind) -> None:
        ...


@dataclass
class BannerStyle:
    """Visual configuration for the banner.

    Attributes:
        success_color: Background for success feedback.
        error_color: Background for error feedback.
        text_color: RGBA text color.
        font_size: Font size in points.
        height: Minimum banner height in pixels.
        margin: Horizontal and top margin from the window edges.
        padding: Inner padding around the text.
    """

    success_color: Color = (46, 160, 67, 255)
    error_color: Color = (207, 34, 46, 255)
    text_color: Color = (255, 255, 255, 255)
    font_size: int = 16
    height: int = 40
    margin: int = 16
    padding: int = 8

    def background_for(self, kind: FeedbackKind) -> Color:
        if kind is FeedbackKind.ERROR:
            return self.error_color
        return self.success_color


try:  # Optional Arcade adapter
    import arcade  # type: ignore

    class ArcadeBannerRenderer:
        """Draws the banner across the top of the current arcade window.

        Args:
            style: Colors and metrics.
            translate: Maps a message key to display text (identity by default).
        """

        def __init__(
            self,
            style: Optional[BannerStyle] = None,
            translate: Optional[Callable[[str], str]] = None,
        ) -> None:
            self.style = style or BannerStyle()
            self.translate = translate or (lambda key: key)

        def draw_banner(self, message: str, kind: FeedbackKind) -> None:  # pragma: no cover - needs a GL window
            window = arcade.get_window()
            s = self.style
            left = s.margin
            right = window.width - s.margin
            top = window.height - s.margin
            bottom = top - max(s.height, s.font_size + 2 * s.padding)
            arcade.draw_lrbt_rectangle_filled(left, right, bottom, top, s.background_for(kind))
            arcade.draw_text(
                self.translate(message),
                (left + right) / 2,
                (top + bottom) / 2,
                color=s.text_color,
                font_size=s.font_size,
                anchor_x="center",
                anchor_y="center",
            )

except Exception:  # pragma: no cover - no arcade
    ArcadeBannerRenderer = None  # type: ignore
