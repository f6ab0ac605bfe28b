import sys
from pathlib import Path
from typing import List, Tuple

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from feedback_overlay.container import FeedbackContainer  # noqa: E402
from feedback_overlay.models import FeedbackKind  # noqa: E402


class RecordingRenderer:
    """Banner renderer double that records every draw call."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, FeedbackKind]] = []

    def draw_banner(self, message: str, kind: FeedbackKind) -> None:
        self.calls.append((message, kind))


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def container(renderer: RecordingRenderer):
    c = FeedbackContainer(renderer=renderer)
    yield c
    c.close()
