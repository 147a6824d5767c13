"""Terminal size checks."""

from __future__ import annotations

from . import theme
from .style import Style

MIN_WIDTH = 80
MIN_HEIGHT = 24


def check_terminal_size(width: int, height: int) -> str:
    """Return a warning when the terminal is too small, else an empty string."""
    if width >= MIN_WIDTH and height >= MIN_HEIGHT:
        return ""
    message = (
        f"Terminal too small ({width}x{height}). Minimum: {MIN_WIDTH}x{MIN_HEIGHT}.\n"
        "Please resize your terminal window."
    )
    return (
        Style()
        .foreground(theme.palette().warning)
        .bold(True)
        .padding(2, 4)
        .render(message)
    )


def content_width(total_width: int) -> int:
    """Return the width available for content after padding."""
    return max(total_width - 4, MIN_WIDTH - 4)