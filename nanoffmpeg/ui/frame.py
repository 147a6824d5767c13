"""The persistent top bar, status line and bottom bar around screen content."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from . import theme
from .style import Style, height, join_vertical


@dataclass(frozen=True)
class KeyHint:
    """A key binding shown in the bottom bar."""

    key: str
    desc: str


@dataclass
class Frame:
    """Lays out screen content inside the application chrome."""

    width: int
    height: int

    def render(
        self,
        breadcrumb: str,
        status_line: str,
        content: str,
        key_hints: Optional[Iterable[KeyHint]] = (),
    ) -> str:
        """Wrap ``content`` with the bars, padding or cutting it to fit."""
        top_bar = self._top_bar(breadcrumb)
        bottom_bar = self._bottom_bar(key_hints or ())
        status_bar = self._status_line(status_line) if status_line else ""

        used = height(top_bar) + height(bottom_bar)
        if status_bar:
            used += height(status_bar)
        content_height = max(self.height - used, 1)

        lines = content.split("\n")
        lines = (lines + [""] * content_height)[:content_height]

        parts = [top_bar]
        if status_bar:
            parts.append(status_bar)
        parts.extend(["\n".join(lines), bottom_bar])
        return join_vertical(*parts)

    def _top_bar(self, breadcrumb: str) -> str:
        p = theme.palette()
        logo = Style().bold(True).foreground(p.primary).render("nano-ffmpeg")
        crumb = Style().foreground(p.dim).render(" > " + breadcrumb)
        return (
            Style()
            .width(self.width)
            .background(p.top_bar_bg)
            .padding(0, 1)
            .render(logo + crumb)
        )

    def _status_line(self, status: str) -> str:
        p = theme.palette()
        return (
            Style()
            .width(self.width)
            .foreground(p.dim)
            .background(p.status_bar_bg)
            .padding(0, 1)
            .render(status)
        )

    def _bottom_bar(self, hints: Iterable[KeyHint]) -> str:
        s = theme.styles()
        joined = "   ".join(
            f"{s.key.render(h.key)} {s.desc.render(h.desc)}" for h in hints
        )
        return (
            Style()
            .width(self.width)
            .background(theme.palette().bottom_bar_bg)
            .padding(0, 1)
            .render(joined)
        )