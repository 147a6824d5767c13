"""The home screen: ffmpeg summary, recent files and the operation list."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple

from ..ui import theme
from ..ui.frame import KeyHint
from ..ui.style import Style
from .messages import Cmd, KeyMsg, NavigateMsg, Screen, ScreenID, WindowSizeMsg

_MAX_RECENT = 5


@dataclass(frozen=True)
class HomeOperation:
    """An entry of the home screen's operation list."""

    name: str
    desc: str


HOME_OPERATIONS: Tuple[HomeOperation, ...] = (
    HomeOperation("Convert Format", "Change container or codec"),
    HomeOperation("Extract Audio", "Strip video, keep audio"),
    HomeOperation("Resize / Scale", "Change resolution"),
    HomeOperation("Trim / Cut", "Cut segments by time"),
    HomeOperation("Compress", "Reduce file size"),
    HomeOperation("Merge / Concat", "Join multiple files"),
    HomeOperation("Add Subtitles", "Burn-in or embed subs"),
    HomeOperation("Create GIF/WebP", "Animated image from video"),
    HomeOperation("Extract Thumbnails", "Grab frames from video"),
    HomeOperation("Watermark", "Image or text overlay"),
    HomeOperation("Audio Adjustments", "Normalize, fade, volume"),
    HomeOperation("Video Filters", "Stabilize, crop, color"),
)


class HomeScreen(Screen):
    """The first screen shown.

    ``info`` needs a ``version`` attribute; ``caps`` needs ``codecs`` (items
    with an ``encoding`` flag), ``formats``, ``filters`` and ``hw_accels``.
    """

    def __init__(self, info: Any, caps: Any, recent_files: Iterable[str] = ()) -> None:
        self.info = info
        self.caps = caps
        self.recent_files = list(recent_files or ())
        self.cursor = 0
        self.width = 0
        self.height = 0

    def init(self) -> Optional[Cmd]:
        """Start with the first operation selected; no startup command."""
        self.cursor = 0
        return None

    def update(self, msg: Any) -> Tuple[Screen, Optional[Cmd]]:
        if isinstance(msg, WindowSizeMsg):
            self.width = msg.width
            self.height = msg.height
        elif isinstance(msg, KeyMsg):
            key = msg.key
            if key in ("up", "k"):
                if self.cursor > 0:
                    self.cursor -= 1
            elif key in ("down", "j"):
                if self.cursor < len(HOME_OPERATIONS) - 1:
                    self.cursor += 1
            elif key == "enter":
                op = HOME_OPERATIONS[self.cursor]
                return self, lambda: NavigateMsg(ScreenID.FILE_PICKER, op)
        return self, None

    def view(self) -> str:
        p = theme.palette()
        s = theme.styles()
        parts = [self._render_header(), "\n\n"]

        if self.recent_files:
            parts.append(s.subtitle.render("RECENT FILES"))
            parts.append("\n")
            for path in self.recent_files[:_MAX_RECENT]:
                name = Style().foreground(p.text).padding_left(3).render(os.path.basename(path))
                folder = Style().foreground(p.muted).render("  " + os.path.dirname(path))
                parts.append(name + folder + "\n")
            parts.append("\n")

        parts.append(s.subtitle.render("OPERATIONS"))
        parts.append("\n\n")

        for i, op in enumerate(HOME_OPERATIONS):
            if i == self.cursor:
                indicator = Style().foreground(p.primary).bold(True).render(" > ")
                name = s.selected.render(op.name)
                desc = Style().foreground(p.dim).render("  " + op.desc)
                parts.append(indicator + name + desc + "\n")
            else:
                name = Style().foreground(p.text).padding_left(3).render(op.name)
                desc = Style().foreground(p.muted).render("  " + op.desc)
                parts.append(name + desc + "\n")
        return "".join(parts)

    def _render_header(self) -> str:
        p = theme.palette()
        s = theme.styles()
        version = s.success.render(f"  ffmpeg {self.info.version}")

        codecs = list(self.caps.codecs)
        encoders = sum(1 for codec in codecs if codec.encoding)
        stats = (
            f"{len(codecs)} codecs  |  {encoders} encoders  |  "
            f"{len(self.caps.formats)} formats  |  {len(self.caps.filters)} filters"
        )

        info = version + "\n" + Style().foreground(p.dim).padding_left(2).render(stats)
        if self.caps.hw_accels:
            hw = "HW Accel: " + ", ".join(self.caps.hw_accels)
            info += "\n" + Style().foreground(p.secondary).render("  " + hw)
        return s.panel.render(info)

    def breadcrumb(self) -> str:
        return "Home"

    def key_hints(self) -> list[KeyHint]:
        return [
            KeyHint("↑↓", "Navigate"),
            KeyHint("Enter", "Select"),
            KeyHint("q", "Quit"),
            KeyHint("?", "Help"),
        ]