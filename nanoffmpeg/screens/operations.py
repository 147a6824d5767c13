"""The screen listing every operation the user can run."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Optional, Tuple

from ..ui import theme
from ..ui.frame import KeyHint
from ..ui.style import Style
from .messages import BackMsg, Cmd, KeyMsg, Screen, WindowSizeMsg


class OperationID(IntEnum):
    """Identifies an operation type."""

    CONVERT = 0
    EXTRACT_AUDIO = 1
    RESIZE = 2
    TRIM = 3
    COMPRESS = 4
    MERGE = 5
    SUBTITLES = 6
    GIF = 7
    THUMBNAILS = 8
    WATERMARK = 9
    AUDIO = 10
    FILTERS = 11


@dataclass(frozen=True)
class Operation:
    """A selectable operation."""

    id: OperationID
    name: str
    desc: str
    icon: str


@dataclass(frozen=True)
class OperationSelectedMsg:
    """Sent when the user picks an operation."""

    operation: Operation


ALL_OPERATIONS: Tuple[Operation, ...] = (
    Operation(OperationID.CONVERT, "Convert Format", "Change container or codec (MP4, MKV, WebM, MP3...)", ">>"),
    Operation(OperationID.EXTRACT_AUDIO, "Extract Audio", "Strip video track, keep audio", "♪ "),
    Operation(OperationID.RESIZE, "Resize / Scale", "Change resolution, handle aspect ratio", "[]"),
    Operation(OperationID.TRIM, "Trim / Cut", "Cut segments by time or frame", "✂ "),
    Operation(OperationID.COMPRESS, "Compress", "Reduce file size with quality control", "↓ "),
    Operation(OperationID.MERGE, "Merge / Concat", "Join multiple files together", "++"),
    Operation(OperationID.SUBTITLES, "Add Subtitles", "Burn-in or embed subtitle tracks", "T "),
    Operation(OperationID.GIF, "Create GIF/WebP", "Animated image from video", "◎ "),
    Operation(OperationID.THUMBNAILS, "Extract Thumbnails", "Grab frames as images", "▣ "),
    Operation(OperationID.WATERMARK, "Watermark", "Image or text overlay", "✦ "),
    Operation(OperationID.AUDIO, "Audio Adjustments", "Normalize, volume, fade in/out", "♫ "),
    Operation(OperationID.FILTERS, "Video Filters", "Stabilize, crop, color, speed", "◈ "),
)


class OperationsScreen(Screen):
    """Lets the user choose which operation to run."""

    def __init__(self) -> None:
        self.cursor = 0
        self.width = 0
        self.height = 0

    def init(self) -> Optional[Cmd]:
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
                if self.cursor < len(ALL_OPERATIONS) - 1:
                    self.cursor += 1
            elif key == "enter":
                op = ALL_OPERATIONS[self.cursor]
                return self, lambda: OperationSelectedMsg(op)
            elif key == "esc":
                return self, BackMsg
        return self, None

    def view(self) -> str:
        p = theme.palette()
        s = theme.styles()
        parts = [
            Style()
            .foreground(p.primary)
            .bold(True)
            .padding_left(1)
            .render("What would you like to do?"),
            "\n\n",
        ]
        for i, op in enumerate(ALL_OPERATIONS):
            icon = Style().foreground(p.secondary).render(op.icon)
            if i == self.cursor:
                indicator = Style().foreground(p.primary).bold(True).render(" > ")
                name = s.selected.render(op.name)
                desc = Style().foreground(p.dim).render("  " + op.desc)
                parts.append(indicator + icon + " " + name + desc + "\n")
            else:
                name = Style().foreground(p.text).render(op.name)
                desc = Style().foreground(p.muted).render("  " + op.desc)
                parts.append("   " + icon + " " + name + desc + "\n")
        return "".join(parts)

    def breadcrumb(self) -> str:
        return "Operations"

    def key_hints(self) -> list[KeyHint]:
        return [
            KeyHint("↑↓", "Navigate"),
            KeyHint("Enter", "Select"),
            KeyHint("Esc", "Back"),
        ]