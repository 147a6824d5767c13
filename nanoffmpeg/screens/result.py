"""The screen shown after a successful encode."""

from __future__ import annotations

import os
import subprocess
import sys
from typing import Any, Callable, Optional, Tuple

from ..ui import theme
from ..ui.frame import KeyHint
from ..ui.style import Style
from .messages import Cmd, KeyMsg, NavigateMsg, QuitMsg, Screen, ScreenID, WindowSizeMsg

SUPPORT_URL = "https://example.com/support"

_BAR_WIDTH = 30


def open_url(url: str) -> None:
    """Open ``url`` in the default browser; raises OSError if that fails."""
    if sys.platform == "darwin":
        argv = ["open", url]
    elif sys.platform.startswith("win"):
        argv = ["rundll32", "url.dll,FileProtocolHandler", url]
    else:
        argv = ["xdg-open", url]
    subprocess.Popen(argv, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)


def _format_size(num_bytes: int) -> str:
    size = float(num_bytes)
    units = ("B", "KB", "MB", "GB")
    index = 0
    while size >= 1024 and index < len(units) - 1:
        size /= 1024
        index += 1
    if index == 0:
        return f"{size:.0f} {units[index]}"
    return f"{size:.1f} {units[index]}"


def _file_size(path: str) -> int:
    try:
        return os.stat(path).st_size
    except OSError:
        return 0


class ResultScreen(Screen):
    """Shows the output file, the size change and what to do next."""

    def __init__(
        self,
        output_path: str,
        input_size: int,
        opener: Callable[[str], Any] = open_url,
        support_url: str = SUPPORT_URL,
    ) -> None:
        self.output_path = output_path
        self.input_size = input_size
        self.output_size = _file_size(output_path)
        self.options: Tuple[str, ...] = ("Do another operation", "Buy me a coffee ☕", "Quit")
        self.cursor = 0
        self.width = 0
        self.height = 0
        self._opener = opener
        self._support_url = support_url

    def init(self) -> Optional[Cmd]:
        """Refresh the output size from disk; no startup command."""
        self.output_size = _file_size(self.output_path)
        return None

    def _open_support(self) -> None:
        try:
            self._opener(self._support_url)
        except OSError:
            pass
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
                if self.cursor < len(self.options) - 1:
                    self.cursor += 1
            elif key == "enter":
                if self.cursor == 0:
                    return self, lambda: NavigateMsg(ScreenID.HOME)
                if self.cursor == 1:
                    return self, self._open_support
                if self.cursor == 2:
                    return self, QuitMsg
            elif key == "esc":
                return self, lambda: NavigateMsg(ScreenID.HOME)
        return self, None

    def view(self) -> str:
        p = theme.palette()
        s = theme.styles()
        parts = [
            Style().foreground(p.success).bold(True).render("  Done!"),
            "\n\n",
            Style().foreground(p.dim).render("  Output: ")
            + Style().foreground(p.secondary).bold(True).render(self.output_path),
            "\n\n",
            self.render_size_comparison(),
            "\n\n",
        ]
        for i, option in enumerate(self.options):
            if i == self.cursor:
                indicator = Style().foreground(p.primary).bold(True).render(" > ")
                parts.append(indicator + s.selected.render(option) + "\n")
            else:
                parts.append(Style().foreground(p.text).padding_left(3).render(option) + "\n")
        return "".join(parts)

    def render_size_comparison(self) -> str:
        """Render input and output sizes side by side, or "" if either is unknown."""
        if self.input_size == 0 or self.output_size == 0:
            return ""
        p = theme.palette()

        ratio = self.output_size / self.input_size
        if ratio < 1:
            change = f"{(1 - ratio) * 100:.1f}% smaller"
            change_style = Style().foreground(p.success).bold(True)
            bar_color = p.success
        else:
            change = f"{(ratio - 1) * 100:.1f}% larger"
            change_style = Style().foreground(p.warning).bold(True)
            bar_color = p.warning

        input_bar = Style().foreground(p.muted).render("█" * _BAR_WIDTH)
        output_len = min(max(int(_BAR_WIDTH * ratio), 1), _BAR_WIDTH)
        output_bar = Style().foreground(bar_color).render("█" * output_len)
        output_pad = " " * (_BAR_WIDTH - output_len)

        col = Style().foreground(p.dim).padding_left(2)
        lines = [
            col.render(f"Input:  {input_bar}  {_format_size(self.input_size)}"),
            col.render(f"Output: {output_bar}{output_pad}  {_format_size(self.output_size)}"),
            "",
            Style().padding_left(2).render(change_style.render("  " + change)),
        ]
        return "\n".join(lines)

    def breadcrumb(self) -> str:
        return "Result"

    def key_hints(self) -> list[KeyHint]:
        return [
            KeyHint("↑↓", "Navigate"),
            KeyHint("Enter", "Select"),
            KeyHint("Esc", "Home"),
        ]