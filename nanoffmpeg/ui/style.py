"""Minimal terminal styling: colours, padding, fixed widths and borders."""

from __future__ import annotations

import os
import re
import sys
from dataclasses import dataclass, replace
from typing import Iterator, Optional, Tuple

from wcwidth import wcwidth

_ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
_HEX_RE = re.compile(r"^#([0-9a-fA-F]{6})$")
_RESET = "\x1b[0m"


@dataclass(frozen=True)
class Border:
    """Glyphs used to draw a box around rendered text."""

    top: str
    bottom: str
    left: str
    right: str
    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str


ROUNDED = Border("─", "─", "│", "│", "╭", "╮", "╰", "╯")


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from ``text``."""
    return _ANSI_RE.sub("", text)


def _char_width(ch: str) -> int:
    return max(wcwidth(ch), 0)


def _line_width(line: str) -> int:
    return sum(_char_width(ch) for ch in strip_ansi(line))


def visible_width(text: str) -> int:
    """Return the display width of the widest line of ``text``."""
    return max(_line_width(line) for line in text.split("\n"))


def height(text: str) -> int:
    """Return the number of lines in ``text``."""
    return text.count("\n") + 1


def join_vertical(*args: str) -> str:
    """Stack blocks of text, left-aligned and padded to a common width."""
    if not args:
        return ""
    lines = [line for block in args for line in block.split("\n")]
    span = max(_line_width(line) for line in lines)
    return "\n".join(line + " " * (span - _line_width(line)) for line in lines)


def _color_enabled() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    force = os.environ.get("CLICOLOR_FORCE")
    if force and force != "0":
        return True
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def _parse_hex(color: str) -> Tuple[int, int, int]:
    match = _HEX_RE.match(color)
    if not match:
        raise ValueError(f"invalid colour {color!r}; expected #RRGGBB")
    value = match.group(1)
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def _tokens(text: str) -> Iterator[Tuple[str, int]]:
    pos = 0
    for match in _ANSI_RE.finditer(text):
        for ch in text[pos:match.start()]:
            yield ch, _char_width(ch)
        yield match.group(), 0
        pos = match.end()
    for ch in text[pos:]:
        yield ch, _char_width(ch)


def _hard_wrap(word: str, limit: int) -> list[str]:
    chunks: list[str] = []
    current, current_width = "", 0
    for token, width in _tokens(word):
        if width and current_width and current_width + width > limit:
            chunks.append(current)
            current, current_width = "", 0
        current += token
        current_width += width
    chunks.append(current)
    return chunks


def _wrap(line: str, limit: int) -> list[str]:
    if _line_width(line) <= limit:
        return [line]
    lines: list[str] = []
    current: Optional[str] = None
    current_width = 0
    for word in line.split(" "):
        width = _line_width(word)
        if current is not None and current_width + 1 + width <= limit:
            current += " " + word
            current_width += 1 + width
            continue
        if current is not None:
            if not word:
                # A line break absorbs the space.
                continue
            lines.append(current)
        pieces = _hard_wrap(word, limit) if width > limit else [word]
        lines.extend(pieces[:-1])
        current = pieces[-1]
        current_width = _line_width(current)
    lines.append(current if current is not None else "")
    return lines


@dataclass(frozen=True)
class Style:
    """An immutable text style; every setter returns a new style."""

    _bold: bool = False
    _foreground: Optional[str] = None
    _background: Optional[str] = None
    _width: int = 0
    _padding: Tuple[int, int, int, int] = (0, 0, 0, 0)
    _border: Optional[Border] = None
    _border_foreground: Optional[str] = None

    def bold(self, value: bool = True) -> "Style":
        return replace(self, _bold=bool(value))

    def foreground(self, color: str) -> "Style":
        _parse_hex(color)
        return replace(self, _foreground=color)

    def background(self, color: str) -> "Style":
        _parse_hex(color)
        return replace(self, _background=color)

    def width(self, width: int) -> "Style":
        return replace(self, _width=width)

    def padding(self, *args: int) -> "Style":
        """Set padding CSS-style: 1 to 4 values (top, right, bottom, left)."""
        if len(args) == 1:
            values = (args[0],) * 4
        elif len(args) == 2:
            values = (args[0], args[1], args[0], args[1])
        elif len(args) == 3:
            values = (args[0], args[1], args[2], args[1])
        elif len(args) == 4:
            values = tuple(args)
        else:
            raise ValueError("padding takes between 1 and 4 values")
        return replace(self, _padding=tuple(max(v, 0) for v in values))

    def padding_left(self, amount: int) -> "Style":
        top, right, bottom, _ = self._padding
        return replace(self, _padding=(top, right, bottom, max(amount, 0)))

    def padding_right(self, amount: int) -> "Style":
        top, _, bottom, left = self._padding
        return replace(self, _padding=(top, max(amount, 0), bottom, left))

    def border(self, border: Border) -> "Style":
        return replace(self, _border=border)

    def border_foreground(self, color: str) -> "Style":
        _parse_hex(color)
        return replace(self, _border_foreground=color)

    def _codes(self) -> str:
        codes = []
        if self._bold:
            codes.append("1")
        if self._foreground:
            codes.append("38;2;%d;%d;%d" % _parse_hex(self._foreground))
        if self._background:
            codes.append("48;2;%d;%d;%d" % _parse_hex(self._background))
        return ";".join(codes)

    def _draw_border(self, lines: list[str], inner_width: int, colored: bool) -> list[str]:
        b = self._border
        assert b is not None

        def paint(glyphs: str) -> str:
            if colored and self._border_foreground:
                rgb = _parse_hex(self._border_foreground)
                return "\x1b[38;2;%d;%d;%dm" % rgb + glyphs + _RESET
            return glyphs

        top = paint(b.top_left + b.top * inner_width + b.top_right)
        bottom = paint(b.bottom_left + b.bottom * inner_width + b.bottom_right)
        left, right = paint(b.left), paint(b.right)
        return [top, *(left + line + right for line in lines), bottom]

    def render(self, text: str) -> str:
        """Apply the style to ``text`` and return the rendered block."""
        top, right, bottom, left = self._padding
        lines = text.replace("\r\n", "\n").replace("\t", "    ").split("\n")
        inner = self._width - left - right if self._width > 0 else 0
        if inner > 0:
            lines = [piece for line in lines for piece in _wrap(line, inner)]
        span = max([inner, *(_line_width(line) for line in lines)])
        lines = [line + " " * (span - _line_width(line)) for line in lines]
        blank = " " * span
        lines = [blank] * top + lines + [blank] * bottom
        lines = [" " * left + line + " " * right for line in lines]

        colored = _color_enabled()
        codes = self._codes()
        if colored and codes:
            lines = [f"\x1b[{codes}m{line}{_RESET}" for line in lines]
        if self._border is not None:
            lines = self._draw_border(lines, span + left + right, colored)
        return "\n".join(lines)