"""A directory browser for choosing the input file."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

from ..ui import theme
from ..ui.frame import KeyHint
from ..ui.style import Style
from .messages import BackMsg, Cmd, KeyMsg, Screen, WindowSizeMsg

MEDIA_EXTENSIONS = frozenset(
    {
        ".mp4", ".mkv", ".avi", ".mov", ".wmv",
        ".flv", ".webm", ".m4v", ".mpg", ".mpeg",
        ".3gp", ".ogv", ".ts", ".m2ts", ".vob",
        ".mp3", ".aac", ".flac", ".wav", ".ogg",
        ".wma", ".m4a", ".opus", ".ac3", ".dts",
        ".png", ".jpg", ".jpeg", ".gif", ".bmp",
        ".webp", ".tiff", ".srt", ".ass", ".ssa",
    }
)

_LEADING_FLOAT = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

Prober = Callable[[str, str], Any]
"""Inspects a media file: called with the ffprobe path and the file path.

Returns a probe result or raises on failure. A probe result offers
``format.format_name``, ``duration_string()``, ``size_string()``,
``video_stream()``, ``audio_stream()`` and ``subtitle_streams()``.
"""


@dataclass(frozen=True)
class Entry:
    """A directory or file shown in the browser."""

    name: str
    path: str
    is_dir: bool
    size: int = 0


@dataclass(frozen=True)
class FileSelectedMsg:
    """Sent when a file is chosen."""

    path: str
    probe_result: Any


def is_media_file(name: str) -> bool:
    """Report whether ``name`` has a known media extension."""
    return os.path.splitext(name)[1].lower() in MEDIA_EXTENSIONS


def format_size(num_bytes: int) -> str:
    """Format a byte count using B, KB, MB or GB."""
    size = float(num_bytes)
    units = ("B", "KB", "MB", "GB")
    index = 0
    while size >= 1024 and index < len(units) - 1:
        size /= 1024
        index += 1
    if index == 0:
        return f"{size:.0f} {units[index]}"
    return f"{size:.1f} {units[index]}"


def _leading_float(text: str) -> float:
    match = _LEADING_FLOAT.match(text)
    return float(match.group()) if match else 0.0


def parse_fps(rational: str) -> float:
    """Turn a rational such as ``"30000/1001"`` into frames per second, or 0."""
    parts = rational.split("/")
    if len(parts) != 2:
        return 0.0
    num = _leading_float(parts[0])
    den = _leading_float(parts[1])
    if den == 0:
        return 0.0
    return num / den


class FilePicker(Screen):
    """Browses directories and picks a media file to work on."""

    def __init__(
        self,
        ffprobe_path: str,
        start_dir: str = "",
        prober: Optional[Prober] = None,
    ) -> None:
        if not start_dir:
            start_dir = os.path.expanduser("~")
        self.ffprobe_path = ffprobe_path
        self.current_dir = start_dir
        self.entries: list[Entry] = []
        self.cursor = 0
        self.offset = 0
        self.err: Optional[Exception] = None
        self.probe_result: Any = None
        self.path_input = False
        self.path_text = ""
        self.width = 0
        self.height = 0
        self._prober = prober
        self.load_dir()

    def init(self) -> Optional[Cmd]:
        """Keep the cursor row in view; no startup command."""
        self._ensure_visible()
        return None

    def update(self, msg: Any) -> Tuple[Screen, Optional[Cmd]]:
        if isinstance(msg, WindowSizeMsg):
            self.width = msg.width
            self.height = msg.height
        elif isinstance(msg, KeyMsg):
            if self.path_input:
                return self._update_path_input(msg)
            return self._update_browser(msg)
        return self, None

    def _enter_dir(self, path: str) -> None:
        self.current_dir = path
        self.cursor = 0
        self.offset = 0
        self.load_dir()

    def _update_browser(self, msg: KeyMsg) -> Tuple[Screen, Optional[Cmd]]:
        key = msg.key
        if key in ("up", "k"):
            if self.cursor > 0:
                self.cursor -= 1
                self._ensure_visible()
                self._probe_selected()
        elif key in ("down", "j"):
            if self.cursor < len(self.entries) - 1:
                self.cursor += 1
                self._ensure_visible()
                self._probe_selected()
        elif key == "enter":
            if self.cursor < len(self.entries):
                entry = self.entries[self.cursor]
                if entry.is_dir:
                    self._enter_dir(entry.path)
                    self.probe_result = None
                elif self.probe_result is not None:
                    result = self.probe_result
                    return self, lambda: FileSelectedMsg(entry.path, result)
        elif key == "esc":
            return self, BackMsg
        elif key == "/":
            self.path_input = True
            self.path_text = self.current_dir + "/"
        elif key == "backspace":
            parent = os.path.dirname(self.current_dir)
            if parent != self.current_dir:
                self._enter_dir(parent)
                self.probe_result = None
        return self, None

    def _update_path_input(self, msg: KeyMsg) -> Tuple[Screen, Optional[Cmd]]:
        key = msg.key
        if key == "esc":
            self.path_input = False
        elif key == "enter":
            self.path_input = False
            path = self.path_text
            if not os.path.exists(path):
                try:
                    os.stat(path)
                except OSError as exc:
                    self.err = exc
                    return self, None
            if os.path.isdir(path):
                self._enter_dir(path)
            else:
                try:
                    probe = self._probe(path)
                except Exception as exc:  # any probe failure is shown to the user
                    self.err = exc
                else:
                    return self, lambda: FileSelectedMsg(path, probe)
        elif key == "backspace":
            self.path_text = self.path_text[:-1]
        elif len(key) == 1:
            self.path_text += key
        return self, None

    def _probe(self, path: str) -> Any:
        if self._prober is None:
            raise RuntimeError("no media prober configured")
        return self._prober(self.ffprobe_path, path)

    def view(self) -> str:
        p = theme.palette()
        s = theme.styles()
        parts = [
            Style().foreground(p.secondary).bold(True).padding_left(1).render(self.current_dir),
            "\n",
        ]

        if self.path_input:
            parts.append(Style().foreground(p.primary).render("  Path: "))
            parts.append(Style().foreground(p.text).render(self.path_text))
            parts.append(Style().foreground(p.primary).render("_"))
            parts.append("\n\n")

        if self.err is not None:
            parts.append(s.error.render(f"  Error: {self.err}"))
            parts.append("\n\n")
            self.err = None

        end = min(self.offset + self.visible_lines(), len(self.entries))
        for i in range(self.offset, end):
            entry = self.entries[i]
            icon = "  "
            name = entry.name + "/" if entry.is_dir else entry.name
            size = "" if entry.is_dir else format_size(entry.size)
            if i == self.cursor:
                indicator = Style().foreground(p.primary).bold(True).render(" >")
                styled = Style().foreground(p.text).bold(True).render(icon + name)
                sized = Style().foreground(p.dim).render("  " + size)
                parts.append(indicator + styled + sized + "\n")
            else:
                if entry.is_dir:
                    color = p.secondary
                elif is_media_file(entry.name):
                    color = p.text
                else:
                    color = p.dim
                styled = Style().foreground(color).padding_left(2).render(icon + name)
                sized = Style().foreground(p.muted).render("  " + size)
                parts.append(styled + sized + "\n")

        if self.probe_result is not None:
            parts.append("\n")
            parts.append(self._render_preview())
        return "".join(parts)

    def _render_preview(self) -> str:
        p = theme.palette()
        r = self.probe_result
        lines = [
            Style().foreground(p.primary).bold(True).render("File Info"),
            f"  Format: {r.format.format_name}  |  Duration: {r.duration_string()}"
            f"  |  Size: {r.size_string()}",
        ]

        video = r.video_stream()
        if video is not None:
            fps = parse_fps(video.r_frame_rate)
            line = f"  Video:  {video.codec_name} {video.width}x{video.height}"
            if fps > 0:
                line += f" @ {fps:.3g}fps"
            if video.pix_fmt:
                line += f" ({video.pix_fmt})"
            lines.append(line)

        audio = r.audio_stream()
        if audio is not None:
            line = f"  Audio:  {audio.codec_name}"
            if audio.channel_layout:
                line += " " + audio.channel_layout
            if audio.sample_rate:
                line += f" {audio.sample_rate}Hz"
            lines.append(line)

        subs = r.subtitle_streams()
        if subs:
            lines.append(f"  Subs:   {len(subs)} track(s)")

        content = "\n".join(lines)
        return theme.styles().panel.render(Style().foreground(p.dim).render(content))

    def breadcrumb(self) -> str:
        return "File Picker"

    def key_hints(self) -> list[KeyHint]:
        if self.path_input:
            return [KeyHint("Enter", "Go"), KeyHint("Esc", "Cancel")]
        return [
            KeyHint("↑↓", "Navigate"),
            KeyHint("Enter", "Open/Select"),
            KeyHint("Bksp", "Parent dir"),
            KeyHint("/", "Path input"),
            KeyHint("Esc", "Back"),
        ]

    def load_dir(self) -> None:
        """List the current directory: visible directories first, then files."""
        try:
            with os.scandir(self.current_dir) as it:
                found = sorted(it, key=lambda e: e.name)
        except OSError as exc:
            self.err = exc
            return

        visible = [e for e in found if not e.name.startswith(".")]
        dirs = [e for e in visible if e.is_dir(follow_symlinks=False)]
        files = [e for e in visible if not e.is_dir(follow_symlinks=False)]

        entries = [
            Entry(e.name, os.path.join(self.current_dir, e.name), True) for e in dirs
        ]
        for e in files:
            try:
                size = e.stat(follow_symlinks=False).st_size
            except OSError:
                size = 0
            entries.append(Entry(e.name, os.path.join(self.current_dir, e.name), False, size))
        self.entries = entries

    def _probe_selected(self) -> None:
        if self.cursor >= len(self.entries):
            return
        entry = self.entries[self.cursor]
        if entry.is_dir or not is_media_file(entry.name):
            self.probe_result = None
            return
        try:
            self.probe_result = self._probe(entry.path)
        except Exception:  # no preview for files that cannot be probed
            self.probe_result = None

    def visible_lines(self) -> int:
        """Number of list rows that fit, leaving room for header and preview."""
        return max(self.height - 10, 5)

    def _ensure_visible(self) -> None:
        visible = self.visible_lines()
        if self.cursor < self.offset:
            self.offset = self.cursor
        if self.cursor >= self.offset + visible:
            self.offset = self.cursor - visible + 1