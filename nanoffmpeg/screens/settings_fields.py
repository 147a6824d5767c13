"""Form fields for the settings screen and the default fields of each operation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from .operations import OperationID


class FieldType(IntEnum):
    """The kind of form field."""

    SELECT = 0
    TEXT = 1
    TOGGLE = 2


@dataclass(frozen=True)
class Option:
    """A selectable choice in a select field."""

    label: str
    value: str


def clamp_cursor(cursor: int, limit: int) -> int:
    """Clamp ``cursor`` into the range 0..limit."""
    return min(max(cursor, 0), limit)


@dataclass
class Field:
    """A single form field: a choice list, a text box or an on/off toggle."""

    label: str
    type: FieldType
    options: Tuple[Option, ...] = ()
    value: str = ""
    selected: int = 0
    enabled: bool = False
    cursor: int = 0

    def adjust(self, delta: int) -> None:
        """Step a choice, flip a toggle, or move the text cursor by ``delta``."""
        if self.type is FieldType.SELECT:
            if not self.options:
                return
            self.selected = clamp_cursor(self.selected + delta, len(self.options) - 1)
            self.value = self.options[self.selected].value
        elif self.type is FieldType.TOGGLE:
            self.enabled = not self.enabled
            self.value = "true" if self.enabled else "false"
        elif self.type is FieldType.TEXT:
            self.cursor = clamp_cursor(self.cursor + delta, len(self.value))

    def insert_text(self, text: str) -> None:
        """Insert ``text`` at the cursor and move the cursor past it."""
        cursor = clamp_cursor(self.cursor, len(self.value))
        self.value = self.value[:cursor] + text + self.value[cursor:]
        self.cursor = cursor + len(text)

    def backspace(self) -> bool:
        """Delete the character before the cursor; False if there is none."""
        cursor = clamp_cursor(self.cursor, len(self.value))
        if cursor == 0:
            self.cursor = 0
            return False
        self.value = self.value[: cursor - 1] + self.value[cursor:]
        self.cursor = cursor - 1
        return True

    def delete(self) -> bool:
        """Delete the character under the cursor; False if there is none."""
        cursor = clamp_cursor(self.cursor, len(self.value))
        if cursor >= len(self.value):
            self.cursor = len(self.value)
            return False
        self.value = self.value[:cursor] + self.value[cursor + 1 :]
        self.cursor = cursor
        return True

    def display_with_cursor(self) -> str:
        """Return the value with a bar drawn at the cursor position."""
        cursor = clamp_cursor(self.cursor, len(self.value))
        return self.value[:cursor] + "│" + self.value[cursor:]


def _select(label: str, options: Sequence[Tuple[str, str]], selected: int) -> Field:
    opts = tuple(Option(lbl, val) for lbl, val in options)
    return Field(label, FieldType.SELECT, opts, opts[selected].value, selected)


def _text(label: str, value: str) -> Field:
    return Field(label, FieldType.TEXT, value=value, cursor=len(value))


def _toggle(label: str, enabled: bool) -> Field:
    return Field(label, FieldType.TOGGLE, value="true" if enabled else "false", enabled=enabled)


def _format_duration(seconds: float) -> str:
    total = max(int(seconds), 0)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def _convert_fields(probe: Any) -> list[Field]:
    return [
        _select("Format", [("MP4", "mp4"), ("MKV", "mkv"), ("WebM", "webm"), ("AVI", "avi"), ("MOV", "mov")], 0),
        _select("Codec", [("H.264", "libx264"), ("H.265", "libx265"), ("AV1", "libsvtav1"), ("VP9", "libvpx-vp9")], 0),
        _select(
            "Quality",
            [("High (CRF 18)", "18"), ("Balanced (CRF 23)", "23"), ("Small (CRF 28)", "28"), ("Tiny (CRF 32)", "32")],
            1,
        ),
        _select("Preset", [("Slow", "slow"), ("Medium", "medium"), ("Fast", "fast"), ("Ultrafast", "ultrafast")], 1),
        _select("Audio", [("Copy", "copy"), ("AAC", "aac"), ("MP3", "libmp3lame"), ("Opus", "libopus")], 0),
    ]


def _extract_audio_fields(probe: Any) -> list[Field]:
    return [
        _select(
            "Format",
            [("MP3", "mp3"), ("AAC", "m4a"), ("FLAC", "flac"), ("WAV", "wav"), ("OGG", "ogg"), ("Opus", "opus")],
            0,
        ),
        _select(
            "Bitrate",
            [
                ("320k (CD)", "320k"),
                ("256k (High)", "256k"),
                ("192k (Good)", "192k"),
                ("128k (Podcast)", "128k"),
                ("64k (Lo-fi)", "64k"),
            ],
            2,
        ),
    ]


def _resize_fields(probe: Any) -> list[Field]:
    return [
        _select(
            "Resolution",
            [("4K (2160p)", "2160"), ("1080p", "1080"), ("720p", "720"), ("480p", "480"), ("360p", "360")],
            1,
        ),
        _select(
            "Aspect Ratio",
            [("Keep Original", "keep"), ("16:9", "16:9"), ("4:3", "4:3"), ("Crop to Fit", "crop")],
            0,
        ),
        _select("Codec", [("H.264", "libx264"), ("H.265", "libx265")], 0),
    ]


def _trim_fields(probe: Any) -> list[Field]:
    end = _format_duration(probe.format.duration) if probe is not None else ""
    return [
        _text("Start Time", "00:00:00"),
        _text("End Time", end),
        _toggle("Lossless Cut", True),
    ]


def _compress_fields(probe: Any) -> list[Field]:
    return [
        _select("Quality", [("Visually Lossless", "18"), ("Good", "23"), ("Noticeable", "28"), ("Heavy", "32")], 1),
        _select(
            "Codec",
            [("H.264 (Compatible)", "libx264"), ("H.265 (Smaller)", "libx265"), ("AV1 (Smallest)", "libsvtav1")],
            0,
        ),
        _select("Preset", [("Slow (Better)", "slow"), ("Medium", "medium"), ("Fast", "fast")], 1),
        _toggle("Two-Pass", False),
    ]


def _merge_fields(probe: Any) -> list[Field]:
    return [
        _select("Merge Mode", [("Concat (Copy Streams)", "copy"), ("Concat (Re-encode)", "reencode")], 0),
    ]


def _subtitle_tracks(probe: Any) -> list[Tuple[str, str]]:
    subs = list(probe.subtitle_streams()) if probe is not None else []
    if not subs:
        return [("Track 1", "0")]
    tracks = []
    for i, stream in enumerate(subs):
        label = f"Track {i + 1} ({stream.codec_name.upper()})"
        lang = (getattr(stream, "tags", None) or {}).get("language", "")
        if lang:
            label += " " + lang.upper()
        tracks.append((label, str(i)))
    return tracks


def _subtitles_fields(probe: Any) -> list[Field]:
    return [
        _select("Subtitle Mode", [("Burn-in", "burn"), ("Embed", "embed")], 0),
        _select("Subtitle Track", _subtitle_tracks(probe), 0),
    ]


def _watermark_fields(probe: Any) -> list[Field]:
    return [
        _select(
            "Position",
            [
                ("Top Left", "top-left"),
                ("Top Right", "top-right"),
                ("Bottom Left", "bottom-left"),
                ("Bottom Right", "bottom-right"),
                ("Center", "center"),
            ],
            3,
        ),
        _select("Opacity", [("25%", "0.25"), ("50%", "0.50"), ("75%", "0.75")], 1),
        _select("Size", [("Small", "160x60"), ("Medium", "240x90"), ("Large", "320x120")], 1),
    ]


def _gif_fields(probe: Any) -> list[Field]:
    return [
        _select("FPS", [("24 fps", "24"), ("15 fps", "15"), ("10 fps", "10")], 1),
        _select("Width", [("640px", "640"), ("480px", "480"), ("320px", "320")], 1),
        _text("Start Time", "00:00:00"),
        _text("Duration", "5"),
    ]


def _thumbnail_fields(probe: Any) -> list[Field]:
    return [
        _select("Mode", [("Single Frame", "single"), ("Grid (4x4)", "grid"), ("Every N Seconds", "interval")], 0),
        _text("Timestamp", "00:00:05"),
    ]


def _audio_fields(probe: Any) -> list[Field]:
    return [
        _select(
            "Operation",
            [
                ("Normalize", "normalize"),
                ("Volume Up", "up"),
                ("Volume Down", "down"),
                ("Fade In/Out", "fade"),
                ("Remove Audio", "remove"),
            ],
            0,
        ),
        _select("Volume (dB)", [("+3 dB", "3"), ("+6 dB", "6"), ("-3 dB", "-3"), ("-6 dB", "-6")], 0),
    ]


def _filters_fields(probe: Any) -> list[Field]:
    return [
        _select(
            "Filter",
            [
                ("Stabilize", "vidstab"),
                ("Deinterlace", "yadif"),
                ("Speed 2x", "speed2"),
                ("Speed 0.5x", "speed05"),
                ("Rotate 90", "rotate90"),
                ("Flip Horizontal", "hflip"),
                ("Flip Vertical", "vflip"),
            ],
            0,
        ),
    ]


_BUILDERS: Dict[OperationID, Callable[[Any], list[Field]]] = {
    OperationID.CONVERT: _convert_fields,
    OperationID.EXTRACT_AUDIO: _extract_audio_fields,
    OperationID.RESIZE: _resize_fields,
    OperationID.TRIM: _trim_fields,
    OperationID.COMPRESS: _compress_fields,
    OperationID.MERGE: _merge_fields,
    OperationID.SUBTITLES: _subtitles_fields,
    OperationID.WATERMARK: _watermark_fields,
    OperationID.GIF: _gif_fields,
    OperationID.THUMBNAILS: _thumbnail_fields,
    OperationID.AUDIO: _audio_fields,
    OperationID.FILTERS: _filters_fields,
}


def fields_for(op_id: Any, probe: Optional[Any] = None) -> list[Field]:
    """Return fresh default fields for an operation; unknown ids get convert's.

    ``probe`` may be None; otherwise it offers ``format.duration`` and
    ``subtitle_streams()`` whose items have ``codec_name`` and ``tags``.
    """
    return _BUILDERS.get(op_id, _convert_fields)(probe)