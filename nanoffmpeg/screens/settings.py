"""The settings form for an operation and the ffmpeg commands it produces."""

from __future__ import annotations

import math
import os
import re
import shlex
import subprocess
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, Optional, Tuple

from ..ui import theme
from ..ui.frame import KeyHint
from ..ui.style import Style
from .messages import BackMsg, Cmd, KeyMsg, Screen, WindowSizeMsg
from .operations import OperationID
from .settings_fields import Field, FieldType, clamp_cursor, fields_for

FilterChecker = Callable[[str, str], bool]
"""Reports whether the ffmpeg binary at the first argument has the named filter."""

_FADE_DURATION = 2.0
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_VIDSTAB_TRANSFORM_FILE = ".nano-ffmpeg-vidstab.trf"
_MERGE_LIST_FILE = ".nano-ffmpeg-merge.ffconcat"
_SVT_AV1_PRESETS = {"slow": "4", "medium": "8", "fast": "10", "ultrafast": "12"}


@dataclass
class _Command:
    """An ffmpeg invocation assembled option by option."""

    binary: str
    input: str
    output: str
    options: list[str] = field(default_factory=list)
    video_filters: list[str] = field(default_factory=list)
    audio_filters: list[str] = field(default_factory=list)

    def add_args(self, *args: str) -> None:
        self.options.extend(args)

    def _set(self, flag: str, value: str) -> None:
        if flag in self.options:
            index = self.options.index(flag)
            self.options[index + 1] = value
        else:
            self.options.extend([flag, value])

    def _flag(self, flag: str) -> None:
        if flag not in self.options:
            self.options.append(flag)

    def add_video_filter(self, expr: str) -> None:
        self.video_filters.append(expr)

    def add_audio_filter(self, expr: str) -> None:
        self.audio_filters.append(expr)

    def set_video_codec(self, codec: str) -> None:
        self._set("-c:v", codec)

    def set_audio_codec(self, codec: str) -> None:
        self._set("-c:a", codec)

    def set_audio_bitrate(self, bitrate: str) -> None:
        self._set("-b:a", bitrate)

    def set_crf(self, crf: int) -> None:
        self._set("-crf", str(crf))

    def set_preset(self, preset: str) -> None:
        self._set("-preset", preset)

    def set_preset_for_codec(self, codec: str, preset: str) -> None:
        if codec == "libsvtav1":
            preset = _SVT_AV1_PRESETS.get(preset, preset)
        self.set_preset(preset)

    def set_scale_height(self, px: int) -> None:
        self.add_video_filter(f"scale=-2:{px}")

    def set_start_time(self, value: str) -> None:
        self._set("-ss", value)

    def set_end_time(self, value: str) -> None:
        self._set("-to", value)

    def set_duration(self, value: str) -> None:
        self._set("-t", value)

    def set_pixel_format(self, fmt: str) -> None:
        self._set("-pix_fmt", fmt)

    def no_audio(self) -> None:
        self._flag("-an")

    def no_video(self) -> None:
        self._flag("-vn")

    def stream_copy(self) -> None:
        self._set("-c", "copy")

    def build(self) -> list[str]:
        """Return the argument list, without the binary itself."""
        args = ["-y", "-i", self.input]
        if self.video_filters:
            args += ["-vf", ",".join(self.video_filters)]
        if self.audio_filters:
            args += ["-af", ",".join(self.audio_filters)]
        return args + self.options + [self.output]

    def __str__(self) -> str:
        return shlex.join([self.binary, *self.build()])


@dataclass(frozen=True)
class ExecuteMsg:
    """Asks the application to run the given ffmpeg commands in order."""

    commands: Tuple[_Command, ...]


def parse_int(text: str) -> int:
    """Read a leading decimal integer from ``text``; 0 if there is none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def operation_slug(name: str) -> str:
    """Turn an operation name into a file-name fragment such as ``merge_concat``."""
    slug = name.lower()
    for ch in (" ", "/", "\\", "-"):
        slug = slug.replace(ch, "_")
    while "__" in slug:
        slug = slug.replace("__", "_")
    return slug.strip("_")


def overlay_position(position: str) -> str:
    """Return the overlay coordinates for a named position (default bottom-right)."""
    return {
        "top-left": "20:20",
        "top-right": "W-w-20:20",
        "bottom-left": "20:H-h-20",
        "center": "(W-w)/2:(H-h)/2",
    }.get(position, "W-w-20:H-h-20")


def escape_subtitles_path(path: str) -> str:
    """Escape a path for use inside an ffmpeg filter argument."""
    return path.replace("\\", "\\\\").replace(":", "\\:").replace("'", "\\'")


def clamp_fade_out_start(duration: float, fade_duration: float) -> float:
    """Return where a fade-out of ``fade_duration`` should start, never below 0."""
    if duration <= 0 or fade_duration <= 0 or math.isnan(duration) or math.isinf(duration):
        return 0.0
    return max(duration - fade_duration, 0.0)


def format_ffmpeg_seconds(seconds: float) -> str:
    """Format seconds in the shortest plain decimal form; "0" for bad input."""
    if seconds < 0 or math.isnan(seconds) or math.isinf(seconds):
        return "0"
    return format(Decimal(repr(float(seconds))).normalize(), "f")


def has_ffmpeg_filter(ffmpeg_path: str, filter_name: str) -> bool:
    """Report whether ``ffmpeg -filters`` lists ``filter_name``."""
    try:
        result = subprocess.run(
            [ffmpeg_path, "-hide_banner", "-filters"],
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return False
    for line in result.stdout.splitlines():
        parts = line.split()
        if len(parts) >= 2 and parts[1] == filter_name:
            return True
    return False


class SettingsScreen(Screen):
    """A form of options for one operation on one input file."""

    def __init__(
        self,
        op_id: OperationID,
        op_name: str,
        file_path: str,
        probe: Any = None,
        ffmpeg_path: str = "ffmpeg",
        filter_checker: FilterChecker = has_ffmpeg_filter,
    ) -> None:
        self.op_id = op_id
        self.op_name = op_name
        self.file_path = file_path
        self.output_dir = os.path.dirname(file_path) or "."
        self.probe_result = probe
        self.ffmpeg_path = ffmpeg_path
        self.fields: list[Field] = fields_for(op_id, probe)
        self.cursor = 0
        self.width = 0
        self.height = 0
        self._filter_checker = filter_checker
        self._vidstab_ok: Optional[bool] = None

    def init(self) -> Optional[Cmd]:
        return None

    # -- input handling -------------------------------------------------

    def update(self, msg: Any) -> Tuple[Screen, Optional[Cmd]]:
        if isinstance(msg, WindowSizeMsg):
            self.width = msg.width
            self.height = msg.height
        elif isinstance(msg, KeyMsg):
            if self._handle_text_input(msg):
                return self, None
            key = msg.key
            if key in ("up", "k"):
                if self.cursor > 0:
                    self.cursor -= 1
            elif key in ("down", "j"):
                if self.cursor < len(self.fields) - 1:
                    self.cursor += 1
            elif key in ("left", "h"):
                self._adjust_field(-1)
            elif key in ("right", "l"):
                self._adjust_field(1)
            elif key == "enter":
                commands = tuple(self._build_commands())
                return self, lambda: ExecuteMsg(commands)
            elif key == "esc":
                return self, BackMsg
        return self, None

    def _current_field(self) -> Optional[Field]:
        if 0 <= self.cursor < len(self.fields):
            return self.fields[self.cursor]
        return None

    def _adjust_field(self, delta: int) -> None:
        current = self._current_field()
        if current is not None:
            current.adjust(delta)

    def _handle_text_input(self, msg: KeyMsg) -> bool:
        current = self._current_field()
        if current is None or current.type is not FieldType.TEXT:
            return False
        key = msg.key
        if key in ("backspace", "ctrl+h"):
            return current.backspace()
        if key == "delete":
            return current.delete()
        if key == "home":
            current.cursor = 0
            return True
        if key == "end":
            current.cursor = len(current.value)
            return True
        if msg.is_text:
            current.insert_text(key)
            return True
        return False

    # -- rendering ------------------------------------------------------

    def view(self) -> str:
        p = theme.palette()
        s = theme.styles()
        parts = [
            Style().foreground(p.primary).bold(True).padding_left(1).render(self.op_name + " Settings"),
            "\n\n",
        ]
        for i, f in enumerate(self.fields):
            parts.append(self._render_field(f, i == self.cursor))
            parts.append("\n")

        notice = self.fallback_notice()
        if notice:
            parts.append("\n")
            parts.append(s.warning.render("  " + notice))
            parts.append("\n")

        parts.append("\n")
        parts.append(
            Style().foreground(p.dim).render("  Output: ")
            + Style().foreground(p.secondary).render(self.output_path())
            + "\n"
        )

        parts.append("\n")
        preview = Style().foreground(p.dim).padding_left(2).render("$ " + self._command_preview())
        parts.append(
            s.panel.render(
                Style().foreground(p.primary).bold(True).render("Command Preview") + "\n" + preview
            )
        )
        return "".join(parts)

    def _render_field(self, f: Field, selected: bool) -> str:
        p = theme.palette()
        indicator = Style().foreground(p.primary).bold(True).render("> ") if selected else "  "
        label = Style().foreground(p.text).width(20).render(f.label)

        if f.type is FieldType.SELECT:
            rendered = []
            for i, opt in enumerate(f.options):
                if i == f.selected:
                    style = Style().foreground(p.text).background(p.highlight).bold(True).padding(0, 1)
                else:
                    style = Style().foreground(p.muted).padding(0, 1)
                rendered.append(style.render(opt.label))
            value = " ".join(rendered)
        elif f.type is FieldType.TOGGLE:
            if f.enabled:
                value = Style().foreground(p.success).bold(True).render("[ON]")
            else:
                value = Style().foreground(p.muted).render("[OFF]")
        else:
            display = f.display_with_cursor() if selected else f.value
            value = Style().foreground(p.text).render(display)

        return indicator + label + " " + value

    def breadcrumb(self) -> str:
        return self.op_name

    def key_hints(self) -> list[KeyHint]:
        current = self._current_field()
        if current is not None and current.type is FieldType.TEXT:
            return [
                KeyHint("↑↓", "Field"),
                KeyHint("Type", "Edit"),
                KeyHint("←→", "Cursor"),
                KeyHint("Bksp/Del", "Delete"),
                KeyHint("Enter", "Execute"),
                KeyHint("Esc", "Back"),
            ]
        return [
            KeyHint("↑↓", "Field"),
            KeyHint("←→", "Change"),
            KeyHint("Enter", "Execute"),
            KeyHint("c", "Copy cmd"),
            KeyHint("Esc", "Back"),
        ]

    # -- output naming --------------------------------------------------

    def output_path(self) -> str:
        """Path of the file the operation will write."""
        base = os.path.splitext(os.path.basename(self.file_path))[0]
        name = f"{base}_{operation_slug(self.op_name)}.{self.output_extension()}"
        return os.path.join(self.output_dir, name)

    def _input_extension(self) -> str:
        ext = os.path.splitext(self.file_path)[1]
        return ext[1:] if ext else "mp4"

    def output_extension(self) -> str:
        """Extension (without dot) of the output file."""
        if self.op_id == OperationID.CONVERT:
            return self._field_or("Format", "mp4")
        if self.op_id == OperationID.EXTRACT_AUDIO:
            return self._field_or("Format", "mp3")
        if self.op_id == OperationID.GIF:
            return "gif"
        if self.op_id == OperationID.THUMBNAILS:
            return "png"
        return self._input_extension()

    def _field_or(self, label: str, default: str) -> str:
        for f in self.fields:
            if f.label == label:
                return f.value
        return default

    def field_value(self, label: str) -> str:
        """Current value of the field named ``label``, or "" if absent."""
        return self._field_or(label, "")

    def field_enabled(self, label: str) -> bool:
        """Whether the toggle named ``label`` is on."""
        return next((f.enabled for f in self.fields if f.label == label), False)

    # -- stabilisation --------------------------------------------------

    def vidstab_supported(self) -> bool:
        """Whether ffmpeg has the vidstab filters; checked once and remembered."""
        if self._vidstab_ok is None:
            self._vidstab_ok = self._filter_checker(
                self.ffmpeg_path, "vidstabdetect"
            ) and self._filter_checker(self.ffmpeg_path, "vidstabtransform")
        return self._vidstab_ok

    def _wants_stabilize(self) -> bool:
        return self.op_id == OperationID.FILTERS and self.field_value("Filter") == "vidstab"

    def fallback_notice(self) -> str:
        """A warning when stabilisation must fall back to deshake, else ""."""
        if self._wants_stabilize() and not self.vidstab_supported():
            return "vidstab filters unavailable in your ffmpeg build; using deshake fallback."
        return ""

    # -- command building -----------------------------------------------

    def _build_commands(self) -> list[_Command]:
        if self._wants_stabilize():
            if not self.vidstab_supported():
                return [self._build_deshake_command()]
            return self._build_stabilize_commands()
        return [self._build_command()]

    def _command_preview(self) -> str:
        return " && ".join(str(cmd) for cmd in self._build_commands())

    def _build_stabilize_commands(self) -> list[_Command]:
        transform_path = escape_subtitles_path(os.path.join(self.output_dir, _VIDSTAB_TRANSFORM_FILE))

        detect = _Command(self.ffmpeg_path, self.file_path, "-")
        detect.add_video_filter(f"vidstabdetect=result='{transform_path}'")
        detect.no_audio()
        detect.add_args("-f", "null")

        transform = _Command(self.ffmpeg_path, self.file_path, self.output_path())
        transform.add_video_filter(f"vidstabtransform=input='{transform_path}'")
        transform.set_audio_codec("copy")
        return [detect, transform]

    def _build_deshake_command(self) -> _Command:
        cmd = _Command(self.ffmpeg_path, self.file_path, self.output_path())
        cmd.add_video_filter("deshake")
        cmd.set_audio_codec("copy")
        return cmd

    def _build_command(self) -> _Command:
        cmd = _Command(self.ffmpeg_path, self.file_path, self.output_path())
        builders = {
            OperationID.MERGE: self._merge,
            OperationID.SUBTITLES: self._subtitles,
            OperationID.WATERMARK: self._watermark,
            OperationID.CONVERT: self._convert,
            OperationID.EXTRACT_AUDIO: self._extract_audio,
            OperationID.RESIZE: self._resize,
            OperationID.TRIM: self._trim,
            OperationID.COMPRESS: self._compress,
            OperationID.GIF: self._gif,
            OperationID.THUMBNAILS: self._thumbnails,
            OperationID.AUDIO: self._audio,
            OperationID.FILTERS: self._filters,
        }
        builder = builders.get(self.op_id)
        if builder is not None:
            builder(cmd)
        return cmd

    def _convert(self, cmd: _Command) -> None:
        codec = self.field_value("Codec")
        cmd.set_video_codec(codec)
        cmd.set_crf(parse_int(self.field_value("Quality")))
        cmd.set_preset_for_codec(codec, self.field_value("Preset"))
        cmd.set_audio_codec(self.field_value("Audio"))

    def _extract_audio(self, cmd: _Command) -> None:
        cmd.no_video()
        codec = {
            "mp3": "libmp3lame",
            "m4a": "aac",
            "flac": "flac",
            "wav": "pcm_s16le",
            "ogg": "libvorbis",
            "opus": "libopus",
        }.get(self.field_value("Format"))
        if codec:
            cmd.set_audio_codec(codec)
        cmd.set_audio_bitrate(self.field_value("Bitrate"))

    def _resize(self, cmd: _Command) -> None:
        cmd.set_scale_height(parse_int(self.field_value("Resolution")))
        cmd.set_video_codec(self.field_value("Codec"))
        cmd.set_audio_codec("copy")

    def _trim(self, cmd: _Command) -> None:
        start = self.field_value("Start Time").strip()
        if start:
            cmd.set_start_time(start)
        end = self.field_value("End Time").strip()
        if end:
            cmd.set_end_time(end)
        if self.field_enabled("Lossless Cut"):
            cmd.stream_copy()

    def _compress(self, cmd: _Command) -> None:
        codec = self.field_value("Codec")
        cmd.set_video_codec(codec)
        cmd.set_crf(parse_int(self.field_value("Quality")))
        cmd.set_preset_for_codec(codec, self.field_value("Preset"))
        cmd.set_audio_codec("copy")

    def _merge(self, cmd: _Command) -> None:
        try:
            list_path = self.write_merge_concat_file()
        except OSError:
            cmd.set_video_codec("copy")
            cmd.set_audio_codec("copy")
            return
        # A script starting with "ffconcat version 1.0" selects the concat demuxer.
        cmd.input = list_path
        if self.field_value("Merge Mode") == "reencode":
            cmd.set_video_codec("libx264")
            cmd.set_audio_codec("aac")
            cmd.set_preset("medium")
            return
        cmd.stream_copy()

    def _has_subtitle_streams(self) -> bool:
        return self.probe_result is not None and bool(list(self.probe_result.subtitle_streams()))

    def _subtitles(self, cmd: _Command) -> None:
        track = parse_int(self.field_value("Subtitle Track"))
        if self.field_value("Subtitle Mode") == "embed":
            cmd.add_args("-map", "0")
            cmd.set_video_codec("copy")
            cmd.set_audio_codec("copy")
            codec = "mov_text" if self.output_extension() == "mp4" else "copy"
            cmd.add_args("-c:s", codec)
            return
        if not self._has_subtitle_streams():
            cmd.set_video_codec("copy")
            cmd.set_audio_codec("copy")
            return
        cmd.add_video_filter(f"subtitles='{escape_subtitles_path(self.file_path)}':si={track}")
        cmd.set_audio_codec("copy")

    def _watermark(self, cmd: _Command) -> None:
        opacity = self.field_value("Opacity")
        size = self.field_value("Size")
        position = self.field_value("Position")
        cmd.add_args("-f", "lavfi")
        cmd.add_args("-i", f"color=c=white@{opacity}:s={size}")
        cmd.add_args("-filter_complex", f"[0:v][1:v]overlay={overlay_position(position)}[v]")
        cmd.add_args("-map", "[v]")
        cmd.add_args("-map", "0:a?")
        cmd.set_video_codec("libx264")
        cmd.set_audio_codec("copy")
        cmd.set_pixel_format("yuv420p")

    def _gif(self, cmd: _Command) -> None:
        fps = self.field_value("FPS")
        width = self.field_value("Width")
        start = self.field_value("Start Time")
        duration = self.field_value("Duration")
        if start and start != "00:00:00":
            cmd.set_start_time(start)
        if duration:
            cmd.set_duration(duration)
        cmd.add_args(
            "-filter_complex",
            f"fps={fps},scale={width}:-1:flags=lanczos,split[s0][s1];[s0]palettegen[p];[s1][p]paletteuse",
        )

    def _thumbnails(self, cmd: _Command) -> None:
        mode = self.field_value("Mode")
        if mode == "single":
            cmd.set_start_time(self.field_value("Timestamp"))
            cmd.add_args("-frames:v", "1")
        elif mode == "grid":
            cmd.add_video_filter("select='not(mod(n\\,30))',scale=320:-1,tile=4x4")
            cmd.add_args("-frames:v", "1")
        elif mode == "interval":
            cmd.add_video_filter("fps=1/5")

    def _audio(self, cmd: _Command) -> None:
        op = self.field_value("Operation")
        if op == "normalize":
            cmd.add_audio_filter("loudnorm")
        elif op in ("up", "down"):
            cmd.add_audio_filter(f"volume={self.field_value('Volume (dB)')}dB")
        elif op == "fade":
            duration = self.probe_result.format.duration if self.probe_result is not None else 0.0
            start = format_ffmpeg_seconds(clamp_fade_out_start(duration, _FADE_DURATION))
            cmd.add_audio_filter(f"afade=t=in:st=0:d=2,afade=t=out:st={start}:d=2")
        elif op == "remove":
            cmd.no_audio()
        else:
            return
        cmd.set_video_codec("copy")

    def _filters(self, cmd: _Command) -> None:
        chosen = self.field_value("Filter")
        if chosen == "vidstab":
            cmd.add_video_filter("vidstabdetect")
        elif chosen == "speed2":
            cmd.add_video_filter("setpts=0.5*PTS")
            cmd.add_audio_filter("atempo=2.0")
        elif chosen == "speed05":
            cmd.add_video_filter("setpts=2.0*PTS")
            cmd.add_audio_filter("atempo=0.5")
        else:
            video = {"yadif": "yadif", "rotate90": "transpose=1", "hflip": "hflip", "vflip": "vflip"}.get(chosen)
            if video:
                cmd.add_video_filter(video)
                cmd.set_audio_codec("copy")

    # -- merge list -------------------------------------------------------

    def write_merge_concat_file(self) -> str:
        """Write an ffconcat list of sibling files sharing the input's extension.

        Returns the list's path; raises OSError if the directory cannot be
        read or the list cannot be written.
        """
        source = os.path.normpath(self.file_path)
        source_dir = os.path.dirname(source) or "."
        source_ext = os.path.splitext(source)[1].lower()

        with os.scandir(source_dir) as it:
            names = [
                e.name
                for e in it
                if not e.is_dir() and os.path.splitext(e.name)[1].lower() == source_ext
            ]
        if not names:
            names = [os.path.basename(source)]
        names.sort()

        lines = ["ffconcat version 1.0"]
        lines += ["file '" + name.replace("'", "\\'") + "'" for name in names]
        list_path = os.path.join(source_dir, _MERGE_LIST_FILE)
        with open(list_path, "w", encoding="utf-8") as handle:
            handle.write("\n".join(lines) + "\n")
        return list_path


def _clamp(cursor: int, limit: int) -> int:
    return clamp_cursor(cursor, limit)