import math
import os
from dataclasses import dataclass, field

import pytest

from nanoffmpeg.screens.filepicker import (
    FilePicker,
    FileSelectedMsg,
    format_size,
    is_media_file,
    parse_fps,
)
from nanoffmpeg.screens.messages import BackMsg, KeyMsg, WindowSizeMsg


@dataclass
class _Format:
    format_name: str = "mov,mp4"


@dataclass
class _Stream:
    codec_name: str
    width: int = 0
    height: int = 0
    r_frame_rate: str = ""
    pix_fmt: str = ""
    channel_layout: str = ""
    sample_rate: str = ""


@dataclass
class _Probe:
    format: _Format = field(default_factory=_Format)
    subs: list = field(default_factory=list)

    def duration_string(self):
        return "00:01:05"

    def size_string(self):
        return "1.0 MB"

    def video_stream(self):
        return _Stream("h264", 1920, 1080, "30/1", "yuv420p")

    def audio_stream(self):
        return _Stream("aac", channel_layout="stereo", sample_rate="48000")

    def subtitle_streams(self):
        return self.subs


def _fake_prober(ffprobe_path, path):
    return _Probe()


def _failing_prober(ffprobe_path, path):
    raise RuntimeError("probe failed")


def _write(path, data=b"x"):
    with open(path, "wb") as fh:
        fh.write(data)


@pytest.mark.parametrize(
    "name,want",
    [
        ("clip.mp4", True),
        ("song.MP3", True),
        ("SAMPLE.MKV", True),
        ("script.go", False),
        ("notes.txt", False),
        ("no-extension", False),
        ("archive.tar.gz", False),
    ],
)
def test_is_media_file(name, want):
    assert is_media_file(name) is want


@pytest.mark.parametrize(
    "num_bytes,want",
    [
        (0, "0 B"),
        (512, "512 B"),
        (1024, "1.0 KB"),
        (1024 * 1024, "1.0 MB"),
        (int(1.5 * 1024 * 1024), "1.5 MB"),
    ],
)
def test_format_size(num_bytes, want):
    assert format_size(num_bytes) == want


@pytest.mark.parametrize(
    "text,want", [("30/1", 30.0), ("0/0", 0.0), ("bad", 0.0), ("", 0.0)]
)
def test_parse_fps(text, want):
    assert math.isclose(parse_fps(text), want, abs_tol=0.001)


def test_new_uses_provided_start_dir(tmp_path):
    m = FilePicker("ffprobe", str(tmp_path))
    assert m.current_dir == str(tmp_path)


def test_new_defaults_to_home_when_start_dir_blank(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    m = FilePicker("ffprobe", "")
    assert m.current_dir == str(tmp_path)


def test_load_dir_lists_directories_before_files(tmp_path):
    for name in (".hidden", "video.mp4", "notes.txt"):
        _write(tmp_path / name)
    for name in ("zdir", "adir"):
        (tmp_path / name).mkdir()

    m = FilePicker("ffprobe", str(tmp_path))
    assert len(m.entries) == 4
    assert m.entries[0].is_dir and m.entries[1].is_dir
    assert not m.entries[2].is_dir and not m.entries[3].is_dir
    assert [e.size for e in m.entries[2:]] == [1, 1]
    assert [e.name for e in m.entries[:2]] == ["adir", "zdir"]


def test_navigation_clamped(tmp_path):
    for ch in "abc":
        _write(tmp_path / f"f{ch}.mp4")
    m = FilePicker("ffprobe", str(tmp_path))
    m.update(KeyMsg("up"))
    assert m.cursor == 0
    for _ in range(10):
        m.update(KeyMsg("down"))
    assert m.cursor == len(m.entries) - 1


def test_backspace_goes_to_parent(tmp_path):
    child = tmp_path / "child"
    child.mkdir()
    m = FilePicker("ffprobe", str(child))
    m.update(KeyMsg("backspace"))
    assert m.current_dir == str(tmp_path)


def test_slash_enters_path_input_mode(tmp_path):
    m = FilePicker("ffprobe", str(tmp_path))
    m.update(KeyMsg("/"))
    assert m.path_input is True
    assert m.path_text == str(tmp_path) + "/"


def test_path_input_enter_navigates_to_dir(tmp_path):
    target = tmp_path / "target"
    target.mkdir()
    m = FilePicker("ffprobe", str(tmp_path))
    m.path_input = True
    m.path_text = str(target)
    m.update(KeyMsg("enter"))
    assert m.path_input is False
    assert m.current_dir == str(target)


def test_path_input_enter_on_missing_path_sets_err(tmp_path):
    m = FilePicker("ffprobe", str(tmp_path))
    m.path_input = True
    m.path_text = str(tmp_path / "does-not-exist")
    m.update(KeyMsg("enter"))
    assert isinstance(m.err, FileNotFoundError)
    view = m.view()
    assert "Error:" in view
    assert m.err is None


def test_path_input_enter_on_file_emits_selection(tmp_path):
    target = tmp_path / "clip.mp4"
    _write(target)
    m = FilePicker("ffprobe", str(tmp_path), prober=_fake_prober)
    m.path_input = True
    m.path_text = str(target)
    _, cmd = m.update(KeyMsg("enter"))
    msg = cmd()
    assert isinstance(msg, FileSelectedMsg)
    assert msg.path == str(target)
    assert msg.probe_result.format.format_name == "mov,mp4"


def test_path_input_enter_on_unprobeable_file_sets_err(tmp_path):
    target = tmp_path / "clip.mp4"
    _write(target)
    m = FilePicker("ffprobe", str(tmp_path), prober=_failing_prober)
    m.path_input = True
    m.path_text = str(target)
    _, cmd = m.update(KeyMsg("enter"))
    assert cmd is None
    assert str(m.err) == "probe failed"


def test_path_input_esc_cancels(tmp_path):
    m = FilePicker("ffprobe", str(tmp_path))
    m.path_input = True
    m.path_text = "/tmp/foo"
    m.update(KeyMsg("esc"))
    assert m.path_input is False


def test_path_input_backspace_and_typing(tmp_path):
    m = FilePicker("ffprobe", str(tmp_path))
    m.path_input = True
    m.path_text = "/tmp/abc"
    m.update(KeyMsg("backspace"))
    assert m.path_text == "/tmp/ab"
    m.update(KeyMsg("z"))
    assert m.path_text == "/tmp/abz"


def test_browser_esc_emits_back(tmp_path):
    m = FilePicker("ffprobe", str(tmp_path))
    _, cmd = m.update(KeyMsg("esc"))
    assert cmd() == BackMsg()
    assert m.current_dir == str(tmp_path)


def test_key_hints_reflect_mode(tmp_path):
    m = FilePicker("ffprobe", str(tmp_path))
    keys = [h.key for h in m.key_hints()]
    for want in ("↑↓", "Enter", "Bksp", "/", "Esc"):
        assert want in keys
    m.path_input = True
    assert [h.key for h in m.key_hints()] == ["Enter", "Esc"]


def test_view_renders_current_directory(tmp_path):
    m = FilePicker("ffprobe", str(tmp_path))
    assert str(tmp_path) in m.view()


def test_breadcrumb(tmp_path):
    assert FilePicker("ffprobe", str(tmp_path)).breadcrumb() == "File Picker"


def test_init_returns_no_cmd(tmp_path):
    assert FilePicker("ffprobe", str(tmp_path)).init() is None


def test_window_size_stored(tmp_path):
    m = FilePicker("ffprobe", str(tmp_path))
    m.update(WindowSizeMsg(70, 22))
    assert (m.width, m.height) == (70, 22)


def test_enter_on_directory_loads_contents(tmp_path):
    child = tmp_path / "nested"
    child.mkdir()
    _write(child / "clip.mp4")
    m = FilePicker("ffprobe", str(tmp_path))
    assert m.entries[0].is_dir
    m.update(KeyMsg("enter"))
    assert m.current_dir == str(child)
    assert [e.name for e in m.entries] == ["clip.mp4"]


def test_visible_lines_floor_enforced(tmp_path):
    m = FilePicker("ffprobe", str(tmp_path))
    m.height = 0
    assert m.visible_lines() == 5
    m.height = 40
    assert m.visible_lines() == 30


def test_moving_onto_media_file_shows_preview_and_enter_selects(tmp_path):
    _write(tmp_path / "a.mp4")
    _write(tmp_path / "b.mp4")
    m = FilePicker("ffprobe", str(tmp_path), prober=_fake_prober)
    m.update(KeyMsg("down"))
    assert m.probe_result is not None
    view = m.view()
    assert "File Info" in view
    assert "h264 1920x1080 @ 30fps (yuv420p)" in view
    assert "aac stereo 48000Hz" in view
    _, cmd = m.update(KeyMsg("enter"))
    msg = cmd()
    assert isinstance(msg, FileSelectedMsg)
    assert msg.path == os.path.join(str(tmp_path), "b.mp4")


def test_non_media_file_clears_preview(tmp_path):
    _write(tmp_path / "a.mp4")
    _write(tmp_path / "b.txt")
    m = FilePicker("ffprobe", str(tmp_path), prober=_fake_prober)
    m.update(KeyMsg("down"))
    assert m.probe_result is None
    _, cmd = m.update(KeyMsg("enter"))
    assert cmd is None


def test_scroll_offset_follows_cursor(tmp_path):
    for i in range(12):
        _write(tmp_path / f"f{i:02d}.txt")
    m = FilePicker("ffprobe", str(tmp_path))
    for _ in range(8):
        m.update(KeyMsg("down"))
    assert m.cursor == 8
    assert m.offset == 4
    for _ in range(8):
        m.update(KeyMsg("up"))
    assert m.offset == 0