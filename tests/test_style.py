import pytest

from nanoffmpeg.ui.style import (
    ROUNDED,
    Style,
    height,
    join_vertical,
    strip_ansi,
    visible_width,
)


@pytest.fixture(autouse=True)
def _no_color(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.delenv("CLICOLOR_FORCE", raising=False)


def test_strip_ansi_removes_sequences():
    assert strip_ansi("\x1b[1;38;2;1;2;3mhi\x1b[0m") == "hi"


def test_visible_width_uses_widest_line():
    assert visible_width("ab\nabcd") == len("abcd")


def test_visible_width_counts_wide_characters():
    assert visible_width("日本") == 4


def test_visible_width_ignores_escapes():
    assert visible_width("\x1b[1mabc\x1b[0m") == len("abc")


def test_height_counts_lines():
    assert height("\n".join(["x"] * 5)) == 5
    assert height("") == 1


def test_render_without_options_is_identity():
    assert Style().render("plain text") == "plain text"


def test_render_pads_to_width():
    out = Style().width(20).render("hi")
    assert visible_width(out) == 20
    assert out.startswith("hi")


def test_horizontal_padding():
    assert Style().padding(0, 1).render("ab") == " ab "


def test_vertical_padding_adds_lines():
    out = Style().padding(1, 2).render("x")
    lines = out.split("\n")
    assert len(lines) == 3
    assert lines[1].strip() == "x"
    assert len({visible_width(line) for line in lines}) == 1


def test_padding_rejects_bad_arity():
    with pytest.raises(ValueError):
        Style().padding(1, 2, 3, 4, 5)


def test_foreground_rejects_non_hex():
    with pytest.raises(ValueError):
        Style().foreground("blue")


def test_setters_do_not_mutate():
    base = Style()
    base.padding_left(3)
    assert base.render("x") == "x"


def test_width_word_wraps():
    out = Style().width(5).render("aaa bbb")
    assert [line.rstrip() for line in out.split("\n")] == ["aaa", "bbb"]


def test_width_hard_wraps_long_words():
    out = Style().width(3).render("abcdef")
    assert out.split("\n") == ["abc", "def"]


def test_border_surrounds_text():
    out = Style().border(ROUNDED).render("hello")
    lines = out.split("\n")
    assert lines[0].startswith(ROUNDED.top_left)
    assert lines[-1].endswith(ROUNDED.bottom_right)
    assert "hello" in lines[1]
    assert len({visible_width(line) for line in lines}) == 1


def test_join_vertical_pads_lines():
    out = join_vertical("a", "abc\nab")
    lines = out.split("\n")
    assert [line.rstrip() for line in lines] == ["a", "abc", "ab"]
    assert {visible_width(line) for line in lines} == {len("abc")}


def test_join_vertical_empty():
    assert join_vertical() == ""


def test_no_color_disables_escapes():
    assert Style().bold(True).foreground("#7C3AED").render("hi") == "hi"


def test_forced_color_emits_escapes(monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.setenv("CLICOLOR_FORCE", "1")
    out = Style().bold(True).foreground("#7C3AED").render("hi")
    assert "\x1b[" in out
    assert strip_ansi(out) == "hi"