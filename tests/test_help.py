import pytest

from nanoffmpeg.ui.help import (
    HelpEntry,
    HelpSection,
    file_picker_help,
    help_overlay,
    home_help,
    operations_help,
    progress_help,
    settings_help,
)


@pytest.fixture(autouse=True)
def _no_color(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.delenv("CLICOLOR_FORCE", raising=False)


def _single_section():
    return [HelpSection("X", (HelpEntry("a", "b"),))]


def test_overlay_contains_all_sections():
    sections = [
        HelpSection("Navigation", (HelpEntry("Enter", "Select"), HelpEntry("Esc", "Back"))),
        HelpSection("Editing", (HelpEntry("Bksp", "Delete"),)),
    ]
    out = help_overlay(sections, 120, 30)
    for want in [
        "Help",
        "Navigation",
        "Editing",
        "Enter",
        "Select",
        "Esc",
        "Back",
        "Bksp",
        "Delete",
        "Press ? or Esc to close",
    ]:
        assert want in out


def test_overlay_draws_rounded_border():
    out = help_overlay(_single_section(), 80, 20)
    assert any(glyph in out for glyph in "╭╮╰╯")


def test_overlay_narrow_width_shrinks_box():
    narrow = help_overlay(_single_section(), 30, 10)
    assert narrow != ""
    assert all(len(line) <= 60 for line in narrow.split("\n"))
    assert all(len(line) <= 30 for line in narrow.split("\n"))


@pytest.mark.parametrize(
    "catalog, must_have",
    [
        (home_help, ["Enter", "Quit"]),
        (file_picker_help, ["Enter", "Esc"]),
        (operations_help, ["Enter", "Esc"]),
        (settings_help, ["Execute", "Esc"]),
        (progress_help, ["Cancel"]),
    ],
)
def test_help_catalog_expected_contents(catalog, must_have):
    sections = catalog()
    assert len(sections) > 0
    for section in sections:
        assert section.title
        assert len(section.entries) > 0
        for entry in section.entries:
            assert entry.key and entry.desc
    flat = " ".join(f"{e.key} {e.desc}" for s in sections for e in s.entries)
    for want in must_have:
        assert want in flat