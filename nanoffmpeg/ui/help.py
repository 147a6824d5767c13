"""The help overlay and the help text for each screen."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence, Tuple

from . import style, theme
from .style import ROUNDED, Style


@dataclass(frozen=True)
class HelpEntry:
    """One key and what it does."""

    key: str
    desc: str


@dataclass(frozen=True)
class HelpSection:
    """A titled group of help entries."""

    title: str
    entries: Tuple[HelpEntry, ...] = field(default_factory=tuple)


def help_overlay(sections: Sequence[HelpSection], width: int, height: int) -> str:
    """Render the help sections in a bordered box centred on the screen."""
    p = theme.palette()
    parts = [Style().foreground(p.primary).bold(True).render("Help"), "\n\n"]

    for section in sections:
        parts.append(Style().foreground(p.secondary).bold(True).render(section.title))
        parts.append("\n")
        for entry in section.entries:
            key = Style().foreground(p.text).bold(True).width(12).render(entry.key)
            desc = Style().foreground(p.dim).render(entry.desc)
            parts.append("  " + key + desc + "\n")
        parts.append("\n")

    parts.append(Style().foreground(p.muted).render("Press ? or Esc to close"))

    box_width = 50
    if width > 0 and box_width > width - 4:
        box_width = width - 4

    box = (
        Style()
        .border(ROUNDED)
        .border_foreground(p.primary)
        .padding(1, 2)
        .width(box_width)
        .render("".join(parts))
    )

    pad_top = max((height - style.height(box)) // 2, 0)
    pad_left = max((width - style.visible_width(box)) // 2, 0)
    return "\n" * pad_top + Style().padding_left(pad_left).render(box)


def home_help() -> list[HelpSection]:
    """Help for the home screen."""
    return [
        HelpSection(
            "Navigation",
            (
                HelpEntry("↑ / k", "Move up"),
                HelpEntry("↓ / j", "Move down"),
                HelpEntry("Enter", "Select operation & pick file"),
                HelpEntry("q", "Quit"),
                HelpEntry("?", "Toggle this help"),
            ),
        )
    ]


def file_picker_help() -> list[HelpSection]:
    """Help for the file picker."""
    return [
        HelpSection(
            "File Browser",
            (
                HelpEntry("↑ / k", "Move up"),
                HelpEntry("↓ / j", "Move down"),
                HelpEntry("Enter", "Open directory / select file"),
                HelpEntry("Backspace", "Go to parent directory"),
                HelpEntry("/", "Switch to path input mode"),
                HelpEntry("Esc", "Go back"),
            ),
        ),
        HelpSection(
            "Path Input Mode",
            (
                HelpEntry("Enter", "Navigate to path"),
                HelpEntry("Esc", "Cancel path input"),
            ),
        ),
    ]


def operations_help() -> list[HelpSection]:
    """Help for the operations screen."""
    return [
        HelpSection(
            "Operations",
            (
                HelpEntry("↑ / k", "Move up"),
                HelpEntry("↓ / j", "Move down"),
                HelpEntry("Enter", "Select operation"),
                HelpEntry("Esc", "Go back to file picker"),
            ),
        )
    ]


def settings_help() -> list[HelpSection]:
    """Help for the settings screen."""
    return [
        HelpSection(
            "Settings",
            (
                HelpEntry("↑ / k", "Previous field"),
                HelpEntry("↓ / j", "Next field"),
                HelpEntry("← / →", "Change value / toggle"),
                HelpEntry("Enter", "Execute ffmpeg command"),
                HelpEntry("c", "Copy command to clipboard"),
                HelpEntry("Esc", "Go back"),
            ),
        )
    ]


def progress_help() -> list[HelpSection]:
    """Help for the progress screen."""
    return [
        HelpSection(
            "Encoding",
            (HelpEntry("Esc", "Cancel encoding (with confirmation)"),),
        )
    ]