"""Messages exchanged between screens and the screen interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Optional, Tuple

from ..ui.frame import KeyHint

Cmd = Callable[[], Any]
"""A deferred action that produces the next message (or None)."""

_NAMED_KEYS = frozenset(
    {
        "up",
        "down",
        "left",
        "right",
        "enter",
        "esc",
        "backspace",
        "delete",
        "home",
        "end",
        "tab",
        "shift+tab",
        "pgup",
        "pgdown",
        "ctrl+c",
        "ctrl+h",
    }
)


class ScreenID(IntEnum):
    """Identifies which screen is active."""

    HOME = 0
    FILE_PICKER = 1
    OPERATIONS = 2
    SETTINGS = 3
    PROGRESS = 4
    RESULT = 5


@dataclass(frozen=True)
class NavigateMsg:
    """Asks the application to switch screens."""

    screen: ScreenID
    payload: Any = None


@dataclass(frozen=True)
class StatusMsg:
    """Updates the persistent status line."""

    text: str


@dataclass(frozen=True)
class BackMsg:
    """Asks to go back one screen."""


@dataclass(frozen=True)
class QuitMsg:
    """Asks the application to exit."""


@dataclass(frozen=True)
class KeyMsg:
    """A key press: a named key such as ``"enter"`` or typed text."""

    key: str

    @property
    def is_text(self) -> bool:
        """True when the key carries typed characters rather than a named key."""
        return bool(self.key) and self.key not in _NAMED_KEYS

    def __str__(self) -> str:
        return self.key


@dataclass(frozen=True)
class WindowSizeMsg:
    """Reports the terminal size."""

    width: int
    height: int


class Screen(ABC):
    """The interface every screen implements."""

    @abstractmethod
    def init(self) -> Optional[Cmd]:
        """Return the command to run when the screen opens, if any."""

    @abstractmethod
    def update(self, msg: Any) -> Tuple["Screen", Optional[Cmd]]:
        """Handle a message and return the screen and an optional command."""

    @abstractmethod
    def view(self) -> str:
        """Render the screen content."""

    @abstractmethod
    def breadcrumb(self) -> str:
        """Return the label shown in the top bar."""

    @abstractmethod
    def key_hints(self) -> list[KeyHint]:
        """Return the key hints shown in the bottom bar."""