"""Colour palettes and the shared styles built from them."""

from __future__ import annotations

from dataclasses import dataclass

from .style import ROUNDED, Style

THEME_DARK = "dark"
THEME_LIGHT = "light"


@dataclass(frozen=True)
class Palette:
    """Hex colours for every role in the interface."""

    primary: str
    secondary: str
    success: str
    warning: str
    error: str
    info: str
    muted: str
    text: str
    dim: str
    bg: str
    bg_panel: str
    border: str
    highlight: str
    top_bar_bg: str
    status_bar_bg: str
    bottom_bar_bg: str
    progress_empty: str


DARK_PALETTE = Palette(
    primary="#7C3AED",
    secondary="#06B6D4",
    success="#22C55E",
    warning="#EAB308",
    error="#EF4444",
    info="#3B82F6",
    muted="#6B7280",
    text="#F9FAFB",
    dim="#9CA3AF",
    bg="#111827",
    bg_panel="#1F2937",
    border="#374151",
    highlight="#7C3AED",
    top_bar_bg="#1E1B2E",
    status_bar_bg="#1A1A2E",
    bottom_bar_bg="#1E1B2E",
    progress_empty="#2D3748",
)

LIGHT_PALETTE = Palette(
    primary="#6D28D9",
    secondary="#0E7490",
    success="#15803D",
    warning="#A16207",
    error="#B91C1C",
    info="#1D4ED8",
    muted="#6B7280",
    text="#111827",
    dim="#374151",
    bg="#F9FAFB",
    bg_panel="#FFFFFF",
    border="#D1D5DB",
    highlight="#DDD6FE",
    top_bar_bg="#EDE9FE",
    status_bar_bg="#F3F4F6",
    bottom_bar_bg="#EDE9FE",
    progress_empty="#D1D5DB",
)


@dataclass(frozen=True)
class Styles:
    """Common styles shared by the screens."""

    title: Style
    subtitle: Style
    selected: Style
    normal: Style
    muted: Style
    success: Style
    error: Style
    warning: Style
    info: Style
    border: Style
    panel: Style
    key: Style
    desc: Style


def _build_styles(p: Palette) -> Styles:
    return Styles(
        title=Style().bold(True).foreground(p.primary).padding_left(1),
        subtitle=Style().foreground(p.dim).padding_left(1),
        selected=Style()
        .foreground(p.text)
        .background(p.highlight)
        .bold(True)
        .padding_left(1)
        .padding_right(1),
        normal=Style().foreground(p.text).padding_left(1),
        muted=Style().foreground(p.muted),
        success=Style().foreground(p.success).bold(True),
        error=Style().foreground(p.error).bold(True),
        warning=Style().foreground(p.warning),
        info=Style().foreground(p.info),
        border=Style().border(ROUNDED).border_foreground(p.border),
        panel=Style().border(ROUNDED).border_foreground(p.border).padding(1, 2),
        key=Style().foreground(p.secondary).bold(True),
        desc=Style().foreground(p.dim),
    )


@dataclass
class _ThemeState:
    name: str
    palette: Palette
    styles: Styles


_state = _ThemeState(THEME_DARK, DARK_PALETTE, _build_styles(DARK_PALETTE))


def normalize_theme(theme: str) -> str:
    """Coerce any input to a supported theme name, defaulting to dark."""
    if theme.strip().lower() == THEME_LIGHT:
        return THEME_LIGHT
    return THEME_DARK


def is_valid_theme(theme: str) -> bool:
    """Report whether ``theme`` names a supported theme."""
    return theme.strip().lower() in (THEME_DARK, THEME_LIGHT)


def current_theme() -> str:
    """Return the active theme name."""
    return _state.name


def set_theme(theme: str) -> None:
    """Activate a theme and rebuild the shared styles."""
    name = normalize_theme(theme)
    chosen = LIGHT_PALETTE if name == THEME_LIGHT else DARK_PALETTE
    _state.name = name
    _state.palette = chosen
    _state.styles = _build_styles(chosen)


def palette() -> Palette:
    """Return the active palette."""
    return _state.palette


def styles() -> Styles:
    """Return the styles built from the active palette."""
    return _state.styles