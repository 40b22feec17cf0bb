"""Theme system for the TUI."""
from __future__ import annotations

from ydoc_inspector.tui.theme.defaults import DEFAULT_DARK_THEME, get_default_theme
from ydoc_inspector.tui.theme.loader import load_theme
from ydoc_inspector.tui.theme.models import ALL_COLOR_KEYS, ThemeColor, ThemeInfo

__all__ = [
    "ALL_COLOR_KEYS",
    "DEFAULT_DARK_THEME",
    "ThemeColor",
    "ThemeInfo",
    "get_default_theme",
    "load_theme",
]
