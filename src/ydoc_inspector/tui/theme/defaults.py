"""
Built-in default dark theme.

Provides a colour for every key in
:data:`~ydoc_inspector.tui.theme.models.ALL_COLOR_KEYS`.
"""

from __future__ import annotations

from ydoc_inspector.tui.theme.models import ThemeColor, ThemeInfo

DEFAULT_DARK_COLORS: ThemeColor = {
    # Core UI
    "primary": "#7aa2f7",
    "text": "#c0caf5",
    "text_dim": "#565f89",
    "border": "#3b4261",
    "error": "#f7768e",
    "warning": "#e0af68",

    # Tree tokens
    "json_key": "#7dcfff",
    "json_string": "#9ece6a",
    "json_number": "#ff9e64",
    "json_boolean": "#bb9af7",
    "json_null": "#565f89",
    "json_bracket": "#a9b1d6",
    "json_comma": "#565f89",
    "json_toggle": "#7aa2f7",
    "json_placeholder": "#565f89",
    "cursor_bg": "#292e42",

    # Chrome
    "sidebar_title": "#c0caf5",
    "sidebar_item": "#a9b1d6",
    "sidebar_time": "#565f89",
    "sidebar_active_bg": "#3b4261",
    "sidebar_active_fg": "#7aa2f7",
    "status_bar_bg": "#1a1b26",
    "status_bar_fg": "#a9b1d6",
    "prompt_fg": "#c0caf5",
}


DEFAULT_DARK_THEME = ThemeInfo(
    name="default-dark",
    description="Built-in dark theme inspired by Tokyo Night",
    colors=dict(DEFAULT_DARK_COLORS),
)


def get_default_theme() -> ThemeInfo:
    """Return a fresh copy of the default dark theme."""
    return ThemeInfo(
        name=DEFAULT_DARK_THEME.name,
        description=DEFAULT_DARK_THEME.description,
        colors=dict(DEFAULT_DARK_THEME.colors),
    )
