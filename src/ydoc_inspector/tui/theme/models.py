"""
Theme data models.

Defines the colour keys a theme provides and the ``ThemeInfo`` container.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# Each key maps to a hex colour string (e.g. ``"#1e1e2e"``).

CORE_UI_KEYS: list[str] = [
    "primary",
    "text",
    "text_dim",
    "border",
    "error",
    "warning",
]

TREE_KEYS: list[str] = [
    "json_key",
    "json_string",
    "json_number",
    "json_boolean",
    "json_null",
    "json_bracket",
    "json_comma",
    "json_toggle",
    "json_placeholder",
    "cursor_bg",
]

CHROME_KEYS: list[str] = [
    "sidebar_title",
    "sidebar_item",
    "sidebar_time",
    "sidebar_active_bg",
    "sidebar_active_fg",
    "status_bar_bg",
    "status_bar_fg",
    "prompt_fg",
]

ALL_COLOR_KEYS: list[str] = CORE_UI_KEYS + TREE_KEYS + CHROME_KEYS
"""Complete list of recognised colour keys."""

ThemeColor = dict[str, str]
"""A mapping from colour key names to hex colour strings."""


@dataclass
class ThemeInfo:
    """
    Full theme definition including metadata and resolved colours.

    Attributes
    ----------
    name:
        Short identifier for the theme (e.g. ``"default-dark"``).
    description:
        One-line human-readable description.
    colors:
        Mapping from colour key to hex colour string.
    """

    name: str = "untitled"
    description: str = ""
    colors: ThemeColor = field(default_factory=dict)

    def get(self, key: str, fallback: str = "#ffffff") -> str:
        """Return the colour for *key*, or *fallback* if absent."""
        return self.colors.get(key, fallback)

    def __getitem__(self, key: str) -> str:
        return self.colors[key]

    def __contains__(self, key: str) -> bool:
        return key in self.colors

    def missing_keys(self) -> list[str]:
        """Recognised keys this theme does not define."""
        return [k for k in ALL_COLOR_KEYS if k not in self.colors]
