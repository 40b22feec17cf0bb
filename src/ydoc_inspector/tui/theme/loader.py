"""Theme loading."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ydoc_inspector.tui.theme.defaults import get_default_theme
from ydoc_inspector.tui.theme.models import ThemeInfo


def load_theme(path: Path) -> ThemeInfo:
    """Load a theme from a JSON file.

    A colour value that is not a hex string is looked up in the
    ``variables`` dict first, then among the other ``colors``.  Keys the
    file does not define keep their default-dark colour.
    """
    with open(path) as f:
        data: dict[str, Any] = json.load(f)

    variables: dict[str, str] = data.get("variables", {})
    raw_colors: dict[str, Any] = data.get("colors", {})

    resolved: dict[str, str] = {}
    for key, value in raw_colors.items():
        if not isinstance(value, str) or not value:
            continue
        if value.startswith("#"):
            resolved[key] = value
        elif value in variables:
            resolved[key] = variables[value]
        elif isinstance(raw_colors.get(value), str):
            ref = raw_colors[value]
            resolved[key] = variables.get(ref, ref)

    theme = get_default_theme()
    theme.name = data.get("name", path.stem)
    theme.description = data.get("description", "")
    theme.colors.update(resolved)
    return theme
