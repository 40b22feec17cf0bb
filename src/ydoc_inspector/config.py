"""
Configuration for the inspector.

Settings can be loaded from a YAML file, constructed programmatically, or
overridden through ``YDOC_INSPECTOR_*`` environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

ENV_PREFIX = "YDOC_INSPECTOR_"

CONFIG_SEARCH_PATHS: list[Path] = [
    Path("ydoc-inspector.yaml"),
    Path.home() / ".config" / "ydoc-inspector" / "config.yaml",
]


@dataclass
class InspectorConfig:
    """
    Main configuration for decoding and viewing.

    Example YAML:
        container_key: objects
        entry_key: object_data
        indent_width: 2
        default_expanded: true
        sidebar_width: 28
        max_concurrent: 5
        keybindings:
          quit: ["q", "ctrl+c"]
    """

    # Decoding
    container_key: str = "objects"  # Root map holding the preferred entry
    entry_key: str = "object_data"  # Preferred entry inside the container
    max_concurrent: int = 5  # Max files decoded at once in a batch

    # Tree rendering
    indent_width: int = 2
    default_expanded: bool = True
    elision_marker: str = "..."
    expanded_glyph: str = "▼"
    collapsed_glyph: str = "▶"

    # Viewer chrome
    sidebar_width: int = 28
    theme: Path | None = None  # JSON theme file, None = built-in dark
    keybindings: dict[str, list[str]] = field(default_factory=dict)

    # Logging
    log_level: str = "WARNING"
    log_file: Path | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InspectorConfig:
        """Create config from a dictionary."""
        keybindings = {
            str(action): [str(d) for d in descriptors]
            for action, descriptors in (data.get("keybindings") or {}).items()
            if isinstance(descriptors, list)
        }
        return cls(
            container_key=data.get("container_key", "objects"),
            entry_key=data.get("entry_key", "object_data"),
            max_concurrent=int(data.get("max_concurrent", 5)),
            indent_width=int(data.get("indent_width", 2)),
            default_expanded=bool(data.get("default_expanded", True)),
            elision_marker=data.get("elision_marker", "..."),
            expanded_glyph=data.get("expanded_glyph", "▼"),
            collapsed_glyph=data.get("collapsed_glyph", "▶"),
            sidebar_width=int(data.get("sidebar_width", 28)),
            theme=Path(data["theme"]) if data.get("theme") else None,
            keybindings=keybindings,
            log_level=str(data.get("log_level", "WARNING")).upper(),
            log_file=Path(data["log_file"]) if data.get("log_file") else None,
        )

    @classmethod
    def from_yaml(cls, path: Path) -> InspectorConfig:
        """Load config from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    @classmethod
    def from_yaml_string(cls, content: str) -> InspectorConfig:
        """Load config from a YAML string."""
        data = yaml.safe_load(content)
        return cls.from_dict(data or {})

    @classmethod
    def load(cls, path: Path | None = None) -> InspectorConfig:
        """
        Load config from *path*, or the first existing search path.

        Falls back to defaults when no file exists.  Environment overrides
        are applied last in either case.
        """
        candidates = [path] if path is not None else CONFIG_SEARCH_PATHS
        config = cls()
        for candidate in candidates:
            if candidate.is_file():
                config = cls.from_yaml(candidate)
                break
        return config.apply_env()

    def apply_env(self, environ: dict[str, str] | None = None) -> InspectorConfig:
        """Apply ``YDOC_INSPECTOR_*`` overrides in place and return self."""
        env = os.environ if environ is None else environ

        level = env.get(f"{ENV_PREFIX}LOG_LEVEL")
        if level:
            self.log_level = level.upper()

        concurrent = env.get(f"{ENV_PREFIX}MAX_CONCURRENT")
        if concurrent and concurrent.isdigit() and int(concurrent) > 0:
            self.max_concurrent = int(concurrent)

        log_file = env.get(f"{ENV_PREFIX}LOG_FILE")
        if log_file:
            self.log_file = Path(log_file)

        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a dictionary."""
        return {
            "container_key": self.container_key,
            "entry_key": self.entry_key,
            "max_concurrent": self.max_concurrent,
            "indent_width": self.indent_width,
            "default_expanded": self.default_expanded,
            "elision_marker": self.elision_marker,
            "expanded_glyph": self.expanded_glyph,
            "collapsed_glyph": self.collapsed_glyph,
            "sidebar_width": self.sidebar_width,
            "theme": str(self.theme) if self.theme else None,
            "keybindings": {k: list(v) for k, v in self.keybindings.items()},
            "log_level": self.log_level,
            "log_file": str(self.log_file) if self.log_file else None,
        }
