"""
Keybinding management.

Maps viewer actions to key descriptors such as ``"ctrl+o"`` or
``"shift+tab"``.  Defaults can be overridden per action from the config
file or a standalone JSON file.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ydoc_inspector.logging import get_logger
from ydoc_inspector.tui.keys import Key

logger = get_logger("tui.keybindings")

DEFAULT_KEYBINDINGS: dict[str, list[str]] = {
    "quit": ["q", "ctrl+c"],
    "cursor_up": ["up", "k"],
    "cursor_down": ["down", "j"],
    "page_up": ["page_up"],
    "page_down": ["page_down"],
    "top": ["home", "g"],
    "bottom": ["end"],
    "toggle": ["enter", "space"],
    "expand": ["right", "l"],
    "collapse": ["left", "h"],
    "expand_all": ["*", "e"],
    "collapse_all": ["-", "c"],
    "next_file": ["tab", "]"],
    "prev_file": ["shift+tab", "["],
    "open_file": ["o", "ctrl+o"],
    "dismiss": ["escape"],
}

DEFAULT_KEYBINDINGS_PATH = Path.home() / ".config" / "ydoc-inspector" / "keybindings.json"


def _normalise_descriptor(descriptor: str) -> str:
    """
    Canonical form of a descriptor: lower-case, modifiers sorted, base last.

    ``"Shift+Tab"`` -> ``"shift+tab"``
    """
    parts = [p.strip().lower() for p in descriptor.split("+")]
    modifiers = sorted(parts[:-1])
    return "+".join(modifiers + [parts[-1]])


def _key_to_descriptor(key: Key) -> str:
    """
    Canonical descriptor for a parsed :class:`Key`.

    >>> _key_to_descriptor(Key(name="ctrl+c", char="c", ctrl=True))
    'ctrl+c'
    >>> _key_to_descriptor(Key(name="tab", shift=True))
    'shift+tab'
    """
    base = key.name.rsplit("+", 1)[-1] if "+" in key.name else key.name
    modifiers = sorted(
        name for name, on in (("alt", key.alt), ("ctrl", key.ctrl), ("shift", key.shift)) if on
    )
    return "+".join(modifiers + [base.lower()])


class KeybindingsManager:
    """
    Maps logical action names to key descriptors.

    Parameters
    ----------
    user_overrides:
        Action -> descriptor lists replacing the defaults for those actions.
    """

    def __init__(self, user_overrides: dict[str, list[str]] | None = None) -> None:
        self._bindings: dict[str, list[str]] = dict(DEFAULT_KEYBINDINGS)
        if user_overrides:
            self._bindings.update(user_overrides)

        self._normalised: dict[str, list[str]] = {
            action: [_normalise_descriptor(d) for d in descriptors]
            for action, descriptors in self._bindings.items()
        }

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> KeybindingsManager:
        """
        Load overrides from a JSON file mapping actions to descriptor lists::

            {"quit": ["q", "ctrl+q"], "toggle": ["enter"]}

        A missing or unreadable file leaves the defaults in place.
        """
        path = Path(config_path) if config_path is not None else DEFAULT_KEYBINDINGS_PATH
        overrides: dict[str, list[str]] = {}
        if path.is_file():
            try:
                raw: Any = json.loads(path.read_text(encoding="utf-8"))
            except (json.JSONDecodeError, OSError) as e:
                logger.warning("Ignoring keybindings file %s: %s", path, e)
                raw = None
            if isinstance(raw, dict):
                overrides = {
                    action: descriptors
                    for action, descriptors in raw.items()
                    if isinstance(descriptors, list)
                    and all(isinstance(d, str) for d in descriptors)
                }
        return cls(user_overrides=overrides)

    def matches(self, key: Key | str, action: str) -> bool:
        """``True`` if *key* (a :class:`Key` or descriptor) triggers *action*."""
        descriptors = self._normalised.get(action)
        if descriptors is None:
            return False
        if isinstance(key, str):
            normalised = _normalise_descriptor(key)
        else:
            normalised = _key_to_descriptor(key)
        return normalised in descriptors

    def get_keys(self, action: str) -> list[str]:
        """Descriptors bound to *action*, as configured."""
        return list(self._bindings.get(action, []))

    def actions(self) -> list[str]:
        return list(self._bindings.keys())

    def find_action(self, key: Key | str) -> str | None:
        """First action (in definition order) bound to *key*, or ``None``."""
        for action in self._bindings:
            if self.matches(key, action):
                return action
        return None
