"""
Terminal UI framework for the inspector.

Provides the component model, layout containers, key parsing and
keybindings, theming, overlays, the differential renderer, and the
widgets the viewer is built from.
"""
from __future__ import annotations

from ydoc_inspector.tui.component import Component
from ydoc_inspector.tui.container import Columns, Container
from ydoc_inspector.tui.file_list import FileListView
from ydoc_inspector.tui.json_tree import JSONTreeView
from ydoc_inspector.tui.keybindings import DEFAULT_KEYBINDINGS, KeybindingsManager
from ydoc_inspector.tui.keys import Key, parse_key
from ydoc_inspector.tui.overlay import NoticeBox, OverlayManager
from ydoc_inspector.tui.prompt import PathPrompt, split_paths
from ydoc_inspector.tui.renderer import TUIRenderer

__all__ = [
    # Core
    "Component",
    "Container",
    "Columns",
    "TUIRenderer",
    # Keys
    "Key",
    "parse_key",
    "KeybindingsManager",
    "DEFAULT_KEYBINDINGS",
    # Widgets
    "JSONTreeView",
    "FileListView",
    "PathPrompt",
    "split_paths",
    # Overlay
    "NoticeBox",
    "OverlayManager",
]
