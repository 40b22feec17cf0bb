"""Collapsible tree rendering for JSON-like values."""

from ydoc_inspector.tree.model import (
    ROOT,
    DisplayLine,
    DisplayNode,
    ExpansionState,
    LineRole,
    NodeKind,
    TreeModel,
    TreePath,
    flatten,
    format_path,
    render,
)

__all__ = [
    "ROOT",
    "DisplayLine",
    "DisplayNode",
    "ExpansionState",
    "LineRole",
    "NodeKind",
    "TreeModel",
    "TreePath",
    "flatten",
    "format_path",
    "render",
]
