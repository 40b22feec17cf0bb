"""
Collapsible tree model for JSON-like values.

A value is rendered into a tree of :class:`DisplayNode` objects and then
flattened into :class:`DisplayLine` rows.  Expand/collapse state lives in an
:class:`ExpansionState` keyed by structural path (the keys and indices from
the root), so toggling one node never disturbs another and the state
survives any number of re-renders of the same value.

Punctuation rules:

* brackets depend only on array vs object
* a trailing comma is emitted iff the node is not the last of its
  siblings, whether the node is expanded, collapsed, empty or a leaf
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import TypeAlias

from ydoc_inspector.values import (
    JSONValue,
    ValueType,
    format_key,
    format_literal,
    value_type,
)

TreePath: TypeAlias = tuple[str | int, ...]

ROOT: TreePath = ()

_BRACKETS: dict[str, tuple[str, str]] = {
    "array": ("[", "]"),
    "object": ("{", "}"),
}


class NodeKind(str, Enum):
    """How a node is drawn."""

    LEAF = "leaf"  # scalar
    EMPTY = "empty"  # container with no entries
    EXPANDED = "expanded"  # header, children, closing line
    COLLAPSED = "collapsed"  # single line with elision marker


class LineRole(str, Enum):
    """What a single rendered row represents."""

    LEAF = "leaf"
    EMPTY = "empty"
    HEADER = "header"
    COLLAPSED = "collapsed"
    CLOSE = "close"


# ---------------------------------------------------------------------------
# Expansion state
# ---------------------------------------------------------------------------

class ExpansionState:
    """
    Per-node expanded flags keyed by structural path.

    Paths never seen before report *default*.  ``expand_all`` and
    ``collapse_all`` change the default and drop individual overrides.
    """

    def __init__(self, default: bool = True) -> None:
        self._initial_default = default
        self._default = default
        self._overrides: dict[TreePath, bool] = {}

    @property
    def default(self) -> bool:
        return self._default

    def is_expanded(self, path: TreePath) -> bool:
        return self._overrides.get(path, self._default)

    def set_expanded(self, path: TreePath, expanded: bool) -> None:
        if expanded == self._default:
            self._overrides.pop(path, None)
        else:
            self._overrides[path] = expanded

    def toggle(self, path: TreePath) -> bool:
        """Flip the flag at *path* and return the new value."""
        expanded = not self.is_expanded(path)
        self.set_expanded(path, expanded)
        return expanded

    def expand_all(self) -> None:
        self._overrides.clear()
        self._default = True

    def collapse_all(self) -> None:
        self._overrides.clear()
        self._default = False

    def reset(self) -> None:
        """Forget every toggle and restore the initial default."""
        self._overrides.clear()
        self._default = self._initial_default

    def snapshot(self) -> dict[TreePath, bool]:
        """Copy of the explicit overrides, for tests and debugging."""
        return dict(self._overrides)


# ---------------------------------------------------------------------------
# Display tree
# ---------------------------------------------------------------------------

@dataclass
class DisplayNode:
    """One node of the rendered tree."""

    path: TreePath
    key: str | None
    kind: NodeKind
    value_type: ValueType
    is_last: bool
    literal: str | None = None
    open_bracket: str = ""
    close_bracket: str = ""
    size: int = 0
    children: list[DisplayNode] = field(default_factory=list)

    @property
    def expandable(self) -> bool:
        return self.kind in (NodeKind.EXPANDED, NodeKind.COLLAPSED)


@dataclass(frozen=True)
class DisplayLine:
    """
    One visible row.

    ``text`` is the row body without indentation or toggle glyph, for
    example ``'"a": 1,'`` or ``'"b": {...}'``.
    """

    path: TreePath
    depth: int
    role: LineRole
    value_type: ValueType
    key: str | None = None
    literal: str | None = None
    open_bracket: str = ""
    close_bracket: str = ""
    comma: bool = False
    elision: str = ""

    @property
    def expandable(self) -> bool:
        return self.role in (LineRole.HEADER, LineRole.COLLAPSED)

    @property
    def expanded(self) -> bool | None:
        """True/False on toggle rows, None elsewhere."""
        if self.role is LineRole.HEADER:
            return True
        if self.role is LineRole.COLLAPSED:
            return False
        return None

    @property
    def label(self) -> str:
        return f"{format_key(self.key)}: " if self.key is not None else ""

    @property
    def text(self) -> str:
        sep = "," if self.comma else ""
        if self.role is LineRole.LEAF:
            return f"{self.label}{self.literal}{sep}"
        if self.role is LineRole.EMPTY:
            return f"{self.label}{self.open_bracket}{self.close_bracket}{sep}"
        if self.role is LineRole.HEADER:
            return f"{self.label}{self.open_bracket}"
        if self.role is LineRole.COLLAPSED:
            return f"{self.label}{self.open_bracket}{self.elision}{self.close_bracket}{sep}"
        return f"{self.close_bracket}{sep}"


def _entries(value: JSONValue) -> list[tuple[str | int, JSONValue]]:
    if isinstance(value, dict):
        return list(value.items())
    if isinstance(value, list):
        return list(enumerate(value))
    return []


def _child(value: JSONValue, step: str | int, path: TreePath) -> JSONValue:
    if isinstance(value, dict) and isinstance(step, str) and step in value:
        return value[step]
    if (
        isinstance(value, list)
        and isinstance(step, int)
        and not isinstance(step, bool)
        and 0 <= step < len(value)
    ):
        return value[step]
    raise KeyError(path)


def render(
    value: JSONValue,
    path: TreePath = ROOT,
    *,
    key: str | None = None,
    is_last: bool = True,
    state: ExpansionState | None = None,
) -> DisplayNode:
    """
    Render *value* at *path* into a :class:`DisplayNode` tree.

    Collapsed nodes have no children; their content is only rendered once
    they are expanded.
    """
    state = state or ExpansionState()
    vtype = value_type(value)

    if vtype not in _BRACKETS:
        return DisplayNode(
            path=path,
            key=key,
            kind=NodeKind.LEAF,
            value_type=vtype,
            is_last=is_last,
            literal=format_literal(value),  # type: ignore[arg-type]
        )

    open_bracket, close_bracket = _BRACKETS[vtype]
    entries = _entries(value)
    node = DisplayNode(
        path=path,
        key=key,
        kind=NodeKind.EMPTY,
        value_type=vtype,
        is_last=is_last,
        open_bracket=open_bracket,
        close_bracket=close_bracket,
        size=len(entries),
    )
    if not entries:
        return node

    if not state.is_expanded(path):
        node.kind = NodeKind.COLLAPSED
        return node

    node.kind = NodeKind.EXPANDED
    is_array = vtype == "array"
    last_index = len(entries) - 1
    for index, (entry_key, child) in enumerate(entries):
        node.children.append(
            render(
                child,
                path + (entry_key,),
                key=None if is_array else str(entry_key),
                is_last=index == last_index,
                state=state,
            )
        )
    return node


def flatten(
    node: DisplayNode,
    depth: int = 0,
    *,
    elision: str = "...",
) -> list[DisplayLine]:
    """Flatten a display tree into rows, top to bottom."""
    lines: list[DisplayLine] = []
    _flatten_into(node, depth, elision, lines)
    return lines


def _flatten_into(
    node: DisplayNode,
    depth: int,
    elision: str,
    out: list[DisplayLine],
) -> None:
    common = {
        "path": node.path,
        "depth": depth,
        "value_type": node.value_type,
        "key": node.key,
        "open_bracket": node.open_bracket,
        "close_bracket": node.close_bracket,
    }
    if node.kind is NodeKind.LEAF:
        out.append(DisplayLine(role=LineRole.LEAF, literal=node.literal,
                               comma=not node.is_last, **common))
    elif node.kind is NodeKind.EMPTY:
        out.append(DisplayLine(role=LineRole.EMPTY, comma=not node.is_last, **common))
    elif node.kind is NodeKind.COLLAPSED:
        out.append(DisplayLine(role=LineRole.COLLAPSED, comma=not node.is_last,
                               elision=elision, **common))
    else:
        out.append(DisplayLine(role=LineRole.HEADER, **common))
        for child in node.children:
            _flatten_into(child, depth + 1, elision, out)
        common["key"] = None
        out.append(DisplayLine(role=LineRole.CLOSE, comma=not node.is_last, **common))


# ---------------------------------------------------------------------------
# TreeModel
# ---------------------------------------------------------------------------

class TreeModel:
    """
    A value plus the expansion state used to display it.

    The value is never modified.  Each call to :meth:`lines` renders
    afresh from the current state.

    Example:
        model = TreeModel({"a": 1, "b": {"c": True}})
        model.toggle(("b",))
        [line.text for line in model.lines()]
        # ['{', '"a": 1,', '"b": {...}', '}']
    """

    def __init__(
        self,
        value: JSONValue,
        state: ExpansionState | None = None,
        *,
        elision_marker: str = "...",
    ) -> None:
        self._value = value
        self._state = state if state is not None else ExpansionState()
        self._elision = elision_marker

    @property
    def value(self) -> JSONValue:
        return self._value

    @property
    def state(self) -> ExpansionState:
        return self._state

    def root(self) -> DisplayNode:
        return render(self._value, ROOT, state=self._state)

    def lines(self) -> list[DisplayLine]:
        return flatten(self.root(), elision=self._elision)

    def toggle(self, path: TreePath) -> bool:
        """Flip the node at *path*; returns whether it is now expanded."""
        return self._state.toggle(path)

    def expand_all(self) -> None:
        self._state.expand_all()

    def collapse_all(self) -> None:
        self._state.collapse_all()

    def lookup(self, path: TreePath) -> JSONValue:
        """
        Return the value at *path*.

        Raises:
            KeyError: if *path* does not exist in the value.
        """
        current = self._value
        for depth, step in enumerate(path):
            current = _child(current, step, path[: depth + 1])
        return current

    def container_paths(self) -> Iterator[TreePath]:
        """Paths of every non-empty container, depth first."""
        stack: list[tuple[TreePath, JSONValue]] = [(ROOT, self._value)]
        while stack:
            path, value = stack.pop()
            entries = _entries(value)
            if not entries:
                continue
            yield path
            for entry_key, child in reversed(entries):
                stack.append((path + (entry_key,), child))

    def plain_text(
        self,
        indent: int = 2,
        *,
        expanded_glyph: str = "▼",
        collapsed_glyph: str = "▶",
    ) -> str:
        """Render the visible rows as plain text, one row per line."""
        rows: list[str] = []
        for line in self.lines():
            if line.expanded is True:
                toggle = f"{expanded_glyph} "
            elif line.expanded is False:
                toggle = f"{collapsed_glyph} "
            else:
                toggle = "  "
            rows.append(f"{' ' * (indent * line.depth)}{toggle}{line.text}")
        return "\n".join(rows)

    def resolve_path(self, text: str) -> TreePath:
        """
        Turn a ``/``-separated path such as ``"items/0/name"`` into a
        :data:`TreePath`, using the value to tell array indices from
        object keys.  ``""`` and ``"/"`` are the root.

        Raises:
            KeyError: if a segment does not exist.
        """
        path: list[str | int] = []
        current = self._value
        for segment in (s for s in text.strip("/").split("/") if s):
            if isinstance(current, list) and segment.isdigit():
                step: str | int = int(segment)
            else:
                step = segment
            current = _child(current, step, tuple(path) + (step,))
            path.append(step)
        return tuple(path)


def format_path(path: TreePath) -> str:
    """
    JSONPath-style label for *path*, e.g. ``$.items[0]["display name"]``.
    """
    parts = ["$"]
    for step in path:
        if isinstance(step, int):
            parts.append(f"[{step}]")
        elif step.isidentifier():
            parts.append(f".{step}")
        else:
            parts.append(f"[{format_key(step)}]")
    return "".join(parts)
