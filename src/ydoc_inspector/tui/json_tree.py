"""
Collapsible JSON tree pane.

Draws the rows of a :class:`~ydoc_inspector.tree.TreeModel` with syntax
colours, a cursor and vertical scrolling.  The cursor is remembered by
structural path rather than row number, so collapsing or expanding a node
keeps it on the same node even though rows shift.  A path names a node,
not one of its rows: a cursor on a closing bracket comes back on that
node's header row after the model is replaced.
"""

from __future__ import annotations

from ydoc_inspector.tree import DisplayLine, LineRole, TreeModel, TreePath
from ydoc_inspector.tui.ansi import fit_segments
from ydoc_inspector.tui.component import Component
from ydoc_inspector.tui.keybindings import KeybindingsManager
from ydoc_inspector.tui.keys import Key
from ydoc_inspector.tui.theme import ThemeInfo, get_default_theme

_VALUE_COLOR_KEYS: dict[str, str] = {
    "string": "json_string",
    "number": "json_number",
    "boolean": "json_boolean",
    "null": "json_null",
}

Segment = tuple[str, dict[str, object]]


class JSONTreeView(Component):
    """
    Read-only tree pane over a :class:`TreeModel`.

    With no model it shows *empty_message* instead.
    """

    def __init__(
        self,
        model: TreeModel | None = None,
        *,
        theme: ThemeInfo | None = None,
        keybindings: KeybindingsManager | None = None,
        indent_width: int = 2,
        expanded_glyph: str = "▼",
        collapsed_glyph: str = "▶",
        height: int = 20,
        empty_message: list[str] | None = None,
    ) -> None:
        super().__init__()
        self._theme = theme or get_default_theme()
        self._keys = keybindings or KeybindingsManager()
        self._indent = indent_width
        self._glyphs = (expanded_glyph, collapsed_glyph)
        self.height = height
        self._empty_message = empty_message or []

        self._model: TreeModel | None = None
        self._lines: list[DisplayLine] = []
        self._cursor: int = 0
        self._cursor_path: TreePath = ()
        self._scroll: int = 0
        self.set_model(model)

    # ------------------------------------------------------------------
    # Model
    # ------------------------------------------------------------------

    @property
    def model(self) -> TreeModel | None:
        return self._model

    def set_model(self, model: TreeModel | None, cursor_path: TreePath = ()) -> None:
        """Show *model*, placing the cursor on *cursor_path* if it is visible."""
        self._model = model
        self._cursor_path = cursor_path
        self._scroll = 0
        self._refresh()

    @property
    def lines(self) -> list[DisplayLine]:
        """The rows currently visible in the model (not just on screen)."""
        return list(self._lines)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def cursor_path(self) -> TreePath:
        return self._cursor_path

    @property
    def cursor_line(self) -> DisplayLine | None:
        if not self._lines:
            return None
        return self._lines[self._cursor]

    def _refresh(self) -> None:
        """Re-render rows from the model and re-anchor the cursor."""
        self._lines = self._model.lines() if self._model is not None else []
        self._cursor = self._anchor(self._cursor_path)
        if self._lines:
            self._cursor_path = self._lines[self._cursor].path
        self.invalidate()

    def _anchor(self, path: TreePath) -> int:
        """
        Header row of *path*, or of its nearest visible ancestor.

        Closing rows share their header's path and are never chosen.
        """
        rows = {
            line.path: i
            for i, line in reversed(list(enumerate(self._lines)))
            if line.role is not LineRole.CLOSE
        }
        for cut in range(len(path), -1, -1):
            if path[:cut] in rows:
                return rows[path[:cut]]
        return 0

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def move_cursor(self, delta: int) -> None:
        if not self._lines:
            return
        self._set_cursor(self._cursor + delta)

    def _set_cursor(self, index: int) -> None:
        index = max(0, min(index, len(self._lines) - 1))
        if index != self._cursor:
            self._cursor = index
            self._cursor_path = self._lines[index].path
            self.invalidate()

    def cursor_top(self) -> None:
        self._set_cursor(0)

    def cursor_bottom(self) -> None:
        self._set_cursor(len(self._lines) - 1)

    # ------------------------------------------------------------------
    # Expand / collapse
    # ------------------------------------------------------------------

    def toggle(self) -> None:
        """Toggle the node under the cursor (header or its closing row)."""
        line = self.cursor_line
        if self._model is None or line is None:
            return
        if line.expandable or line.role is LineRole.CLOSE:
            self._model.toggle(line.path)
            self._refresh()

    def expand(self) -> None:
        """Expand a collapsed node, or step into an expanded one."""
        line = self.cursor_line
        if self._model is None or line is None:
            return
        if line.role is LineRole.COLLAPSED:
            self._model.toggle(line.path)
            self._refresh()
        elif line.role is LineRole.HEADER:
            self.move_cursor(1)

    def collapse(self) -> None:
        """Collapse an expanded node, or jump to the parent's header."""
        line = self.cursor_line
        if self._model is None or line is None:
            return
        if line.role in (LineRole.HEADER, LineRole.CLOSE):
            self._model.toggle(line.path)
            self._refresh()
        elif line.path:
            self._set_cursor(self._anchor(line.path[:-1]))

    def expand_all(self) -> None:
        if self._model is not None:
            self._model.expand_all()
            self._refresh()

    def collapse_all(self) -> None:
        if self._model is not None:
            self._model.collapse_all()
            self._refresh()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def handle_input(self, key: Key) -> bool:
        action = self._keys.find_action(key)
        handlers = {
            "cursor_up": lambda: self.move_cursor(-1),
            "cursor_down": lambda: self.move_cursor(1),
            "page_up": lambda: self.move_cursor(-max(1, self.height - 1)),
            "page_down": lambda: self.move_cursor(max(1, self.height - 1)),
            "top": self.cursor_top,
            "bottom": self.cursor_bottom,
            "toggle": self.toggle,
            "expand": self.expand,
            "collapse": self.collapse,
            "expand_all": self.expand_all,
            "collapse_all": self.collapse_all,
        }
        handler = handlers.get(action or "")
        if handler is None or self._model is None:
            return False
        handler()
        return True

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _segments(self, line: DisplayLine) -> list[Segment]:
        t = self._theme
        expanded_glyph, collapsed_glyph = self._glyphs
        segs: list[Segment] = [(" " * (self._indent * line.depth), {})]

        if line.expanded is True:
            segs.append((f"{expanded_glyph} ", {"fg": t.get("json_toggle")}))
        elif line.expanded is False:
            segs.append((f"{collapsed_glyph} ", {"fg": t.get("json_toggle")}))
        else:
            segs.append(("  ", {}))

        if line.label:
            segs.append((line.label, {"fg": t.get("json_key")}))

        bracket = {"fg": t.get("json_bracket")}
        if line.role is LineRole.LEAF:
            color_key = _VALUE_COLOR_KEYS.get(line.value_type, "text")
            segs.append((line.literal or "", {"fg": t.get(color_key)}))
        elif line.role is LineRole.EMPTY:
            segs.append((line.open_bracket + line.close_bracket, bracket))
        elif line.role is LineRole.HEADER:
            segs.append((line.open_bracket, bracket))
        elif line.role is LineRole.COLLAPSED:
            segs.append((line.open_bracket, bracket))
            segs.append((line.elision, {"fg": t.get("json_placeholder")}))
            segs.append((line.close_bracket, bracket))
        else:
            segs.append((line.close_bracket, bracket))

        if line.comma:
            segs.append((",", {"fg": t.get("json_comma")}))
        return segs

    def _scroll_to_cursor(self) -> None:
        height = max(1, self.height)
        if self._cursor < self._scroll:
            self._scroll = self._cursor
        elif self._cursor >= self._scroll + height:
            self._scroll = self._cursor - height + 1
        self._scroll = max(0, min(self._scroll, max(0, len(self._lines) - height)))

    def render(self, width: int) -> list[str]:
        self._dirty = False
        if self._model is None:
            return [
                fit_segments([(text, {"fg": self._theme.get("text_dim")})], width)
                for text in self._empty_message
            ]

        self._scroll_to_cursor()
        cursor_bg = self._theme.get("cursor_bg")
        rows: list[str] = []
        for index in range(self._scroll, min(len(self._lines), self._scroll + self.height)):
            segs = self._segments(self._lines[index])
            if index == self._cursor and self.focused:
                segs = [(text, {**kwargs, "bg": cursor_bg}) for text, kwargs in segs]
                rows.append(fit_segments(segs, width, fill={"bg": cursor_bg}))
            else:
                rows.append(fit_segments(segs, width))
        return rows
