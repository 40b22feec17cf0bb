"""
Layout containers.

``Container`` stacks children top to bottom; ``Columns`` puts the file
list beside the tree pane.  Key events reach the focused child first.
"""

from __future__ import annotations

from collections.abc import Iterator

from ydoc_inspector.tui.ansi import RESET, style, visible_width
from ydoc_inspector.tui.component import Component
from ydoc_inspector.tui.keys import Key


class Container(Component):
    """A fixed set of child components rendered as a vertical stack."""

    def __init__(self, children: list[Component] | None = None) -> None:
        super().__init__()
        self._children: list[Component] = list(children or [])
        self._focused_index = 0

    @property
    def children(self) -> list[Component]:
        return self._children

    @property
    def focused_index(self) -> int:
        """Index of the child that receives keys first."""
        return self._focused_index

    @focused_index.setter
    def focused_index(self, value: int) -> None:
        if not self._children:
            return
        target = max(0, min(value, len(self._children) - 1))
        for i, child in enumerate(self._children):
            child.focused = i == target
        if target != self._focused_index:
            self._focused_index = target
            self.invalidate()

    def focus_next(self) -> None:
        """Focus the next visible child, wrapping past the end."""
        count = len(self._children)
        for step in range(1, count):
            candidate = (self._focused_index + step) % count
            if self._children[candidate].visible:
                self.focused_index = candidate
                return

    def _input_order(self) -> Iterator[Component]:
        if not self._children:
            return
        focused = self._children[self._focused_index]
        yield focused
        yield from (c for c in self._children if c is not focused)

    def render(self, width: int) -> list[str]:
        """
        Stack the rows of every visible child.

        Parameters
        ----------
        width:
            Columns available, passed unchanged to each child.

        Returns
        -------
        list[str]
            The children's rows in child order.  Hidden children add none.
        """
        lines: list[str] = []
        for child in self._children:
            if child.visible:
                lines += child.render(width)
        self.dirty = False
        return lines

    def handle_input(self, key: Key) -> bool:
        """
        Offer *key* to the focused child, then to the others in order.

        Returns
        -------
        bool
            ``True`` as soon as one visible child consumes the key.
        """
        return any(c.handle_input(key) for c in self._input_order() if c.visible)

    @property
    def dirty(self) -> bool:
        """True when the container or any visible child needs a redraw."""
        return self._dirty or any(c.dirty for c in self._children if c.visible)

    @dirty.setter
    def dirty(self, value: bool) -> None:
        self._dirty = value

    def invalidate(self) -> None:
        super().invalidate()
        for child in self._children:
            child.invalidate()


class Columns(Container):
    """
    The browser layout: *left* (the file list) at a fixed width and *right*
    (the tree) taking what remains, split by a vertical rule.  Every frame
    is exactly *height* rows.
    """

    SEPARATOR = "│"

    def __init__(
        self,
        left: Component,
        right: Component,
        *,
        left_width: int = 28,
        height: int = 24,
        separator_color: str | None = None,
    ) -> None:
        super().__init__([left, right])
        self.left_width = left_width
        self.height = height
        self._separator_color = separator_color

    def _column(self, child: Component, width: int) -> list[str]:
        rows = child.render(width) if child.visible else []
        rows = rows[: self.height]
        return rows + [""] * (self.height - len(rows))

    def render(self, width: int) -> list[str]:
        """
        Lay both columns out side by side.

        Parameters
        ----------
        width:
            Total columns.  The left column gets ``left_width`` of them,
            narrowed on very small terminals, and the rule takes one.

        Returns
        -------
        list[str]
            Exactly ``height`` rows.  Longer columns are cut and shorter
            ones padded with blank rows.
        """
        left, right = self._children
        left_width = min(self.left_width, max(0, width - 2))
        right_width = max(0, width - left_width - 1)
        rule = style(self.SEPARATOR, fg=self._separator_color)

        frame = [
            f"{l_row}{RESET}{' ' * max(0, left_width - visible_width(l_row))}{rule}{r_row}"
            for l_row, r_row in zip(
                self._column(left, left_width), self._column(right, right_width)
            )
        ]
        self.dirty = False
        return frame
