"""
Modal overlays.

The :class:`OverlayManager` keeps a stack of components drawn over the
main frame.  The viewer uses it for :class:`NoticeBox` messages such as
per-file decode failures.
"""

from __future__ import annotations

from collections.abc import Callable

from ydoc_inspector.tui.ansi import RESET, fit, style, visible_width
from ydoc_inspector.tui.component import Component
from ydoc_inspector.tui.keys import Key


class NoticeBox(Component):
    """
    A titled list of messages, dismissed by any key.

    *on_dismiss* is called once when a key is pressed.
    """

    def __init__(
        self,
        title: str,
        messages: list[str],
        *,
        color: str | None = None,
        on_dismiss: Callable[[NoticeBox], None] | None = None,
    ) -> None:
        super().__init__()
        self.title = title
        self.messages = list(messages)
        self._color = color
        self._on_dismiss = on_dismiss

    def handle_input(self, key: Key) -> bool:
        if self._on_dismiss is not None:
            self._on_dismiss(self)
        return True

    def render(self, width: int) -> list[str]:
        self._dirty = False
        rows = [style(fit(self.title, min(width, len(self.title))), fg=self._color, bold=True), ""]
        for message in self.messages:
            rows.append(fit(message, min(width, visible_width(message))))
        rows.extend(["", style("press any key", dim=True)])
        return rows


class OverlayManager:
    """
    Stack-based overlay manager.

    The topmost overlay receives keyboard input before the underlying
    content; :meth:`compose` draws every overlay centred over a frame.
    """

    def __init__(self) -> None:
        self._stack: list[Component] = []

    def push(self, component: Component) -> None:
        """Push *component*; it gains focus."""
        component.focused = True
        component.invalidate()
        self._stack.append(component)

    def pop(self) -> Component | None:
        """Remove and return the top overlay, or ``None`` if empty."""
        if not self._stack:
            return None
        component = self._stack.pop()
        component.focused = False
        return component

    def remove(self, component: Component) -> None:
        if component in self._stack:
            self._stack.remove(component)
            component.focused = False

    @property
    def is_active(self) -> bool:
        return bool(self._stack)

    @property
    def top(self) -> Component | None:
        return self._stack[-1] if self._stack else None

    def handle_input(self, key: Key) -> bool:
        """Give *key* to the topmost overlay; ``False`` if there is none."""
        if not self._stack:
            return False
        return self._stack[-1].handle_input(key)

    def compose(self, base_lines: list[str], width: int, height: int) -> list[str]:
        """
        Draw every overlay, centred and boxed, over *base_lines*.

        Returns exactly *height* rows.
        """
        result = list(base_lines[:height])
        result.extend([""] * (height - len(result)))

        for component in self._stack:
            if not component.visible:
                continue
            body = component.render(max(1, width - 4))
            content_width = max((visible_width(line) for line in body), default=0)
            box_width = min(content_width + 4, width)
            inner = max(0, box_width - 4)
            left = " " * max(0, (width - box_width) // 2)
            top = max(1, (height - len(body)) // 2)

            border = {"dim": True}
            if top - 1 < height:
                result[top - 1] = left + style("┌" + "─" * (box_width - 2) + "┐", **border)
            for i, line in enumerate(body):
                row = top + i
                if row >= height:
                    break
                pad = " " * max(0, inner - visible_width(line))
                result[row] = (
                    f"{left}{style('│', **border)} {line}{RESET}{pad} {style('│', **border)}"
                )
            bottom = top + len(body)
            if bottom < height:
                result[bottom] = left + style("└" + "─" * (box_width - 2) + "┘", **border)

        return result[:height]
