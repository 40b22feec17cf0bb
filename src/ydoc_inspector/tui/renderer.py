"""
Differential rendering engine.

``TUIRenderer`` remembers the last frame written and rewrites only the
rows that changed, wrapped in CSI 2026 synchronized-output markers so
terminals that support them never show a half-drawn frame.
"""

from __future__ import annotations

import sys
from io import StringIO
from typing import TextIO

from ydoc_inspector.tui.ansi import (
    clear_line,
    clear_screen,
    cursor_position,
    hide_cursor,
)
from ydoc_inspector.tui.component import Component

_SYNC_START = "\033[?2026h"
_SYNC_END = "\033[?2026l"


class TUIRenderer:
    """
    Differential terminal renderer.

    A full redraw happens on the first frame and whenever the terminal
    size changes; otherwise only differing rows are written.

    Parameters
    ----------
    output:
        Writable text stream, defaults to ``sys.stdout``.
    """

    def __init__(self, output: TextIO | None = None) -> None:
        self._output: TextIO = output or sys.stdout
        self._previous_lines: list[str] = []
        self._size: tuple[int, int] = (0, 0)

    @property
    def previous_lines(self) -> list[str]:
        """The last frame that was written."""
        return list(self._previous_lines)

    def render(self, components: list[Component], width: int, height: int) -> None:
        """
        Render visible *components* top to bottom as one frame.

        Every component is marked clean afterwards, hidden ones included.
        """
        lines: list[str] = []
        for comp in components:
            if comp.visible:
                lines.extend(comp.render(width))
        self.render_lines(lines, width, height)
        for comp in components:
            comp.dirty = False

    def render_lines(self, lines: list[str], width: int, height: int) -> None:
        """
        Write a pre-composed frame.

        Parameters
        ----------
        lines:
            The frame rows, already styled.  Padded with blank rows or cut
            to *height*.
        width, height:
            Terminal size.  A change from the previous call redraws the
            whole screen instead of only the changed rows.
        """
        frame = list(lines[:height])
        frame.extend([""] * (height - len(frame)))

        if (width, height) != self._size or not self._previous_lines:
            self._write_rows(list(enumerate(frame, start=1)), full=True)
        else:
            updates = self._diff(self._previous_lines, frame)
            if updates:
                self._write_rows(updates, full=False)

        self._previous_lines = frame
        self._size = (width, height)

    @staticmethod
    def _diff(old_lines: list[str], new_lines: list[str]) -> list[tuple[int, str]]:
        """``(1-based row, text)`` for every row that differs.  Frames share a height."""
        return [
            (row, new)
            for row, (old, new) in enumerate(zip(old_lines, new_lines), start=1)
            if old != new
        ]

    def _write_rows(self, rows: list[tuple[int, str]], *, full: bool) -> None:
        buf = StringIO()
        buf.write(_SYNC_START)
        buf.write(hide_cursor())
        if full:
            buf.write(clear_screen())
        for row, text in rows:
            buf.write(cursor_position(row, 1))
            if not full:
                buf.write(clear_line())
            buf.write(text)
        buf.write(_SYNC_END)
        self._output.write(buf.getvalue())
        self._output.flush()
