"""
Single-line path prompt.

The viewer's "add file" affordance.  Paths can be typed, or pasted, which
covers terminals that turn a dragged file into its pasted path.
"""

from __future__ import annotations

import shlex
from collections.abc import Callable

from ydoc_inspector.tui.ansi import fit_segments
from ydoc_inspector.tui.component import Component
from ydoc_inspector.tui.keys import Key
from ydoc_inspector.tui.theme import ThemeInfo, get_default_theme


def split_paths(text: str) -> list[str]:
    """
    Split prompt text into paths.

    Shell quoting is honoured (``'my file.bin'`` stays one path) and
    ``file://`` prefixes added by some terminals are dropped.  Text that
    does not parse as shell words is treated as a single path.
    """
    text = text.strip()
    if not text:
        return []
    try:
        words = shlex.split(text)
    except ValueError:
        words = [text]
    return [w[len("file://"):] if w.startswith("file://") else w for w in words]


class PathPrompt(Component):
    """
    Collects a line of input and hands the parsed paths to *on_submit*.

    ``enter`` submits, ``escape`` cancels; both clear the buffer and call
    *on_close*.
    """

    def __init__(
        self,
        on_submit: Callable[[list[str]], None],
        *,
        on_close: Callable[[], None] | None = None,
        label: str = "Open: ",
        theme: ThemeInfo | None = None,
    ) -> None:
        super().__init__()
        self._on_submit = on_submit
        self._on_close = on_close
        self._label = label
        self._theme = theme or get_default_theme()
        self._buffer: str = ""

    @property
    def buffer(self) -> str:
        return self._buffer

    def clear(self) -> None:
        self._buffer = ""
        self.invalidate()

    def handle_input(self, key: Key) -> bool:
        if key.name == "enter":
            paths = split_paths(self._buffer)
            self.clear()
            self._close()
            if paths:
                self._on_submit(paths)
        elif key.name == "escape":
            self.clear()
            self._close()
        elif key.name == "backspace":
            self._buffer = self._buffer[:-1]
        elif key.name == "paste" or (key.char and not key.ctrl and not key.alt):
            self._buffer += key.char.replace("\n", " ").replace("\r", " ")
        else:
            return False
        self.invalidate()
        return True

    def _close(self) -> None:
        if self._on_close is not None:
            self._on_close()

    def render(self, width: int) -> list[str]:
        t = self._theme
        # Keep the end of a long buffer (where the user is typing) on screen.
        room = max(0, width - len(self._label) - 1)
        shown = self._buffer[-room:] if room else ""
        self._dirty = False
        return [
            fit_segments(
                [
                    (self._label, {"fg": t.get("primary"), "bold": True}),
                    (shown, {"fg": t.get("prompt_fg")}),
                    ("█", {"fg": t.get("prompt_fg")}),
                ],
                width,
            )
        ]
