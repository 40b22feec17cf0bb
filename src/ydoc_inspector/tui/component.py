"""
Base class for everything drawn on screen.

The tree pane, the file list, the path prompt and notice boxes are all
``Component`` subclasses composed by :class:`~ydoc_inspector.app.InspectorApp`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ydoc_inspector.tui.keys import Key


class Component(ABC):
    """
    A rectangular widget.

    ``render`` returns the rows to draw, each at most *width* visible
    columns.  Changing ``visible`` or ``focused`` marks the component dirty
    so the renderer knows to redraw it.
    """

    def __init__(self) -> None:
        self._dirty = True
        self._visible = True
        self._focused = False

    @abstractmethod
    def render(self, width: int) -> list[str]:
        """
        Draw the component.

        Parameters
        ----------
        width:
            Columns available.  Escape sequences take no columns, so a
            styled row may be longer than *width* characters.

        Returns
        -------
        list[str]
            The rows to draw, top first.  Containers decide how many rows
            a child may use, not the child.
        """
        ...

    def handle_input(self, key: Key) -> bool:
        """
        React to a key press.

        Parameters
        ----------
        key:
            The key as decoded by :func:`~ydoc_inspector.tui.keys.parse_key`.

        Returns
        -------
        bool
            ``True`` when the key was used here.  A container then stops
            offering it to the remaining children.
        """
        return False

    def invalidate(self) -> None:
        """Request a redraw on the next frame."""
        self._dirty = True

    @property
    def dirty(self) -> bool:
        """Whether the last rendered rows are stale."""
        return self._dirty

    @dirty.setter
    def dirty(self, value: bool) -> None:
        self._dirty = value

    @property
    def visible(self) -> bool:
        """Hidden components are skipped by containers and the renderer."""
        return self._visible

    @visible.setter
    def visible(self, value: bool) -> None:
        self._dirty |= self._visible != value
        self._visible = value

    @property
    def focused(self) -> bool:
        """Whether keys reach this component before its siblings."""
        return self._focused

    @focused.setter
    def focused(self, value: bool) -> None:
        self._dirty |= self._focused != value
        self._focused = value
