"""
SessionRegistry - the ordered list of decoded documents.

Documents are appended in arrival order and never reordered, deduplicated
or removed.  A single selection pointer tracks which document the viewer
shows.  The first arrival selects index 0 when nothing is selected; later
arrivals never move an existing selection.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from ydoc_inspector.logging import get_logger
from ydoc_inspector.values import JSONValue

logger = get_logger("session")


@dataclass(frozen=True)
class DecodedDocument:
    """One successfully decoded file."""

    name: str
    value: JSONValue
    decoded_at: datetime = field(default_factory=datetime.now)

    @property
    def display_time(self) -> str:
        """Local wall-clock time of decoding, e.g. ``"14:03:27"``."""
        return self.decoded_at.strftime("%H:%M:%S")


class _NothingSelected:
    """Returned by :meth:`SessionRegistry.current_value` with no selection."""

    _instance: _NothingSelected | None = None

    def __new__(cls) -> _NothingSelected:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOTHING_SELECTED"

    def __bool__(self) -> bool:
        return False


NOTHING_SELECTED = _NothingSelected()

Listener = Callable[["SessionRegistry"], None]


class SessionRegistry:
    """
    Holds decoded documents for the current run.

    Nothing is persisted; the registry lives as long as the process.
    Listeners registered with :meth:`subscribe` are called after every
    append or selection change.
    """

    def __init__(self) -> None:
        self._documents: list[DecodedDocument] = []
        self._selected: int | None = None
        self._listeners: list[Listener] = []

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def documents(self) -> list[DecodedDocument]:
        """Shallow copy of the documents in arrival order."""
        return list(self._documents)

    @property
    def selected_index(self) -> int | None:
        """Index of the selected document, or ``None``."""
        return self._selected

    def __len__(self) -> int:
        return len(self._documents)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_document(self, name: str, value: JSONValue) -> DecodedDocument:
        """
        Append a decoded document.

        Selects index 0 only if nothing was selected before.
        """
        document = DecodedDocument(name=name, value=value)
        self._documents.append(document)
        if self._selected is None:
            self._selected = 0
        logger.debug(
            "Added %s as #%d (selected=%s)",
            name, len(self._documents) - 1, self._selected,
        )
        self._notify()
        return document

    def select(self, index: int) -> None:
        """
        Select the document at *index*.

        Raises:
            IndexError: if *index* does not reference an existing document.
        """
        if not 0 <= index < len(self._documents):
            raise IndexError(
                f"No document at index {index} ({len(self._documents)} loaded)"
            )
        if index != self._selected:
            self._selected = index
            self._notify()

    def select_next(self) -> None:
        """Move the selection down one entry, wrapping to the top."""
        if not self._documents:
            return
        current = -1 if self._selected is None else self._selected
        self.select((current + 1) % len(self._documents))

    def select_prev(self) -> None:
        """Move the selection up one entry, wrapping to the bottom."""
        if not self._documents:
            return
        current = 0 if self._selected is None else self._selected
        self.select((current - 1) % len(self._documents))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def current_document(self) -> DecodedDocument | None:
        """The selected document, or ``None`` when nothing is selected."""
        if self._selected is None or not self._documents:
            return None
        return self._documents[self._selected]

    def current_value(self) -> JSONValue | _NothingSelected:
        """
        The selected document's value.

        Returns :data:`NOTHING_SELECTED` (not ``None``, which is JSON null)
        when the registry is empty or nothing is selected.
        """
        document = self.current_document()
        if document is None:
            return NOTHING_SELECTED
        return document.value

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
