"""Sidebar listing the decoded documents."""

from __future__ import annotations

from ydoc_inspector.session import SessionRegistry
from ydoc_inspector.tui.ansi import fit_segments
from ydoc_inspector.tui.component import Component
from ydoc_inspector.tui.theme import ThemeInfo, get_default_theme


class FileListView(Component):
    """
    Read-only view of a :class:`SessionRegistry`.

    Each document takes two rows: its name, then the time it was decoded.
    The selected document is highlighted.  Redraws whenever the registry
    changes.
    """

    TITLE = "Attached Files"
    EMPTY = "No files attached"

    def __init__(
        self,
        registry: SessionRegistry,
        *,
        theme: ThemeInfo | None = None,
    ) -> None:
        super().__init__()
        self._registry = registry
        self._theme = theme or get_default_theme()
        self._unsubscribe = registry.subscribe(lambda _: self.invalidate())

    def close(self) -> None:
        """Stop listening to the registry."""
        self._unsubscribe()

    def render(self, width: int) -> list[str]:
        t = self._theme
        rows = [
            fit_segments([(f" {self.TITLE}", {"fg": t.get("sidebar_title"), "bold": True})], width),
            fit_segments([("─" * width, {"fg": t.get("border")})], width),
        ]

        documents = self._registry.documents
        if not documents:
            rows.append(fit_segments([(f" {self.EMPTY}", {"fg": t.get("text_dim")})], width))

        selected = self._registry.selected_index
        for index, document in enumerate(documents):
            if index == selected:
                active = {"fg": t.get("sidebar_active_fg"), "bg": t.get("sidebar_active_bg")}
                fill = {"bg": t.get("sidebar_active_bg")}
                rows.append(fit_segments([(f"▸ {document.name}", {**active, "bold": True})], width, fill=fill))
                rows.append(fit_segments([(f"  {document.display_time}", active)], width, fill=fill))
            else:
                rows.append(fit_segments([(f"  {document.name}", {"fg": t.get("sidebar_item")})], width))
                rows.append(fit_segments([(f"  {document.display_time}", {"fg": t.get("sidebar_time")})], width))

        self._dirty = False
        return rows
