"""
Interactive viewer.

``InspectorApp`` ties the session registry to the terminal widgets: the
file sidebar on the left, the JSON tree on the right, a status row at the
bottom, plus the open-file prompt and failure notices on top.

The app is driven one key at a time through :meth:`InspectorApp.handle_key`
and drawn with :meth:`InspectorApp.compose`, so everything except the
terminal loop in :meth:`InspectorApp.run` can be exercised without a TTY.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from ydoc_inspector.config import InspectorConfig
from ydoc_inspector.logging import get_logger
from ydoc_inspector.session import IngestReport, SessionRegistry, ingest_files
from ydoc_inspector.tree import ExpansionState, TreeModel, TreePath, format_path
from ydoc_inspector.tui import (
    Columns,
    FileListView,
    JSONTreeView,
    Key,
    KeybindingsManager,
    NoticeBox,
    OverlayManager,
    PathPrompt,
    TUIRenderer,
    parse_key,
    split_paths,
)
from ydoc_inspector.tui.ansi import fit_segments
from ydoc_inspector.tui.terminal import raw_terminal, read_key_bytes, terminal_size
from ydoc_inspector.tui.theme import ThemeInfo, get_default_theme, load_theme

logger = get_logger("app")

EMPTY_MESSAGE = [
    "",
    "  Y.Doc Decoder",
    "",
    "  Drag & drop files onto the terminal or press o to open",
]

_HINT = "o open · tab next file · q quit"


class InspectorApp:
    """
    The two-pane document viewer.

    Each document keeps its own expansion state and cursor, so switching
    files and coming back shows the tree the way it was left.
    """

    def __init__(
        self,
        config: InspectorConfig | None = None,
        registry: SessionRegistry | None = None,
        *,
        theme: ThemeInfo | None = None,
        keybindings: KeybindingsManager | None = None,
    ) -> None:
        self.config = config or InspectorConfig()
        self.registry = registry or SessionRegistry()
        self.theme = theme or self._load_theme(self.config.theme)
        self.keybindings = keybindings or KeybindingsManager(self.config.keybindings)

        self._states: dict[int, ExpansionState] = {}
        self._cursors: dict[int, TreePath] = {}
        self._shown: int | None = None
        self._running = False

        self.tree = JSONTreeView(
            theme=self.theme,
            keybindings=self.keybindings,
            indent_width=self.config.indent_width,
            expanded_glyph=self.config.expanded_glyph,
            collapsed_glyph=self.config.collapsed_glyph,
            empty_message=EMPTY_MESSAGE,
        )
        self.files = FileListView(self.registry, theme=self.theme)
        self.layout = Columns(
            self.files,
            self.tree,
            left_width=self.config.sidebar_width,
            separator_color=self.theme.get("border"),
        )
        self.layout.focused_index = 1

        self.prompt = PathPrompt(self.open_paths, on_close=self._close_prompt, theme=self.theme)
        self.prompt_active = False
        self.overlays = OverlayManager()

        self._unsubscribe = self.registry.subscribe(lambda _: self._sync_tree())
        self._sync_tree()

    @staticmethod
    def _load_theme(path: Path | None) -> ThemeInfo:
        if path is None:
            return get_default_theme()
        return load_theme(path)

    @property
    def running(self) -> bool:
        return self._running

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def state_for(self, index: int) -> ExpansionState:
        """Expansion state of the document at *index*, created on first use."""
        if index not in self._states:
            self._states[index] = ExpansionState(default=self.config.default_expanded)
        return self._states[index]

    def _sync_tree(self) -> None:
        """Point the tree pane at the selected document."""
        index = self.registry.selected_index
        if index == self._shown:
            return
        if self._shown is not None:
            self._cursors[self._shown] = self.tree.cursor_path

        document = self.registry.current_document()
        if index is None or document is None:
            self.tree.set_model(None)
        else:
            model = TreeModel(
                document.value,
                self.state_for(index),
                elision_marker=self.config.elision_marker,
            )
            self.tree.set_model(model, cursor_path=self._cursors.get(index, ()))
        self._shown = index

    def open_paths(self, paths: Iterable[str | Path]) -> IngestReport:
        """Decode *paths* into the session and report any failures."""
        paths = list(paths)
        logger.info("Opening %d file(s)", len(paths))
        report = ingest_files(self.registry, paths, config=self.config)
        if report.failed:
            self.notify(report.notices)
        return report

    def notify(self, messages: list[str], title: str = "Could not open") -> NoticeBox:
        """Show *messages* in a box that closes on the next key."""
        box = NoticeBox(
            title,
            messages,
            color=self.theme.get("error"),
            on_dismiss=self.overlays.remove,
        )
        self.overlays.push(box)
        return box

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def open_prompt(self) -> None:
        self.prompt_active = True
        self.prompt.clear()

    def _close_prompt(self) -> None:
        self.prompt_active = False

    def stop(self) -> None:
        self._running = False

    def handle_key(self, key: Key) -> None:
        """Route one key press: notices first, then the prompt, then the panes."""
        if self.overlays.is_active:
            self.overlays.handle_input(key)
            return
        if self.prompt_active:
            self.prompt.handle_input(key)
            return
        # A drop onto the terminal arrives as a bracketed paste of paths.
        if key.name == "paste":
            paths = split_paths(key.char)
            if paths:
                self.open_paths(paths)
            return

        action = self.keybindings.find_action(key)
        if action == "quit":
            self.stop()
        elif action == "open_file":
            self.open_prompt()
        elif action == "next_file":
            self.registry.select_next()
        elif action == "prev_file":
            self.registry.select_prev()
        else:
            self.layout.handle_input(key)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _status_line(self, width: int) -> str:
        if self.prompt_active:
            return self.prompt.render(width)[0]
        t = self.theme
        bar = {"fg": t.get("status_bar_fg"), "bg": t.get("status_bar_bg")}
        document = self.registry.current_document()
        if document is None:
            location = ""
        else:
            location = f" {document.name}  {format_path(self.tree.cursor_path)}"
        return fit_segments(
            [(location, {**bar, "bold": True}), (f"  {_HINT} ", bar)],
            width,
            fill=bar,
        )

    def compose(self, width: int, height: int) -> list[str]:
        """The full screen as *height* rows of at most *width* cells."""
        body_height = max(1, height - 1)
        self.layout.height = body_height
        self.tree.height = body_height
        frame = self.layout.render(width)
        frame.append(self._status_line(width))
        return self.overlays.compose(frame, width, height)

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def run(self, paths: Iterable[str | Path] = ()) -> None:
        """
        Take over the terminal until the user quits.

        Raises:
            RuntimeError: if stdin is not an interactive terminal.
        """
        paths = list(paths)
        if paths:
            self.open_paths(paths)

        renderer = TUIRenderer()
        with raw_terminal(title="ydoc-inspector") as fd:
            self._running = True
            logger.debug("Viewer started")
            try:
                while self._running:
                    width, height = terminal_size()
                    renderer.render_lines(self.compose(width, height), width, height)
                    data = read_key_bytes(fd, timeout=0.25)
                    if data:
                        self.handle_key(parse_key(data))
            finally:
                self._running = False
                self.files.close()
                self._unsubscribe()
                logger.debug("Viewer stopped")
