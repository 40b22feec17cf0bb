"""Tests for the interactive viewer, driven without a terminal."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from ydoc_inspector.app import InspectorApp
from ydoc_inspector.config import InspectorConfig
from ydoc_inspector.tui.ansi import strip_ansi
from ydoc_inspector.tui.keys import KEY_ENTER, KEY_TAB, Key

SHIFT_TAB = Key(name="tab", char="\t", shift=True)


def screen(app: InspectorApp, width: int = 70, height: int = 14) -> str:
    return "\n".join(strip_ansi(row).rstrip() for row in app.compose(width, height))


def press(app: InspectorApp, *chars: str) -> None:
    for ch in chars:
        app.handle_key(Key(name=ch, char=ch))


@pytest.fixture
def app(config: InspectorConfig) -> InspectorApp:
    return InspectorApp(config)


class TestEmptyState:
    """The viewer before any file is opened."""

    def test_welcome_message(self, app: InspectorApp) -> None:
        text = screen(app)

        assert "Y.Doc Decoder" in text
        assert "No files attached" in text
        assert "Attached Files" in text

    def test_frame_has_requested_height(self, app: InspectorApp) -> None:
        assert len(app.compose(70, 14)) == 14

    def test_tree_keys_are_harmless(self, app: InspectorApp) -> None:
        app.handle_key(KEY_ENTER)
        app.handle_key(KEY_TAB)
        assert app.registry.selected_index is None


class TestOpeningFiles:
    """Opening files through the API, drops and the prompt."""

    def test_batch_with_failure(self, app: InspectorApp, update_files: list[Path]) -> None:
        report = app.open_paths(update_files)

        assert [d.name for d in app.registry.documents] == ["first.bin", "third.bin"]
        assert len(report.failed) == 1
        assert app.overlays.is_active
        assert "Failed to decode file second.bin." in screen(app)

    def test_notice_dismissed_by_any_key(
        self, app: InspectorApp, update_files: list[Path]
    ) -> None:
        app.open_paths(update_files)

        app.handle_key(KEY_TAB)

        assert not app.overlays.is_active
        # The key only closed the notice.
        assert app.registry.selected_index == 0

    def test_no_notice_when_all_succeed(
        self, app: InspectorApp, update_files: list[Path]
    ) -> None:
        app.open_paths([update_files[0]])
        assert not app.overlays.is_active

    def test_first_file_shown(self, app: InspectorApp, update_files: list[Path]) -> None:
        app.open_paths([update_files[0], update_files[2]])

        assert app.tree.model is not None
        assert app.tree.model.value == {"title": "Board", "items": [1, 2], "meta": {"ok": True}}
        text = screen(app)
        assert "▸ first.bin" in text
        assert '"title": "Board"' in text

    def test_drop_opens_files(self, app: InspectorApp, update_files: list[Path]) -> None:
        app.handle_key(Key(name="paste", char=f"'{update_files[0]}'"))
        assert [d.name for d in app.registry.documents] == ["first.bin"]

    def test_open_prompt(self, app: InspectorApp, update_files: list[Path]) -> None:
        press(app, "o")
        assert app.prompt_active
        assert "Open:" in screen(app)

        app.handle_key(Key(name="paste", char=str(update_files[2])))
        app.handle_key(KEY_ENTER)

        assert not app.prompt_active
        assert [d.name for d in app.registry.documents] == ["third.bin"]

    def test_prompt_captures_bound_keys(self, app: InspectorApp) -> None:
        app.open_prompt()
        press(app, "q")
        assert app.prompt.buffer == "q"
        assert app.prompt_active


class TestNavigation:
    """Switching documents and per-document expansion state."""

    @pytest.fixture
    def loaded(self, app: InspectorApp, update_files: list[Path]) -> InspectorApp:
        app.open_paths([update_files[0], update_files[2]])
        return app

    def test_tab_switches_document(self, loaded: InspectorApp) -> None:
        loaded.handle_key(KEY_TAB)

        assert loaded.registry.selected_index == 1
        assert loaded.tree.model.value == {"shape-1": {"x": 10, "label": "box"}}
        assert "▸ third.bin" in screen(loaded)

    def test_shift_tab_wraps(self, loaded: InspectorApp) -> None:
        loaded.handle_key(SHIFT_TAB)
        assert loaded.registry.selected_index == 1

    def test_expansion_state_is_per_document(self, loaded: InspectorApp) -> None:
        loaded.handle_key(KEY_ENTER)
        assert len(loaded.tree.lines) == 1

        loaded.handle_key(KEY_TAB)
        assert len(loaded.tree.lines) > 1
        assert loaded.state_for(1).is_expanded(()) is True

        loaded.handle_key(SHIFT_TAB)
        assert len(loaded.tree.lines) == 1
        assert loaded.state_for(0).is_expanded(()) is False

    def test_cursor_restored_when_switching_back(self, loaded: InspectorApp) -> None:
        press(loaded, "j", "j")
        path = loaded.tree.cursor_path
        assert path != ()

        loaded.handle_key(KEY_TAB)
        assert loaded.tree.cursor_path == ()
        loaded.handle_key(KEY_TAB)
        assert loaded.tree.cursor_path == path

    def test_status_line_shows_location(self, loaded: InspectorApp) -> None:
        last_row = screen(loaded).splitlines()[-1]
        assert "first.bin" in last_row
        assert "$" in last_row

    def test_quit(self, loaded: InspectorApp) -> None:
        press(loaded, "q")
        assert loaded.running is False


class TestConfiguration:
    """Config settings reach the widgets."""

    def test_custom_keybindings(self, update_files: list[Path]) -> None:
        app = InspectorApp(InspectorConfig(keybindings={"next_file": ["n"]}))
        app.open_paths([update_files[0], update_files[2]])

        app.handle_key(KEY_TAB)
        assert app.registry.selected_index == 0
        press(app, "n")
        assert app.registry.selected_index == 1

    def test_collapsed_by_default(self, update_files: list[Path]) -> None:
        app = InspectorApp(InspectorConfig(default_expanded=False, elision_marker="…"))
        app.open_paths([update_files[0]])

        assert [line.text for line in app.tree.lines] == ["{…}"]

    def test_theme_file(self, tmp_path: Path) -> None:
        theme_path = tmp_path / "mine.json"
        theme_path.write_text(json.dumps({"name": "mine", "colors": {"error": "#123456"}}))

        app = InspectorApp(InspectorConfig(theme=theme_path))

        assert app.theme.name == "mine"
        assert app.theme["error"] == "#123456"
