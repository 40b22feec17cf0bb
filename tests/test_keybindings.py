"""Tests for keybinding management."""

import json

from ydoc_inspector.tui.keybindings import DEFAULT_KEYBINDINGS, KeybindingsManager
from ydoc_inspector.tui.keys import KEY_ENTER, KEY_SPACE, Key


class TestKeybindingsManager:
    """Tests for KeybindingsManager."""

    def test_defaults_loaded(self) -> None:
        """All default actions should be present in a fresh manager."""
        manager = KeybindingsManager()
        actions = manager.actions()

        for action in DEFAULT_KEYBINDINGS:
            assert action in actions

    def test_matches_with_string_descriptor(self) -> None:
        manager = KeybindingsManager()

        assert manager.matches("ctrl+c", "quit") is True
        assert manager.matches("ctrl+d", "quit") is False

    def test_descriptor_case_and_order_ignored(self) -> None:
        manager = KeybindingsManager()
        assert manager.matches("Shift+Tab", "prev_file") is True

    def test_matches_with_key_object(self) -> None:
        manager = KeybindingsManager()
        key = Key(name="ctrl+o", char="o", ctrl=True)

        assert manager.matches(key, "open_file") is True

    def test_matches_shift_tab_with_key_object(self) -> None:
        manager = KeybindingsManager()
        key = Key(name="tab", char="\t", shift=True)

        assert manager.matches(key, "prev_file") is True
        assert manager.matches(key, "next_file") is False

    def test_find_action(self) -> None:
        manager = KeybindingsManager()

        assert manager.find_action(KEY_ENTER) == "toggle"
        assert manager.find_action(KEY_SPACE) == "toggle"
        assert manager.find_action(Key(name="*", char="*")) == "expand_all"
        assert manager.find_action(Key(name="z", char="z")) is None

    def test_unknown_action(self) -> None:
        assert KeybindingsManager().matches("q", "no_such_action") is False

    def test_user_overrides_replace_defaults(self) -> None:
        manager = KeybindingsManager(user_overrides={"quit": ["ctrl+q"]})

        assert manager.matches("ctrl+q", "quit") is True
        assert manager.matches("q", "quit") is False

    def test_user_overrides_preserve_other_defaults(self) -> None:
        manager = KeybindingsManager(user_overrides={"quit": ["ctrl+q"]})

        assert manager.matches("tab", "next_file") is True

    def test_get_keys_returns_descriptors(self) -> None:
        manager = KeybindingsManager()
        assert manager.get_keys("open_file") == ["o", "ctrl+o"]
        assert manager.get_keys("missing") == []


class TestKeybindingsLoad:
    """Tests for loading overrides from a JSON file."""

    def test_load_from_file(self, tmp_path) -> None:
        path = tmp_path / "keybindings.json"
        path.write_text(json.dumps({"quit": ["x"], "bogus": "not-a-list"}))

        manager = KeybindingsManager.load(path)

        assert manager.matches("x", "quit") is True
        assert "bogus" not in manager.actions()

    def test_missing_file_uses_defaults(self, tmp_path) -> None:
        manager = KeybindingsManager.load(tmp_path / "missing.json")
        assert manager.matches("q", "quit") is True

    def test_invalid_json_uses_defaults(self, tmp_path) -> None:
        path = tmp_path / "keybindings.json"
        path.write_text("{not json")

        manager = KeybindingsManager.load(path)

        assert manager.matches("q", "quit") is True
