"""Tests for raw key parsing."""

import pytest

from ydoc_inspector.tui.keys import (
    KEY_BACKSPACE,
    KEY_DOWN,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_SPACE,
    KEY_TAB,
    KEY_UP,
    PASTE_END,
    PASTE_START,
    Key,
    parse_key,
)


class TestParseKey:
    """Tests for parse_key."""

    @pytest.mark.parametrize(
        "data,expected",
        [
            (b"\r", KEY_ENTER),
            (b"\n", KEY_ENTER),
            (b"\t", KEY_TAB),
            (b"\x7f", KEY_BACKSPACE),
            (b"\x1b", KEY_ESCAPE),
            (b" ", KEY_SPACE),
            (b"\x1b[A", KEY_UP),
            (b"\x1bOB", KEY_DOWN),
        ],
    )
    def test_special_keys(self, data: bytes, expected: Key) -> None:
        assert parse_key(data) == expected

    def test_printable(self) -> None:
        assert parse_key(b"q") == Key(name="q", char="q")

    def test_utf8_character(self) -> None:
        assert parse_key("é".encode()) == Key(name="é", char="é")

    def test_ctrl_letter(self) -> None:
        key = parse_key(b"\x0f")
        assert key.name == "ctrl+o"
        assert key.ctrl is True

    def test_alt_character(self) -> None:
        key = parse_key(b"\x1bx")
        assert key.name == "alt+x"
        assert key.alt is True

    def test_shift_tab(self) -> None:
        key = parse_key(b"\x1b[Z")
        assert key.name == "tab"
        assert key.shift is True

    def test_tilde_sequences(self) -> None:
        assert parse_key(b"\x1b[5~").name == "page_up"
        assert parse_key(b"\x1b[6~").name == "page_down"
        assert parse_key(b"\x1b[3~").name == "delete"

    def test_modified_arrow(self) -> None:
        key = parse_key(b"\x1b[1;5C")
        assert key.name == "right"
        assert key.ctrl is True
        assert key.shift is False

    def test_bracketed_paste(self) -> None:
        key = parse_key(PASTE_START + b"/tmp/a.bin /tmp/b.bin" + PASTE_END)
        assert key.name == "paste"
        assert key.char == "/tmp/a.bin /tmp/b.bin"

    def test_unterminated_paste(self) -> None:
        key = parse_key(PASTE_START + b"/tmp/a.bin")
        assert key == Key(name="paste", char="/tmp/a.bin")

    def test_plain_multi_char_read_is_paste(self) -> None:
        assert parse_key(b"/tmp/a.bin") == Key(name="paste", char="/tmp/a.bin")

    def test_empty_and_invalid(self) -> None:
        assert parse_key(b"").name == "unknown"
        assert parse_key(b"\xff").name == "unknown"
        assert parse_key(b"\x1b[9~").name == "unknown"
