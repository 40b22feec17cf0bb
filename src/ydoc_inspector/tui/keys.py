"""
Key parsing for terminal input.

Translates raw bytes read from stdin into ``Key`` objects.  Besides single
key presses this recognises bracketed-paste blocks, which is how most
terminals deliver a file dragged onto the window: as its pasted path.
"""

from __future__ import annotations

from dataclasses import dataclass

PASTE_START = b"\x1b[200~"
PASTE_END = b"\x1b[201~"


@dataclass(frozen=True)
class Key:
    """
    Parsed representation of a single key press.

    Attributes
    ----------
    name:
        Symbolic name for special keys (``'enter'``, ``'up'``, ``'paste'``).
        For plain printable characters this equals *char*.
    char:
        The literal character, if printable.  For ``'paste'`` the whole
        pasted text.
    ctrl, alt, shift:
        Modifier flags.
    """

    name: str
    char: str = ""
    ctrl: bool = False
    alt: bool = False
    shift: bool = False


KEY_ENTER = Key(name="enter", char="\r")
KEY_TAB = Key(name="tab", char="\t")
KEY_ESCAPE = Key(name="escape")
KEY_BACKSPACE = Key(name="backspace")
KEY_DELETE = Key(name="delete")
KEY_SPACE = Key(name="space", char=" ")

KEY_UP = Key(name="up")
KEY_DOWN = Key(name="down")
KEY_LEFT = Key(name="left")
KEY_RIGHT = Key(name="right")
KEY_HOME = Key(name="home")
KEY_END = Key(name="end")
KEY_PAGE_UP = Key(name="page_up")
KEY_PAGE_DOWN = Key(name="page_down")

_CSI_FINAL: dict[str, Key] = {
    "A": KEY_UP,
    "B": KEY_DOWN,
    "C": KEY_RIGHT,
    "D": KEY_LEFT,
    "H": KEY_HOME,
    "F": KEY_END,
    "Z": Key(name="tab", char="\t", shift=True),
}

# CSI <number> ~
_CSI_TILDE: dict[int, Key] = {
    1: KEY_HOME,
    3: KEY_DELETE,
    4: KEY_END,
    5: KEY_PAGE_UP,
    6: KEY_PAGE_DOWN,
    7: KEY_HOME,
    8: KEY_END,
}


def parse_key(data: bytes) -> Key:
    """
    Parse raw terminal input bytes into a ``Key``.

    Handles printable UTF-8 characters, Ctrl+letter, Alt+character, CSI
    and SS3 navigation sequences, and bracketed paste.
    """
    if not data:
        return Key(name="unknown")

    if data.startswith(PASTE_START):
        body = data[len(PASTE_START):]
        if body.endswith(PASTE_END):
            body = body[: -len(PASTE_END)]
        return Key(name="paste", char=body.decode("utf-8", errors="replace"))

    if data[0:1] == b"\x1b":
        if len(data) == 1:
            return KEY_ESCAPE
        if data[1:2] in (b"[", b"O"):
            return _parse_csi(data[2:].decode("ascii", errors="replace"))
        if len(data) == 2:
            ch = chr(data[1])
            if ch.isprintable():
                return Key(name=f"alt+{ch}", char=ch, alt=True)
        return Key(name="unknown")

    byte = data[0]
    if byte in (0x0D, 0x0A):
        return KEY_ENTER
    if byte == 0x09:
        return KEY_TAB
    if byte in (0x7F, 0x08):
        return KEY_BACKSPACE
    if 1 <= byte <= 26:
        letter = chr(byte + 96)  # 1 -> 'a'
        return Key(name=f"ctrl+{letter}", char=letter, ctrl=True)

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return Key(name="unknown")

    if len(text) == 1 and text.isprintable():
        if text == " ":
            return KEY_SPACE
        return Key(name=text, char=text)

    # Several characters in one read without paste markers: treat as paste.
    if len(text) > 1 and text.isprintable():
        return Key(name="paste", char=text)

    return Key(name="unknown")


def _parse_csi(payload: str) -> Key:
    """Parse the text after ``ESC [`` (or ``ESC O``)."""
    if not payload:
        return Key(name="unknown")

    if payload.endswith("~"):
        head = payload[:-1].split(";")[0]
        if head.isdigit():
            return _CSI_TILDE.get(int(head), Key(name="unknown"))
        return Key(name="unknown")

    final = payload[-1]
    base = _CSI_FINAL.get(final)
    if base is None:
        return Key(name="unknown")

    # xterm modifiers: "1;5C" is Ctrl+Right
    params = payload[:-1].split(";")
    if len(params) == 2 and params[1].isdigit():
        mod = int(params[1]) - 1
        return Key(
            name=base.name,
            char=base.char,
            shift=bool(mod & 1),
            alt=bool(mod & 2),
            ctrl=bool(mod & 4),
        )
    return base
