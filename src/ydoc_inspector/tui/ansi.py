"""
ANSI escape sequence utilities.

Colour and styling helpers, cursor/screen control, and width-aware
helpers that measure text in terminal cells rather than code points.
"""

from __future__ import annotations

import re

from rich.cells import cell_len, set_cell_size

# ---------------------------------------------------------------------------
# Escape sequences
# ---------------------------------------------------------------------------

ESC = "\033"
CSI = f"{ESC}["
OSC = f"{ESC}]"
RESET = f"{CSI}0m"

_ANSI_RE = re.compile(r"\033\[[0-9;?]*[A-Za-z]")


# ---------------------------------------------------------------------------
# True-color (24-bit) helpers
# ---------------------------------------------------------------------------

def rgb_fg(r: int, g: int, b: int) -> str:
    """Return an escape sequence for a 24-bit foreground color."""
    return f"{CSI}38;2;{r};{g};{b}m"


def rgb_bg(r: int, g: int, b: int) -> str:
    """Return an escape sequence for a 24-bit background color."""
    return f"{CSI}48;2;{r};{g};{b}m"


def _hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Convert a hex color string (with or without '#') to an (r, g, b) tuple."""
    h = hex_color.lstrip("#")
    if len(h) == 3:
        h = h[0] * 2 + h[1] * 2 + h[2] * 2
    if len(h) != 6:
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def hex_fg(hex_color: str) -> str:
    r, g, b = _hex_to_rgb(hex_color)
    return rgb_fg(r, g, b)


def hex_bg(hex_color: str) -> str:
    r, g, b = _hex_to_rgb(hex_color)
    return rgb_bg(r, g, b)


# ---------------------------------------------------------------------------
# Text styling
# ---------------------------------------------------------------------------

def style(
    text: str,
    *,
    fg: str | None = None,
    bg: str | None = None,
    bold: bool = False,
    dim: bool = False,
    reverse: bool = False,
) -> str:
    """
    Wrap *text* in ANSI styling with a trailing ``RESET``.

    *fg* and *bg* are hex colours (``'#ff8800'``) or ready-made escape
    sequences.
    """
    parts: list[str] = []
    if fg is not None:
        parts.append(fg if fg.startswith(ESC) else hex_fg(fg))
    if bg is not None:
        parts.append(bg if bg.startswith(ESC) else hex_bg(bg))
    if bold:
        parts.append(f"{CSI}1m")
    if dim:
        parts.append(f"{CSI}2m")
    if reverse:
        parts.append(f"{CSI}7m")

    if not parts or not text:
        return text
    return f"{''.join(parts)}{text}{RESET}"


# ---------------------------------------------------------------------------
# Width helpers
# ---------------------------------------------------------------------------

def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences."""
    return _ANSI_RE.sub("", text)


def visible_width(text: str) -> int:
    """Width of *text* in terminal cells, ignoring escape sequences."""
    return cell_len(strip_ansi(text))


def fit(text: str, width: int) -> str:
    """Truncate or pad plain *text* to exactly *width* cells."""
    if width <= 0:
        return ""
    return set_cell_size(text, width)


def fit_segments(
    segments: list[tuple[str, dict[str, object]]],
    width: int,
    *,
    fill: dict[str, object] | None = None,
) -> str:
    """
    Style and join ``(text, style_kwargs)`` segments into one row of
    exactly *width* cells.

    Text past *width* is cut off; a short row is padded with spaces
    styled by *fill*.
    """
    out: list[str] = []
    remaining = width
    for text, kwargs in segments:
        if remaining <= 0:
            break
        size = cell_len(text)
        if size > remaining:
            text = set_cell_size(text, remaining)
            size = remaining
        out.append(style(text, **kwargs))  # type: ignore[arg-type]
        remaining -= size
    if remaining > 0:
        out.append(style(" " * remaining, **(fill or {})))  # type: ignore[arg-type]
    return "".join(out)


# ---------------------------------------------------------------------------
# Cursor and screen control
# ---------------------------------------------------------------------------

def cursor_position(row: int, col: int) -> str:
    """Move cursor to absolute *row*, *col* (1-based)."""
    return f"{CSI}{row};{col}H"


def clear_line() -> str:
    """Erase the entire current line."""
    return f"{CSI}2K"


def clear_screen() -> str:
    """Clear the entire screen and move cursor to top-left."""
    return f"{CSI}2J{CSI}H"


def hide_cursor() -> str:
    return f"{CSI}?25l"


def show_cursor() -> str:
    return f"{CSI}?25h"


def enter_alt_screen() -> str:
    """Switch to the alternate screen buffer."""
    return f"{CSI}?1049h"


def exit_alt_screen() -> str:
    """Return to the main screen buffer."""
    return f"{CSI}?1049l"


def enable_bracketed_paste() -> str:
    """Ask the terminal to wrap pasted (or dropped) text in markers."""
    return f"{CSI}?2004h"


def disable_bracketed_paste() -> str:
    return f"{CSI}?2004l"


def set_title(title: str) -> str:
    """Set the terminal window title via OSC 2."""
    return f"{OSC}2;{title}{ESC}\\"
