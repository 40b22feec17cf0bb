"""
Terminal session handling.

:func:`raw_terminal` is the one place the viewer takes over the terminal:
raw input, alternate screen, hidden cursor, bracketed paste.  Everything
is restored when the ``with`` block exits, including on errors.
"""

from __future__ import annotations

import os
import select
import shutil
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

from ydoc_inspector.tui.ansi import (
    disable_bracketed_paste,
    enable_bracketed_paste,
    enter_alt_screen,
    exit_alt_screen,
    hide_cursor,
    set_title,
    show_cursor,
)

# Enough for one escape sequence or a pasted path list.
_READ_SIZE = 65536


def terminal_size(fallback: tuple[int, int] = (80, 24)) -> tuple[int, int]:
    """``(columns, rows)`` of the controlling terminal."""
    size = shutil.get_terminal_size(fallback)
    return size.columns, size.lines


@contextmanager
def raw_terminal(
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    *,
    title: str | None = None,
) -> Iterator[int]:
    """
    Put the terminal into raw mode for the duration of the block.

    Yields the input file descriptor.

    Raises:
        RuntimeError: if stdin is not a TTY or the platform lacks termios.
    """
    try:
        import termios
        import tty
    except ImportError as e:
        raise RuntimeError("The interactive viewer needs a POSIX terminal") from e

    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    if not stdin.isatty():
        raise RuntimeError("The interactive viewer needs a terminal on stdin")

    fd = stdin.fileno()
    saved = termios.tcgetattr(fd)
    tty.setraw(fd)
    prologue = enter_alt_screen() + hide_cursor() + enable_bracketed_paste()
    if title:
        prologue += set_title(title)
    stdout.write(prologue)
    stdout.flush()
    try:
        yield fd
    finally:
        stdout.write(disable_bracketed_paste() + show_cursor() + exit_alt_screen())
        stdout.flush()
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def read_key_bytes(fd: int, timeout: float | None = None) -> bytes:
    """
    Read whatever the terminal has for us, waiting up to *timeout*
    seconds (forever when ``None``).  Returns ``b""`` on timeout.

    A bracketed paste can arrive over several reads; they are joined
    until the closing marker shows up.
    """
    ready, _, _ = select.select([fd], [], [], timeout)
    if not ready:
        return b""
    data = os.read(fd, _READ_SIZE)
    if data.startswith(b"\x1b[200~"):
        while not data.endswith(b"\x1b[201~"):
            more, _, _ = select.select([fd], [], [], 0.5)
            if not more:
                break
            data += os.read(fd, _READ_SIZE)
    return data
