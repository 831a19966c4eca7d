"""Single-keystroke input and a line prompt built on it."""

from __future__ import annotations

import os
import sys
import termios
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from glyphterm.cursor import Cursor
from glyphterm.errors import ResourceError
from glyphterm.strbuf import format_string

BACKSPACE = b"\x7f"
ENTER = (b"\n", b"\r")

# Indexes into the list returned by termios.tcgetattr.
_LFLAG = 3
_CC = 6


@contextmanager
def raw_mode(fd: int) -> Iterator[int]:
    """Disable line buffering and echo on fd for the duration of the block.

    The previous terminal mode is restored on every exit path.
    """
    saved = termios.tcgetattr(fd)
    raw = termios.tcgetattr(fd)
    raw[_LFLAG] &= ~(termios.ICANON | termios.ECHO)
    raw[_CC][termios.VMIN] = 1
    raw[_CC][termios.VTIME] = 0
    termios.tcsetattr(fd, termios.TCSANOW, raw)
    try:
        yield fd
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def read_key(fd: int | None = None) -> bytes:
    """Block until one byte of input is available and return it.

    Raises:
        ResourceError: If the terminal mode cannot be changed, the read fails,
            or input has ended.
    """
    if fd is None:
        fd = sys.stdin.fileno()

    try:
        with raw_mode(fd):
            data = os.read(fd, 1)
    except termios.error as e:
        raise ResourceError("read_key", str(e)) from e
    except OSError as e:
        raise ResourceError("read_key", e) from e

    if not data:
        raise ResourceError("read_key", "end of input")
    return data


def prompt_line(
    cursor: Cursor,
    prompt: str,
    read: Callable[[], bytes] = read_key,
) -> str:
    """Read a line from the user, redrawing the prompt after every key.

    Backspace removes the last character; Enter finishes the line.
    """
    buffer = format_string("")
    with buffer:
        while True:
            line = format_string("%s%s", prompt, str(buffer))
            with line:
                cursor.rewrite_line(str(line))

            key = read()
            if key in ENTER:
                break
            if key == BACKSPACE:
                if len(buffer):
                    buffer.delete_last_char()
                continue
            buffer.append(key)

        cursor.write("\n")
        return str(buffer)
