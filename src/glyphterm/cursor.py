"""Terminal cursor session.

Positions are 1-based (column, row) everywhere in glyphterm, including the
extent query. Colour and text-mode state lives on the Cursor instance and is
applied to every cell it writes until reset.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum, IntEnum
from typing import NamedTuple

from rich.cells import cell_len
from rich.color import Color
from rich.console import Console
from rich.control import Control, ControlType
from rich.style import Style

from glyphterm.errors import TerminalError


class Direction(Enum):
    """Relative cursor movement directions."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class TermColor(IntEnum):
    """The eight standard terminal colour indices."""

    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7


class TextMode(Enum):
    """Text attributes. NORMAL clears colours and every other mode."""

    NORMAL = "normal"
    BOLD = "bold"
    BLINK = "blink"
    REVERSE = "reverse"
    UNDERLINE = "underline"


class Position(NamedTuple):
    """A 1-based (column, row) terminal cell."""

    column: int
    row: int

    def offset(self, columns: int = 0, rows: int = 0) -> Position:
        return Position(self.column + columns, self.row + rows)


class ScreenExtent(NamedTuple):
    """Terminal size in cells, as (columns, rows)."""

    columns: int
    rows: int


class Cursor:
    """Issues cursor moves, clears and styled output to a Rich console.

    Every operation is written immediately, in issue order, unless grouped
    with batch().
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        self.position = Position(1, 1)
        self.foreground: TermColor | None = None
        self.background: TermColor | None = None
        self.modes: set[TextMode] = set()

    # -- style state ---------------------------------------------------------

    def set_foreground(self, color: TermColor) -> None:
        self.foreground = TermColor(color)

    def set_background(self, color: TermColor) -> None:
        self.background = TermColor(color)

    def set_text_mode(self, mode: TextMode) -> None:
        if mode is TextMode.NORMAL:
            self.reset()
        else:
            self.modes.add(mode)

    def reset(self) -> None:
        """Return colours and text modes to the terminal defaults."""
        self.foreground = None
        self.background = None
        self.modes.clear()

    @property
    def style(self) -> Style:
        """The Rich style equivalent of the current attribute state."""
        return Style(
            color=Color.from_ansi(int(self.foreground)) if self.foreground is not None else None,
            bgcolor=Color.from_ansi(int(self.background)) if self.background is not None else None,
            bold=TextMode.BOLD in self.modes or None,
            blink=TextMode.BLINK in self.modes or None,
            reverse=TextMode.REVERSE in self.modes or None,
            underline=TextMode.UNDERLINE in self.modes or None,
        )

    # -- movement ------------------------------------------------------------

    def move_to(self, column: int, row: int) -> None:
        """Place the cursor at an absolute 1-based (column, row)."""
        if column < 1 or row < 1:
            raise ValueError(f"positions are 1-based, got ({column}, {row})")
        self.console.control(Control.move_to(column - 1, row - 1))
        self.position = Position(column, row)

    def move(self, distance: int, direction: Direction) -> None:
        """Move the cursor distance cells in a direction."""
        if distance < 0:
            raise ValueError(f"distance must be non-negative, got {distance}")
        if distance == 0:
            return

        column, row = self.position
        if direction is Direction.UP:
            self.console.control(Control.move(y=-distance))
            row = max(1, row - distance)
        elif direction is Direction.DOWN:
            self.console.control(Control.move(y=distance))
            row += distance
        elif direction is Direction.LEFT:
            self.console.control(Control.move(x=-distance))
            column = max(1, column - distance)
        else:
            self.console.control(Control.move(x=distance))
            column += distance
        self.position = Position(column, row)

    def move_to_column(self, column: int) -> None:
        """Move to a 1-based column on the current row."""
        if column < 1:
            raise ValueError(f"columns are 1-based, got {column}")
        self.console.control(Control.move_to_column(column - 1))
        self.position = Position(column, self.position.row)

    # -- clearing ------------------------------------------------------------

    def clear_screen(self) -> None:
        """Clear the viewport and home the cursor."""
        self.console.control(Control.clear(), Control.home())
        self.position = Position(1, 1)

    def clear_line_before(self) -> None:
        """Clear from the start of the line to the cursor."""
        self.console.control(Control((ControlType.ERASE_IN_LINE, 1)))

    def clear_line_after(self) -> None:
        """Clear from the cursor to the end of the line."""
        self.console.control(Control((ControlType.ERASE_IN_LINE, 0)))

    # -- output --------------------------------------------------------------

    def fill(self) -> None:
        """Write one space in the current style."""
        self.write(" ")

    def write(self, text: str) -> None:
        """Write text in the current style at the cursor."""
        self.console.out(text, style=self.style, end="", highlight=False)
        self.position = self.position.offset(columns=cell_len(text))

    def print_at(self, text: str, position: Position) -> None:
        """Write text starting at an absolute position."""
        self.move_to(position.column, position.row)
        self.write(text)

    def rewrite_line(self, text: str) -> None:
        """Clear the current line and write text from its first column."""
        self.clear_line_after()
        self.clear_line_before()
        self.move_to_column(1)
        self.write(text)

    @contextmanager
    def batch(self) -> Iterator[Cursor]:
        """Group everything issued inside the block into one write."""
        with self.console:
            yield self

    # -- queries -------------------------------------------------------------

    def query_extent(self) -> ScreenExtent:
        """Ask the terminal for its current size.

        The console's file is queried on every call, never Console.size.

        Raises:
            TerminalError: If the console is not a terminal or reports no size.
        """
        file = self.console.file
        if not file.isatty():
            raise TerminalError("output is not attached to a terminal")

        try:
            width, height = os.get_terminal_size(file.fileno())
        except (OSError, ValueError) as e:
            raise TerminalError(f"could not read the terminal size: {e}") from e
        if width <= 0 or height <= 0:
            raise TerminalError(f"terminal reported an invalid size {width}x{height}")
        return ScreenExtent(width, height)
