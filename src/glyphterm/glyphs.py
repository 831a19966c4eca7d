"""Bitmap glyph loading and drawing.

Each drawable character has a text file of rows. A '1' in a row is a filled
cell; anything else is empty. Glyphs are drawn left to right, each one
glyph-width columns after the previous.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from glyphterm.config import GlyphConfig
from glyphterm.cursor import Cursor, Direction, Position, ScreenExtent, TermColor
from glyphterm.errors import GlyphNotFoundError, ResourceError
from glyphterm.strbuf import ENCODING, format_string

logger = logging.getLogger(__name__)

FILLED = "1"


@dataclass(frozen=True)
class GlyphBitmap:
    """Rows of filled/empty cells for one character."""

    rows: tuple[str, ...]

    @classmethod
    def from_lines(cls, lines: list[str]) -> GlyphBitmap:
        """Build a bitmap, dropping line terminators from each row."""
        rows = []
        for line in lines:
            row = format_string("%s", line)
            with row:
                row.delete_all_of("\n")
                row.delete_all_of("\r")
                rows.append(str(row))
        return cls(tuple(rows))

    @classmethod
    def load(cls, path: str | Path, char: str = "?") -> GlyphBitmap:
        """Read a bitmap file.

        Any byte is a valid cell, so undecodable bytes become U+FFFD (empty)
        instead of failing the load.

        Raises:
            GlyphNotFoundError: If the file does not exist.
            ResourceError: If the file exists but cannot be read.
        """
        try:
            with open(path, "rb") as f:
                lines = [line.decode(ENCODING, errors="replace") for line in f]
            return cls.from_lines(lines)
        except FileNotFoundError as e:
            raise GlyphNotFoundError(char, str(path)) from e
        except (OSError, ValueError) as e:
            raise ResourceError("load_glyph", e) from e

    @property
    def height(self) -> int:
        return len(self.rows)


@dataclass
class DrawResult:
    """What draw_string drew."""

    height: int = 0
    skipped: list[str] = field(default_factory=list)


class GlyphRenderer:
    """Draws strings of bitmap glyphs through a Cursor."""

    def __init__(self, cursor: Cursor, config: GlyphConfig | None = None) -> None:
        self.cursor = cursor
        self.config = config or GlyphConfig()

    @property
    def fill_color(self) -> TermColor:
        return self.config.fill

    def glyph_path(self, char: str) -> Path:
        """Path of the bitmap file for a character."""
        path = format_string(self.config.path_template, self.config.directory, char)
        with path:
            return Path(str(path))

    def load_glyph(self, char: str) -> GlyphBitmap:
        return GlyphBitmap.load(self.glyph_path(char), char)

    def draw_row(self, row: str, origin: Position, bounds: ScreenExtent) -> None:
        """Draw one bitmap row starting at origin, clipped to bounds."""
        cursor = self.cursor
        cursor.move_to(origin.column, origin.row)
        for column in range(min(len(row), bounds.columns)):
            if row[column] == FILLED:
                cursor.set_background(self.fill_color)
                cursor.fill()
            else:
                cursor.move(1, Direction.RIGHT)
        cursor.reset()

    def draw_glyph(self, bitmap: GlyphBitmap, origin: Position, bounds: ScreenExtent) -> None:
        """Draw every row of a bitmap, top to bottom."""
        for offset, row in enumerate(bitmap.rows):
            self.draw_row(row, origin.offset(rows=offset), bounds)

    def draw_string(self, text: str, origin: Position, bounds: ScreenExtent) -> DrawResult:
        """Draw text one glyph per character.

        Characters whose glyph is missing are recorded in the result's
        skipped list; this only happens when on_missing is "skip".

        Raises:
            GlyphNotFoundError: If a glyph is missing and on_missing is "raise".
        """
        result = DrawResult()
        with self.cursor.batch():
            for index, char in enumerate(text):
                at = origin.offset(columns=index * self.config.width)
                try:
                    bitmap = self.load_glyph(char)
                except GlyphNotFoundError as e:
                    if self.config.on_missing == "raise":
                        raise
                    logger.warning("Skipping %r: %s", char, e)
                    result.skipped.append(char)
                    continue
                logger.debug("Drawing %r at %s", char, tuple(at))
                self.draw_glyph(bitmap, at, bounds)
                result.height = max(result.height, bitmap.height)
        return result
