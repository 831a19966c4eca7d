"""Exception types raised by glyphterm.

Library code raises these and never exits the process. The command line
front-end is the only place that turns them into a fatal error line.
"""

from __future__ import annotations


class GlyphtermError(Exception):
    """Base class for all glyphterm errors."""

    operation: str = "glyphterm"


class ResourceError(GlyphtermError):
    """A file, stream or input read failed."""

    def __init__(self, operation: str, cause: BaseException | str) -> None:
        self.operation = operation
        self.cause = cause
        if isinstance(cause, OSError) and cause.strerror:
            detail = cause.strerror
            if cause.filename is not None:
                detail = f"Could not open file {cause.filename}: {detail}"
        else:
            detail = str(cause)
        super().__init__(detail)


class ClockError(GlyphtermError):
    """The monotonic clock could not be read or went backwards."""

    operation = "timer"


class TerminalError(GlyphtermError):
    """The terminal could not be queried."""

    operation = "terminal"


class GlyphNotFoundError(GlyphtermError):
    """No bitmap file exists for a character."""

    operation = "draw"

    def __init__(self, char: str, path: str) -> None:
        self.char = char
        self.path = path
        super().__init__(f"No glyph file for {char!r}: {path}")


class StringIndexError(GlyphtermError, IndexError):
    """Deleting at an index outside a DynamicString."""

    operation = "delete_at"


class ReleasedStringError(GlyphtermError):
    """A DynamicString was used after its buffer was released."""

    operation = "strbuf"
