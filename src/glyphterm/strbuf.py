"""Exact-fit string buffers.

A DynamicString owns a null-terminated UTF-8 byte buffer whose capacity is
always its length plus one. Every mutation allocates a new buffer of exactly
the right size and drops the old one, so nothing may hold on to the bytes of
a previous buffer across a call.
"""

from __future__ import annotations

from typing import Any

from glyphterm.errors import ReleasedStringError, StringIndexError

ENCODING = "utf-8"
TERMINATOR = b"\x00"


def _render(template: str, args: tuple[Any, ...]) -> bytes:
    return (template % args).encode(ENCODING)


def required_size(template: str, *args: Any) -> int:
    """Return the number of bytes needed to hold the formatted string.

    The count includes the terminator.
    """
    return len(_render(template, args)) + len(TERMINATOR)


class DynamicString:
    """An owned, exactly sized, mutable text buffer.

    Use format_string() to create one. The buffer can be handed to a new owner
    with move(), after which this object is released and unusable.
    """

    __slots__ = ("_buffer",)

    def __init__(self, buffer: bytearray) -> None:
        if not buffer or buffer[-1:] != TERMINATOR:
            raise ValueError("buffer must be null-terminated")
        self._buffer: bytearray | None = buffer

    # -- ownership -----------------------------------------------------------

    @property
    def released(self) -> bool:
        return self._buffer is None

    def _live(self) -> bytearray:
        if self._buffer is None:
            raise ReleasedStringError("DynamicString used after release")
        return self._buffer

    def release(self) -> None:
        """Drop the buffer. Releasing twice is a no-op."""
        self._buffer = None

    def move(self) -> DynamicString:
        """Transfer the buffer to a new DynamicString and release this one."""
        buffer = self._live()
        self._buffer = None
        return DynamicString(buffer)

    def __enter__(self) -> DynamicString:
        self._live()
        return self

    def __exit__(self, *exc: object) -> None:
        self.release()

    # -- access --------------------------------------------------------------

    @property
    def capacity(self) -> int:
        """Allocated bytes, terminator included."""
        return len(self._live())

    @property
    def raw(self) -> bytes:
        """The full buffer, terminator included."""
        return bytes(self._live())

    @property
    def data(self) -> bytes:
        """The content bytes without the terminator."""
        return bytes(self._live()[:-1])

    def __len__(self) -> int:
        return len(self._live()) - 1

    def __str__(self) -> str:
        return self.data.decode(ENCODING, errors="replace")

    def __repr__(self) -> str:
        if self._buffer is None:
            return "DynamicString(<released>)"
        return f"DynamicString({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DynamicString):
            return self.data == other.data
        if isinstance(other, str):
            return self.data == other.encode(ENCODING)
        if isinstance(other, bytes):
            return self.data == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    # -- mutation ------------------------------------------------------------

    def _replace(self, content: bytes) -> None:
        buffer = bytearray(len(content) + len(TERMINATOR))
        buffer[: len(content)] = content
        buffer[-1:] = TERMINATOR
        self._buffer = buffer

    def delete_at(self, index: int) -> None:
        """Remove the byte at index.

        Raises:
            StringIndexError: If the string is empty or index is out of range.
        """
        content = self.data
        if not content:
            raise StringIndexError("cannot delete from an empty string")
        if index < 0 or index >= len(content):
            raise StringIndexError(
                f"index {index} out of range for string of length {len(content)}"
            )
        self._replace(content[:index] + content[index + 1 :])

    def delete_all_of(self, char: str) -> None:
        """Remove every occurrence of a single-byte character."""
        target = char.encode(ENCODING)
        if len(target) != 1:
            raise ValueError(f"expected a single-byte character, got {char!r}")

        index = 0
        while index < len(self):
            if self.data[index : index + 1] == target:
                self.delete_at(index)
                # Re-check the byte that slid into this index.
                continue
            index += 1

    def delete_last_char(self) -> None:
        """Remove the final character, including every byte of a UTF-8 sequence."""
        if not len(self):
            raise StringIndexError("cannot delete from an empty string")
        while len(self) > 1 and self.data[-1] & 0xC0 == 0x80:
            self.delete_at(len(self) - 1)
        self.delete_at(len(self) - 1)

    def append(self, text: str | bytes) -> None:
        """Append text, reallocating to exact fit."""
        extra = text.encode(ENCODING) if isinstance(text, str) else text
        self._replace(self.data + extra)


def format_string(template: str, *args: Any) -> DynamicString:
    """Format a printf-style template into an exactly sized DynamicString.

    >>> str(format_string("%s.txt", "session"))
    'session.txt'
    """
    size = required_size(template, *args)
    content = _render(template, args)
    if len(content) + len(TERMINATOR) != size:
        raise RuntimeError("size pass and write pass disagree")

    buffer = bytearray(size)
    buffer[: len(content)] = content
    buffer[-1:] = TERMINATOR
    return DynamicString(buffer)


def delete_at(string: DynamicString, index: int) -> DynamicString:
    """Remove the byte at index from string and return it."""
    string.delete_at(index)
    return string


def delete_all_of(string: DynamicString, char: str) -> DynamicString:
    """Remove every occurrence of char from string and return it."""
    string.delete_all_of(char)
    return string
