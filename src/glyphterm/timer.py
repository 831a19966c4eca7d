"""Frame pacing against a monotonic clock, plus the timestamp provider."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from glyphterm.errors import ClockError
from glyphterm.strbuf import format_string

NANOS_PER_SEC = 1_000_000_000


@dataclass(frozen=True)
class Instant:
    """A captured monotonic timestamp."""

    seconds: int
    nanoseconds: int

    @classmethod
    def from_ns(cls, total_ns: int) -> Instant:
        seconds, nanoseconds = divmod(total_ns, NANOS_PER_SEC)
        return cls(seconds, nanoseconds)

    @property
    def total_ns(self) -> int:
        return self.seconds * NANOS_PER_SEC + self.nanoseconds


class FrameTimer:
    """Reports whether a fixed interval has passed since a captured instant.

    The clock must be monotonic. Tests pass a fake clock returning
    nanoseconds.
    """

    def __init__(self, clock: Callable[[], int] = time.monotonic_ns) -> None:
        self._clock = clock

    def _now(self) -> int:
        try:
            return self._clock()
        except OSError as e:
            raise ClockError(f"clock unavailable: {e.strerror or e}") from e

    def start(self) -> Instant:
        """Capture the current instant."""
        return Instant.from_ns(self._now())

    def elapsed_ns(self, start: Instant) -> int:
        """Nanoseconds since start.

        Raises:
            ClockError: If the clock cannot be read or reads earlier than start.
        """
        delta = self._now() - start.total_ns
        if delta < 0:
            raise ClockError(f"clock went backwards by {-delta}ns")
        return delta

    def elapsed(self, start: Instant, threshold_ns: int) -> bool:
        """Return True once at least threshold_ns have passed since start."""
        if threshold_ns < 0:
            raise ValueError(f"threshold must be non-negative, got {threshold_ns}")
        return self.elapsed_ns(start) >= threshold_ns


def nanos_per_frame(frames_per_second: int) -> int:
    """Frame interval for a target frame rate."""
    if frames_per_second <= 0:
        raise ValueError(f"frames per second must be positive, got {frames_per_second}")
    return NANOS_PER_SEC // frames_per_second


def timestamp() -> str:
    """Current local time in ctime format, without any newline."""
    stamp = format_string("%s", time.ctime())
    with stamp:
        stamp.delete_all_of("\n")
        return str(stamp)
