"""Frame-paced example animation.

Runs a fixed number of frames at a target rate. Each frame writes a line
naming the frame number and time to an output stream and the console, and
can hand the frame number to a callback (the CLI uses this to draw the
number with glyphs).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TextIO

from rich.console import Console

from glyphterm.strbuf import format_string
from glyphterm.timer import FrameTimer, timestamp


@dataclass
class AnimationResult:
    """Result of an animation run."""

    frames: int
    lines: list[str] = field(default_factory=list)


class AnimationLoop:
    """Polls a FrameTimer and runs one frame each time the interval passes."""

    def __init__(
        self,
        timer: FrameTimer,
        nanos_per_frame: int,
        max_frames: int,
        console: Console | None = None,
        on_frame: Callable[[int], None] | None = None,
        clock_text: Callable[[], str] = timestamp,
    ) -> None:
        if max_frames <= 0:
            raise ValueError(f"max_frames must be positive, got {max_frames}")
        self.timer = timer
        self.nanos_per_frame = nanos_per_frame
        self.max_frames = max_frames
        self.console = console or Console()
        self.on_frame = on_frame
        self.clock_text = clock_text

    def run(self, stream: TextIO) -> AnimationResult:
        """Run until max_frames frames have been written to stream."""
        result = AnimationResult(frames=0)
        started = self.timer.start()

        while result.frames < self.max_frames:
            if not self.timer.elapsed(started, self.nanos_per_frame):
                continue

            result.frames += 1
            text = format_string("Frame number %d at %s\n", result.frames, self.clock_text())
            with text:
                line = str(text)
            stream.write(line)
            self.console.out(line, end="", highlight=False)
            result.lines.append(line)

            if self.on_frame is not None:
                self.on_frame(result.frames)

            started = self.timer.start()

        return result
