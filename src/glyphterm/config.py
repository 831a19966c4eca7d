"""Configuration models for glyphterm."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from glyphterm.cursor import TermColor
from glyphterm.timer import nanos_per_frame

ColorName = Literal["black", "red", "green", "yellow", "blue", "magenta", "cyan", "white"]


class GlyphConfig(BaseModel):
    """Where glyph bitmaps live and how they are drawn."""

    directory: str = "art"
    # Formatted with (directory, character).
    path_template: str = "%s/%c.txt"
    width: int = Field(default=8, gt=0)
    fill_color: ColorName = "white"
    on_missing: Literal["raise", "skip"] = "raise"

    @property
    def fill(self) -> TermColor:
        return TermColor[self.fill_color.upper()]


class TimingConfig(BaseModel):
    """Configuration for frame pacing."""

    frames_per_second: int = Field(default=60, gt=0)

    @property
    def nanos_per_frame(self) -> int:
        return nanos_per_frame(self.frames_per_second)


class AnimationConfig(BaseModel):
    """Configuration for the example animation loop."""

    max_frames: int = Field(default=5, gt=0)
    draw_frames: bool = False


class GlyphtermConfig(BaseModel):
    """Main configuration for glyphterm."""

    glyphs: GlyphConfig = Field(default_factory=GlyphConfig)
    timing: TimingConfig = Field(default_factory=TimingConfig)
    animation: AnimationConfig = Field(default_factory=AnimationConfig)

    @classmethod
    def load(cls, path: Path | None = None) -> GlyphtermConfig:
        """Load configuration from file or return defaults."""
        if path is None:
            path = CONFIG_FILE

        if not path.exists():
            return cls()

        with open(path) as f:
            data = json.load(f)

        return cls.model_validate(data)


GLYPHTERM_DIR = Path(".glyphterm")
CONFIG_FILE = GLYPHTERM_DIR / "config.json"
