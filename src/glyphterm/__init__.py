"""glyphterm - bitmap glyph drawing and frame timing for terminal animations."""

__version__ = "0.1.0"
