"""Error types raised by glyphreel components.

Components raise, the command line front end decides how to exit. Errors fall
into three groups:

- PreconditionError: something required before playback is missing (no
  terminal, no ffmpeg, no video, failed frame extraction).
- FrameError: a frame could not be loaded while playing.
- TerminalSizeError: the terminal geometry could not be queried. Recoverable
  during playback, fatal at startup.
"""

from __future__ import annotations

from pathlib import Path


class GlyphreelError(Exception):
    """Base class for all glyphreel errors."""


class PreconditionError(GlyphreelError):
    """A requirement for starting playback is not met."""


class ExtractionError(PreconditionError):
    """ffmpeg failed or its log did not report frame count and rate."""

    def __init__(self, message: str, log: str = ""):
        super().__init__(message)
        self.log = log

    def log_tail(self, lines: int = 10) -> str:
        """Return the last lines of the ffmpeg log."""
        return "\n".join(self.log.strip().splitlines()[-lines:])


class FrameError(GlyphreelError):
    """A frame image is missing or cannot be decoded."""

    def __init__(self, index: int, path: Path, reason: str = ""):
        message = f"Failed to load frame {index} from `{path}`"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.index = index
        self.path = path


class TerminalSizeError(GlyphreelError):
    """The terminal size could not be determined."""


__all__ = [
    "GlyphreelError",
    "PreconditionError",
    "ExtractionError",
    "FrameError",
    "TerminalSizeError",
]
