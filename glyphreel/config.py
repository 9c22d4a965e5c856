"""Player configuration.

A single PlayerConfig is built at startup and passed to every component that
needs it.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .ascii.glyphs import BRIGHTNESS_RAMP, GlyphPolicy
from .errors import PreconditionError

DEFAULT_FPS = 24
DEFAULT_FRAMES_DIR = Path("imgs")


@dataclass
class PlayerConfig:
    """Configuration for frame extraction and playback."""

    video_path: Path | None = None
    ffmpeg_path: str | None = None  # None = look up "ffmpeg" in $PATH

    # Frame rate requested from ffmpeg
    fps: int = DEFAULT_FPS
    frames_dir: Path = DEFAULT_FRAMES_DIR

    # Rendering
    glyph_policy: GlyphPolicy = GlyphPolicy.RAMP
    charset: str = BRIGHTNESS_RAMP
    show_status: bool = True

    # Pauses (in seconds) after extraction and after the last frame
    pre_roll: float = 2.0
    post_roll: float = 3.0

    def validate(self) -> None:
        """Check value ranges.

        :raises PreconditionError: On an invalid setting
        """
        if self.fps < 1:
            raise PreconditionError(f"Frame rate must be at least 1, got {self.fps}")
        if self.pre_roll < 0 or self.post_roll < 0:
            raise PreconditionError("Pre-roll and post-roll must not be negative")
        if self.glyph_policy == GlyphPolicy.RAMP and not self.charset:
            raise PreconditionError("Glyph ramp must not be empty")


def frame_duration_ms(fps: int) -> int:
    """Nominal time between frames in whole milliseconds (remainder dropped)."""
    if fps < 1:
        raise ValueError(f"Frame rate must be at least 1, got {fps}")
    return 1000 // fps


def resize_interval(fps: int) -> int:
    """Number of frames between two terminal size polls."""
    return max(1, fps // 2)


__all__ = ["PlayerConfig", "DEFAULT_FPS", "DEFAULT_FRAMES_DIR", "frame_duration_ms", "resize_interval"]
