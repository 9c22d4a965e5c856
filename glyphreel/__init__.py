"""
glyphreel - Play videos as ASCII art frames directly in the terminal
"""

from .errors import (
    GlyphreelError,
    PreconditionError,
    ExtractionError,
    FrameError,
    TerminalSizeError,
)
from .config import PlayerConfig
from .ascii import (
    GlyphMapper,
    GlyphPolicy,
    FrameRasterizer,
    GlyphGrid,
    TerminalCanvas,
)
from .streams import FrameSource, FrameSequence, FfmpegExtractor
from .terminal import TerminalProbe
from .scheduler import (
    PlaybackScheduler,
    PlaybackState,
    PlaybackResult,
    CancelToken,
    cancel_on_signals,
)

__all__ = [
    # Errors
    "GlyphreelError",
    "PreconditionError",
    "ExtractionError",
    "FrameError",
    "TerminalSizeError",
    # Configuration
    "PlayerConfig",
    # Rendering
    "GlyphMapper",
    "GlyphPolicy",
    "FrameRasterizer",
    "GlyphGrid",
    "TerminalCanvas",
    # Frame sources
    "FrameSource",
    "FrameSequence",
    "FfmpegExtractor",
    # Terminal
    "TerminalProbe",
    # Playback
    "PlaybackScheduler",
    "PlaybackState",
    "PlaybackResult",
    "CancelToken",
    "cancel_on_signals",
]

__version__ = "0.1.0"
