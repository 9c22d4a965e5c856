"""Numbered PNG sequence on disk as produced by ffmpeg."""

from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image as PILImage

from ..errors import FrameError
from .base import FrameSource

FRAME_PATTERN = "out{index}.png"


class FrameSequence(FrameSource):
    """Frames stored as ``out1.png ... outN.png`` in one directory.

    Every frame is decoded on demand and not cached. A missing or broken
    file raises :class:`FrameError`, frames are never skipped.
    """

    def __init__(self, directory: str | Path, frame_count: int, fps: int) -> None:
        """Initialize the sequence.

        :param directory: Directory holding the numbered frames
        :param frame_count: Number of frames
        :param fps: Frame rate the sequence was extracted at
        """
        if frame_count < 0:
            raise ValueError(f"Frame count must not be negative, got {frame_count}")
        if fps < 1:
            raise ValueError(f"Frame rate must be at least 1, got {fps}")
        self.directory = Path(directory)
        self.frame_count = frame_count
        self.fps = fps

    def path_for(self, index: int) -> Path:
        """Return the file path of frame ``index``."""
        return self.directory / FRAME_PATTERN.format(index=index)

    def load(self, index: int) -> np.ndarray:
        if not 1 <= index <= self.frame_count:
            raise IndexError(f"Frame index {index} out of range 1..{self.frame_count}")
        path = self.path_for(index)
        try:
            with PILImage.open(path) as img:
                # Force a full decode so truncated files fail here
                img.load()
                return np.asarray(img.convert("RGB"))
        except FileNotFoundError:
            raise FrameError(index, path, "file not found") from None
        except (OSError, SyntaxError, ValueError, PILImage.DecompressionBombError) as e:
            # Covers unreadable, truncated, unidentified and broken images
            raise FrameError(index, path, str(e)) from e

    def __repr__(self) -> str:
        return f"FrameSequence({str(self.directory)!r}, frame_count={self.frame_count}, fps={self.fps})"
