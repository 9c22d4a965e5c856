"""Base frame source class for glyphreel.

A frame source is a finite, 1-indexed sequence of decoded frames whose length
and nominal rate are known before playback starts.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np


class FrameSource(ABC):
    """Base class for all frame sources.

    Example:
        class SolidSource(FrameSource):
            frame_count = 10
            fps = 10

            def load(self, index: int) -> np.ndarray:
                return np.zeros((4, 4, 3), dtype=np.uint8)
    """

    #: Total number of frames, indices run from 1 to frame_count
    frame_count: int = 0
    #: Rate the frames were produced at
    fps: int = 0

    @abstractmethod
    def load(self, index: int) -> np.ndarray:
        """Load and decode one frame.

        :param index: 1-based frame index
        :return: Frame as an HxWx3 RGB array
        :raises FrameError: If the frame is missing or cannot be decoded
        """
        ...

    def __len__(self) -> int:
        return self.frame_count
