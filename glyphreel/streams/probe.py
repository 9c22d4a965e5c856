"""Read basic metadata of the source video with OpenCV."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import cv2

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VideoInfo:
    """Dimensions, rate and length of a video file."""

    width: int
    height: int
    fps: float
    frame_count: int

    @property
    def duration(self) -> float:
        """Duration in seconds (0 if the rate is unknown)."""
        if self.fps <= 0:
            return 0.0
        return self.frame_count / self.fps

    def describe(self) -> str:
        return (
            f"{self.width}x{self.height} @ {self.fps:.2f} fps, "
            f"{self.frame_count} frames ({self.duration:.1f}s)"
        )


def probe_video(path: str | Path) -> VideoInfo | None:
    """Read video metadata.

    :param path: Video file
    :return: VideoInfo, or None if OpenCV cannot open the file
    """
    cap = cv2.VideoCapture(str(path))
    try:
        if not cap.isOpened():
            logger.warning(f"OpenCV could not open {path}, skipping source probe")
            return None
        return VideoInfo(
            width=int(cap.get(cv2.CAP_PROP_FRAME_WIDTH)),
            height=int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT)),
            fps=cap.get(cv2.CAP_PROP_FPS) or 0.0,
            frame_count=int(cap.get(cv2.CAP_PROP_FRAME_COUNT)),
        )
    finally:
        cap.release()


__all__ = ["VideoInfo", "probe_video"]
