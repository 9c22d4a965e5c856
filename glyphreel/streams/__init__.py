"""Frame sources for glyphreel.

- FrameSource: Abstract 1-indexed frame sequence
- FrameSequence: Numbered PNG files in a directory
- FfmpegExtractor: Produce a FrameSequence from a video file
- probe_video: Read source video metadata with OpenCV
"""

from .base import FrameSource
from .sequence import FrameSequence, FRAME_PATTERN
from .ffmpeg import FfmpegExtractor, parse_ffmpeg_log, resolve_ffmpeg
from .probe import VideoInfo, probe_video

__all__ = [
    "FrameSource",
    "FrameSequence",
    "FRAME_PATTERN",
    "FfmpegExtractor",
    "parse_ffmpeg_log",
    "resolve_ffmpeg",
    "VideoInfo",
    "probe_video",
]
