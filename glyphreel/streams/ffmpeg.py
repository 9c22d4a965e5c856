"""Frame extraction with an external ffmpeg binary.

The video is converted into a directory of numbered PNG files before playback
starts. Frame count and output frame rate are read back from ffmpeg's log.

Example:
    extractor = FfmpegExtractor(resolve_ffmpeg(None))
    frames = extractor.extract("clip.mp4", "imgs", fps=24)
    print(frames.frame_count, frames.fps)
"""

from __future__ import annotations

import logging
import re
import shutil
import subprocess
import time
from pathlib import Path

from ..errors import ExtractionError, PreconditionError
from .sequence import FRAME_PATTERN, FrameSequence

logger = logging.getLogger(__name__)

FFMPEG_DOWNLOAD_URL = "https://www.ffmpeg.org/download.html"

# "frame=  240 fps=110 q=-0.0 Lsize=N/A ..." progress lines, the last one wins
_FRAME_COUNT_RE = re.compile(r"frame=\s*(\d+)")
# "Stream #0:0: Video: png, rgb24, 1280x720, q=2-31, 200 kb/s, 24 fps, 24 tbn"
_STREAM_FPS_RE = re.compile(r"Stream #\S+.*?Video:.*?(\d+(?:\.\d+)?)\s+fps")


def resolve_ffmpeg(path: str | None = None) -> str:
    """Locate the ffmpeg executable.

    :param path: Explicit path or command name (None = search $PATH)
    :return: Resolved executable path
    :raises PreconditionError: If ffmpeg cannot be found
    """
    if path:
        resolved = shutil.which(path)
        if resolved is None:
            raise PreconditionError(f"Invalid ffmpeg path: {path}")
        return resolved
    resolved = shutil.which("ffmpeg")
    if resolved is None:
        raise PreconditionError(f"ffmpeg not found in $PATH: {FFMPEG_DOWNLOAD_URL}")
    return resolved


def parse_ffmpeg_log(log: str) -> tuple[int, int]:
    """Recover frame count and output frame rate from an ffmpeg log.

    :param log: Combined ffmpeg output
    :return: Tuple of (frame_count, fps)
    :raises ExtractionError: If either value is missing
    """
    counts = _FRAME_COUNT_RE.findall(log)
    if not counts:
        raise ExtractionError("Failed to extract frame count from ffmpeg output", log)
    frame_count = int(counts[-1])

    output_start = log.find("Output #0")
    match = _STREAM_FPS_RE.search(log, output_start) if output_start >= 0 else None
    if match is None:
        raise ExtractionError("Failed to extract frame rate from ffmpeg output", log)
    fps = int(round(float(match.group(1))))
    if fps < 1:
        raise ExtractionError(f"ffmpeg reported an unusable frame rate: {match.group(1)}", log)

    return frame_count, fps


class FfmpegExtractor:
    """Convert a video file into a numbered PNG sequence."""

    def __init__(self, ffmpeg_path: str = "ffmpeg"):
        self.ffmpeg_path = ffmpeg_path

    def command(self, video: Path, frames_dir: Path, fps: int) -> list[str]:
        """Build the ffmpeg command line."""
        output = frames_dir / FRAME_PATTERN.replace("{index}", "%d")
        return [
            self.ffmpeg_path,
            "-nostdin",
            "-y",
            "-i", str(video),
            "-vf", f"fps={fps}",
            str(output),
        ]

    def extract(self, video: str | Path, frames_dir: str | Path, fps: int) -> FrameSequence:
        """Run ffmpeg and return the resulting frame sequence.

        :param video: Input video file
        :param frames_dir: Output directory, created if missing
        :param fps: Requested frame rate
        :return: Sequence describing the extracted frames
        :raises ExtractionError: If ffmpeg fails or its log is incomplete
        """
        video = Path(video)
        frames_dir = Path(frames_dir)
        try:
            frames_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ExtractionError(f"Failed to create {frames_dir} directory: {e}") from e

        cmd = self.command(video, frames_dir, fps)
        logger.debug(f"Running {' '.join(cmd)}")
        print("Processing...", end="", flush=True)
        time_start = time.perf_counter()

        try:
            result = subprocess.run(cmd, capture_output=True, text=True, errors="replace")
        except OSError as e:
            print()
            raise ExtractionError(f"Failed to run ffmpeg: {e}") from e

        log = result.stdout + result.stderr
        if result.returncode != 0:
            print()
            raise ExtractionError(f"ffmpeg exited with status {result.returncode}", log)

        print("\nDone.")
        frame_count, reported_fps = parse_ffmpeg_log(log)
        print(f"ffmpeg: frames = {frame_count}")
        print(f"ffmpeg: elapsed time = {time.perf_counter() - time_start:.0f}s")
        if reported_fps != fps:
            logger.warning(
                f"ffmpeg reported {reported_fps} fps instead of the requested {fps} fps, "
                f"pacing playback at {reported_fps} fps"
            )

        return FrameSequence(frames_dir, frame_count, reported_fps)


__all__ = ["FfmpegExtractor", "parse_ffmpeg_log", "resolve_ffmpeg"]
