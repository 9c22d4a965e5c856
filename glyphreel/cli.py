"""Command line entry point.

Usage:
    glyphreel video.mp4
    glyphreel --ffmpeg /opt/ffmpeg/bin/ffmpeg --fps 30 video.mp4
    python -m glyphreel --glyphs bands video.mp4

Without a video argument the path is read from stdin.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import TextIO

from .ascii.canvas import TerminalCanvas
from .ascii.glyphs import BRIGHTNESS_RAMP, GlyphPolicy
from .config import DEFAULT_FPS, DEFAULT_FRAMES_DIR, PlayerConfig
from .errors import ExtractionError, FrameError, GlyphreelError, PreconditionError, TerminalSizeError
from .scheduler import CancelToken, PlaybackScheduler, PlaybackState, cancel_on_signals
from .streams import FfmpegExtractor, probe_video, resolve_ffmpeg
from .terminal import TerminalProbe

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PLAYBACK_FAILED = 1
EXIT_PRECONDITION = 2
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="glyphreel",
        description="Play a video as ASCII art in the terminal",
    )
    parser.add_argument("video", nargs="?", type=Path, help="Video file to play (prompted if omitted)")
    parser.add_argument("--ffmpeg", help="Path to the ffmpeg executable (default: search $PATH)")
    parser.add_argument(
        "--fps",
        type=int,
        default=DEFAULT_FPS,
        help=f"Frame rate to extract at (default: {DEFAULT_FPS})",
    )
    parser.add_argument(
        "--frames-dir",
        type=Path,
        default=DEFAULT_FRAMES_DIR,
        help=f"Directory for extracted frames (default: {DEFAULT_FRAMES_DIR})",
    )
    parser.add_argument(
        "--glyphs",
        choices=[p.value for p in GlyphPolicy],
        default=GlyphPolicy.RAMP.value,
        help="Brightness mapping: continuous ramp or seven bands (default: ramp)",
    )
    parser.add_argument("--charset", default=BRIGHTNESS_RAMP, help="Glyph ramp, dark to bright")
    parser.add_argument("--no-status", action="store_true", help="Hide the status line")
    parser.add_argument("--pre-roll", type=float, default=2.0, help="Pause before playback in seconds")
    parser.add_argument("--post-roll", type=float, default=3.0, help="Pause after playback in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def config_from_args(args: argparse.Namespace) -> PlayerConfig:
    return PlayerConfig(
        video_path=args.video,
        ffmpeg_path=args.ffmpeg,
        fps=args.fps,
        frames_dir=args.frames_dir,
        glyph_policy=GlyphPolicy(args.glyphs),
        charset=args.charset,
        show_status=not args.no_status,
        pre_roll=args.pre_roll,
        post_roll=args.post_roll,
    )


def prompt_video_path(stdin: TextIO | None = None) -> Path:
    """Ask for the video path on stdin."""
    stdin = stdin or sys.stdin
    print("Enter path to video file: ", end="", flush=True)
    line = stdin.readline().strip()
    if not line:
        raise PreconditionError("No video file given")
    return Path(line)


def check_preconditions(config: PlayerConfig, probe: TerminalProbe) -> tuple[int, int]:
    """Verify everything needed before extraction starts.

    Resolves ``config.ffmpeg_path`` and ``config.video_path`` in place.

    :return: Terminal (columns, rows)
    :raises PreconditionError: On the first unmet condition
    """
    config.validate()
    config.ffmpeg_path = resolve_ffmpeg(config.ffmpeg_path)

    if not probe.is_interactive:
        raise PreconditionError("Not a terminal!")
    try:
        columns, rows = probe.size()
    except TerminalSizeError as e:
        raise PreconditionError(str(e)) from e
    if columns < 1 or rows < 2:
        raise PreconditionError(f"Terminal too small: {columns}x{rows}")
    print(f"Current terminal dimensions: {columns} x {rows - 1}")

    if config.video_path is None:
        config.video_path = prompt_video_path()
    if not config.video_path.is_file():
        raise PreconditionError(f"File does not exist: {config.video_path}")

    return columns, rows


def play(config: PlayerConfig, probe: TerminalProbe, cancel_token: CancelToken | None = None) -> int:
    """Extract frames and play them.

    :return: Process exit status
    :raises GlyphreelError: On precondition or extraction failure
    """
    geometry = check_preconditions(config, probe)

    info = probe_video(config.video_path)
    if info is not None:
        print(f"Source: {info.describe()}")

    frames = FfmpegExtractor(config.ffmpeg_path).extract(config.video_path, config.frames_dir, config.fps)
    if frames.frame_count == 0:
        raise ExtractionError("ffmpeg produced no frames")

    time.sleep(config.pre_roll)

    # Geometry may have changed while ffmpeg was running
    try:
        geometry = probe.size()
    except TerminalSizeError as e:
        logger.debug(f"Using startup terminal size: {e}")

    scheduler = PlaybackScheduler(
        frames,
        TerminalCanvas(probe.stream),
        probe,
        config=config,
        geometry=geometry,
        cancel_token=cancel_token,
    )
    with probe.hidden_cursor(), cancel_on_signals(scheduler.cancel_token):
        result = scheduler.run()

    if result.state == PlaybackState.COMPLETED:
        time.sleep(config.post_roll)
        return EXIT_OK
    if result.interrupted:
        print(f"Playback interrupted after {result.frames_presented} frames")
        return EXIT_INTERRUPTED
    raise result.error


def run(config: PlayerConfig, probe: TerminalProbe | None = None) -> int:
    """Run the player, turning every error into an exit status."""
    probe = probe or TerminalProbe()
    try:
        return play(config, probe)
    except ExtractionError as e:
        print(f"Error: {e}", file=sys.stderr)
        if e.log:
            print(e.log_tail(), file=sys.stderr)
        return EXIT_PRECONDITION
    except PreconditionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_PRECONDITION
    except FrameError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_PLAYBACK_FAILED
    except GlyphreelError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_PLAYBACK_FAILED
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return EXIT_INTERRUPTED


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    return run(config_from_args(args))


if __name__ == "__main__":
    sys.exit(main())
