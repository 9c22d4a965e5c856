"""
Playback Scheduler - Drive the frame loop at the source frame rate.

Every tick loads one frame, rasterizes it to the current terminal size,
presents it and then sleeps until the tick's deadline. Late ticks are not
compensated: the next frame simply follows immediately.

Example:
    scheduler = PlaybackScheduler(frames, canvas, probe, config=config)
    with cancel_on_signals(scheduler.cancel_token):
        result = scheduler.run()
"""

from __future__ import annotations

import logging
import signal
import time
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator

from .ascii.canvas import TerminalCanvas, format_status
from .ascii.glyphs import GlyphMapper
from .ascii.rasterizer import FrameRasterizer
from .config import PlayerConfig, frame_duration_ms, resize_interval
from .errors import FrameError, GlyphreelError, PreconditionError, TerminalSizeError
from .streams.base import FrameSource
from .terminal import TerminalProbe

logger = logging.getLogger(__name__)

INTERRUPTED = "interrupted"

# Longest uninterrupted sleep while waiting for a deadline
WAIT_SLICE = 0.01


class PlaybackState(Enum):
    """Playback state machine."""

    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass
class PlaybackResult:
    """Outcome of a playback run."""

    state: PlaybackState
    frames_presented: int
    reason: str | None = None
    error: GlyphreelError | None = None

    @property
    def interrupted(self) -> bool:
        """Whether playback was cancelled rather than failed."""
        return self.state == PlaybackState.ABORTED and self.reason == INTERRUPTED


class CancelToken:
    """Cancellation flag the scheduler checks every tick and waits on.

    Cancelling only assigns a flag, so it is safe from signal handlers. The
    wait sleeps in short slices and checks the flag between them.
    """

    def __init__(self, slice_seconds: float = WAIT_SLICE) -> None:
        self._cancelled = False
        self.slice_seconds = slice_seconds

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def wait(self, timeout: float) -> bool:
        """Sleep up to ``timeout`` seconds; True if cancelled meanwhile."""
        wake_up = time.monotonic() + timeout
        while not self._cancelled:
            remaining = wake_up - time.monotonic()
            if remaining <= 0:
                return False
            time.sleep(min(remaining, self.slice_seconds))
        return True


@contextmanager
def cancel_on_signals(
    token: CancelToken,
    signals: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM),
) -> Iterator[CancelToken]:
    """Route the given signals to ``token`` while the block runs."""

    def _handle(_signum, _frame) -> None:
        token.cancel()

    previous = {sig: signal.signal(sig, _handle) for sig in signals}
    try:
        yield token
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


class PlaybackScheduler:
    """Play a frame source once, from frame 1 to the last frame."""

    def __init__(
        self,
        source: FrameSource,
        canvas: TerminalCanvas,
        probe: TerminalProbe,
        *,
        config: PlayerConfig,
        rasterizer: FrameRasterizer | None = None,
        geometry: tuple[int, int] | None = None,
        clock: Callable[[], float] = time.monotonic,
        cancel_token: CancelToken | None = None,
    ):
        """
        Initialize the scheduler.

        :param source: Frames to play, paced at ``source.fps``
        :param canvas: Canvas receiving every frame
        :param probe: Terminal geometry provider
        :param config: Player configuration
        :param rasterizer: Rasterizer (None = build from config)
        :param geometry: Known (columns, rows) at startup (None = query probe)
        :param clock: Monotonic clock in seconds
        :param cancel_token: Token to stop playback early
        """
        self.source = source
        self.canvas = canvas
        self.probe = probe
        self.config = config
        self.rasterizer = rasterizer or FrameRasterizer(
            GlyphMapper(config.glyph_policy, config.charset)
        )
        self.clock = clock
        self.cancel_token = cancel_token or CancelToken()

        self.fps = source.fps
        self.frame_duration = frame_duration_ms(self.fps) / 1000.0
        self.resize_every = resize_interval(self.fps)

        self._geometry = geometry
        self._state = PlaybackState.RUNNING

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def geometry(self) -> tuple[int, int] | None:
        """Last known terminal (columns, rows)."""
        return self._geometry

    @property
    def grid_size(self) -> tuple[int, int]:
        """Glyph grid (width, height); the last terminal row holds the status."""
        columns, rows = self._geometry
        return columns, rows - 1

    @staticmethod
    def _usable(columns: int, rows: int) -> bool:
        return columns >= 1 and rows >= 2

    def _startup_geometry(self) -> tuple[int, int]:
        try:
            columns, rows = self.probe.size()
        except TerminalSizeError as e:
            raise PreconditionError(str(e)) from e
        if not self._usable(columns, rows):
            raise PreconditionError(f"Terminal too small: {columns}x{rows}")
        return columns, rows

    def _poll_geometry(self) -> None:
        """Re-read the terminal size, keeping the old one on failure."""
        try:
            columns, rows = self.probe.size()
        except TerminalSizeError as e:
            logger.debug(f"Keeping terminal size {self._geometry}: {e}")
            return
        if not self._usable(columns, rows):
            logger.debug(f"Ignoring unusable terminal size {columns}x{rows}")
            return
        if (columns, rows) != self._geometry:
            logger.debug(f"Terminal resized from {self._geometry} to {(columns, rows)}")
            self._geometry = (columns, rows)
            self.canvas.clear_below()

    def _end(
        self,
        state: PlaybackState,
        presented: int,
        reason: str | None = None,
        error: GlyphreelError | None = None,
    ) -> PlaybackResult:
        self._state = state
        return PlaybackResult(state, presented, reason, error)

    def run(self) -> PlaybackResult:
        """
        Play all frames.

        :return: Result with the terminal state and frames presented
        :raises PreconditionError: If the terminal size is unusable at startup
        """
        if self._geometry is None:
            self._geometry = self._startup_geometry()
        elif not self._usable(*self._geometry):
            raise PreconditionError(f"Terminal too small: {self._geometry[0]}x{self._geometry[1]}")

        self._state = PlaybackState.RUNNING
        presented = 0
        self.canvas.initialize(*self.grid_size)
        try:
            for i in range(self.source.frame_count):
                if self.cancel_token.cancelled:
                    return self._end(PlaybackState.ABORTED, presented, INTERRUPTED)

                deadline = self.clock() + self.frame_duration

                try:
                    image = self.source.load(i + 1)
                except FrameError as e:
                    logger.debug(f"Aborting at frame {i + 1}: {e}")
                    return self._end(PlaybackState.ABORTED, presented, str(e), e)

                width, height = self.grid_size
                grid = self.rasterizer.rasterize(image, width, height)
                status = format_status(i + 1, self.fps, width, height) if self.config.show_status else ""
                self.canvas.present(grid, status)
                presented += 1

                if (i + 1) % self.resize_every == 0:
                    self._poll_geometry()

                remaining = deadline - self.clock()
                if remaining > 0 and self.cancel_token.wait(remaining):
                    return self._end(PlaybackState.ABORTED, presented, INTERRUPTED)

            return self._end(PlaybackState.COMPLETED, presented)
        finally:
            self.canvas.finish()


__all__ = [
    "PlaybackScheduler",
    "PlaybackState",
    "PlaybackResult",
    "CancelToken",
    "cancel_on_signals",
    "INTERRUPTED",
]
