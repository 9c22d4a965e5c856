"""
Terminal Canvas - Redraw glyph frames in place without scrolling.

The canvas reserves a blank region once, saves the cursor position at its top
left corner and from then on returns to that origin before every frame. The
terminal is never cleared, so everything above the region stays in the
scrollback.
"""

from __future__ import annotations

import sys
from typing import TextIO

from .rasterizer import GlyphGrid

# ANSI escape codes
ESC = "\033"
SAVE_CURSOR = f"{ESC}7"
RESTORE_CURSOR = f"{ESC}8"
ERASE_LINE = f"{ESC}[2K"
ERASE_BELOW = f"{ESC}[J"


def cursor_up(rows: int) -> str:
    return f"{ESC}[{rows}A" if rows > 0 else ""


def cursor_down(rows: int) -> str:
    return f"{ESC}[{rows}B" if rows > 0 else ""


def format_status(frame: int, fps: int, width: int, height: int) -> str:
    """Build the status text shown beneath each frame."""
    return f"frame={frame} fps={fps} out={width}x{height}"


def fit_status(status: str, width: int) -> str:
    """
    Pad the status text to the terminal width.

    :return: The padded text, or an empty string when it does not fit
    """
    if len(status) > width:
        return ""
    return status.ljust(width)


class TerminalCanvas:
    """Sole writer of frame output to the terminal."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream or sys.stdout
        self._initialized = False
        self._drawn_height = 0

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self, width: int, height: int) -> None:
        """
        Reserve a blank drawing area and remember its origin.

        :param width: Width of the area in columns
        :param height: Number of glyph rows (the status row comes below)
        """
        blank = (" " * width + "\n") * height
        self.stream.write(f"{blank}{cursor_up(height)}\r{SAVE_CURSOR}")
        self.stream.flush()
        self._initialized = True
        self._drawn_height = height

    def present(self, grid: GlyphGrid, status: str = "") -> None:
        """
        Overwrite the drawing area with a new frame.

        The whole frame is built first and handed to the stream in one write.

        :param grid: Glyph grid to draw
        :param status: Status text for the row beneath the grid
        """
        if not self._initialized:
            raise RuntimeError("Canvas must be initialized before presenting frames")

        status_line = fit_status(status, grid.width)
        output = [RESTORE_CURSOR, "\n".join(grid.rows), "\n"]
        output.append(status_line if status_line else ERASE_LINE)

        self.stream.write("".join(output))
        self.stream.flush()
        self._drawn_height = grid.height

    def clear_below(self) -> None:
        """Erase everything from the origin down, e.g. after a resize."""
        if not self._initialized:
            return
        self.stream.write(f"{RESTORE_CURSOR}{ERASE_BELOW}")
        self.stream.flush()

    def finish(self) -> None:
        """Move the cursor beneath the last frame's status row."""
        if not self._initialized:
            return
        self.stream.write(f"{RESTORE_CURSOR}{cursor_down(self._drawn_height)}\n")
        self.stream.flush()
        self._initialized = False


__all__ = ["TerminalCanvas", "format_status", "fit_status"]
