"""
Pytest fixtures for glyphreel tests
"""

from __future__ import annotations

import numpy as np
import pytest
from PIL import Image as PILImage

from glyphreel.ascii.rasterizer import GlyphGrid
from glyphreel.errors import FrameError, TerminalSizeError
from glyphreel.streams import FrameSequence, FrameSource


class FakeProbe:
    """Terminal probe with a settable size."""

    def __init__(self, columns: int = 80, rows: int = 24, interactive: bool = True):
        self.columns = columns
        self.rows = rows
        self.interactive = interactive
        self.fail = False
        self.queries = 0

    @property
    def is_interactive(self) -> bool:
        return self.interactive

    def size(self) -> tuple[int, int]:
        self.queries += 1
        if self.fail:
            raise TerminalSizeError("size query failed")
        return self.columns, self.rows


class RecordingCanvas:
    """Canvas that keeps every presented grid instead of writing it."""

    def __init__(self):
        self.initialized_with: tuple[int, int] | None = None
        self.grids: list[GlyphGrid] = []
        self.statuses: list[str] = []
        self.cleared = 0
        self.finished = False
        self.on_present = None

    def initialize(self, width: int, height: int) -> None:
        self.initialized_with = (width, height)

    def present(self, grid: GlyphGrid, status: str = "") -> None:
        self.grids.append(grid)
        self.statuses.append(status)
        if self.on_present is not None:
            self.on_present(len(self.grids))

    def clear_below(self) -> None:
        self.cleared += 1

    def finish(self) -> None:
        self.finished = True


class ArraySource(FrameSource):
    """In-memory frame source; indices listed in ``broken`` fail to load."""

    def __init__(self, frame_count: int, fps: int, broken: tuple[int, ...] = ()):
        self.frame_count = frame_count
        self.fps = fps
        self.broken = broken
        self.loaded: list[int] = []

    def load(self, index: int) -> np.ndarray:
        if index in self.broken:
            raise FrameError(index, f"out{index}.png", "file not found")
        self.loaded.append(index)
        value = (index * 25) % 256
        return np.full((12, 16, 3), value, dtype=np.uint8)


@pytest.fixture
def gradient_image() -> np.ndarray:
    """40x20 RGB image, brightness rising left to right."""
    pixels = np.zeros((20, 40, 3), dtype=np.uint8)
    for x in range(40):
        pixels[:, x] = int(x * 255 / 39)
    return pixels


@pytest.fixture
def probe() -> FakeProbe:
    return FakeProbe()


@pytest.fixture
def canvas() -> RecordingCanvas:
    return RecordingCanvas()


@pytest.fixture
def png_frames(tmp_path):
    """Ten 8x6 PNG frames written to ``tmp_path/imgs``."""
    frames_dir = tmp_path / "imgs"
    frames_dir.mkdir()
    for index in range(1, 11):
        arr = np.full((6, 8, 3), index * 20, dtype=np.uint8)
        PILImage.fromarray(arr).save(frames_dir / f"out{index}.png")
    return FrameSequence(frames_dir, frame_count=10, fps=10)
