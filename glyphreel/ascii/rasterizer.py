"""
Frame Rasterizer - Downsample an RGB image into a grid of glyphs.

Each target cell takes the single source pixel at
``(floor(col * src_w / width), floor(row * src_h / height))``. There is no
interpolation and no antialiasing. Brightness is the plain mean of the three
color channels scaled to [0, 255].
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .glyphs import GlyphMapper


@dataclass(frozen=True)
class GlyphGrid:
    """A terminal sized block of glyphs, one string per row."""

    rows: tuple[str, ...]

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def __str__(self) -> str:
        return "\n".join(self.rows)


def channel_max(pixels: np.ndarray) -> float:
    """Return the maximum channel value implied by the array dtype."""
    if np.issubdtype(pixels.dtype, np.integer):
        return float(np.iinfo(pixels.dtype).max)
    return 1.0


def brightness_map(pixels: np.ndarray) -> np.ndarray:
    """
    Compute per-pixel brightness in [0, 255].

    :param pixels: HxW (grayscale), HxWx3 (RGB) or HxWx4 (RGBA) array
    :return: HxW int array
    """
    if pixels.ndim == 2:
        # Grayscale - expand to RGB
        pixels = np.stack([pixels, pixels, pixels], axis=-1)
    elif pixels.shape[2] == 4:
        # RGBA - drop alpha
        pixels = pixels[:, :, :3]

    if np.issubdtype(pixels.dtype, np.integer):
        total = pixels.astype(np.int64).sum(axis=2)
        brightness = total * 255 // (3 * int(channel_max(pixels)))
    else:
        brightness = np.floor(pixels.astype(np.float64).sum(axis=2) * 255 / 3).astype(np.int64)
    return np.clip(brightness, 0, 255)


class FrameRasterizer:
    """Nearest-neighbour rasterizer producing :class:`GlyphGrid` frames."""

    def __init__(self, mapper: GlyphMapper | None = None):
        self.mapper = mapper or GlyphMapper()

    def rasterize(self, image: np.ndarray, width: int, height: int) -> GlyphGrid:
        """
        Rasterize an image to exactly ``height`` rows of ``width`` glyphs.

        :param image: Decoded frame as a numpy array
        :param width: Target width in characters
        :param height: Target height in characters
        :return: Glyph grid of the requested size
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Target size must be at least 1x1, got {width}x{height}")
        src_h, src_w = image.shape[:2]
        if src_w == 0 or src_h == 0:
            raise ValueError("Cannot rasterize an empty image")

        # Integer arithmetic keeps the sampling positions exact
        xs = np.arange(width) * src_w // width
        ys = np.arange(height) * src_h // height
        sampled = image[ys[:, None], xs[None, :]]

        chars = self.mapper.table[brightness_map(sampled)]
        return GlyphGrid(tuple("".join(row) for row in chars))


__all__ = ["FrameRasterizer", "GlyphGrid", "brightness_map", "channel_max"]
