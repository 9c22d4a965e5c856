"""ASCII rendering components.

This module turns decoded frames into terminal output:
- GlyphMapper: Map brightness levels to characters
- FrameRasterizer: Downsample an image into a grid of glyphs
- TerminalCanvas: Redraw frames in place at a fixed origin
"""

from .glyphs import GlyphMapper, GlyphPolicy, BRIGHTNESS_RAMP, BAND_GLYPHS
from .rasterizer import FrameRasterizer, GlyphGrid
from .canvas import TerminalCanvas, format_status

__all__ = [
    # Glyphs
    "GlyphMapper",
    "GlyphPolicy",
    "BRIGHTNESS_RAMP",
    "BAND_GLYPHS",
    # Rasterizer
    "FrameRasterizer",
    "GlyphGrid",
    # Canvas
    "TerminalCanvas",
    "format_status",
]
