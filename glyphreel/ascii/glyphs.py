"""
Glyph mapping - Convert brightness levels to display characters.

Two policies are available:
- Ramp: index into an ordered ramp of glyphs (dark to bright)
- Bands: seven fixed brightness bands, one glyph each

Example:
    from glyphreel.ascii import GlyphMapper, GlyphPolicy

    mapper = GlyphMapper(GlyphPolicy.BANDS)
    mapper.map(200)  # '+'
"""

from __future__ import annotations

from enum import Enum

import numpy as np

# Character ramp ordered from dark to bright
BRIGHTNESS_RAMP = (
    "  `.-':_,^=;><+!rc*/z?sLTv)J7(|Fi{C}fI31tlu[neoZ5Yxjya]2ESwqkP6h9d4VpOGbUAKXHm8RD#$Bg0MNWQ%&@"
)

# Upper bounds (exclusive) of the first six bands; the seventh takes the rest
BAND_BOUNDARIES = (35, 70, 105, 140, 175, 210)
BAND_GLYPHS = " .:-=+#"


class GlyphPolicy(Enum):
    """Brightness to glyph mapping policy."""

    RAMP = "ramp"  # Continuous index into a glyph ramp
    BANDS = "bands"  # Seven discrete brightness bands


class GlyphMapper:
    """
    Deterministic brightness to glyph mapper.

    The full mapping for all 256 brightness levels is computed once at
    construction, so :meth:`map` and :attr:`table` always agree.
    """

    def __init__(self, policy: GlyphPolicy = GlyphPolicy.RAMP, charset: str = BRIGHTNESS_RAMP):
        """
        Initialize the mapper.

        :param policy: Mapping policy
        :param charset: Ramp of glyphs (dark to bright), only used by RAMP
        """
        if policy == GlyphPolicy.RAMP and not charset:
            raise ValueError("Glyph ramp must not be empty")
        self.policy = policy
        self.charset = charset if policy == GlyphPolicy.RAMP else BAND_GLYPHS

        levels = np.arange(256)
        if policy == GlyphPolicy.RAMP:
            count = len(self.charset)
            indices = np.minimum(levels * (count - 1) // 255, count - 1)
        else:
            indices = np.searchsorted(np.array(BAND_BOUNDARIES), levels, side="right")

        self._table = np.array(list(self.charset), dtype="<U1")[indices]

    @property
    def table(self) -> np.ndarray:
        """Lookup table of 256 glyphs indexed by brightness."""
        return self._table

    def map(self, brightness: int) -> str:
        """
        Map a brightness level to a glyph.

        :param brightness: Brightness in [0, 255], values outside are clamped
        :return: Single display character
        """
        return str(self._table[min(255, max(0, int(brightness)))])


__all__ = ["GlyphMapper", "GlyphPolicy", "BRIGHTNESS_RAMP", "BAND_BOUNDARIES", "BAND_GLYPHS"]
