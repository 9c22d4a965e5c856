"""
Tests for the nearest-neighbour frame rasterizer.
"""

import numpy as np
import pytest

from glyphreel.ascii.glyphs import GlyphMapper, GlyphPolicy
from glyphreel.ascii.rasterizer import FrameRasterizer, GlyphGrid, brightness_map


class TestGridShape:
    """Tests for output dimensions."""

    @pytest.mark.parametrize("width,height", [(1, 1), (7, 3), (40, 20), (80, 23), (200, 60)])
    def test_exact_dimensions(self, gradient_image, width, height):
        """Grid always has exactly height rows of width glyphs."""
        grid = FrameRasterizer().rasterize(gradient_image, width, height)
        assert grid.height == height
        assert grid.width == width
        assert all(len(row) == width for row in grid.rows)

    @pytest.mark.parametrize("width,height", [(0, 10), (10, 0), (0, 0), (-1, 5)])
    def test_zero_size_fails(self, gradient_image, width, height):
        """Zero or negative target sizes fail fast."""
        with pytest.raises(ValueError):
            FrameRasterizer().rasterize(gradient_image, width, height)

    def test_empty_image_fails(self):
        with pytest.raises(ValueError):
            FrameRasterizer().rasterize(np.zeros((0, 10, 3), dtype=np.uint8), 5, 5)

    def test_str_joins_rows(self):
        grid = GlyphGrid(("ab", "cd"))
        assert str(grid) == "ab\ncd"


class TestSampling:
    """Tests for nearest-neighbour sampling."""

    def test_sample_positions(self):
        """Cell (i, j) samples pixel (floor(j*sw/w), floor(i*sh/h))."""
        src_h, src_w = 7, 10
        pixels = np.zeros((src_h, src_w, 3), dtype=np.uint8)
        # Encode the source column in red and the source row in green
        for y in range(src_h):
            for x in range(src_w):
                pixels[y, x] = [x, y, 0]

        # One glyph per brightness value makes the sampled pixel recoverable
        charset = "".join(chr(0x100 + i) for i in range(256))
        rasterizer = FrameRasterizer(GlyphMapper(charset=charset))
        width, height = 4, 3
        grid = rasterizer.rasterize(pixels, width, height)

        for i in range(height):
            for j in range(width):
                x = j * src_w // width
                y = i * src_h // height
                assert grid.rows[i][j] == charset[(x + y) // 3]

    def test_upsampling_repeats_pixels(self):
        """Targets larger than the source repeat pixels."""
        pixels = np.array([[[0, 0, 0], [255, 255, 255]]], dtype=np.uint8)
        grid = FrameRasterizer(GlyphMapper(GlyphPolicy.BANDS)).rasterize(pixels, 4, 2)
        assert grid.rows == ("  ##", "  ##")

    def test_idempotent(self, gradient_image):
        """Same image and size give identical grids."""
        rasterizer = FrameRasterizer()
        first = rasterizer.rasterize(gradient_image, 33, 11)
        second = rasterizer.rasterize(gradient_image, 33, 11)
        assert first == second
        assert str(first).encode() == str(second).encode()

    def test_gradient_darkest_left(self, gradient_image):
        grid = FrameRasterizer().rasterize(gradient_image, 40, 5)
        for row in grid.rows:
            assert row[0] == " "
            assert row[-1] == "@"


class TestBrightness:
    """Tests for channel averaging and normalization."""

    def test_unweighted_mean(self):
        pixels = np.array([[[255, 0, 0], [0, 0, 255], [30, 60, 90]]], dtype=np.uint8)
        assert brightness_map(pixels).tolist() == [[85, 85, 60]]

    def test_sixteen_bit_normalized(self):
        pixels = np.array([[[65535, 65535, 65535], [257 * 100, 257 * 100, 257 * 100]]], dtype=np.uint16)
        assert brightness_map(pixels).tolist() == [[255, 100]]

    def test_float_normalized(self):
        pixels = np.array([[[1.0, 1.0, 1.0], [0.0, 0.0, 0.0]]], dtype=np.float32)
        assert brightness_map(pixels).tolist() == [[255, 0]]

    def test_grayscale(self):
        pixels = np.array([[0, 128, 255]], dtype=np.uint8)
        assert brightness_map(pixels).tolist() == [[0, 128, 255]]

    def test_rgba_alpha_ignored(self):
        pixels = np.array([[[90, 90, 90, 0], [90, 90, 90, 255]]], dtype=np.uint8)
        assert brightness_map(pixels).tolist() == [[90, 90]]
