"""Tests for the canvas and PPM serialization.

Tests cover:
- Canvas creation, pixel access and bounds checking
- PPM header and pixel data
- Clamping and rounding of color components
- Line wrapping at 70 characters and the trailing newline
- NumPy conversion
"""

import numpy as np
import pytest

from src.python.core.tuples import color
from src.python.preview.canvas import PPM_MAX_LINE_LENGTH, Canvas


class TestCanvas:
    """Tests for the pixel buffer."""

    def test_new_canvas_is_black(self):
        """Test that every pixel starts black."""
        c = Canvas(10, 20)
        assert c.width == 10
        assert c.height == 20
        for y in range(c.height):
            for x in range(c.width):
                assert c.pixel_at(x, y) == color(0, 0, 0)

    def test_write_pixel(self):
        """Test writing and reading back a pixel."""
        c = Canvas(10, 20)
        red = color(1, 0, 0)
        c.write_pixel(2, 3, red)
        assert c.pixel_at(2, 3) == red

    def test_out_of_bounds_raises(self):
        """Test that out-of-range coordinates raise IndexError."""
        c = Canvas(10, 20)
        with pytest.raises(IndexError):
            c.write_pixel(10, 0, color(1, 0, 0))
        with pytest.raises(IndexError):
            c.pixel_at(0, -1)

    def test_invalid_size_raises(self):
        """Test that non-positive dimensions raise ValueError."""
        with pytest.raises(ValueError, match="positive"):
            Canvas(0, 5)

    def test_numpy_layout(self):
        """Test that to_numpy() is indexed [row, column]."""
        c = Canvas(4, 2)
        c.write_pixel(3, 1, color(0.25, 0.5, 0.75))
        image = c.to_numpy()
        assert image.shape == (2, 4, 3)
        assert np.allclose(image[1, 3], [0.25, 0.5, 0.75])

    def test_from_numpy(self):
        """Test building a canvas from an array."""
        image = np.zeros((3, 5, 3))
        image[2, 4] = (1.0, 0.5, 0.0)
        c = Canvas.from_numpy(image)
        assert (c.width, c.height) == (5, 3)
        assert c.pixel_at(4, 2) == color(1.0, 0.5, 0.0)

    def test_from_numpy_rejects_bad_shape(self):
        """Test that a non-RGB array raises ValueError."""
        with pytest.raises(ValueError, match="shape"):
            Canvas.from_numpy(np.zeros((3, 5)))


class TestPPM:
    """Tests for plain-text PPM output."""

    def test_header(self):
        """Test the P3 header lines."""
        lines = Canvas(5, 3).to_ppm().splitlines()
        assert lines[0:3] == ["P3", "5 3", "255"]

    def test_pixel_data(self):
        """Test scaling, rounding and clamping of pixel data."""
        c = Canvas(5, 3)
        c.write_pixel(0, 0, color(1.5, 0, 0))
        c.write_pixel(2, 1, color(0, 0.5, 0))
        c.write_pixel(4, 2, color(-0.5, 0, 1))
        lines = c.to_ppm().splitlines()
        assert lines[3:6] == [
            "255 0 0 0 0 0 0 0 0 0 0 0 0 0 0",
            "0 0 0 0 0 0 0 128 0 0 0 0 0 0 0",
            "0 0 0 0 0 0 0 0 0 0 0 0 0 0 255",
        ]

    def test_long_lines_are_split(self):
        """Test that rows longer than 70 characters wrap."""
        c = Canvas(10, 2)
        for y in range(2):
            for x in range(10):
                c.write_pixel(x, y, color(1, 0.8, 0.6))
        lines = c.to_ppm().splitlines()
        assert lines[3:7] == [
            "255 204 153 255 204 153 255 204 153 255 204 153 255 204 153 255 204",
            "153 255 204 153 255 204 153 255 204 153 255 204 153",
            "255 204 153 255 204 153 255 204 153 255 204 153 255 204 153 255 204",
            "153 255 204 153 255 204 153 255 204 153 255 204 153",
        ]

    def test_no_line_exceeds_limit(self):
        """Test the line length limit on a wide canvas."""
        c = Canvas(100, 3)
        for x in range(100):
            c.write_pixel(x, 1, color(1, 1, 1))
        for line in c.to_ppm().splitlines():
            assert len(line) <= PPM_MAX_LINE_LENGTH

    def test_ends_with_newline(self):
        """Test that the PPM text ends with a newline."""
        assert Canvas(5, 3).to_ppm().endswith("\n")

    def test_line_count(self):
        """Test that each short row is one line after the header."""
        assert len(Canvas(5, 3).to_ppm().splitlines()) == 3 + 3
