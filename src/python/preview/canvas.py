"""Pixel buffer with plain-text PPM serialization.

The canvas stores linear, unclamped colors in a (height, width, 3) NumPy
array. Row 0 is the top of the image and column 0 the left edge, which is the
order PPM files are written in.

PPM (P3) output:
    - header "P3", "<width> <height>", "255"
    - each color component scaled by 255, rounded, clamped to [0, 255]
    - no line longer than 70 characters
    - every pixel row starts on a new line; the file ends with a newline

Example:
    >>> from src.python.core.tuples import color
    >>> from src.python.preview.canvas import Canvas
    >>> canvas = Canvas(5, 3)
    >>> canvas.write_pixel(0, 0, color(1.5, 0.0, 0.0))
    >>> canvas.to_ppm().splitlines()[3]
    '255 0 0 0 0 0 0 0 0 0 0 0 0 0 0'
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from src.python.core.tuples import Tuple, color

# Maximum PPM line length
PPM_MAX_LINE_LENGTH = 70

# Maximum color component value written to PPM
PPM_MAX_COLOR = 255


class Canvas:
    """A rectangular grid of colors.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        """Create a canvas with every pixel black.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._pixels = np.zeros((height, width, 3), dtype=np.float64)

    @classmethod
    def from_numpy(cls, image: npt.NDArray[np.floating]) -> Canvas:
        """Create a canvas from a (height, width, 3) array."""
        if image.ndim != 3 or image.shape[2] != 3:
            raise ValueError(f"Expected an (H, W, 3) array, got shape {image.shape}")
        canvas = cls(image.shape[1], image.shape[0])
        canvas._pixels[...] = image
        return canvas

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return a copy of the (height, width, 3) color buffer."""
        return self._pixels.copy()

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) is outside a {self.width}x{self.height} canvas")

    def pixel_at(self, x: int, y: int) -> Tuple:
        self._check_bounds(x, y)
        r, g, b = self._pixels[y, x]
        return color(r, g, b)

    def write_pixel(self, x: int, y: int, c: Tuple) -> None:
        self._check_bounds(x, y)
        self._pixels[y, x] = (c.red, c.green, c.blue)

    def to_ppm(self) -> str:
        """Serialize the canvas as a plain-text PPM (P3) image."""
        # Round half away from zero; negatives clamp to 0 anyway
        scaled = np.floor(self._pixels * PPM_MAX_COLOR + 0.5)
        values = np.clip(scaled, 0, PPM_MAX_COLOR).astype(np.int64)

        lines = ["P3", f"{self.width} {self.height}", str(PPM_MAX_COLOR)]
        for row in values:
            lines.extend(_wrap_ppm_row([str(v) for v in row.reshape(-1)]))
        return "\n".join(lines) + "\n"


def _wrap_ppm_row(numbers: list[str]) -> list[str]:
    """Join a row of numbers with spaces, wrapping lines at 70 characters."""
    lines: list[str] = []
    current = ""
    for n in numbers:
        if current and len(current) + 1 + len(n) > PPM_MAX_LINE_LENGTH:
            lines.append(current)
            current = ""
        current = f"{current} {n}" if current else n
    lines.append(current)
    return lines
