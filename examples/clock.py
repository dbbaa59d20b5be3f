#!/usr/bin/env python3
"""Plot the twelve hour marks of a clock face onto a canvas.

The twelve o'clock mark sits on the +z axis and each following hour is that
point rotated by pi/6 around the y axis. The face is viewed from above, so
x maps to canvas columns and z to canvas rows.

Usage:
    python -m examples.clock [options]

Options:
    --size SIZE         Canvas width and height in pixels (default: 40)
    --radius RADIUS     Clock radius as a fraction of half the canvas (default: 0.75)
    --output OUTPUT     Output PPM path (default: write to stdout)

Example:
    python -m examples.clock --size 100 --output clock.ppm
"""

from __future__ import annotations

import argparse
import math
import sys
from pathlib import Path

from src.python.core.transforms import rotation_y
from src.python.core.tuples import Tuple, color, point
from src.python.preview.canvas import Canvas


def hour_marks(radius: float) -> list[Tuple]:
    """Positions of the twelve hour marks, starting at twelve o'clock."""
    twelve = point(0, 0, radius)
    return [rotation_y(hour * math.pi / 6).tuple_prod(twelve) for hour in range(12)]


def to_canvas(canvas: Canvas, p: Tuple) -> tuple[int, int]:
    """Map a point with x and z in (-1, 1) to a pixel."""
    half_width = canvas.width / 2
    half_height = canvas.height / 2
    return int(half_width * p.x + half_width), int(half_height * p.z + half_height)


def plot_clock(size: int, radius: float = 0.75) -> Canvas:
    """Draw every hour mark onto a new square canvas."""
    if not 0.0 < radius < 1.0:
        raise ValueError(f"radius must be in (0, 1), got {radius}")

    canvas = Canvas(size, size)
    mark = color(0.5, 0.5, 0.5)
    for p in hour_marks(radius):
        x, y = to_canvas(canvas, p)
        canvas.write_pixel(x, y, mark)
    return canvas


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Plot a clock face as PPM.")
    parser.add_argument("--size", type=int, default=40, help="Canvas size (default: 40)")
    parser.add_argument("--radius", type=float, default=0.75, help="Clock radius (default: 0.75)")
    parser.add_argument("--output", type=str, default=None, help="Output PPM path (default: stdout)")
    return parser.parse_args()


def main() -> int:
    """Main entry point."""
    args = parse_args()
    try:
        canvas = plot_clock(args.size, args.radius)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    ppm = canvas.to_ppm()
    if args.output is None:
        sys.stdout.write(ppm)
    else:
        Path(args.output).write_text(ppm, encoding="ascii")
    return 0


if __name__ == "__main__":
    sys.exit(main())
