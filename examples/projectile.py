#!/usr/bin/env python3
"""Plot a projectile trajectory onto a canvas.

A projectile is launched from (0, 1, 0) and moved one tick at a time under
gravity and wind until it hits the ground. Every position is drawn as one
pixel (y up, so rows are flipped) and the canvas is written as PPM.

Usage:
    python -m examples.projectile [options]

Options:
    --width WIDTH       Canvas width in pixels (default: 900)
    --height HEIGHT     Canvas height in pixels (default: 550)
    --speed SPEED       Launch speed (default: 11.25)
    --output OUTPUT     Output PPM path (default: write to stdout)

Example:
    python -m examples.projectile --output projectile.ppm
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path

from src.python.core.tuples import Tuple, color, point, vector
from src.python.preview.canvas import Canvas


@dataclass(frozen=True)
class Projectile:
    position: Tuple
    velocity: Tuple


@dataclass(frozen=True)
class Environment:
    gravity: Tuple
    wind: Tuple


def tick(env: Environment, proj: Projectile) -> Projectile:
    """Advance the projectile by one time step."""
    return Projectile(
        position=proj.position + proj.velocity,
        velocity=proj.velocity + env.gravity + env.wind,
    )


def plot_trajectory(width: int, height: int, speed: float) -> Canvas:
    """Simulate the launch and draw every position onto a new canvas."""
    env = Environment(gravity=vector(0, -0.1, 0), wind=vector(-0.01, 0, 0))
    proj = Projectile(
        position=point(0, 1, 0),
        velocity=vector(1, 1.8, 0).normalize() * speed,
    )

    canvas = Canvas(width, height)
    trail = color(0.5, 0.5, 0.5)
    while proj.position.y > 0.0:
        x = round(proj.position.x)
        y = height - round(proj.position.y)
        if 0 <= x < width and 0 <= y < height:
            canvas.write_pixel(x, y, trail)
        proj = tick(env, proj)
    return canvas


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Plot a projectile trajectory as PPM.")
    parser.add_argument("--width", type=int, default=900, help="Canvas width (default: 900)")
    parser.add_argument("--height", type=int, default=550, help="Canvas height (default: 550)")
    parser.add_argument("--speed", type=float, default=11.25, help="Launch speed (default: 11.25)")
    parser.add_argument("--output", type=str, default=None, help="Output PPM path (default: stdout)")
    return parser.parse_args()


def main() -> int:
    """Main entry point."""
    args = parse_args()
    canvas = plot_trajectory(args.width, args.height, args.speed)
    ppm = canvas.to_ppm()
    if args.output is None:
        sys.stdout.write(ppm)
    else:
        Path(args.output).write_text(ppm, encoding="ascii")
    return 0


if __name__ == "__main__":
    sys.exit(main())
