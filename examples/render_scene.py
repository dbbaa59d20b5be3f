#!/usr/bin/env python3
"""Render a Phong-shaded sphere scene.

This script renders either the built-in three-sphere scene or a JSON scene
file, with the Taichi kernel renderer or the pure Python reference renderer,
and writes a PPM or PNG image depending on the output extension.

Usage:
    python -m examples.render_scene [options]

Options:
    --width WIDTH       Image width in pixels (default: 100)
    --height HEIGHT     Image height in pixels (default: 50)
    --fov RADIANS       Field of view in radians (default: pi/3)
    --scene PATH        JSON scene file (default: built-in three spheres)
    --output OUTPUT     Output file path, .ppm or .png (default: spheres.ppm)
    --backend NAME      taichi or python (default: taichi)
    --compare           Also render with the other backend and print the RMSE
    --quiet             Suppress progress output

Example:
    python -m examples.render_scene --width 400 --height 200 --output spheres.png
    python -m examples.render_scene --scene examples/scenes/three_spheres.json
"""

from __future__ import annotations

import argparse
import math
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a Phong-shaded sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=100,
        help="Image width in pixels (default: 100)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=50,
        help="Image height in pixels (default: 50)",
    )
    parser.add_argument(
        "--fov",
        type=float,
        default=math.pi / 3,
        help="Field of view in radians (default: pi/3)",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene file (default: built-in three spheres)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="spheres.ppm",
        help="Output file path, .ppm or .png (default: spheres.ppm)",
    )
    parser.add_argument(
        "--backend",
        choices=("taichi", "python"),
        default="taichi",
        help="Renderer to use (default: taichi)",
    )
    parser.add_argument(
        "--compare",
        action="store_true",
        help="Also render with the other backend and print the RMSE",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def create_three_sphere_scene(width: int, height: int, fov: float):
    """Create the three-sphere demo world and a camera looking at it.

    Returns:
        Tuple of (world, camera).
    """
    from src.python.camera.pinhole import Camera
    from src.python.core.transforms import scaling, translation, view_transform
    from src.python.core.tuples import color, point, vector
    from src.python.geometry.sphere import Sphere
    from src.python.materials.phong import Material, PointLight
    from src.python.scene.world import World

    middle = Sphere(
        transform=translation(-0.5, 1, 0.5),
        material=Material(color=color(0.1, 1, 0.5), diffuse=0.7, specular=0.3),
    )
    right = Sphere(
        transform=translation(1.5, 0.5, -0.5) * scaling(0.5, 0.5, 0.5),
        material=Material(color=color(0.5, 1, 0.1), diffuse=0.7, specular=0.3),
    )
    left = Sphere(
        transform=translation(-1.5, 0.33, -0.75) * scaling(0.33, 0.33, 0.33),
        material=Material(color=color(1, 0.8, 0.1), diffuse=0.7, specular=0.3),
    )
    world = World(
        light=PointLight(point(-10, 10, -10), color(1, 1, 1)),
        objects=[middle, right, left],
    )

    camera = Camera(width, height, fov)
    camera.transform = view_transform(point(0, 1.5, -5), point(0, 1, 0), vector(0, 1, 0))
    return world, camera


def _render(backend: str, camera, world, quiet: bool):
    """Render with one backend and report timing."""
    from src.python.camera.pinhole import render
    from src.python.core.integrator import render_canvas

    start_time = time.time()
    if backend == "taichi":
        canvas = render_canvas(camera, world)
    else:

        def progress_callback(rows_done: int, total_rows: int) -> None:
            if not quiet:
                print(
                    f"\r  Progress: {rows_done}/{total_rows} rows "
                    f"({rows_done / total_rows * 100:.1f}%)",
                    end="",
                    flush=True,
                )

        canvas = render(camera, world, callback=progress_callback)
        if not quiet:
            print()  # Newline after progress

    if not quiet:
        print(f"  {backend} backend: {time.time() - start_time:.2f}s")
    return canvas


def render_scene(
    width: int = 100,
    height: int = 50,
    fov: float = math.pi / 3,
    scene_path: str | None = None,
    output_path: str = "spheres.ppm",
    backend: str = "taichi",
    compare: bool = False,
    quiet: bool = False,
) -> Path:
    """Render a scene and save it to file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Field of view in radians.
        scene_path: JSON scene file, or None for the built-in scene.
        output_path: Output file path (.ppm or .png).
        backend: "taichi" or "python".
        compare: If True, also render with the other backend and print the RMSE.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from src.python.preview.export import compute_rmse, save_image
    from src.python.scene.config import camera_from_config, load_scene, world_from_config

    if scene_path is None:
        if not quiet:
            print(f"Creating three-sphere scene ({width}x{height})...")
        world, camera = create_three_sphere_scene(width, height, fov)
    else:
        if not quiet:
            print(f"Loading scene from {scene_path} ({width}x{height})...")
        config = load_scene(scene_path)
        world = world_from_config(config)
        camera = camera_from_config(config, hsize=width, vsize=height)

    if not quiet:
        print(f"Rendering {len(world.objects)} spheres...")

    canvas = _render(backend, camera, world, quiet)

    if compare:
        other = "python" if backend == "taichi" else "taichi"
        reference = _render(other, camera, world, quiet)
        rmse = compute_rmse(canvas.to_numpy(), reference.to_numpy())
        print(f"RMSE {backend} vs {other}: {rmse:.2e}")

    output_file = Path(output_path)
    save_image(canvas, output_file)

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # The pixel loop is serialized, so the CPU backend is all we need
    ti.init(arch=ti.cpu)

    try:
        render_scene(
            width=args.width,
            height=args.height,
            fov=args.fov,
            scene_path=args.scene,
            output_path=args.output,
            backend=args.backend,
            compare=args.compare,
            quiet=args.quiet,
        )
        return 0
    except (OSError, ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
