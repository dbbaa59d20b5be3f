"""Pinhole camera mapping canvas pixels to world-space rays.

The camera sits at the origin of its own space, looking down -z at a virtual
canvas one unit away. ``transform`` is the world-to-camera matrix (usually
built with view_transform); rays are generated in camera space and mapped to
world space through its inverse.

The canvas is sized from the field of view:
    half_view = tan(field_of_view / 2)
    aspect = hsize / vsize
    aspect >= 1: half_width = half_view, half_height = half_view / aspect
    aspect < 1:  half_width = half_view * aspect, half_height = half_view
    pixel_size = 2 * half_width / hsize

Each pixel gets exactly one ray, through its center.

Example:
    >>> import math
    >>> from src.python.camera.pinhole import Camera, render
    >>> from src.python.core.transforms import view_transform
    >>> from src.python.core.tuples import point, vector
    >>> camera = Camera(100, 50, math.pi / 3)
    >>> camera.transform = view_transform(point(0, 1.5, -5), point(0, 1, 0), vector(0, 1, 0))
    >>> canvas = render(camera, world)
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from typing import TYPE_CHECKING

from src.python.core.matrix import Matrix
from src.python.core.ray import Ray
from src.python.core.tuples import point
from src.python.preview.canvas import Canvas

if TYPE_CHECKING:
    from src.python.scene.world import World

logger = logging.getLogger(__name__)

# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]


class Camera:
    """A pinhole camera.

    Attributes:
        hsize: Horizontal size of the canvas in pixels.
        vsize: Vertical size of the canvas in pixels.
        field_of_view: Horizontal-or-vertical (whichever is larger) view
            angle in radians.
        transform: World-to-camera transformation matrix.
    """

    def __init__(
        self,
        hsize: int,
        vsize: int,
        field_of_view: float,
        transform: Matrix | None = None,
    ) -> None:
        """Create a camera.

        Raises:
            ValueError: If a canvas dimension or the field of view is not positive.
            SingularMatrixError: If the transform cannot be inverted.
        """
        if hsize <= 0 or vsize <= 0:
            raise ValueError(f"Camera canvas must be positive, got {hsize}x{vsize}")
        if not 0.0 < field_of_view < math.pi:
            raise ValueError(f"Field of view must be in (0, pi), got {field_of_view}")

        self.hsize = hsize
        self.vsize = vsize
        self.field_of_view = field_of_view
        self.transform = transform if transform is not None else Matrix.identity()

        half_view = math.tan(field_of_view / 2.0)
        aspect = hsize / vsize
        if aspect >= 1.0:
            self.half_width = half_view
            self.half_height = half_view / aspect
        else:
            self.half_width = half_view * aspect
            self.half_height = half_view
        self.pixel_size = self.half_width * 2.0 / hsize

    @property
    def transform(self) -> Matrix:
        return self._transform

    @transform.setter
    def transform(self, value: Matrix) -> None:
        self._inverse = value.inverse()
        self._transform = value

    @property
    def inverse_transform(self) -> Matrix:
        """Camera-to-world matrix."""
        return self._inverse

    def ray_for_pixel(self, px: float, py: float) -> Ray:
        """Create the world-space ray through the center of a pixel.

        Args:
            px: Pixel column (0 = left).
            py: Pixel row (0 = top).

        Returns:
            A ray from the camera position with a normalized direction.
        """
        xoffset = (px + 0.5) * self.pixel_size
        yoffset = (py + 0.5) * self.pixel_size

        # The camera looks toward -z, so +x is to the *left*
        world_x = self.half_width - xoffset
        world_y = self.half_height - yoffset

        pixel = self._inverse.tuple_prod(point(world_x, world_y, -1.0))
        origin = self._inverse.tuple_prod(point(0.0, 0.0, 0.0))
        direction = (pixel - origin).normalize()
        return Ray(origin, direction)


def render(
    camera: Camera,
    world: World,
    callback: ProgressCallback | None = None,
) -> Canvas:
    """Render a world through a camera, one color_at call per pixel.

    This is the pure Python reference renderer. The Taichi renderer in
    src.python.core.integrator produces the same image much faster.

    Args:
        camera: The camera to render through.
        world: The scene. Must have a light.
        callback: Optional callback called after each finished row.

    Returns:
        The rendered canvas (unclamped colors).

    Raises:
        RuntimeError: If the world has no light.
    """
    if world.light is None:
        raise RuntimeError("Cannot render a world without a light")
    logger.debug("Rendering %dx%d with %d spheres", camera.hsize, camera.vsize, len(world.objects))
    image = Canvas(camera.hsize, camera.vsize)
    for y in range(camera.vsize):
        for x in range(camera.hsize):
            ray = camera.ray_for_pixel(x, y)
            image.write_pixel(x, y, world.color_at(ray))
        if callback is not None:
            callback(y + 1, camera.vsize)
    return image
