"""World: a collection of spheres lit by a single point light.

The world composes the full per-ray pipeline:

    intersect -> hit -> prepare_computations -> shade_hit -> color

Rays that hit nothing (or only hit behind their origin) return black.

Example:
    >>> from src.python.core.ray import Ray
    >>> from src.python.core.tuples import point, vector
    >>> from src.python.scene.world import World
    >>> world = World.default()
    >>> world.color_at(Ray(point(0.0, 0.0, -5.0), vector(0.0, 0.0, 1.0)))
    ... # approximately color(0.38066, 0.47583, 0.2855)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from operator import attrgetter

from src.python.core.ray import Ray
from src.python.core.transforms import scaling
from src.python.core.tuples import BLACK, Tuple, color, point
from src.python.geometry.sphere import Sphere
from src.python.materials.phong import Material, PointLight, lighting
from src.python.scene.intersection import (
    Computations,
    Intersection,
    hit,
    prepare_computations,
)


@dataclass
class World:
    """A scene of spheres and an optional point light.

    Attributes:
        light: The point light, or None for an unlit world.
        objects: The spheres in the scene. Order only matters for breaking
            ties between intersections with equal t.
    """

    light: PointLight | None = None
    objects: list[Sphere] = field(default_factory=list)

    @classmethod
    def default(cls) -> World:
        """Create the standard two-sphere test world.

        A white light at (-10, 10, -10), an outer unit sphere with a green
        tinted material and an inner sphere scaled by 0.5.
        """
        outer = Sphere(
            material=Material(color=color(0.8, 1.0, 0.6), diffuse=0.7, specular=0.2),
        )
        inner = Sphere(transform=scaling(0.5, 0.5, 0.5))
        return cls(
            light=PointLight(point(-10.0, 10.0, -10.0), color(1.0, 1.0, 1.0)),
            objects=[outer, inner],
        )

    def add(self, sphere: Sphere) -> None:
        self.objects.append(sphere)

    def contains(self, sphere: Sphere) -> bool:
        """Check whether an equal sphere (same transform and material) is present."""
        return any(obj == sphere for obj in self.objects)

    def intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect a ray with every sphere.

        Returns:
            All intersections sorted by ascending t. The sort is stable, so
            ties keep object order.
        """
        xs: list[Intersection] = []
        for obj in self.objects:
            xs.extend(obj.intersect(ray))
        xs.sort(key=attrgetter("t"))
        return xs

    def shade_hit(self, comps: Computations) -> Tuple:
        """Shade a prepared hit with the world light.

        Raises:
            RuntimeError: If the world has no light.
        """
        if self.light is None:
            raise RuntimeError("Cannot shade a hit in a world without a light")
        return lighting(
            comps.object.material,
            self.light,
            comps.point,
            comps.eyev,
            comps.normalv,
        )

    def color_at(self, ray: Ray) -> Tuple:
        """Compute the color seen along a ray (black when nothing is hit)."""
        visible = hit(self.intersect(ray))
        if visible is None:
            return BLACK
        return self.shade_hit(prepare_computations(visible, ray))
