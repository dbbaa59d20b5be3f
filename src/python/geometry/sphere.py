"""Unit sphere primitive placed in the world by a transformation matrix.

Every sphere is the unit sphere (radius 1) centered at the object-space
origin. Its placement in world space is given by ``transform`` (object to
world); rays are intersected in object space by mapping them through the
inverse transform.

The ray-sphere intersection solves:
    |origin + t * direction - center|^2 = 1

which expands to the quadratic a*t^2 + b*t + c = 0 with:
    a = direction . direction
    b = 2 * (direction . (origin - center))
    c = (origin - center) . (origin - center) - 1

Normals are mapped back to world space with the transposed inverse, which
keeps them perpendicular to the surface under non-uniform scaling.

Example:
    >>> from src.python.core.ray import Ray
    >>> from src.python.core.transforms import scaling
    >>> from src.python.core.tuples import point, vector
    >>> from src.python.geometry.sphere import Sphere
    >>> sphere = Sphere(transform=scaling(2.0, 2.0, 2.0))
    >>> xs = sphere.intersect(Ray(point(0.0, 0.0, -5.0), vector(0.0, 0.0, 1.0)))
    >>> [i.t for i in xs]
    [3.0, 7.0]
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from src.python.core.matrix import Matrix
from src.python.core.ray import Ray
from src.python.core.tuples import Tuple, point, vector
from src.python.materials.phong import Material

if TYPE_CHECKING:
    from src.python.scene.intersection import Intersection

# Object-space center of every sphere
ORIGIN = point(0.0, 0.0, 0.0)


class Sphere:
    """A unit sphere with a placement transform and a material.

    The inverse transform is computed when the transform is assigned, so a
    singular transform is rejected at construction time instead of producing
    NaN during rendering.

    Attributes:
        transform: Object-to-world transformation matrix (4x4).
        material: The Phong material of the surface.
    """

    def __init__(self, transform: Matrix | None = None, material: Material | None = None) -> None:
        """Create a sphere.

        Args:
            transform: Placement transform. Defaults to the identity.
            material: Surface material. Defaults to Material().

        Raises:
            SingularMatrixError: If the transform cannot be inverted.
        """
        self.transform = transform if transform is not None else Matrix.identity()
        self.material = material if material is not None else Material()

    @property
    def transform(self) -> Matrix:
        return self._transform

    @transform.setter
    def transform(self, value: Matrix) -> None:
        if value.dim != 4:
            raise ValueError(f"Sphere transform must be 4x4, got {value.dim}x{value.dim}")
        inverse = value.inverse()
        self._transform = value
        self._inverse = inverse
        self._inverse_transpose = inverse.transpose()

    @property
    def inverse_transform(self) -> Matrix:
        """World-to-object matrix, cached from the last transform assignment."""
        return self._inverse

    @property
    def inverse_transpose(self) -> Matrix:
        """Transposed inverse, used to map normals back to world space."""
        return self._inverse_transpose

    # Equality is by value and the transform is reassignable, so no hash
    __hash__ = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sphere):
            return NotImplemented
        return self.transform == other.transform and self.material == other.material

    def __repr__(self) -> str:
        return f"Sphere(transform={self.transform!r}, material={self.material!r})"

    def intersect(self, world_ray: Ray) -> list[Intersection]:
        """Intersect a world-space ray with this sphere.

        Both roots are returned whenever the discriminant is non-negative,
        including the tangent case where they coincide, and including roots
        behind the ray origin. Hit selection happens later.

        Args:
            world_ray: The ray in world space.

        Returns:
            Two intersections with t1 <= t2, or an empty list on a miss.
        """
        from src.python.scene.intersection import Intersection

        ray = world_ray.transform(self._inverse)
        sphere_to_ray = ray.origin - ORIGIN

        a = ray.direction.dot(ray.direction)
        b = 2.0 * ray.direction.dot(sphere_to_ray)
        c = sphere_to_ray.dot(sphere_to_ray) - 1.0

        discriminant = b * b - 4.0 * a * c
        if discriminant < 0.0:
            return []

        sqrt_d = math.sqrt(discriminant)
        t1 = (-b - sqrt_d) / (2.0 * a)
        t2 = (-b + sqrt_d) / (2.0 * a)
        return [Intersection(t1, self), Intersection(t2, self)]

    def normal_at(self, world_point: Tuple) -> Tuple:
        """Compute the unit surface normal at a world-space point.

        Args:
            world_point: A point on the sphere surface, in world space.

        Returns:
            The outward unit normal in world space.
        """
        object_point = self._inverse.tuple_prod(world_point)
        object_normal = object_point - ORIGIN
        world_normal = self._inverse_transpose.tuple_prod(object_normal)
        # The transposed translation column leaks into w; drop it
        return vector(world_normal.x, world_normal.y, world_normal.z).normalize()
