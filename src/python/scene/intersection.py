"""Intersection records, hit selection and shading preparation.

An Intersection pairs a ray parameter ``t`` with the sphere that produced it.
The object reference is a plain borrow: intersections are created per query
and never outlive the World that owns the spheres.

Hit selection picks the smallest non-negative t. Intersection lists are
sorted with a stable sort, so equal t values keep their production order and
rendering stays deterministic.

Example:
    >>> from src.python.geometry.sphere import Sphere
    >>> from src.python.scene.intersection import Intersection, hit, intersections
    >>> s = Sphere()
    >>> xs = intersections(Intersection(5, s), Intersection(7, s), Intersection(-3, s))
    >>> hit(xs).t
    5
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from operator import attrgetter
from typing import TYPE_CHECKING

from src.python.core.ray import Ray
from src.python.core.tuples import Tuple

if TYPE_CHECKING:
    from src.python.geometry.sphere import Sphere


@dataclass(frozen=True)
class Intersection:
    """A ray-sphere intersection.

    Attributes:
        t: The ray parameter where the intersection occurs.
        object: The sphere that was hit.
    """

    t: float
    object: Sphere

    # Spheres are mutable and compare by value, so neither they nor records
    # holding them are hashable
    __hash__ = None


@dataclass(frozen=True)
class Computations:
    """Precomputed inputs for shading a hit.

    Attributes:
        t: The ray parameter of the hit.
        object: The sphere that was hit.
        point: The world-space hit point.
        eyev: Unit vector from the point back toward the ray origin.
        normalv: Unit surface normal, flipped if needed to face the eye.
        inside: True if the ray origin is inside the sphere.
    """

    t: float
    object: Sphere
    point: Tuple
    eyev: Tuple
    normalv: Tuple
    inside: bool

    __hash__ = None


def intersections(*xs: Intersection) -> list[Intersection]:
    """Aggregate intersections into a list sorted by ascending t.

    The sort is stable: intersections with equal t keep their argument order.
    """
    return sorted(xs, key=attrgetter("t"))


def hit(xs: Iterable[Intersection]) -> Intersection | None:
    """Select the visible intersection.

    Args:
        xs: Intersections, typically sorted by t.

    Returns:
        The intersection with the smallest non-negative t, or None if every
        intersection lies behind the ray origin. When several share the
        smallest t, the first one in iteration order wins.
    """
    best: Intersection | None = None
    for candidate in xs:
        if candidate.t >= 0.0 and (best is None or candidate.t < best.t):
            best = candidate
    return best


def prepare_computations(intersection: Intersection, ray: Ray) -> Computations:
    """Compute the shading inputs for an intersection.

    If the normal points away from the eye, the hit is on the inside surface;
    the normal is negated so it always faces the eye.

    Args:
        intersection: The intersection to shade.
        ray: The ray that produced it.

    Returns:
        The Computations record for shading.
    """
    point = ray.position(intersection.t)
    eyev = -ray.direction
    normalv = intersection.object.normal_at(point)

    inside = False
    if normalv.dot(eyev) < 0.0:
        inside = True
        normalv = -normalv

    return Computations(
        t=intersection.t,
        object=intersection.object,
        point=point,
        eyev=eyev,
        normalv=normalv,
        inside=inside,
    )
