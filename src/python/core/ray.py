"""Ray data structure for the Python-scope tracing pipeline.

A ray is an origin point plus a direction vector. Transforming a ray maps both
through a matrix; directions ignore translation only because their w=0 zeroes
the translation column in the homogeneous product.

Example:
    >>> from src.python.core.ray import Ray
    >>> from src.python.core.tuples import point, vector
    >>> ray = Ray(origin=point(2.0, 3.0, 4.0), direction=vector(1.0, 0.0, 0.0))
    >>> ray.position(2.5)
    Tuple(x=4.5, y=3.0, z=4.0, w=1.0)
"""

from dataclasses import dataclass

from src.python.core.matrix import Matrix
from src.python.core.tuples import Tuple


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (w=1).
        direction: The direction vector of the ray (w=0). Camera rays are
            normalized; rays transformed into object space generally are not.
    """

    origin: Tuple
    direction: Tuple

    def position(self, t: float) -> Tuple:
        """Compute the point along the ray at parameter t.

        Args:
            t: The parameter value. Negative values lie behind the origin.

        Returns:
            The point origin + direction * t.
        """
        return self.origin + self.direction * t

    def transform(self, matrix: Matrix) -> "Ray":
        """Map the origin and direction through a 4x4 matrix."""
        return Ray(
            origin=matrix.tuple_prod(self.origin),
            direction=matrix.tuple_prod(self.direction),
        )
