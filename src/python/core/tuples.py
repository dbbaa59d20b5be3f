"""Homogeneous 4-component tuples for points, vectors and colors.

A single Tuple type carries points (w=1), vectors (w=0) and colors (r, g, b
with an unused w=0 slot). Arithmetic operates on all four components, so the
w bookkeeping does the type algebra for free:

    point - point   = vector   (1 - 1 = 0)
    point + vector  = point    (1 + 0 = 1)
    vector + vector = vector   (0 + 0 = 0)

Example:
    >>> from src.python.core.tuples import point, vector
    >>> p = point(3.0, 2.0, 1.0)
    >>> v = vector(5.0, 6.0, 7.0)
    >>> p - v
    Tuple(x=-2.0, y=-4.0, z=-6.0, w=1.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# Component-wise equality tolerance
EPSILON = 1e-5


@dataclass(frozen=True, eq=False)
class Tuple:
    """A homogeneous (x, y, z, w) tuple.

    Attributes:
        x: First component (red for colors).
        y: Second component (green for colors).
        z: Third component (blue for colors).
        w: Homogeneous coordinate: 1.0 for points, 0.0 for vectors and colors.
    """

    x: float
    y: float
    z: float
    w: float

    # =========================================================================
    # Kind predicates and color accessors
    # =========================================================================

    def is_point(self) -> bool:
        """Check whether this tuple is a point (w == 1)."""
        return abs(self.w - 1.0) < EPSILON

    def is_vector(self) -> bool:
        """Check whether this tuple is a vector (w == 0)."""
        return abs(self.w) < EPSILON

    @property
    def red(self) -> float:
        return self.x

    @property
    def green(self) -> float:
        return self.y

    @property
    def blue(self) -> float:
        return self.z

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tuple):
            return NotImplemented
        return (
            abs(self.x - other.x) < EPSILON
            and abs(self.y - other.y) < EPSILON
            and abs(self.z - other.z) < EPSILON
            and abs(self.w - other.w) < EPSILON
        )

    def __add__(self, other: Tuple) -> Tuple:
        return Tuple(self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w)

    def __sub__(self, other: Tuple) -> Tuple:
        return Tuple(self.x - other.x, self.y - other.y, self.z - other.z, self.w - other.w)

    def __neg__(self) -> Tuple:
        return Tuple(-self.x, -self.y, -self.z, -self.w)

    def __mul__(self, scalar: float) -> Tuple:
        return Tuple(self.x * scalar, self.y * scalar, self.z * scalar, self.w * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Tuple:
        return Tuple(self.x / scalar, self.y / scalar, self.z / scalar, self.w / scalar)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    # =========================================================================
    # Vector operations
    # =========================================================================

    def magnitude(self) -> float:
        """Compute the Euclidean length of the x, y, z part.

        The w component does not contribute.
        """
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> Tuple:
        """Scale a vector to unit length.

        All four components are divided by the magnitude, which leaves w at 0
        for vectors. Points are rejected because dividing their w would turn
        them into something that is neither a point nor a vector.

        Returns:
            A unit vector in the same direction.

        Raises:
            ValueError: If this tuple is not a vector or has zero length.
        """
        if not self.is_vector():
            raise ValueError(f"Only vectors can be normalized, got w={self.w}")
        length = self.magnitude()
        if length == 0.0:
            raise ValueError("Cannot normalize a zero-length vector")
        return self / length

    def dot(self, other: Tuple) -> float:
        """Dot product over all four components."""
        return self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w

    def cross(self, other: Tuple) -> Tuple:
        """Cross product of the x, y, z parts. Always returns a vector."""
        return vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def hadamard(self, other: Tuple) -> Tuple:
        """Elementwise (Hadamard) product, used to blend colors."""
        return Tuple(self.x * other.x, self.y * other.y, self.z * other.z, self.w * other.w)


# =============================================================================
# Constructors
# =============================================================================


def point(x: float, y: float, z: float) -> Tuple:
    """Create a point (w=1)."""
    return Tuple(float(x), float(y), float(z), 1.0)


def vector(x: float, y: float, z: float) -> Tuple:
    """Create a vector (w=0)."""
    return Tuple(float(x), float(y), float(z), 0.0)


def color(red: float, green: float, blue: float) -> Tuple:
    """Create a color. The fourth slot is unused and fixed at 0."""
    return Tuple(float(red), float(green), float(blue), 0.0)


BLACK = color(0.0, 0.0, 0.0)
WHITE = color(1.0, 1.0, 1.0)


def reflect(incident: Tuple, normal: Tuple) -> Tuple:
    """Reflect an incident vector about a normal.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal (should be normalized).

    Returns:
        The reflected direction vector: incident - normal * 2 * (incident . normal).
    """
    return incident - normal * 2.0 * incident.dot(normal)
