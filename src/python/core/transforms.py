"""Builders for 4x4 affine transformation matrices.

Transforms compose by matrix product and apply right to left: for
T = C * B * A, T * p applies A first, then B, then C.

Example:
    >>> import math
    >>> from src.python.core.transforms import rotation_x, scaling, translation
    >>> from src.python.core.tuples import point
    >>> t = translation(10, 5, 7) * scaling(5, 5, 5) * rotation_x(math.pi / 2)
    >>> moved = t * point(1, 0, 1)  # point(15, 0, 7)
"""

import math

from src.python.core.matrix import Matrix
from src.python.core.tuples import Tuple


def translation(x: float, y: float, z: float) -> Matrix:
    # fmt: off
    return Matrix(4, [
        1.0, 0.0, 0.0, x,
        0.0, 1.0, 0.0, y,
        0.0, 0.0, 1.0, z,
        0.0, 0.0, 0.0, 1.0,
    ])
    # fmt: on


def scaling(x: float, y: float, z: float) -> Matrix:
    # fmt: off
    return Matrix(4, [
        x, 0.0, 0.0, 0.0,
        0.0, y, 0.0, 0.0,
        0.0, 0.0, z, 0.0,
        0.0, 0.0, 0.0, 1.0,
    ])
    # fmt: on


def rotation_x(radians: float) -> Matrix:
    """Rotate around the x axis (left-handed)."""
    c, s = math.cos(radians), math.sin(radians)
    # fmt: off
    return Matrix(4, [
        1.0, 0.0, 0.0, 0.0,
        0.0, c, -s, 0.0,
        0.0, s, c, 0.0,
        0.0, 0.0, 0.0, 1.0,
    ])
    # fmt: on


def rotation_y(radians: float) -> Matrix:
    """Rotate around the y axis (left-handed)."""
    c, s = math.cos(radians), math.sin(radians)
    # fmt: off
    return Matrix(4, [
        c, 0.0, s, 0.0,
        0.0, 1.0, 0.0, 0.0,
        -s, 0.0, c, 0.0,
        0.0, 0.0, 0.0, 1.0,
    ])
    # fmt: on


def rotation_z(radians: float) -> Matrix:
    """Rotate around the z axis (left-handed)."""
    c, s = math.cos(radians), math.sin(radians)
    # fmt: off
    return Matrix(4, [
        c, -s, 0.0, 0.0,
        s, c, 0.0, 0.0,
        0.0, 0.0, 1.0, 0.0,
        0.0, 0.0, 0.0, 1.0,
    ])
    # fmt: on


def shearing(xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Matrix:
    """Shear each component in proportion to the other two.

    Args:
        xy: Moves x in proportion to y.
        xz: Moves x in proportion to z.
        yx: Moves y in proportion to x.
        yz: Moves y in proportion to z.
        zx: Moves z in proportion to x.
        zy: Moves z in proportion to y.
    """
    # fmt: off
    return Matrix(4, [
        1.0, xy, xz, 0.0,
        yx, 1.0, yz, 0.0,
        zx, zy, 1.0, 0.0,
        0.0, 0.0, 0.0, 1.0,
    ])
    # fmt: on


def view_transform(from_point: Tuple, to_point: Tuple, up: Tuple) -> Matrix:
    """Build the world-to-camera transform for an eye looking at a point.

    The camera basis is derived as:
        forward = normalize(to - from)
        left = forward x normalize(up)
        true_up = left x forward

    The orientation matrix is then composed with translation(-from), which
    moves the eye to the origin before orienting the scene.

    Args:
        from_point: The eye position.
        to_point: The point the eye looks at.
        up: Approximate up direction (need not be orthogonal to forward).

    Returns:
        The view transformation matrix.
    """
    forward = (to_point - from_point).normalize()
    left = forward.cross(up.normalize())
    true_up = left.cross(forward)
    # fmt: off
    orientation = Matrix(4, [
        left.x, left.y, left.z, 0.0,
        true_up.x, true_up.y, true_up.z, 0.0,
        -forward.x, -forward.y, -forward.z, 0.0,
        0.0, 0.0, 0.0, 1.0,
    ])
    # fmt: on
    return orientation * translation(-from_point.x, -from_point.y, -from_point.z)
