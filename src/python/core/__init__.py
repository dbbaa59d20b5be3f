"""Core math and rendering module.

Components:
    tuples: Points, vectors and colors as 4-component tuples
    matrix: Matrices with cofactor-based inversion
    transforms: Translation, scaling, rotation, shearing and view transforms
    ray: Rays and ray transformation
    integrator: Taichi kernel renderer

The math types are plain Python and double precision. The integrator uploads
a world into Taichi fields and shades it in single precision.
"""

from .matrix import MATRIX_EPSILON, SINGULAR_EPSILON, Matrix, SingularMatrixError
from .ray import Ray
from .transforms import (
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
    view_transform,
)
from .tuples import BLACK, EPSILON, WHITE, Tuple, color, point, reflect, vector

# Note: integrator is NOT imported here because it allocates Taichi fields,
# which requires ti.init() first. Import src.python.core.integrator directly.

__all__ = [
    # Tuples
    "Tuple",
    "point",
    "vector",
    "color",
    "reflect",
    "BLACK",
    "WHITE",
    "EPSILON",
    # Matrices
    "Matrix",
    "SingularMatrixError",
    "MATRIX_EPSILON",
    "SINGULAR_EPSILON",
    # Transforms
    "translation",
    "scaling",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "shearing",
    "view_transform",
    # Rays
    "Ray",
]
