"""Geometry module for shape primitives.

Components:
    sphere: Unit sphere at the origin, placed in the world by a transform

Spheres intersect rays in object space (the ray is transformed by the
sphere's inverse transform) and report surface normals in world space.
"""

from .sphere import ORIGIN, Sphere

__all__ = [
    "Sphere",
    "ORIGIN",
]
