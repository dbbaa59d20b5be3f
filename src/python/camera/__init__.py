"""Camera module for primary ray generation.

Components:
    pinhole: Pinhole camera and the pure Python reference renderer

Pixel (0, 0) is the top-left corner of the image; rays pass through pixel
centers.
"""

from .pinhole import Camera, render

__all__ = [
    "Camera",
    "render",
]
