"""Python implementation of the Phong sphere raytracer.

This package renders worlds of transformed spheres lit by a single point
light, shaded with the Phong reflection model. A pure Python renderer serves
as the reference, and a Taichi kernel renderer evaluates the same pipeline
from scene data uploaded to fields.

Subpackages:
    core: Tuples, matrices, transforms, rays and the Taichi renderer
    geometry: The unit sphere primitive
    materials: Phong material and point light
    scene: Intersections, the world and scene configuration files
    camera: Pinhole camera and the reference renderer
    preview: Canvas, PPM/PNG export and Matplotlib preview
"""

__version__ = "0.1.0"
