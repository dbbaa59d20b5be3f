"""Scene module for intersections, worlds and scene files.

Components:
    intersection: Intersection records, hit selection and shading precomputation
    world: Spheres plus a point light, with the per-ray shading pipeline
    config: Dictionary/JSON scene descriptions

The per-ray pipeline is:
    World.intersect -> hit -> prepare_computations -> World.shade_hit
"""

from .config import (
    TRANSFORM_BUILDERS,
    SceneConfig,
    camera_from_config,
    load_scene,
    material_from_config,
    save_scene,
    transform_from_config,
    world_from_config,
)
from .intersection import (
    Computations,
    Intersection,
    hit,
    intersections,
    prepare_computations,
)
from .world import World

__all__ = [
    # Intersection module
    "Intersection",
    "Computations",
    "intersections",
    "hit",
    "prepare_computations",
    # World module
    "World",
    # Config module
    "SceneConfig",
    "TRANSFORM_BUILDERS",
    "load_scene",
    "save_scene",
    "transform_from_config",
    "material_from_config",
    "world_from_config",
    "camera_from_config",
]
