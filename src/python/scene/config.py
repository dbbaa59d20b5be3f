"""Scene configuration and serialization.

Scenes can be described as plain dictionaries (and therefore JSON files)
and turned into a World plus an optional Camera:

    {
        "light": {"position": [-10, 10, -10], "intensity": [1, 1, 1]},
        "spheres": [
            {
                "material": {"color": [1, 0.2, 1], "diffuse": 0.7},
                "transforms": [
                    {"type": "scaling", "args": [0.5, 0.5, 0.5]},
                    {"type": "translation", "args": [1.5, 0.5, -0.5]}
                ]
            }
        ],
        "camera": {
            "hsize": 100, "vsize": 50, "field_of_view": 1.0472,
            "from": [0, 1.5, -5], "to": [0, 1, 0], "up": [0, 1, 0]
        }
    }

Transforms are listed in the order they are applied to the object: the first
entry acts first, so the list above scales the sphere and then moves it.

Example:
    >>> from src.python.scene.config import load_scene, world_from_config
    >>> config = load_scene("examples/scenes/three_spheres.json")
    >>> world = world_from_config(config)
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from src.python.camera.pinhole import Camera
from src.python.core.matrix import Matrix
from src.python.core.transforms import (
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
    view_transform,
)
from src.python.core.tuples import color, point, vector
from src.python.geometry.sphere import Sphere
from src.python.materials.phong import Material, PointLight
from src.python.scene.world import World

logger = logging.getLogger(__name__)

# Transform builders by config name, with their expected argument count
TRANSFORM_BUILDERS: dict[str, tuple[Callable[..., Matrix], int]] = {
    "translation": (translation, 3),
    "scaling": (scaling, 3),
    "rotation_x": (rotation_x, 1),
    "rotation_y": (rotation_y, 1),
    "rotation_z": (rotation_z, 1),
    "shearing": (shearing, 6),
}

_MATERIAL_DEFAULTS = Material()


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        light: Light configuration (position, intensity) or None.
        spheres: List of sphere configurations (material, transforms).
        camera: Camera configuration or None.
    """

    light: dict[str, Any] | None = None
    spheres: list[dict[str, Any]] = field(default_factory=list)
    camera: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SceneConfig:
        """Load a configuration from a dictionary.

        Args:
            data: Dictionary with optional 'light', 'spheres', 'camera' keys.
        """
        return cls(
            light=data.get("light"),
            spheres=list(data.get("spheres", [])),
            camera=data.get("camera"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Export the configuration to a dictionary (for JSON serialization)."""
        data: dict[str, Any] = {"spheres": self.spheres}
        if self.light is not None:
            data["light"] = self.light
        if self.camera is not None:
            data["camera"] = self.camera
        return data


def load_scene(filepath: str | Path) -> SceneConfig:
    """Read a scene configuration from a JSON file."""
    path = Path(filepath)
    config = SceneConfig.from_dict(json.loads(path.read_text(encoding="utf-8")))
    logger.debug("Loaded scene %s with %d spheres", path, len(config.spheres))
    return config


def save_scene(config: SceneConfig, filepath: str | Path) -> None:
    """Write a scene configuration to a JSON file."""
    Path(filepath).write_text(json.dumps(config.to_dict(), indent=2), encoding="utf-8")


# =============================================================================
# Config -> scene objects
# =============================================================================


def _triple(values: Any, name: str) -> tuple[float, float, float]:
    if values is None or len(values) != 3:
        raise ValueError(f"{name} needs 3 components, got {values!r}")
    return float(values[0]), float(values[1]), float(values[2])


def transform_from_config(entries: list[dict[str, Any]]) -> Matrix:
    """Compose a list of transform entries into one matrix.

    The first entry is applied first, so it ends up rightmost in the product.

    Raises:
        ValueError: If an entry has an unknown type or the wrong argument count.
    """
    result = Matrix.identity()
    for entry in entries:
        kind = entry.get("type", "")
        if kind not in TRANSFORM_BUILDERS:
            raise ValueError(f"Unknown transform type: {kind}")
        builder, arity = TRANSFORM_BUILDERS[kind]
        args = entry.get("args", [])
        if len(args) != arity:
            raise ValueError(f"Transform {kind} takes {arity} arguments, got {len(args)}")
        result = builder(*(float(a) for a in args)) * result
    return result


def material_from_config(data: dict[str, Any]) -> Material:
    """Build a Material, falling back to the defaults for missing keys."""
    defaults = _MATERIAL_DEFAULTS
    color_values = data.get("color")
    return Material(
        color=color(*_triple(color_values, "color")) if color_values is not None else defaults.color,
        ambient=float(data.get("ambient", defaults.ambient)),
        diffuse=float(data.get("diffuse", defaults.diffuse)),
        specular=float(data.get("specular", defaults.specular)),
        shininess=float(data.get("shininess", defaults.shininess)),
    )


def world_from_config(config: SceneConfig) -> World:
    """Build a World from a scene configuration.

    Raises:
        ValueError: If the configuration contains invalid data.
        SingularMatrixError: If a sphere transform cannot be inverted.
    """
    light = None
    if config.light is not None:
        light = PointLight(
            position=point(*_triple(config.light.get("position"), "light position")),
            intensity=color(*_triple(config.light.get("intensity", [1, 1, 1]), "light intensity")),
        )

    world = World(light=light)
    for sphere_config in config.spheres:
        world.add(
            Sphere(
                transform=transform_from_config(sphere_config.get("transforms", [])),
                material=material_from_config(sphere_config.get("material", {})),
            )
        )
    return world


def camera_from_config(
    config: SceneConfig,
    *,
    hsize: int | None = None,
    vsize: int | None = None,
) -> Camera:
    """Build a Camera from a scene configuration.

    Args:
        config: The scene configuration. Must include a camera section.
        hsize: Overrides the configured horizontal size.
        vsize: Overrides the configured vertical size.

    Raises:
        ValueError: If the configuration has no camera section.
    """
    if config.camera is None:
        raise ValueError("Scene configuration has no camera section")
    cam = config.camera
    transform = view_transform(
        point(*_triple(cam.get("from", [0, 0, 0]), "camera from")),
        point(*_triple(cam.get("to", [0, 0, -1]), "camera to")),
        vector(*_triple(cam.get("up", [0, 1, 0]), "camera up")),
    )
    return Camera(
        hsize if hsize is not None else int(cam.get("hsize", 100)),
        vsize if vsize is not None else int(cam.get("vsize", 100)),
        float(cam.get("field_of_view", 1.0472)),
        transform,
    )
