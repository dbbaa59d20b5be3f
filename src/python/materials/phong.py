"""Phong material and point light illumination.

This module implements the Phong local illumination model for a single point
light without shadows. The reflected color is the sum of three terms:

    ambient  = effective * ambient_coefficient
    diffuse  = effective * diffuse_coefficient * (light . normal)
    specular = intensity * specular_coefficient * (reflect . eye)^shininess

where effective = material.color (*) light.intensity (Hadamard product).
Diffuse and specular vanish when the light is behind the surface; specular
also vanishes when the reflection points away from the eye. The result is not
clamped; clamping belongs to whatever writes the image.

Example:
    >>> from src.python.core.tuples import color, point, vector
    >>> from src.python.materials.phong import Material, PointLight, lighting
    >>> light = PointLight(point(0.0, 0.0, -10.0), color(1.0, 1.0, 1.0))
    >>> eyev = normalv = vector(0.0, 0.0, -1.0)
    >>> result = lighting(Material(), light, point(0.0, 0.0, 0.0), eyev, normalv)
    >>> # result == color(1.9, 1.9, 1.9)
"""

from dataclasses import dataclass, field

from src.python.core.tuples import BLACK, Tuple, color, reflect


@dataclass(frozen=True)
class PointLight:
    """A point light source with no size.

    Attributes:
        position: The light position in world space (a point).
        intensity: The light color and brightness.
    """

    position: Tuple
    intensity: Tuple


@dataclass(frozen=True)
class Material:
    """Phong surface material.

    Attributes:
        color: The surface color.
        ambient: Fraction of light reflected from ambient sources.
        diffuse: Fraction of light reflected diffusely (matte).
        specular: Strength of the specular highlight.
        shininess: Specular exponent. Larger values give smaller, tighter
            highlights (10 is very broad, 200 is very small).
    """

    color: Tuple = field(default_factory=lambda: color(1.0, 1.0, 1.0))
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0

    def __post_init__(self) -> None:
        for name in ("ambient", "diffuse", "specular", "shininess"):
            value = getattr(self, name)
            if value < 0.0:
                raise ValueError(f"Material {name} = {value} is negative.")

    def lighting(self, light: PointLight, point: Tuple, eyev: Tuple, normalv: Tuple) -> Tuple:
        """Shade a surface point with this material. See lighting()."""
        return lighting(self, light, point, eyev, normalv)


def lighting(
    material: Material,
    light: PointLight,
    point: Tuple,
    eyev: Tuple,
    normalv: Tuple,
) -> Tuple:
    """Evaluate the Phong reflection model at a surface point.

    Args:
        material: The surface material.
        light: The single point light illuminating the scene.
        point: The surface point being shaded.
        eyev: Unit vector from the point toward the eye.
        normalv: Unit surface normal at the point, facing the eye.

    Returns:
        The reflected color (unclamped).
    """
    effective_color = material.color.hadamard(light.intensity)
    lightv = (light.position - point).normalize()
    ambient = effective_color * material.ambient

    # Cosine of the angle between the light vector and the normal.
    # Negative means the light is on the other side of the surface.
    light_dot_normal = lightv.dot(normalv)
    if light_dot_normal < 0.0:
        # Diffuse and specular are both black
        return ambient

    diffuse = effective_color * material.diffuse * light_dot_normal

    reflectv = reflect(-lightv, normalv)
    reflect_dot_eye = reflectv.dot(eyev)
    if reflect_dot_eye <= 0.0:
        specular = BLACK
    else:
        factor = reflect_dot_eye**material.shininess
        specular = light.intensity * material.specular * factor

    return ambient + diffuse + specular
