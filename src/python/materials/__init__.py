"""Materials module.

Components:
    phong: Phong material, point light and the lighting function

Colors are unclamped; only output (PPM, PNG, preview) clamps to [0, 1].
"""

from .phong import Material, PointLight, lighting

__all__ = [
    "Material",
    "PointLight",
    "lighting",
]
