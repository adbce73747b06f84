"""Materials module for surface appearance.

Components:
    material: Diffuse + specular + mirror material, its Taichi struct and
        its validated host-side description

Each material provides:
    - color: base color on the 0-255 scale
    - albedo: diffuse reflectance fraction
    - specular: Phong exponent (NO_SPECULAR disables the highlight)
    - reflectivity: mirror reflection fraction
"""

from .material import NO_SPECULAR, Material, MaterialInfo, has_specular

__all__ = [
    "Material",
    "MaterialInfo",
    "NO_SPECULAR",
    "has_specular",
]
