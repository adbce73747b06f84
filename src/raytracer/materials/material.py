"""Surface material for Whitted shading.

A material combines three shading terms:

    - Lambertian diffuse, scaled by albedo / pi
    - Phong specular with a shininess exponent (NO_SPECULAR disables it)
    - Mirror reflection, blended in by the reflectivity fraction

The local (diffuse + specular) color of a surface point is:

    color * (albedo / pi) * intensity

where ``intensity`` is the scalar sum of all light contributions at that
point. Colors are on the 0-255 scale.

Example:
    >>> from raytracer.materials.material import MaterialInfo
    >>> red = MaterialInfo(color=(255.0, 0.0, 0.0), albedo=1.0, specular=50.0, reflectivity=0.4)
"""

from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from raytracer.core.color import validate_color

# Type alias for 3D vectors
vec3 = tm.vec3

# Specular exponent sentinel meaning "no specular term"
NO_SPECULAR = -1.0


@ti.dataclass
class Material:
    """Material properties as seen by the shader.

    Attributes:
        color: Base color (RGB, 0-255 scale).
        albedo: Diffuse reflectance fraction in [0, 1].
        specular: Specular exponent, or NO_SPECULAR to disable highlights.
        reflectivity: Fraction of the final color taken from the mirror
            reflection, in [0, 1].
    """

    color: vec3
    albedo: ti.f32
    specular: ti.f32
    reflectivity: ti.f32


@ti.func
def has_specular(material: Material) -> ti.i32:
    """Return 1 if the material has a specular term, 0 otherwise."""
    result = 0
    if material.specular != NO_SPECULAR:
        result = 1
    return result


@dataclass(frozen=True)
class MaterialInfo:
    """Host-side description of a material.

    Attributes:
        color: Base color as (R, G, B), channels on the 0-255 scale.
        albedo: Diffuse reflectance fraction in [0, 1].
        specular: Specular exponent, or NO_SPECULAR (-1) to disable it.
        reflectivity: Mirror reflection fraction in [0, 1].

    Raises:
        ValueError: If any parameter is out of range.
    """

    color: tuple[float, float, float]
    albedo: float = 1.0
    specular: float = NO_SPECULAR
    reflectivity: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "color", validate_color(self.color))
        if self.albedo < 0.0 or self.albedo > 1.0:
            raise ValueError(f"Albedo {self.albedo} is outside [0, 1]")
        if self.reflectivity < 0.0 or self.reflectivity > 1.0:
            raise ValueError(f"Reflectivity {self.reflectivity} is outside [0, 1]")

    @property
    def has_specular(self) -> bool:
        """Whether the material has a specular term."""
        return self.specular != NO_SPECULAR

    def to_dict(self) -> dict[str, object]:
        """Export the material as a plain dictionary."""
        return {
            "color": list(self.color),
            "albedo": self.albedo,
            "specular": self.specular,
            "reflectivity": self.reflectivity,
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "MaterialInfo":
        """Create a material from a dictionary produced by to_dict()."""
        color_list = data.get("color", [255.0, 255.0, 255.0])
        return cls(
            color=(color_list[0], color_list[1], color_list[2]),
            albedo=data.get("albedo", 1.0),
            specular=data.get("specular", NO_SPECULAR),
            reflectivity=data.get("reflectivity", 0.0),
        )
