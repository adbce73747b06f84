"""Light source variants.

Three kinds of light are supported, differing in positional dependence:

    AMBIENT      constant intensity everywhere, no direction, never shadowed
    POINT        emits from a position; intensity falls off as 1 / distance^2
    DIRECTIONAL  fixed direction toward the light, no falloff

Every light carries a color which multiplies the surface color during
shading; it defaults to white.

Kernels see lights as the tagged Light struct. ``vector`` holds the
position of a point light and the unit direction toward a directional
light.

Example:
    >>> from raytracer.lights.light import AmbientLight, DirectionalLight, PointLight
    >>> lights = [
    ...     AmbientLight(intensity=0.1),
    ...     DirectionalLight(direction=(0.0, -1.0, -2.0), intensity=1.2),
    ...     PointLight(position=(-2.0, -1.0, -4.5), intensity=9.3),
    ... ]
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Union

import taichi as ti
import taichi.math as tm

from raytracer.core.color import validate_color
from raytracer.core.ray import normalize_tuple

vec3 = tm.vec3

WHITE = (1.0, 1.0, 1.0)


class LightKind(IntEnum):
    """Enumeration of supported light kinds."""

    AMBIENT = 0
    POINT = 1
    DIRECTIONAL = 2


@ti.dataclass
class Light:
    """A light as seen by Taichi kernels.

    Attributes:
        kind: The LightKind tag.
        vector: Position (point lights) or unit direction toward the light
            (directional lights). Unused for ambient lights.
        intensity: Scalar intensity.
        color: Light color multiplying the surface color.
    """

    kind: ti.i32
    vector: vec3
    intensity: ti.f32
    color: vec3


@dataclass
class AmbientLight:
    """Uniform light reaching every surface point."""

    intensity: float
    color: tuple[float, float, float] = WHITE
    kind: LightKind = field(default=LightKind.AMBIENT, init=False)

    def __post_init__(self) -> None:
        self.color = validate_color(self.color, "light color")

    @property
    def vector(self) -> tuple[float, float, float]:
        return (0.0, 0.0, 0.0)


@dataclass
class PointLight:
    """Light emitted from a position with inverse-square falloff."""

    position: tuple[float, float, float]
    intensity: float
    color: tuple[float, float, float] = WHITE
    kind: LightKind = field(default=LightKind.POINT, init=False)

    def __post_init__(self) -> None:
        self.position = (float(self.position[0]), float(self.position[1]), float(self.position[2]))
        self.color = validate_color(self.color, "light color")

    @property
    def vector(self) -> tuple[float, float, float]:
        return self.position


@dataclass
class DirectionalLight:
    """Light arriving along a fixed direction with no falloff.

    ``direction`` points from surfaces toward the light and is normalized on
    construction.
    """

    direction: tuple[float, float, float]
    intensity: float
    color: tuple[float, float, float] = WHITE
    kind: LightKind = field(default=LightKind.DIRECTIONAL, init=False)

    def __post_init__(self) -> None:
        self.direction = normalize_tuple(self.direction)
        self.color = validate_color(self.color, "light color")

    @property
    def vector(self) -> tuple[float, float, float]:
        return self.direction


LightInfo = Union[AmbientLight, PointLight, DirectionalLight]


def light_to_dict(light: LightInfo) -> dict[str, Any]:
    """Export a light description as a plain dictionary."""
    data: dict[str, Any] = {
        "type": light.kind.name.lower(),
        "intensity": light.intensity,
        "color": list(light.color),
    }
    if light.kind == LightKind.POINT:
        data["position"] = list(light.vector)
    elif light.kind == LightKind.DIRECTIONAL:
        data["direction"] = list(light.vector)
    return data


def light_from_dict(data: dict[str, Any]) -> LightInfo:
    """Create a light description from a dictionary produced by light_to_dict().

    Raises:
        ValueError: If the light type is unknown.
    """
    light_type = data.get("type", "").lower()
    intensity = data.get("intensity", 1.0)
    color_list = data.get("color", list(WHITE))
    color = (color_list[0], color_list[1], color_list[2])

    if light_type == "ambient":
        return AmbientLight(intensity=intensity, color=color)
    if light_type == "point":
        position_list = data.get("position", [0.0, 0.0, 0.0])
        return PointLight(
            position=(position_list[0], position_list[1], position_list[2]),
            intensity=intensity,
            color=color,
        )
    if light_type == "directional":
        direction_list = data.get("direction", [0.0, -1.0, 0.0])
        return DirectionalLight(
            direction=(direction_list[0], direction_list[1], direction_list[2]),
            intensity=intensity,
            color=color,
        )
    raise ValueError(f"Unknown light type: {light_type}")
