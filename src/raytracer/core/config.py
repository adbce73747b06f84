"""Render configuration.

All tunable render values live here and are passed explicitly into the
render kernel; nothing in the shading path reads module-level mutable state.
"""

from dataclasses import dataclass
from enum import IntEnum

from raytracer.core.color import MAX_CHANNEL


class ReflectionMiss(IntEnum):
    """What a reflective surface shows when its reflection ray escapes."""

    # Use the local shading result alone (no reflected term)
    LOCAL_ONLY = 0
    # Blend the background color in as the reflected term
    BLEND_BACKGROUND = 1


@dataclass(frozen=True)
class RenderConfig:
    """Configuration for a render.

    Attributes:
        max_depth: Reflection depth budget for every primary hit. 0 disables
            reflections.
        bias: Offset along the surface normal for shadow and reflection ray
            origins.
        background: Color (0-255 scale) of pixels whose primary ray hits
            nothing.
        specular_ignores_shadow: If True, specular highlights are added even
            when the light is occluded at the shaded point.
        reflection_miss: Policy for reflection rays that hit nothing.
    """

    max_depth: int = 3
    bias: float = 1e-4
    background: tuple[float, float, float] = (100.0, 149.0, 237.0)
    specular_ignores_shadow: bool = True
    reflection_miss: ReflectionMiss = ReflectionMiss.LOCAL_ONLY

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.bias <= 0.0:
            raise ValueError(f"bias must be positive, got {self.bias}")
        if len(self.background) != 3:
            raise ValueError(f"background must have 3 channels, got {len(self.background)}")
        for i, component in enumerate(self.background):
            if component < 0.0 or component > MAX_CHANNEL:
                raise ValueError(
                    f"Background channel {i} = {component} is outside [0, {MAX_CHANNEL:g}]"
                )
        # Accept plain ints for the policy
        object.__setattr__(self, "reflection_miss", ReflectionMiss(self.reflection_miss))
