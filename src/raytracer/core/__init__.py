"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    ray: Ray data structure, reflection and surface offset
    color: Channel clamping and 8-bit conversion
    config: Render configuration (depth, bias, background, shading policies)
    integrator: Whitted shading (local lighting, shadows, mirror reflection)
    renderer: Per-pixel render loop and output buffer

All compute-intensive operations use Taichi kernels.
"""

from .color import MAX_CHANNEL, clamp_color, to_rgb8, validate_color
from .config import ReflectionMiss, RenderConfig
from .ray import (
    Ray,
    make_ray,
    normalize_tuple,
    offset_origin,
    ray_at,
    reflect,
    vec3,
)

# Note: integrator and renderer are NOT imported here to avoid circular imports
# (they depend on the scene package, which depends on this one).
# Import directly from raytracer.core.integrator or raytracer.core.renderer.

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "normalize_tuple",
    "reflect",
    "offset_origin",
    "MAX_CHANNEL",
    "clamp_color",
    "to_rgb8",
    "validate_color",
    "ReflectionMiss",
    "RenderConfig",
]
