"""Ray data structure and vector utilities for the Whitted ray tracer.

This module provides the fundamental Ray dataclass along with point
evaluation, mirror reflection and the surface offset used by secondary rays.
All operations are designed to work within Taichi kernels.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> origin = ti.math.vec3(0.0, 0.0, 0.0)
    >>> direction = ti.math.vec3(0.0, 0.0, -1.0)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> point = ray_at(ray, 5.0)  # Point 5 units along the ray
"""

import math

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction of the ray (vec3). Expected to be unit
            length; intersection distances are measured in units of it.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction."""
    return Ray(origin=origin, direction=direction)


@ti.func
def reflect(v: vec3, normal: vec3) -> vec3:
    """Mirror a vector about a normal.

    Both ``v`` and the result point away from the surface, which is the
    convention for to-light and to-viewer vectors:

        R = 2 * N * (N . V) - V

    Args:
        v: The vector to mirror, pointing away from the surface.
        normal: The unit surface normal.

    Returns:
        The mirrored vector (unit length if both inputs are unit length).
    """
    return 2.0 * tm.dot(normal, v) * normal - v


@ti.func
def offset_origin(point: vec3, normal: vec3, bias: ti.f32) -> vec3:
    """Nudge a surface point off the surface along its normal.

    Secondary rays start from the offset point so they do not re-hit the
    surface they leave.

    Args:
        point: The intersection point.
        normal: The unit surface normal.
        bias: Offset distance (small and positive).

    Returns:
        point + bias * normal.
    """
    return point + bias * normal


# =============================================================================
# Python-side helpers
# =============================================================================


def normalize_tuple(v: tuple[float, float, float]) -> tuple[float, float, float]:
    """Normalize a host-side 3-tuple.

    Args:
        v: The vector to normalize.

    Returns:
        The unit vector in the same direction.

    Raises:
        ValueError: If the vector has zero length.
    """
    length = math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])
    if length < 1e-12:
        raise ValueError(f"Cannot normalize zero-length vector {v}")
    return (v[0] / length, v[1] / length, v[2] / length)
