"""Infinite plane primitive with single-sided intersection.

A plane is defined by a point on it and a unit normal N. Planes are
single-sided: a ray only hits the plane when it travels along N, i.e. when

    denom = dot(N, ray_direction) > PLANE_EPSILON

so the visible side is the one N points away from. The surface normal
reported for shading is -N, which faces back toward any ray that can hit
the plane. Rays approaching from the other side, or nearly parallel to the
plane, pass through.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raytracer.geometry.plane import Plane, hit_plane
    >>> # Floor at y = -4, visible from above
    >>> floor = Plane(point=ti.math.vec3(0, -4, 0), normal=ti.math.vec3(0, -1, 0))
    >>> # Use hit_plane within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Smallest dot(N, direction) counted as a hit; grazing rays miss
PLANE_EPSILON = 1e-6


@ti.dataclass
class Plane:
    """An infinite plane defined by a point and a unit normal.

    Attributes:
        point: Any point on the plane (vec3).
        normal: Unit normal (vec3). Rays travelling along it hit the plane.
    """

    point: vec3
    normal: vec3


@ti.func
def hit_plane(ray_origin: vec3, ray_direction: vec3, plane: Plane):
    """Test for ray-plane intersection.

    The distance along the ray is:
        t = dot(point - ray_origin, N) / dot(N, ray_direction)

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.
        plane: The plane to test intersection against.

    Returns:
        A tuple (hit, distance) where hit is 1 on intersection and 0 on a
        miss. distance is only meaningful when hit is 1.
    """
    denom = tm.dot(plane.normal, ray_direction)

    did_hit = 0
    distance = 0.0

    if denom > PLANE_EPSILON:
        t = tm.dot(plane.point - ray_origin, plane.normal) / denom
        if t >= 0.0:
            did_hit = 1
            distance = t

    return did_hit, distance


@ti.func
def plane_normal(plane: Plane) -> vec3:
    """Shading normal of a plane: the negated stored normal, on either side."""
    return -plane.normal
