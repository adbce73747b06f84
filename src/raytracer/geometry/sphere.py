"""Sphere primitive with geometric ray-sphere intersection.

This module provides a Sphere dataclass and the intersection routine used
by the scene's nearest-hit query. The intersection uses the geometric
(projection) formulation rather than the quadratic formula:

1. Project the center-to-origin vector L onto the ray direction (t_proj)
2. The squared perpendicular distance from the center to the ray line is
   |L|^2 - t_proj^2; if it exceeds radius^2 the ray misses
3. Otherwise the half-chord h = sqrt(radius^2 - perp^2) gives the roots
   t_proj - h and t_proj + h

The ray direction must be unit length for the projection to be a distance.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raytracer.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, -5), radius=1.0)
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
    """

    center: vec3
    radius: ti.f32


@ti.func
def hit_sphere(ray_origin: vec3, ray_direction: vec3, sphere: Sphere):
    """Test for ray-sphere intersection.

    Returns the smaller nonnegative root. A ray starting inside the sphere
    therefore hits the far side, and a sphere entirely behind the ray origin
    is a miss.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.
        sphere: The sphere to test intersection against.

    Returns:
        A tuple (hit, distance) where hit is 1 on intersection and 0 on a
        miss. distance is only meaningful when hit is 1.
    """
    # Vector from ray origin to sphere center
    line_to_center = sphere.center - ray_origin
    t_proj = tm.dot(line_to_center, ray_direction)
    perp_squared = tm.dot(line_to_center, line_to_center) - t_proj * t_proj
    radius_squared = sphere.radius * sphere.radius

    # Initialize results (Taichi requires outer-scope declaration)
    did_hit = 0
    distance = 0.0

    if perp_squared <= radius_squared:
        half_chord = ti.sqrt(radius_squared - perp_squared)
        t0 = t_proj - half_chord
        t1 = t_proj + half_chord

        if t0 >= 0.0:
            did_hit = 1
            distance = t0
        elif t1 >= 0.0:
            did_hit = 1
            distance = t1

    return did_hit, distance


@ti.func
def sphere_normal(sphere: Sphere, point: vec3) -> vec3:
    """Compute the outward unit normal of a sphere at a surface point."""
    return tm.normalize(point - sphere.center)
