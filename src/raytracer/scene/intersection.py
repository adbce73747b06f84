"""Scene-level intersection record.

An Intersection is produced fresh by every nearest-hit query and describes
the closest element a ray hits: its distance along the ray and its index in
the scene's ordered element list. The index is the kernel-side reference to
the hit geometry; the scene resolves it to the element's shape and material.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raytracer.scene.intersection import Intersection, make_miss_record
    >>> # Use within a Taichi kernel:
    >>> # rec = scene.trace(ray)
    >>> # if rec.hit == 1: ...
"""

import taichi as ti

# Hits at or beyond this distance are ignored
T_MAX = 1e10


@ti.dataclass
class Intersection:
    """Record of the nearest ray-scene intersection.

    Attributes:
        hit: Whether the ray intersected any element (1 if hit, 0 if miss).
        distance: Distance along the ray to the hit point.
            Only valid if hit == 1.
        index: Index of the hit element in the scene's element list.
            -1 for a miss.
    """

    hit: ti.i32
    distance: ti.f32
    index: ti.i32


@ti.func
def make_intersection(distance: ti.f32, index: ti.i32) -> Intersection:
    """Create an Intersection for a hit."""
    return Intersection(hit=1, distance=distance, index=index)


@ti.func
def make_miss_record() -> Intersection:
    """Create an Intersection indicating no hit."""
    return Intersection(hit=0, distance=0.0, index=-1)
