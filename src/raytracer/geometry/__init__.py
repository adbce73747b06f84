"""Geometry module for shape primitives.

This module provides geometric primitives and intersection algorithms:

Components:
    sphere: Sphere primitive with geometric ray-sphere intersection
    plane: Single-sided infinite plane
    element: Tagged element dispatching over the closed set of shapes

All intersection routines are implemented as Taichi functions (@ti.func).
Ray-object intersection follows the pattern:
    hit, distance = hit_shape(ray_origin, ray_direction, shape)
"""

from .element import (
    Element,
    ElementInfo,
    GeometryKind,
    PlaneInfo,
    SphereInfo,
    element_from_dict,
    element_normal,
    intersect_element,
)
from .plane import PLANE_EPSILON, Plane, hit_plane, plane_normal
from .sphere import Sphere, hit_sphere, sphere_normal

__all__ = [
    "Sphere",
    "hit_sphere",
    "sphere_normal",
    "Plane",
    "hit_plane",
    "plane_normal",
    "PLANE_EPSILON",
    "Element",
    "ElementInfo",
    "GeometryKind",
    "SphereInfo",
    "PlaneInfo",
    "element_from_dict",
    "element_normal",
    "intersect_element",
]
