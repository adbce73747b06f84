"""Tagged scene element unifying the geometry variants.

The set of shapes is closed: every element carries a GeometryKind tag and
the Taichi functions below branch on it exhaustively. Adding a shape means
adding a tag, a host-side description, and a branch in each dispatcher.

Element fields are shared between variants:

    kind      GeometryKind tag
    position  sphere center, or a point on the plane
    radius    sphere radius (unused for planes)
    normal    unit plane normal (unused for spheres)

Example:
    >>> from raytracer.geometry.element import PlaneInfo, SphereInfo
    >>> from raytracer.materials import MaterialInfo
    >>> red = MaterialInfo(color=(255.0, 0.0, 0.0))
    >>> ball = SphereInfo(center=(0.0, 0.0, -5.0), radius=1.0, material=red)
    >>> floor = PlaneInfo(point=(0.0, -4.0, 0.0), normal=(0.0, -1.0, 0.0), material=red)
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Union

import taichi as ti
import taichi.math as tm

from raytracer.core.ray import normalize_tuple
from raytracer.geometry.plane import Plane, hit_plane, plane_normal
from raytracer.geometry.sphere import Sphere, hit_sphere, sphere_normal
from raytracer.materials.material import MaterialInfo

vec3 = tm.vec3


class GeometryKind(IntEnum):
    """Enumeration of supported shapes."""

    SPHERE = 0
    PLANE = 1


@ti.dataclass
class Element:
    """A scene element as seen by Taichi kernels.

    Attributes:
        kind: The GeometryKind tag.
        position: Sphere center or plane point.
        radius: Sphere radius.
        normal: Unit plane normal.
    """

    kind: ti.i32
    position: vec3
    radius: ti.f32
    normal: vec3


@ti.func
def intersect_element(ray_origin: vec3, ray_direction: vec3, element: Element):
    """Dispatch ray intersection on the element's kind.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.
        element: The element to test.

    Returns:
        A tuple (hit, distance) as returned by the shape's intersection test.
    """
    did_hit = 0
    distance = 0.0

    if element.kind == int(GeometryKind.SPHERE):
        sphere = Sphere(center=element.position, radius=element.radius)
        did_hit, distance = hit_sphere(ray_origin, ray_direction, sphere)
    elif element.kind == int(GeometryKind.PLANE):
        plane = Plane(point=element.position, normal=element.normal)
        did_hit, distance = hit_plane(ray_origin, ray_direction, plane)

    return did_hit, distance


@ti.func
def element_normal(element: Element, point: vec3) -> vec3:
    """Dispatch the shading normal at a surface point on the element's kind."""
    normal = vec3(0.0, 0.0, 0.0)

    if element.kind == int(GeometryKind.SPHERE):
        normal = sphere_normal(Sphere(center=element.position, radius=element.radius), point)
    elif element.kind == int(GeometryKind.PLANE):
        normal = plane_normal(Plane(point=element.position, normal=element.normal))

    return normal


# =============================================================================
# Host-side descriptions
# =============================================================================


@dataclass
class SphereInfo:
    """Description of a sphere in the scene.

    Attributes:
        center: The center of the sphere.
        radius: The radius of the sphere (must be positive).
        material: The sphere's material.
    """

    center: tuple[float, float, float]
    radius: float
    material: MaterialInfo
    kind: GeometryKind = field(default=GeometryKind.SPHERE, init=False)

    def __post_init__(self) -> None:
        if self.radius <= 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")
        self.center = (float(self.center[0]), float(self.center[1]), float(self.center[2]))

    def to_dict(self) -> dict[str, Any]:
        """Export the sphere as a plain dictionary."""
        return {
            "type": "sphere",
            "center": list(self.center),
            "radius": self.radius,
            "material": self.material.to_dict(),
        }


@dataclass
class PlaneInfo:
    """Description of a single-sided plane in the scene.

    Attributes:
        point: Any point on the plane.
        normal: Plane normal; normalized on construction. Rays travelling
            along it hit the plane.
        material: The plane's material.
    """

    point: tuple[float, float, float]
    normal: tuple[float, float, float]
    material: MaterialInfo
    kind: GeometryKind = field(default=GeometryKind.PLANE, init=False)

    def __post_init__(self) -> None:
        self.point = (float(self.point[0]), float(self.point[1]), float(self.point[2]))
        self.normal = normalize_tuple(self.normal)

    def to_dict(self) -> dict[str, Any]:
        """Export the plane as a plain dictionary."""
        return {
            "type": "plane",
            "point": list(self.point),
            "normal": list(self.normal),
            "material": self.material.to_dict(),
        }


ElementInfo = Union[SphereInfo, PlaneInfo]


def element_from_dict(data: dict[str, Any]) -> ElementInfo:
    """Create an element description from a dictionary produced by to_dict().

    Raises:
        ValueError: If the element type is unknown.
    """
    element_type = data.get("type", "").lower()
    material = MaterialInfo.from_dict(data.get("material", {}))
    if element_type == "sphere":
        center_list = data.get("center", [0.0, 0.0, 0.0])
        return SphereInfo(
            center=(center_list[0], center_list[1], center_list[2]),
            radius=data.get("radius", 1.0),
            material=material,
        )
    if element_type == "plane":
        point_list = data.get("point", [0.0, 0.0, 0.0])
        normal_list = data.get("normal", [0.0, -1.0, 0.0])
        return PlaneInfo(
            point=(point_list[0], point_list[1], point_list[2]),
            normal=(normal_list[0], normal_list[1], normal_list[2]),
            material=material,
        )
    raise ValueError(f"Unknown element type: {element_type}")
