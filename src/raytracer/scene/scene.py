"""Immutable scene with the nearest-hit query.

A Scene bundles the camera parameters, the ordered element list and the
ordered light list. All of it is uploaded into Taichi fields owned by the
Scene instance when it is constructed and never written again, so one scene
can be rendered any number of times, and every pixel of a render reads it
without synchronization.

Element data uses a Structure-of-Arrays layout (one field per attribute),
indexed by element order. Order matters: the nearest-hit scan keeps the
first element on exact distance ties, and lights are applied in list order.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raytracer.geometry import SphereInfo
    >>> from raytracer.lights import DirectionalLight
    >>> from raytracer.materials import MaterialInfo
    >>> from raytracer.scene.scene import Scene
    >>> red = MaterialInfo(color=(255.0, 0.0, 0.0))
    >>> scene = Scene(
    ...     width=100, height=100, fov=60.0,
    ...     elements=[SphereInfo(center=(0, 0, -5), radius=1.0, material=red)],
    ...     lights=[DirectionalLight(direction=(0, -1, 0), intensity=1.0)],
    ... )
    >>> scene.nearest_hit((0, 0, 0), (0, 0, -1))
    (0, 4.0)
"""

import logging
from collections.abc import Sequence

import taichi as ti
import taichi.math as tm

from raytracer.camera.pinhole import PinholeCamera, primary_ray
from raytracer.core.ray import Ray, make_ray, normalize_tuple
from raytracer.geometry.element import Element, ElementInfo, GeometryKind, intersect_element
from raytracer.lights.light import Light, LightInfo
from raytracer.materials.material import Material
from raytracer.scene.intersection import (
    T_MAX,
    Intersection,
    make_intersection,
    make_miss_record,
)

logger = logging.getLogger(__name__)

vec3 = tm.vec3


@ti.data_oriented
class Scene:
    """Read-only scene: camera parameters, elements and lights.

    Attributes:
        camera: The validated camera parameters.
        elements: The element descriptions, in scan order.
        lights: The light descriptions, in shading order.
    """

    def __init__(
        self,
        width: int,
        height: int,
        fov: float,
        elements: Sequence[ElementInfo] = (),
        lights: Sequence[LightInfo] = (),
    ) -> None:
        """Build the scene and upload it to Taichi fields.

        Args:
            width: Image width in pixels (positive).
            height: Image height in pixels (positive).
            fov: Field of view in degrees, in (0, 180).
            elements: Ordered element descriptions.
            lights: Ordered light descriptions.

        Raises:
            ValueError: If the camera parameters are invalid.
        """
        self.camera = PinholeCamera(width=width, height=height, fov=fov)
        self.elements: tuple[ElementInfo, ...] = tuple(elements)
        self.lights: tuple[LightInfo, ...] = tuple(lights)

        # Plain attributes read at kernel compile time
        self._width = self.camera.width
        self._height = self.camera.height
        self._fov_scale = self.camera.fov_scale
        self._num_elements = len(self.elements)
        self._num_lights = len(self.lights)

        # Taichi fields cannot have zero size
        element_slots = max(self._num_elements, 1)
        light_slots = max(self._num_lights, 1)

        # Element storage: Structure of Arrays layout
        self._element_kinds = ti.field(dtype=ti.i32, shape=element_slots)
        self._element_positions = ti.Vector.field(3, dtype=ti.f32, shape=element_slots)
        self._element_radii = ti.field(dtype=ti.f32, shape=element_slots)
        self._element_normals = ti.Vector.field(3, dtype=ti.f32, shape=element_slots)

        # Per-element material storage
        self._material_colors = ti.Vector.field(3, dtype=ti.f32, shape=element_slots)
        self._material_albedos = ti.field(dtype=ti.f32, shape=element_slots)
        self._material_speculars = ti.field(dtype=ti.f32, shape=element_slots)
        self._material_reflectivities = ti.field(dtype=ti.f32, shape=element_slots)

        # Light storage
        self._light_kinds = ti.field(dtype=ti.i32, shape=light_slots)
        self._light_vectors = ti.Vector.field(3, dtype=ti.f32, shape=light_slots)
        self._light_intensities = ti.field(dtype=ti.f32, shape=light_slots)
        self._light_colors = ti.Vector.field(3, dtype=ti.f32, shape=light_slots)

        # Host query results
        self._query_hit = ti.field(dtype=ti.i32, shape=())
        self._query_distance = ti.field(dtype=ti.f32, shape=())
        self._query_index = ti.field(dtype=ti.i32, shape=())
        self._query_direction = ti.Vector.field(3, dtype=ti.f32, shape=())

        self._upload()

        logger.debug(
            "Built scene %dx%d (fov %.1f) with %d elements and %d lights",
            self._width,
            self._height,
            fov,
            self._num_elements,
            self._num_lights,
        )

    def _upload(self) -> None:
        """Copy the host descriptions into the Taichi fields."""
        for i, element in enumerate(self.elements):
            self._element_kinds[i] = int(element.kind)
            if element.kind == GeometryKind.SPHERE:
                self._element_positions[i] = element.center
                self._element_radii[i] = element.radius
                self._element_normals[i] = (0.0, 0.0, 0.0)
            elif element.kind == GeometryKind.PLANE:
                self._element_positions[i] = element.point
                self._element_radii[i] = 0.0
                self._element_normals[i] = element.normal

            material = element.material
            self._material_colors[i] = material.color
            self._material_albedos[i] = material.albedo
            self._material_speculars[i] = material.specular
            self._material_reflectivities[i] = material.reflectivity

        for i, light in enumerate(self.lights):
            self._light_kinds[i] = int(light.kind)
            self._light_vectors[i] = light.vector
            self._light_intensities[i] = light.intensity
            self._light_colors[i] = light.color

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def width(self) -> int:
        """Image width in pixels."""
        return self._width

    @property
    def height(self) -> int:
        """Image height in pixels."""
        return self._height

    @property
    def fov(self) -> float:
        """Field of view in degrees."""
        return self.camera.fov

    @property
    def num_elements(self) -> int:
        """Number of elements in the scene."""
        return self._num_elements

    @property
    def num_lights(self) -> int:
        """Number of lights in the scene."""
        return self._num_lights

    # =========================================================================
    # Taichi accessors
    # =========================================================================

    @ti.func
    def element(self, index: ti.i32) -> Element:
        """Get the element at an index."""
        return Element(
            kind=self._element_kinds[index],
            position=self._element_positions[index],
            radius=self._element_radii[index],
            normal=self._element_normals[index],
        )

    @ti.func
    def material(self, index: ti.i32) -> Material:
        """Get the material of the element at an index."""
        return Material(
            color=self._material_colors[index],
            albedo=self._material_albedos[index],
            specular=self._material_speculars[index],
            reflectivity=self._material_reflectivities[index],
        )

    @ti.func
    def light(self, index: ti.i32) -> Light:
        """Get the light at an index."""
        return Light(
            kind=self._light_kinds[index],
            vector=self._light_vectors[index],
            intensity=self._light_intensities[index],
            color=self._light_colors[index],
        )

    @ti.func
    def primary_ray(self, x: ti.i32, y: ti.i32) -> Ray:
        """Generate the camera ray through pixel (x, y)."""
        return primary_ray(x, y, self._width, self._height, self._fov_scale)

    @ti.func
    def trace(self, ray: Ray) -> Intersection:
        """Find the nearest element hit by a ray.

        Linear scan over all elements. The comparison is strict, so on an
        exact distance tie the element that comes first keeps the hit.

        Args:
            ray: The ray to trace (unit direction).

        Returns:
            The nearest Intersection, or a miss record.
        """
        nearest = T_MAX
        result = make_miss_record()

        for i in range(self._num_elements):
            did_hit, distance = intersect_element(ray.origin, ray.direction, self.element(i))
            if did_hit == 1 and distance < nearest:
                nearest = distance
                result = make_intersection(distance, i)

        return result

    # =========================================================================
    # Host queries
    # =========================================================================

    @ti.kernel
    def _trace_kernel(self, origin: vec3, direction: vec3):
        # Single-iteration outer loop keeps the scan serial
        for _ in range(1):
            rec = self.trace(make_ray(origin, direction))
            self._query_hit[None] = rec.hit
            self._query_distance[None] = rec.distance
            self._query_index[None] = rec.index

    @ti.kernel
    def _primary_direction_kernel(self, x: ti.i32, y: ti.i32):
        self._query_direction[None] = self.primary_ray(x, y).direction

    def nearest_hit(
        self,
        origin: tuple[float, float, float],
        direction: tuple[float, float, float],
    ) -> tuple[int, float] | None:
        """Run the nearest-hit query from Python.

        Args:
            origin: Ray origin.
            direction: Ray direction; normalized before tracing.

        Returns:
            (element_index, distance) of the nearest hit, or None on a miss.
        """
        unit = normalize_tuple(direction)
        self._trace_kernel(vec3(*origin), vec3(*unit))
        if self._query_hit[None] == 0:
            return None
        return int(self._query_index[None]), float(self._query_distance[None])

    def primary_direction(self, x: int, y: int) -> tuple[float, float, float]:
        """Get the unit direction of the primary ray through pixel (x, y)."""
        self._primary_direction_kernel(x, y)
        d = self._query_direction[None]
        return (float(d[0]), float(d[1]), float(d[2]))

    def __repr__(self) -> str:
        return (
            f"Scene(width={self.width}, height={self.height}, fov={self.fov}, "
            f"elements={self.num_elements}, lights={self.num_lights})"
        )
