"""Scene builder for assembling elements and lights.

A Scene is immutable once built, so scenes are assembled with a
SceneManager first: elements and lights are appended in order, and build()
uploads everything into a new Scene. The manager also converts scenes to
and from plain dictionaries for JSON storage.

Order is preserved everywhere. Element order decides which element wins an
exact distance tie, and light order is the order light colors are applied.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raytracer.materials import MaterialInfo
    >>> from raytracer.scene.manager import SceneManager
    >>> manager = SceneManager(width=800, height=600, fov=60.0)
    >>> manager.add_sphere(center=(0, 0, -5), radius=1.0,
    ...                    material=MaterialInfo(color=(255.0, 0.0, 0.0)))
    0
    >>> manager.add_directional_light(direction=(0, -1, 0), intensity=1.0)
    0
    >>> scene = manager.build()
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from raytracer.geometry.element import (
    ElementInfo,
    GeometryKind,
    PlaneInfo,
    SphereInfo,
    element_from_dict,
)
from raytracer.lights.light import (
    WHITE,
    AmbientLight,
    DirectionalLight,
    LightInfo,
    PointLight,
    light_from_dict,
    light_to_dict,
)
from raytracer.materials.material import MaterialInfo
from raytracer.scene.scene import Scene

logger = logging.getLogger(__name__)


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Field of view in degrees.
        elements: List of element configurations.
        lights: List of light configurations.
    """

    width: int = 800
    height: int = 600
    fov: float = 60.0
    elements: list[dict[str, Any]] = field(default_factory=list)
    lights: list[dict[str, Any]] = field(default_factory=list)


class SceneManager:
    """Ordered builder for Scene objects.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Field of view in degrees.
        elements: Element descriptions in insertion order.
        lights: Light descriptions in insertion order.
    """

    def __init__(self, width: int = 800, height: int = 600, fov: float = 60.0) -> None:
        """Initialize an empty scene description.

        Args:
            width: Image width in pixels.
            height: Image height in pixels.
            fov: Field of view in degrees.
        """
        self.width = width
        self.height = height
        self.fov = fov
        self.elements: list[ElementInfo] = []
        self.lights: list[LightInfo] = []

    def clear(self) -> None:
        """Remove all elements and lights, keeping the camera settings."""
        self.elements = []
        self.lights = []

    # =========================================================================
    # Elements
    # =========================================================================

    def add_element(self, element: ElementInfo) -> int:
        """Append an element description.

        Args:
            element: A SphereInfo or PlaneInfo.

        Returns:
            The index of the element in scan order.
        """
        self.elements.append(element)
        return len(self.elements) - 1

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        material: MaterialInfo,
    ) -> int:
        """Add a sphere to the scene.

        Args:
            center: The center point of the sphere as (x, y, z).
            radius: The radius of the sphere (must be positive).
            material: The sphere's material.

        Returns:
            The index of the sphere in the element list.

        Raises:
            ValueError: If the radius is not positive.
        """
        return self.add_element(SphereInfo(center=center, radius=radius, material=material))

    def add_plane(
        self,
        point: tuple[float, float, float],
        normal: tuple[float, float, float],
        material: MaterialInfo,
    ) -> int:
        """Add a single-sided plane to the scene.

        Args:
            point: Any point on the plane.
            normal: The plane normal. Rays travelling along it hit the plane.
            material: The plane's material.

        Returns:
            The index of the plane in the element list.

        Raises:
            ValueError: If the normal has zero length.
        """
        return self.add_element(PlaneInfo(point=point, normal=normal, material=material))

    # =========================================================================
    # Lights
    # =========================================================================

    def add_light(self, light: LightInfo) -> int:
        """Append a light description and return its index."""
        self.lights.append(light)
        return len(self.lights) - 1

    def add_ambient_light(
        self, intensity: float, color: tuple[float, float, float] = WHITE
    ) -> int:
        """Add an ambient light and return its index."""
        return self.add_light(AmbientLight(intensity=intensity, color=color))

    def add_point_light(
        self,
        position: tuple[float, float, float],
        intensity: float,
        color: tuple[float, float, float] = WHITE,
    ) -> int:
        """Add a point light and return its index."""
        return self.add_light(PointLight(position=position, intensity=intensity, color=color))

    def add_directional_light(
        self,
        direction: tuple[float, float, float],
        intensity: float,
        color: tuple[float, float, float] = WHITE,
    ) -> int:
        """Add a directional light and return its index.

        Args:
            direction: Direction from surfaces toward the light.
            intensity: Light intensity.
            color: Light color.

        Raises:
            ValueError: If the direction has zero length.
        """
        return self.add_light(
            DirectionalLight(direction=direction, intensity=intensity, color=color)
        )

    # =========================================================================
    # Scene Queries
    # =========================================================================

    def get_sphere_count(self) -> int:
        """Get the number of spheres in the scene."""
        return sum(1 for e in self.elements if e.kind == GeometryKind.SPHERE)

    def get_plane_count(self) -> int:
        """Get the number of planes in the scene."""
        return sum(1 for e in self.elements if e.kind == GeometryKind.PLANE)

    def get_element_count(self) -> int:
        """Get the total number of elements in the scene."""
        return len(self.elements)

    def get_light_count(self) -> int:
        """Get the number of lights in the scene."""
        return len(self.lights)

    def build(self) -> Scene:
        """Create an immutable Scene from the current description.

        Returns:
            A new Scene. Later changes to the manager do not affect it.

        Raises:
            ValueError: If the camera parameters are invalid.
        """
        if not self.lights:
            logger.warning("Building a scene without lights; every hit will be black")
        return Scene(
            width=self.width,
            height=self.height,
            fov=self.fov,
            elements=self.elements,
            lights=self.lights,
        )

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object.

        Returns:
            A SceneConfig containing the camera, elements and lights.
        """
        return SceneConfig(
            width=self.width,
            height=self.height,
            fov=self.fov,
            elements=[element.to_dict() for element in self.elements],
            lights=[light_to_dict(light) for light in self.lights],
        )

    def from_config(self, config: SceneConfig) -> None:
        """Load a scene from a configuration object.

        Clears the current scene and loads the configuration.

        Args:
            config: The scene configuration to load.

        Raises:
            ValueError: If the configuration contains invalid data.
        """
        self.clear()
        self.width = config.width
        self.height = config.height
        self.fov = config.fov

        for element_config in config.elements:
            self.add_element(element_from_dict(element_config))

        for light_config in config.lights:
            self.add_light(light_from_dict(light_config))

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization).

        Returns:
            A dictionary representation of the scene.
        """
        config = self.to_config()
        return {
            "width": config.width,
            "height": config.height,
            "fov": config.fov,
            "elements": config.elements,
            "lights": config.lights,
        }

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a scene from a dictionary.

        Args:
            data: Dictionary with 'width', 'height', 'fov', 'elements' and
                'lights' keys. Missing keys take the SceneConfig defaults.
        """
        defaults = SceneConfig()
        config = SceneConfig(
            width=data.get("width", defaults.width),
            height=data.get("height", defaults.height),
            fov=data.get("fov", defaults.fov),
            elements=data.get("elements", []),
            lights=data.get("lights", []),
        )
        self.from_config(config)

    def __repr__(self) -> str:
        return (
            f"SceneManager(width={self.width}, height={self.height}, fov={self.fov}, "
            f"elements={len(self.elements)}, lights={len(self.lights)})"
        )
