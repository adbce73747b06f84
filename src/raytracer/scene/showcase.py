"""Showcase scene: three glossy spheres above a grey floor.

The scene contains:
- Red sphere at (-1, -1, -5.5), Phong exponent 50
- Green sphere at (1, 0.5, -2.6), Phong exponent 50
- Blue sphere at (-4, -2, -7.5), Phong exponent 10
- Grey floor plane at y = -4 (no highlight)

All spheres have radius 1 and reflectivity 0.4; the floor reflects 0.1.
Three white lights (ambient, directional and point) share a common
brightness multiplier.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raytracer.core.renderer import Renderer
    >>> from raytracer.scene.showcase import create_showcase_scene
    >>>
    >>> image = Renderer(create_showcase_scene()).render()
"""

from raytracer.materials.material import NO_SPECULAR, MaterialInfo
from raytracer.scene.manager import SceneManager
from raytracer.scene.scene import Scene

# Multiplier applied to every light intensity
DEFAULT_BRIGHTNESS = 1.5

SPHERE_REFLECTIVITY = 0.4
FLOOR_REFLECTIVITY = 0.1


def create_showcase_manager(
    width: int = 800,
    height: int = 600,
    fov: float = 60.0,
    brightness: float = DEFAULT_BRIGHTNESS,
) -> SceneManager:
    """Describe the showcase scene without building it.

    Useful for tweaking the scene or serializing it with to_dict().

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Field of view in degrees.
        brightness: Multiplier for all light intensities.

    Returns:
        A SceneManager holding the showcase elements and lights.
    """
    manager = SceneManager(width=width, height=height, fov=fov)

    manager.add_sphere(
        center=(-1.0, -1.0, -5.5),
        radius=1.0,
        material=MaterialInfo(
            color=(255.0, 0.0, 0.0), specular=50.0, reflectivity=SPHERE_REFLECTIVITY
        ),
    )
    manager.add_sphere(
        center=(1.0, 0.5, -2.6),
        radius=1.0,
        material=MaterialInfo(
            color=(0.0, 255.0, 0.0), specular=50.0, reflectivity=SPHERE_REFLECTIVITY
        ),
    )
    manager.add_sphere(
        center=(-4.0, -2.0, -7.5),
        radius=1.0,
        material=MaterialInfo(
            color=(0.0, 0.0, 255.0), specular=10.0, reflectivity=SPHERE_REFLECTIVITY
        ),
    )
    manager.add_plane(
        point=(0.0, -4.0, 0.0),
        normal=(0.0, -1.0, 0.0),
        material=MaterialInfo(
            color=(60.0, 60.0, 60.0), specular=NO_SPECULAR, reflectivity=FLOOR_REFLECTIVITY
        ),
    )

    manager.add_ambient_light(intensity=0.06 * brightness)
    manager.add_directional_light(direction=(0.0, -1.0, -2.0), intensity=0.8 * brightness)
    manager.add_point_light(position=(-2.0, -1.0, -4.5), intensity=6.2 * brightness)

    return manager


def create_showcase_scene(
    width: int = 800,
    height: int = 600,
    fov: float = 60.0,
    brightness: float = DEFAULT_BRIGHTNESS,
) -> Scene:
    """Create the showcase scene.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Field of view in degrees.
        brightness: Multiplier for all light intensities.

    Returns:
        The built, immutable Scene.
    """
    return create_showcase_manager(width, height, fov, brightness).build()
