"""Pinhole camera model for primary ray generation.

The camera sits at the origin of camera space looking down -z with +y up.
For a pixel (x, y) the ray passes through the pixel center:

    ndc_x = ((x + 0.5) / width) * 2 - 1          in [-1, 1], left to right
    ndc_y = 1 - ((y + 0.5) / height) * 2         in [-1, 1], top row is +1

The horizontal axis is stretched by the aspect ratio (width / height) and
both axes are scaled by tan(fov / 2), where fov is the field of view in
degrees. The ray direction is normalize(ndc_x, ndc_y, -1).

Ray generation is pure: the same pixel always yields the same ray.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raytracer.camera.pinhole import PinholeCamera, primary_ray
    >>> camera = PinholeCamera(width=800, height=600, fov=60.0)
    >>>
    >>> @ti.kernel
    ... def render():
    ...     ray = primary_ray(400, 300, 800, 600, camera.fov_scale)
"""

import math
from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from raytracer.core.ray import Ray, make_ray, vec3

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass(frozen=True)
class PinholeCamera:
    """Configuration for the pinhole camera.

    Attributes:
        width: Image width in pixels (positive).
        height: Image height in pixels (positive).
        fov: Field of view in degrees, in the open interval (0, 180).

    Raises:
        ValueError: If any parameter is out of range.
    """

    width: int
    height: int
    fov: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        if not 0.0 < self.fov < 180.0:
            raise ValueError(f"Field of view must be in (0, 180) degrees, got {self.fov}")

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height

    @property
    def fov_scale(self) -> float:
        """Image plane half-extent at unit distance: tan(fov / 2)."""
        return fov_scale(self.fov)


def fov_scale(fov_degrees: float) -> float:
    """Convert a field of view in degrees to tan(fov / 2)."""
    return math.tan(math.radians(fov_degrees) / 2.0)


# =============================================================================
# Ray Generation (Taichi-compatible)
# =============================================================================


@ti.func
def primary_ray(x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32, scale: ti.f32) -> Ray:
    """Generate the primary ray through the center of pixel (x, y).

    Args:
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.
        scale: tan(fov / 2), see fov_scale().

    Returns:
        A Ray from the camera-space origin with unit direction.
    """
    w = ti.cast(width, ti.f32)
    h = ti.cast(height, ti.f32)
    aspect_ratio = w / h

    ndc_x = ((ti.cast(x, ti.f32) + 0.5) / w) * 2.0 - 1.0
    ndc_y = 1.0 - ((ti.cast(y, ti.f32) + 0.5) / h) * 2.0

    direction = tm.normalize(vec3(ndc_x * aspect_ratio * scale, ndc_y * scale, -1.0))
    return make_ray(vec3(0.0, 0.0, 0.0), direction)
