"""Renderer that drives the per-pixel shading over a whole image.

The Renderer owns the output color buffer for one scene. Every pixel is
computed independently from the read-only scene, so the render kernel is a
single parallel loop over the buffer; the result does not depend on the
order pixels are evaluated in, and repeated renders of the same scene and
configuration are identical.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raytracer.core.renderer import Renderer
    >>> from raytracer.scene.showcase import create_showcase_scene
    >>>
    >>> renderer = Renderer(create_showcase_scene())
    >>> image = renderer.render()   # uint8 array of shape (600, 800, 3)
"""

import logging
import time

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from raytracer.core.color import to_rgb8
from raytracer.core.config import RenderConfig
from raytracer.core.integrator import ShadingOptions, render_pixel
from raytracer.scene.scene import Scene

logger = logging.getLogger(__name__)

vec3 = tm.vec3


@ti.data_oriented
class Renderer:
    """Renders a Scene into an 8-bit RGB image.

    Attributes:
        scene: The scene being rendered.
        config: The render configuration.
    """

    def __init__(self, scene: Scene, config: RenderConfig | None = None) -> None:
        """Initialize the renderer and allocate its color buffer.

        Args:
            scene: The scene to render.
            config: Render configuration. Defaults to RenderConfig().
        """
        self._scene = scene
        self._config = config if config is not None else RenderConfig()

        # Color buffer indexed [row, column], row 0 at the top
        self._color_buffer = ti.Vector.field(3, dtype=ti.f32, shape=(scene.height, scene.width))
        self._pixel_color = ti.Vector.field(3, dtype=ti.f32, shape=())

    @property
    def scene(self) -> Scene:
        """Get the scene."""
        return self._scene

    @property
    def config(self) -> RenderConfig:
        """Get the render configuration."""
        return self._config

    def _kernel_args(self) -> tuple:
        config = self._config
        return (
            vec3(*config.background),
            config.bias,
            config.max_depth,
            int(config.specular_ignores_shadow),
            int(config.reflection_miss),
        )

    # =========================================================================
    # Kernels
    # =========================================================================

    @ti.kernel
    def _render_kernel(
        self,
        background: vec3,
        bias: ti.f32,
        max_depth: ti.i32,
        specular_ignores_shadow: ti.i32,
        reflection_miss: ti.i32,
    ):
        options = ShadingOptions(
            background=background,
            bias=bias,
            specular_ignores_shadow=specular_ignores_shadow,
            reflection_miss=reflection_miss,
        )
        for y, x in self._color_buffer:
            self._color_buffer[y, x] = render_pixel(self._scene, x, y, max_depth, options)

    @ti.kernel
    def _render_pixel_kernel(
        self,
        x: ti.i32,
        y: ti.i32,
        background: vec3,
        bias: ti.f32,
        max_depth: ti.i32,
        specular_ignores_shadow: ti.i32,
        reflection_miss: ti.i32,
    ):
        options = ShadingOptions(
            background=background,
            bias=bias,
            specular_ignores_shadow=specular_ignores_shadow,
            reflection_miss=reflection_miss,
        )
        self._pixel_color[None] = render_pixel(self._scene, x, y, max_depth, options)

    # =========================================================================
    # Public API
    # =========================================================================

    def render(self) -> npt.NDArray[np.uint8]:
        """Render every pixel of the scene.

        Returns:
            Array of shape (height, width, 3) with dtype uint8. Row 0 is the
            top of the image.
        """
        logger.info(
            "Rendering %dx%d image (max depth %d)",
            self._scene.width,
            self._scene.height,
            self._config.max_depth,
        )
        start = time.perf_counter()
        self._render_kernel(*self._kernel_args())
        ti.sync()
        image = to_rgb8(self._color_buffer.to_numpy())
        logger.info("Render finished in %.3fs", time.perf_counter() - start)
        return image

    def render_pixel(self, x: int, y: int) -> tuple[float, float, float]:
        """Compute the color of a single pixel without rendering the image.

        Args:
            x: Pixel column (0 = left).
            y: Pixel row (0 = top).

        Returns:
            The clamped (R, G, B) color in [0, 255] as floats.

        Raises:
            IndexError: If the pixel is outside the image.
        """
        if not (0 <= x < self._scene.width and 0 <= y < self._scene.height):
            raise IndexError(
                f"Pixel ({x}, {y}) is outside the "
                f"{self._scene.width}x{self._scene.height} image"
            )
        self._render_pixel_kernel(x, y, *self._kernel_args())
        color = self._pixel_color[None]
        return (float(color[0]), float(color[1]), float(color[2]))

    def to_rgba(self, image: npt.NDArray[np.uint8] | None = None) -> npt.NDArray[np.uint8]:
        """Add a fully opaque alpha channel to an image.

        Args:
            image: An RGB image from render(). Renders the scene if omitted.

        Returns:
            Array of shape (height, width, 4) with dtype uint8.
        """
        if image is None:
            image = self.render()
        alpha = np.full(image.shape[:2] + (1,), 255, dtype=np.uint8)
        return np.concatenate([image, alpha], axis=-1)

    def __repr__(self) -> str:
        return f"Renderer(scene={self._scene!r}, config={self._config!r})"
