"""Image export utilities for rendered images.

Rendered images are already 8-bit RGB arrays (channels on the 0-255 scale,
clamped and truncated by the renderer), so export is a direct conversion to
a Pillow image. No tone mapping or gamma correction is applied.

Supported formats:
    - PNG (8-bit RGB or RGBA via Pillow)

Example:
    >>> from raytracer.core.renderer import Renderer
    >>> from raytracer.preview.export import save_png
    >>> from raytracer.scene.showcase import create_showcase_scene
    >>>
    >>> image = Renderer(create_showcase_scene()).render()
    >>> save_png(image, "showcase.png")
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

logger = logging.getLogger(__name__)


def _check_image(image: npt.NDArray[np.uint8]) -> None:
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an RGB image of shape (H, W, 3), got {image.shape}")
    if image.dtype != np.uint8:
        raise ValueError(f"Expected dtype uint8, got {image.dtype}")


def image_to_pil(image: npt.NDArray[np.uint8], *, alpha: bool = False) -> PILImage.Image:
    """Convert a rendered image to a Pillow image.

    Args:
        image: Rendered image of shape (H, W, 3) with dtype uint8.
        alpha: If True, add a fully opaque alpha channel (RGBA output).

    Returns:
        A Pillow image in RGB or RGBA mode.

    Raises:
        ValueError: If the array is not an (H, W, 3) uint8 image.
    """
    _check_image(image)
    pil_image = PILImage.fromarray(np.ascontiguousarray(image))
    if alpha:
        pil_image = pil_image.convert("RGBA")
    return pil_image


def save_png(
    image: npt.NDArray[np.uint8],
    filepath: str | Path,
    *,
    alpha: bool = False,
) -> Path:
    """Save a rendered image as a PNG file.

    Args:
        image: Rendered image of shape (H, W, 3) with dtype uint8.
        filepath: Output file path (should end in .png).
        alpha: If True, save RGBA with an opaque alpha channel.

    Returns:
        The path the image was written to.

    Raises:
        ValueError: If the array is not an (H, W, 3) uint8 image.
    """
    path = Path(filepath)
    image_to_pil(image, alpha=alpha).save(path, format="PNG")
    logger.info("Saved %dx%d image to %s", image.shape[1], image.shape[0], path)
    return path
