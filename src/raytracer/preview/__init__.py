"""Preview module for rendered output.

Components:
    export: Pillow conversion and PNG export

Example:
    >>> from raytracer.preview import save_png
    >>> save_png(image, "output.png")
"""

from raytracer.preview.export import image_to_pil, save_png

__all__ = [
    "image_to_pil",
    "save_png",
]
