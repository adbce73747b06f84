"""Camera module for primary ray generation.

Components:
    pinhole: Pinhole (perspective) camera at the camera-space origin

Camera responsibilities:
    - Map a pixel coordinate to a ray through the pixel center
    - Correct for the image aspect ratio
    - Scale the image plane by the field of view
"""

from .pinhole import PinholeCamera, fov_scale, primary_ray

__all__ = [
    "PinholeCamera",
    "fov_scale",
    "primary_ray",
]
