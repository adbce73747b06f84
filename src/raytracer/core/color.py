"""Color representation and output conversion.

Colors are Taichi vec3 values with channels on the 0-255 scale. During
shading the channels are unbounded; they are clamped to [0, MAX_CHANNEL]
before they leave the shader and truncated to 8 bits on the host.
"""

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

vec3 = tm.vec3

# Largest value an output channel may take
MAX_CHANNEL = 255.0


@ti.func
def clamp_color(color: vec3) -> vec3:
    """Clamp every channel of a color to [0, MAX_CHANNEL]."""
    return tm.clamp(color, 0.0, MAX_CHANNEL)


def to_rgb8(image: npt.NDArray[np.float32]) -> npt.NDArray[np.uint8]:
    """Convert a float color buffer to 8-bit channels.

    Values are clamped to [0, 255] and then truncated (not rounded), so
    254.9 becomes 254 and anything above 255 becomes exactly 255.

    Args:
        image: Float image array of shape (H, W, 3).

    Returns:
        Array of the same shape with dtype uint8.
    """
    return np.clip(image, 0.0, MAX_CHANNEL).astype(np.uint8)


def validate_color(color: tuple[float, float, float], name: str = "color") -> tuple[float, float, float]:
    """Check a host-side color and return it as a float tuple.

    Args:
        color: The (R, G, B) color to check.
        name: Name used in error messages.

    Returns:
        The color as a tuple of floats.

    Raises:
        ValueError: If the color does not have three channels or any
            channel is negative.
    """
    if len(color) != 3:
        raise ValueError(f"{name} must have 3 channels, got {len(color)}")
    for i, component in enumerate(color):
        if component < 0.0:
            raise ValueError(f"{name} channel {i} = {component} is negative")
    return (float(color[0]), float(color[1]), float(color[2]))
