"""Lights module for light source variants.

Components:
    light: Ambient, point and directional lights, their Taichi struct and
        host-side descriptions
"""

from .light import (
    AmbientLight,
    DirectionalLight,
    Light,
    LightInfo,
    LightKind,
    PointLight,
    light_from_dict,
    light_to_dict,
)

__all__ = [
    "Light",
    "LightKind",
    "LightInfo",
    "AmbientLight",
    "PointLight",
    "DirectionalLight",
    "light_from_dict",
    "light_to_dict",
]
