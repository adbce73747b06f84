"""Scene management module.

Components:
    intersection: Nearest-hit record shared by all queries
    scene: Immutable scene (camera, elements, lights) with the nearest-hit query
    manager: Ordered scene builder with dictionary serialization
    showcase: Ready-made demo scene
"""

from .intersection import T_MAX, Intersection, make_intersection, make_miss_record
from .manager import SceneConfig, SceneManager
from .scene import Scene
from .showcase import create_showcase_manager, create_showcase_scene

__all__ = [
    "T_MAX",
    "Intersection",
    "make_intersection",
    "make_miss_record",
    "Scene",
    "SceneConfig",
    "SceneManager",
    "create_showcase_manager",
    "create_showcase_scene",
]
