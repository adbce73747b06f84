"""Taichi-based Whitted-style ray tracer.

This package renders still images by recursive ray casting, with support for:
- Primary rays from a pinhole camera looking down -z
- Spheres and single-sided planes
- Ambient, point and directional lights with hard shadows
- Lambertian diffuse, Phong specular and mirror reflection

Subpackages:
    core: Ray and color utilities, shading integrator, render configuration and loop
    camera: Primary ray generation
    geometry: Shape primitives and intersection algorithms
    materials: Surface appearance parameters
    lights: Light source variants
    scene: Immutable scene, nearest-hit query and scene builder
    preview: Image export utilities
"""

__version__ = "0.1.0"
