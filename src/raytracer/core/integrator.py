"""Whitted-style shading integrator.

This module computes the color seen along a ray that hits the scene. It
combines three effects:

    - Local illumination: Lambertian diffuse plus Phong specular, summed as
      a scalar intensity over all lights
    - Hard shadows: a shadow ray toward each point or directional light
      decides whether its diffuse term applies
    - Mirror reflection: reflective surfaces blend in the color seen along
      the mirrored view ray, down to a fixed depth budget

Local color at a hit point:

    color    = material.color * light_1.color * ... * light_n.color
    local    = clamp(color * (albedo / pi) * intensity)

Reflection blend at a surface with reflectivity r:

    final = local * (1 - r) + reflected * r

Taichi functions cannot recurse, so the reflection chain is evaluated as a
bounded loop that carries the product of reflectivities as a running
weight. The loop runs at most depth_budget + 1 levels, which guarantees
termination even between facing mirrors.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raytracer.core.integrator import ShadingOptions, render_pixel
    >>> # Use within a Taichi kernel:
    >>> # color = render_pixel(scene, x, y, max_depth, options)
"""

import taichi as ti
import taichi.math as tm

from raytracer.core.color import clamp_color
from raytracer.core.config import ReflectionMiss
from raytracer.core.ray import Ray, make_ray, offset_origin, ray_at, reflect
from raytracer.geometry.element import element_normal
from raytracer.lights.light import LightKind
from raytracer.materials.material import Material, has_specular
from raytracer.scene.intersection import T_MAX, Intersection

# Type alias for 3D vectors
vec3 = tm.vec3

# Squared shadow-ray range for lights without a position
UNBOUNDED_DISTANCE_SQUARED = T_MAX * T_MAX


@ti.dataclass
class ShadingOptions:
    """Render configuration values needed while shading.

    Attributes:
        background: Color of escaped rays (0-255 scale).
        bias: Offset along the normal for secondary ray origins.
        specular_ignores_shadow: 1 to add highlights regardless of
            occlusion, 0 to add them only where the light is visible.
        reflection_miss: ReflectionMiss policy value.
    """

    background: vec3
    bias: ti.f32
    specular_ignores_shadow: ti.i32
    reflection_miss: ti.i32


# =============================================================================
# Shadows
# =============================================================================


@ti.func
def is_occluded(
    scene: ti.template(),
    origin: vec3,
    to_light: vec3,
    light_distance_squared: ti.f32,
) -> ti.i32:
    """Test whether anything blocks the path from a point to a light.

    Uses the scene's regular nearest-hit query. An intersection only counts
    when it is closer than the light.

    Args:
        scene: The Scene to query.
        origin: Shadow ray origin (already offset off the surface).
        to_light: Unit direction toward the light.
        light_distance_squared: Squared distance to the light.

    Returns:
        1 if the light is blocked, 0 otherwise.
    """
    rec = scene.trace(make_ray(origin, to_light))
    occluded = 0
    if rec.hit == 1 and rec.distance * rec.distance <= light_distance_squared:
        occluded = 1
    return occluded


# =============================================================================
# Local illumination
# =============================================================================


@ti.func
def compute_lighting(
    scene: ti.template(),
    hit_point: vec3,
    normal: vec3,
    view_direction: vec3,
    material: Material,
    options: ShadingOptions,
) -> vec3:
    """Compute the local (diffuse + specular) color at a surface point.

    For each light the running color is first multiplied by the light's
    color, whatever its kind. Then:

    - Ambient lights add their intensity.
    - Point and directional lights add a diffuse term
      attenuated * dot(N, L) when dot(N, L) > 0 and the shadow ray is
      clear, and, if the material has one, a specular term
      attenuated * dot(R, -V)^specular where R mirrors L about N.
      Point lights attenuate by 1 / distance^2; directional lights do not.

    Args:
        scene: The Scene (lights and shadow queries).
        hit_point: The surface point being shaded.
        normal: Unit surface normal at the point.
        view_direction: Unit direction of the incoming ray.
        material: The surface material.
        options: Shading options (bias and specular/shadow policy).

    Returns:
        The local color, clamped to [0, 255].
    """
    color = material.color
    intensity = 0.0
    shadow_origin = offset_origin(hit_point, normal, options.bias)

    for i in range(scene._num_lights):
        light = scene.light(i)
        color *= light.color

        if light.kind == int(LightKind.AMBIENT):
            intensity += light.intensity
        else:
            # Directional lights store the direction toward the light
            to_light = light.vector
            attenuated = light.intensity
            light_distance_squared = UNBOUNDED_DISTANCE_SQUARED

            if light.kind == int(LightKind.POINT):
                to_light = light.vector - hit_point
                light_distance_squared = tm.dot(to_light, to_light)
                attenuated = light.intensity / light_distance_squared
                to_light = tm.normalize(to_light)

            # Diffuse
            visible = 0
            n_dot_l = tm.dot(normal, to_light)
            if n_dot_l > 0.0:
                if is_occluded(scene, shadow_origin, to_light, light_distance_squared) == 0:
                    visible = 1
                    intensity += attenuated * n_dot_l

            # Specular
            if has_specular(material) == 1:
                if options.specular_ignores_shadow == 1 or visible == 1:
                    r_dot_v = tm.dot(reflect(to_light, normal), -view_direction)
                    if r_dot_v > 0.0:
                        intensity += attenuated * (r_dot_v**material.specular)

    return clamp_color(color * (material.albedo / tm.pi) * intensity)


# =============================================================================
# Whitted Shading Core
# =============================================================================


@ti.func
def shade(
    scene: ti.template(),
    ray: Ray,
    intersection: Intersection,
    depth_budget: ti.i32,
    options: ShadingOptions,
) -> vec3:
    """Compute the color seen along a ray that hits the scene.

    Equivalent to the recursive definition

        shade(ray, hit, d) = local                                 if d == 0 or r == 0
                           = local*(1-r) + shade(refl, hit', d-1)*r if the reflection hits
                           = miss policy                           otherwise

    evaluated front to back with a running weight.

    Args:
        scene: The Scene to shade against.
        ray: The ray that produced the intersection.
        intersection: The nearest hit of that ray (must be a hit).
        depth_budget: Remaining reflection depth. 0 disables reflection.
        options: Shading options.

    Returns:
        The final color, clamped to [0, 255].
    """
    result = vec3(0.0, 0.0, 0.0)
    weight = 1.0

    # Current segment of the reflection chain
    origin = ray.origin
    direction = ray.direction
    distance = intersection.distance
    index = intersection.index

    # Active flag for chain continuation
    active = 1

    for level in range(depth_budget + 1):
        if active == 1:
            hit_point = ray_at(make_ray(origin, direction), distance)
            normal = element_normal(scene.element(index), hit_point)
            material = scene.material(index)

            local = compute_lighting(scene, hit_point, normal, direction, material, options)

            reflectivity = material.reflectivity
            remaining = depth_budget - level

            if remaining > 0 and reflectivity > 0.0:
                # Mirror the view vector (pointing back along the ray) about the normal
                reflected_origin = offset_origin(hit_point, normal, options.bias)
                reflected_direction = reflect(-direction, normal)
                reflected_hit = scene.trace(make_ray(reflected_origin, reflected_direction))

                if reflected_hit.hit == 1:
                    result += weight * (1.0 - reflectivity) * local
                    weight *= reflectivity
                    origin = reflected_origin
                    direction = reflected_direction
                    distance = reflected_hit.distance
                    index = reflected_hit.index
                else:
                    if options.reflection_miss == int(ReflectionMiss.BLEND_BACKGROUND):
                        result += weight * (
                            (1.0 - reflectivity) * local + reflectivity * options.background
                        )
                    else:
                        result += weight * local
                    active = 0
            else:
                result += weight * local
                active = 0

    return clamp_color(result)


@ti.func
def render_pixel(
    scene: ti.template(),
    x: ti.i32,
    y: ti.i32,
    max_depth: ti.i32,
    options: ShadingOptions,
) -> vec3:
    """Compute the color of pixel (x, y).

    Args:
        scene: The Scene to render.
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).
        max_depth: Reflection depth budget for the primary hit.
        options: Shading options.

    Returns:
        The pixel color in [0, 255], or the background on a miss.
    """
    ray = scene.primary_ray(x, y)
    rec = scene.trace(ray)

    color = options.background
    if rec.hit == 1:
        color = shade(scene, ray, rec, max_depth, options)

    return clamp_color(color)
