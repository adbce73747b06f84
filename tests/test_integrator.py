"""Unit tests for the Whitted shading integrator.

Scenes here are rendered at 1x1 so the only primary ray runs straight down
-z from the origin, which keeps expected colors easy to derive. With a
white material and unit albedo, a total light intensity I shades to
255 * I / pi per channel.

Tests cover:
- Ambient light and light color accumulation
- Diffuse falloff for point and directional lights
- Hard shadows (occluders before and beyond the light)
- Specular highlight and the specular/shadow policy
- Reflection blending, depth budget and the reflection-miss policy
- Clamping
"""

import math

import pytest

# Shade of a full channel lit with unit intensity
UNIT_SHADE = 255.0 / math.pi


def _pixel(elements, lights, **config_kwargs):
    """Render the single pixel of a 1x1 scene."""
    from raytracer.core.config import RenderConfig
    from raytracer.core.renderer import Renderer
    from raytracer.scene import Scene

    scene = Scene(width=1, height=1, fov=60.0, elements=elements, lights=lights)
    return Renderer(scene, RenderConfig(**config_kwargs)).render_pixel(0, 0)


def _sphere(center, radius, color, **material_kwargs):
    from raytracer.geometry import SphereInfo
    from raytracer.materials import MaterialInfo

    return SphereInfo(
        center=center, radius=radius, material=MaterialInfo(color=color, **material_kwargs)
    )


# Sphere hit at (0, 0, -4) with normal (0, 1, 1) / sqrt(2)
def _tilted_target(**material_kwargs):
    return _sphere((0.0, -1.0, -5.0), math.sqrt(2.0), (255.0, 0.0, 0.0), **material_kwargs)


class TestLocalLighting:
    """Tests for ambient, diffuse and light color handling."""

    def test_ambient_only(self):
        from raytracer.lights import AmbientLight

        color = _pixel(
            [_sphere((0, 0, -5), 1.0, (255.0, 0.0, 0.0))],
            [AmbientLight(intensity=1.0)],
        )
        assert color == pytest.approx((UNIT_SHADE, 0.0, 0.0), abs=1e-3)

    def test_albedo_scales_result(self):
        from raytracer.lights import AmbientLight

        color = _pixel(
            [_sphere((0, 0, -5), 1.0, (255.0, 0.0, 0.0), albedo=0.5)],
            [AmbientLight(intensity=1.0)],
        )
        assert color[0] == pytest.approx(0.5 * UNIT_SHADE, abs=1e-3)

    def test_no_lights_is_black(self):
        color = _pixel([_sphere((0, 0, -5), 1.0, (255.0, 255.0, 255.0))], [])
        assert color == (0.0, 0.0, 0.0)

    def test_light_colors_multiply_in_order(self):
        from raytracer.lights import AmbientLight

        color = _pixel(
            [_sphere((0, 0, -5), 1.0, (255.0, 255.0, 255.0))],
            [
                AmbientLight(intensity=0.5, color=(1.0, 0.5, 1.0)),
                AmbientLight(intensity=0.5, color=(1.0, 0.5, 0.0)),
            ],
        )
        assert color == pytest.approx((UNIT_SHADE, 0.25 * UNIT_SHADE, 0.0), abs=1e-3)

    def test_directional_light_facing_surface(self):
        from raytracer.lights import DirectionalLight

        color = _pixel(
            [_sphere((0, 0, -5), 1.0, (255.0, 0.0, 0.0))],
            [DirectionalLight(direction=(0.0, 0.0, 1.0), intensity=1.0)],
        )
        assert color[0] == pytest.approx(UNIT_SHADE, abs=1e-2)

    def test_directional_light_behind_surface(self):
        from raytracer.lights import DirectionalLight

        color = _pixel(
            [_sphere((0, 0, -5), 1.0, (255.0, 0.0, 0.0))],
            [DirectionalLight(direction=(0.0, 0.0, -1.0), intensity=1.0)],
        )
        assert color == (0.0, 0.0, 0.0)

    def test_directional_lambert_cosine(self):
        from raytracer.lights import DirectionalLight

        color = _pixel(
            [_tilted_target()],
            [DirectionalLight(direction=(0.0, 1.0, 0.0), intensity=1.0)],
        )
        assert color[0] == pytest.approx(UNIT_SHADE / math.sqrt(2.0), abs=1e-2)

    def test_point_light_inverse_square(self):
        from raytracer.lights import PointLight

        # Two units in front of the hit point at (0, 0, -4)
        color = _pixel(
            [_sphere((0, 0, -5), 1.0, (255.0, 0.0, 0.0))],
            [PointLight(position=(0.0, 0.0, -2.0), intensity=4.0)],
        )
        assert color[0] == pytest.approx(UNIT_SHADE, abs=1e-2)


class TestShadows:
    """Tests for shadow rays."""

    def test_occluder_blocks_directional_diffuse(self):
        from raytracer.lights import DirectionalLight

        lights = [DirectionalLight(direction=(0.0, 1.0, 0.0), intensity=1.0)]
        occluder = _sphere((0.0, 3.0, -4.0), 0.5, (255.0, 255.0, 255.0))

        lit = _pixel([_tilted_target()], lights)
        shadowed = _pixel([_tilted_target(), occluder], lights)

        assert lit[0] > 50.0
        assert shadowed == (0.0, 0.0, 0.0)

    def test_occluder_between_point_light(self):
        from raytracer.lights import PointLight

        lights = [PointLight(position=(0.0, 5.0, -4.0), intensity=25.0)]
        occluder = _sphere((0.0, 3.0, -4.0), 0.5, (255.0, 255.0, 255.0))

        assert _pixel([_tilted_target(), occluder], lights) == (0.0, 0.0, 0.0)

    def test_occluder_beyond_point_light(self):
        from raytracer.lights import PointLight

        # Light at distance 2, occluder surface at distance 2.5
        lights = [PointLight(position=(0.0, 2.0, -4.0), intensity=4.0)]
        occluder = _sphere((0.0, 3.0, -4.0), 0.5, (255.0, 255.0, 255.0))

        color = _pixel([_tilted_target(), occluder], lights)
        assert color[0] == pytest.approx(UNIT_SHADE / math.sqrt(2.0), abs=1e-2)

    def test_ambient_ignores_occluders(self):
        from raytracer.lights import AmbientLight

        occluder = _sphere((0.0, 3.0, -4.0), 0.5, (255.0, 255.0, 255.0))
        color = _pixel([_tilted_target(), occluder], [AmbientLight(intensity=1.0)])
        assert color[0] == pytest.approx(UNIT_SHADE, abs=1e-3)


class TestSpecular:
    """Tests for the Phong highlight and the specular/shadow policy."""

    def test_highlight_adds_to_diffuse(self):
        from raytracer.lights import DirectionalLight

        # The light mirrors straight back to the camera: highlight term 1
        color = _pixel(
            [_tilted_target(specular=50.0)],
            [DirectionalLight(direction=(0.0, 1.0, 0.0), intensity=1.0)],
        )
        expected = UNIT_SHADE * (1.0 / math.sqrt(2.0) + 1.0)
        assert color[0] == pytest.approx(expected, abs=0.5)

    def test_highlight_under_shadow_by_default(self):
        from raytracer.lights import DirectionalLight

        occluder = _sphere((0.0, 3.0, -4.0), 0.5, (255.0, 255.0, 255.0))
        color = _pixel(
            [_tilted_target(specular=50.0), occluder],
            [DirectionalLight(direction=(0.0, 1.0, 0.0), intensity=1.0)],
        )
        assert color[0] == pytest.approx(UNIT_SHADE, abs=0.5)

    def test_highlight_respects_shadow_when_configured(self):
        from raytracer.lights import DirectionalLight

        occluder = _sphere((0.0, 3.0, -4.0), 0.5, (255.0, 255.0, 255.0))
        color = _pixel(
            [_tilted_target(specular=50.0), occluder],
            [DirectionalLight(direction=(0.0, 1.0, 0.0), intensity=1.0)],
            specular_ignores_shadow=False,
        )
        assert color == (0.0, 0.0, 0.0)

    def test_no_specular_sentinel(self):
        from raytracer.lights import DirectionalLight

        color = _pixel(
            [_tilted_target()],
            [DirectionalLight(direction=(0.0, 1.0, 0.0), intensity=1.0)],
        )
        assert color[0] == pytest.approx(UNIT_SHADE / math.sqrt(2.0), abs=1e-2)


class TestReflection:
    """Tests for mirror reflection.

    The red target at (0, 0, -5) reflects the primary ray straight back
    along +z, where a green sphere sits behind the camera.
    """

    def _mirror_scene(self, reflectivity, with_green=True):
        elements = [_sphere((0, 0, -5), 1.0, (255.0, 0.0, 0.0), reflectivity=reflectivity)]
        if with_green:
            elements.append(_sphere((0, 0, 5), 1.0, (0.0, 255.0, 0.0)))
        return elements

    def _ambient(self):
        from raytracer.lights import AmbientLight

        return [AmbientLight(intensity=1.0)]

    def test_zero_reflectivity_equals_local(self):
        for depth in (0, 1, 5):
            color = _pixel(self._mirror_scene(0.0), self._ambient(), max_depth=depth)
            assert color == pytest.approx((UNIT_SHADE, 0.0, 0.0), abs=1e-3)

    def test_half_reflective_blend(self):
        color = _pixel(self._mirror_scene(0.5), self._ambient(), max_depth=3)
        half = 0.5 * UNIT_SHADE
        assert color == pytest.approx((half, half, 0.0), abs=1e-2)

    def test_full_mirror(self):
        color = _pixel(self._mirror_scene(1.0), self._ambient(), max_depth=3)
        assert color == pytest.approx((0.0, UNIT_SHADE, 0.0), abs=1e-2)

    def test_zero_depth_disables_reflection(self):
        color = _pixel(self._mirror_scene(0.5), self._ambient(), max_depth=0)
        assert color == pytest.approx((UNIT_SHADE, 0.0, 0.0), abs=1e-3)

    def test_reflection_miss_local_only(self):
        color = _pixel(
            self._mirror_scene(0.5, with_green=False),
            self._ambient(),
            max_depth=3,
            background=(0.0, 0.0, 200.0),
        )
        assert color == pytest.approx((UNIT_SHADE, 0.0, 0.0), abs=1e-3)

    def test_reflection_miss_blend_background(self):
        from raytracer.core.config import ReflectionMiss

        color = _pixel(
            self._mirror_scene(0.5, with_green=False),
            self._ambient(),
            max_depth=3,
            background=(0.0, 0.0, 200.0),
            reflection_miss=ReflectionMiss.BLEND_BACKGROUND,
        )
        assert color == pytest.approx((0.5 * UNIT_SHADE, 0.0, 100.0), abs=1e-2)

    @pytest.mark.parametrize("depth, expected", [(9, (0.0, 1.0, 0.0)), (10, (1.0, 0.0, 0.0))])
    def test_facing_mirrors_terminate(self, depth, expected):
        elements = [
            _sphere((0, 0, -5), 1.0, (255.0, 0.0, 0.0), reflectivity=1.0),
            _sphere((0, 0, 5), 1.0, (0.0, 255.0, 0.0), reflectivity=1.0),
        ]
        color = _pixel(elements, self._ambient(), max_depth=depth)
        assert color == pytest.approx(tuple(UNIT_SHADE * c for c in expected), abs=1e-2)


class TestClamping:
    """Tests for output clamping."""

    def test_overexposed_channel_clamps_to_255(self):
        from raytracer.lights import AmbientLight

        color = _pixel(
            [_sphere((0, 0, -5), 1.0, (255.0, 10.0, 0.0))],
            [AmbientLight(intensity=100.0)],
        )
        assert color[0] == 255.0
        assert color[1] == 255.0
        assert color[2] == 0.0

    def test_miss_returns_background(self):
        color = _pixel([], [], background=(12.0, 34.0, 56.0))
        assert color == (12.0, 34.0, 56.0)
