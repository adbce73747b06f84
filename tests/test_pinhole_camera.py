"""Unit tests for the pinhole camera module.

Tests cover:
- Camera parameter validation
- Field-of-view scale
- Ray generation for center and corner pixels
- Aspect ratio correction
- Image orientation (row 0 at the top)
- Determinism of ray generation
"""

import math

import pytest
import taichi as ti


def _primary_direction(x, y, width, height, fov):
    """Run primary_ray in a kernel and return the direction and origin."""
    from raytracer.camera.pinhole import fov_scale, primary_ray

    direction = ti.field(dtype=ti.math.vec3, shape=())
    origin = ti.field(dtype=ti.math.vec3, shape=())

    @ti.kernel
    def test_kernel(px: ti.i32, py: ti.i32, w: ti.i32, h: ti.i32, scale: ti.f32):
        ray = primary_ray(px, py, w, h, scale)
        direction[None] = ray.direction
        origin[None] = ray.origin

    test_kernel(x, y, width, height, fov_scale(fov))
    return direction[None], origin[None]


class TestPinholeCamera:
    """Tests for camera parameters."""

    def test_properties(self):
        from raytracer.camera import PinholeCamera

        camera = PinholeCamera(width=800, height=600, fov=90.0)
        assert camera.aspect_ratio == pytest.approx(800 / 600)
        assert camera.fov_scale == pytest.approx(1.0)

    @pytest.mark.parametrize("width, height", [(0, 10), (10, 0), (-5, 10)])
    def test_invalid_dimensions(self, width, height):
        from raytracer.camera import PinholeCamera

        with pytest.raises(ValueError, match="dimensions"):
            PinholeCamera(width=width, height=height, fov=60.0)

    @pytest.mark.parametrize("fov", [0.0, 180.0, -10.0, 200.0])
    def test_invalid_fov(self, fov):
        from raytracer.camera import PinholeCamera

        with pytest.raises(ValueError, match="Field of view"):
            PinholeCamera(width=10, height=10, fov=fov)

    def test_fov_scale(self):
        from raytracer.camera import fov_scale

        assert fov_scale(90.0) == pytest.approx(1.0)
        assert fov_scale(60.0) == pytest.approx(math.tan(math.radians(30.0)))


class TestPrimaryRay:
    """Tests for primary ray generation."""

    def test_center_pixel_looks_down_negative_z(self):
        """Test the center of an odd-sized image maps to (0, 0, -1)."""
        d, o = _primary_direction(1, 1, 3, 3, 60.0)
        assert abs(d[0]) < 1e-6
        assert abs(d[1]) < 1e-6
        assert abs(d[2] + 1.0) < 1e-6
        assert abs(o[0]) < 1e-6 and abs(o[1]) < 1e-6 and abs(o[2]) < 1e-6

    def test_top_left_pixel(self):
        """Test the top-left pixel of a 2x2 image with a 90 degree FOV."""
        d, _ = _primary_direction(0, 0, 2, 2, 90.0)
        expected = 1.0 / math.sqrt(1.5)
        assert abs(d[0] + 0.5 * expected) < 1e-5
        assert abs(d[1] - 0.5 * expected) < 1e-5
        assert abs(d[2] + expected) < 1e-5

    def test_aspect_ratio_stretches_x(self):
        """Test a 2:1 image stretches horizontal directions by 2."""
        d, _ = _primary_direction(0, 0, 4, 2, 90.0)
        length = math.sqrt(3.5)
        assert abs(d[0] + 1.5 / length) < 1e-5
        assert abs(d[1] - 0.5 / length) < 1e-5
        assert abs(d[2] + 1.0 / length) < 1e-5

    def test_row_zero_is_top(self):
        """Test the first row looks up and the last row looks down."""
        top, _ = _primary_direction(5, 0, 10, 10, 60.0)
        bottom, _ = _primary_direction(5, 9, 10, 10, 60.0)
        assert top[1] > 0.0
        assert bottom[1] < 0.0
        assert abs(top[1] + bottom[1]) < 1e-6

    def test_directions_are_unit_length(self):
        for x, y in [(0, 0), (7, 3), (99, 49)]:
            d, _ = _primary_direction(x, y, 100, 50, 75.0)
            assert abs(d[0] ** 2 + d[1] ** 2 + d[2] ** 2 - 1.0) < 1e-5

    def test_deterministic(self):
        first, _ = _primary_direction(13, 21, 64, 48, 60.0)
        second, _ = _primary_direction(13, 21, 64, 48, 60.0)
        assert all(first[i] == second[i] for i in range(3))

    def test_scene_primary_direction(self):
        """Test the Scene exposes the same ray generation."""
        from raytracer.scene import Scene

        scene = Scene(width=2, height=2, fov=90.0)
        d = scene.primary_direction(0, 0)
        expected = 1.0 / math.sqrt(1.5)
        assert d == pytest.approx((-0.5 * expected, 0.5 * expected, -expected), abs=1e-5)
