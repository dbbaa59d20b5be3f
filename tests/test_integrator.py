"""Tests for the Taichi renderer.

This module tests the kernel renderer including:
- Scene upload and capacity limits
- Single ray shading compared with World.color_at
- Whole-frame rendering compared with the Python renderer
- Errors for unlit worlds and oversized images

Note: Imports are done inside test methods to avoid Taichi initialization issues.
The conftest.py fixture initializes Taichi before tests run, so module-level
imports of modules containing ti.field() declarations would fail.
"""

import math

import numpy as np
import pytest

# Single precision fields against the double precision Python path
TOLERANCE = 1e-4


def _assert_colors_close(a, b):
    assert abs(a.red - b.red) < TOLERANCE
    assert abs(a.green - b.green) < TOLERANCE
    assert abs(a.blue - b.blue) < TOLERANCE


def _three_sphere_world():
    from src.python.core.transforms import scaling, translation
    from src.python.core.tuples import color, point
    from src.python.geometry.sphere import Sphere
    from src.python.materials.phong import Material, PointLight
    from src.python.scene.world import World

    middle = Sphere(
        transform=translation(-0.5, 1, 0.5),
        material=Material(color=color(0.1, 1, 0.5), diffuse=0.7, specular=0.3),
    )
    right = Sphere(
        transform=translation(1.5, 0.5, -0.5) * scaling(0.5, 0.5, 0.5),
        material=Material(color=color(0.5, 1, 0.1), diffuse=0.7, specular=0.3),
    )
    left = Sphere(
        transform=translation(-1.5, 0.33, -0.75) * scaling(0.33, 0.33, 0.33),
        material=Material(color=color(1, 0.8, 0.1), diffuse=0.7, specular=0.3, shininess=50),
    )
    return World(
        light=PointLight(point(-10, 10, -10), color(1, 1, 1)),
        objects=[middle, right, left],
    )


class TestSceneUpload:
    """Test uploading worlds to Taichi fields."""

    def test_upload_counts_spheres(self, default_world):
        """Test that the sphere count and light flag are uploaded."""
        from src.python.core.integrator import (
            get_sphere_count,
            is_light_enabled,
            upload_world,
        )

        upload_world(default_world)

        assert get_sphere_count() == 2
        assert is_light_enabled()

    def test_clear_scene(self, default_world):
        """Test that clear_scene removes spheres and the light."""
        from src.python.core.integrator import (
            clear_scene,
            get_sphere_count,
            is_light_enabled,
            upload_world,
        )

        upload_world(default_world)
        clear_scene()

        assert get_sphere_count() == 0
        assert not is_light_enabled()

    def test_too_many_spheres_raises(self):
        """Test that exceeding MAX_SPHERES raises RuntimeError."""
        from src.python.core.integrator import MAX_SPHERES, upload_world
        from src.python.geometry.sphere import Sphere
        from src.python.scene.world import World

        world = World(objects=[Sphere() for _ in range(MAX_SPHERES + 1)])

        with pytest.raises(RuntimeError, match="Maximum number of spheres"):
            upload_world(world)


class TestTraceRay:
    """Test shading single rays in a kernel."""

    def test_ray_hits_default_world(self, default_world):
        """Test the kernel color of the outer sphere."""
        from src.python.core.integrator import trace_ray, upload_world
        from src.python.core.ray import Ray
        from src.python.core.tuples import color, point, vector

        upload_world(default_world)
        result = trace_ray(Ray(point(0, 0, -5), vector(0, 0, 1)))

        _assert_colors_close(result, color(0.38066, 0.47583, 0.2855))

    def test_ray_misses(self, default_world):
        """Test that a miss is black."""
        from src.python.core.integrator import trace_ray, upload_world
        from src.python.core.ray import Ray
        from src.python.core.tuples import color, point, vector

        upload_world(default_world)
        result = trace_ray(Ray(point(0, 0, -5), vector(0, 1, 0)))

        _assert_colors_close(result, color(0, 0, 0))

    def test_ray_from_inside_matches_python(self, default_world):
        """Test the inside-flip against the Python pipeline."""
        from src.python.core.integrator import trace_ray, upload_world
        from src.python.core.ray import Ray
        from src.python.core.tuples import color, point, vector
        from src.python.materials.phong import PointLight

        default_world.light = PointLight(point(0, 0.25, 0), color(1, 1, 1))
        ray = Ray(point(0, 0, 0), vector(0, 0, 1))
        upload_world(default_world)

        _assert_colors_close(trace_ray(ray), default_world.color_at(ray))
        _assert_colors_close(trace_ray(ray), color(0.90498, 0.90498, 0.90498))

    def test_rays_match_python_pipeline(self):
        """Test a fan of rays against World.color_at."""
        from src.python.core.integrator import trace_ray, upload_world
        from src.python.core.ray import Ray
        from src.python.core.tuples import point, vector

        world = _three_sphere_world()
        upload_world(world)

        origin = point(0, 1.5, -5)
        for x in np.linspace(-1.5, 1.5, 7):
            for y in np.linspace(-1.0, 1.0, 5):
                ray = Ray(origin, vector(x, y - 0.5, 5).normalize())
                _assert_colors_close(trace_ray(ray), world.color_at(ray))

    def test_trace_without_upload_raises(self):
        """Test that tracing before upload raises RuntimeError."""
        from src.python.core.integrator import trace_ray
        from src.python.core.ray import Ray
        from src.python.core.tuples import point, vector

        with pytest.raises(RuntimeError, match="No world uploaded"):
            trace_ray(Ray(point(0, 0, -5), vector(0, 0, 1)))


class TestRenderCanvas:
    """Test whole-frame kernel rendering."""

    def test_render_default_world_center(self, default_world):
        """Test the center pixel of an 11x11 render."""
        from src.python.camera.pinhole import Camera
        from src.python.core.integrator import render_canvas
        from src.python.core.transforms import view_transform
        from src.python.core.tuples import color, point, vector

        camera = Camera(11, 11, math.pi / 2)
        camera.transform = view_transform(point(0, 0, -5), point(0, 0, 0), vector(0, 1, 0))
        canvas = render_canvas(camera, default_world)

        assert (canvas.width, canvas.height) == (11, 11)
        _assert_colors_close(canvas.pixel_at(5, 5), color(0.38066, 0.47583, 0.2855))

    def test_matches_python_renderer(self):
        """Test that every pixel matches the pure Python renderer."""
        from src.python.camera.pinhole import Camera, render
        from src.python.core.integrator import render_canvas
        from src.python.core.transforms import view_transform
        from src.python.core.tuples import point, vector

        world = _three_sphere_world()
        camera = Camera(24, 12, math.pi / 3)
        camera.transform = view_transform(point(0, 1.5, -5), point(0, 1, 0), vector(0, 1, 0))

        expected = render(camera, world).to_numpy()
        actual = render_canvas(camera, world).to_numpy()

        assert actual.shape == expected.shape
        assert np.max(np.abs(actual - expected)) < TOLERANCE

    def test_row_zero_is_top(self, default_world):
        """Test that the image is not flipped vertically."""
        from src.python.camera.pinhole import Camera
        from src.python.core.integrator import render_canvas
        from src.python.core.transforms import view_transform
        from src.python.core.tuples import point, vector

        # Aim above the spheres: the top rows see nothing, the bottom rows hit
        camera = Camera(5, 9, math.pi / 3)
        camera.transform = view_transform(point(0, 1.5, -5), point(0, 1.5, 0), vector(0, 1, 0))
        image = render_canvas(camera, default_world).to_numpy()

        assert np.allclose(image[0], 0.0)
        assert np.any(image[-1] > 0.0)

    def test_world_without_light_raises(self):
        """Test that an unlit world raises before rendering."""
        from src.python.camera.pinhole import Camera
        from src.python.core.integrator import render_canvas
        from src.python.geometry.sphere import Sphere
        from src.python.scene.world import World

        with pytest.raises(RuntimeError, match="without a light"):
            render_canvas(Camera(4, 4, math.pi / 2), World(objects=[Sphere()]))

    def test_oversized_image_raises(self, default_world):
        """Test that images beyond the preallocated buffer raise ValueError."""
        from src.python.camera.pinhole import Camera
        from src.python.core.integrator import MAX_IMAGE_WIDTH, render_canvas

        with pytest.raises(ValueError, match="exceed maximum"):
            render_canvas(Camera(MAX_IMAGE_WIDTH + 1, 4, math.pi / 2), default_world)
