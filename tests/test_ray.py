"""Tests for rays.

Tests cover:
- Construction and position along the ray
- Translating and scaling rays
"""

from src.python.core.ray import Ray
from src.python.core.transforms import scaling, translation
from src.python.core.tuples import point, vector


class TestRayBasics:
    """Tests for ray construction and evaluation."""

    def test_create_ray(self):
        """Test that a ray keeps its origin and direction."""
        origin = point(1, 2, 3)
        direction = vector(4, 5, 6)
        r = Ray(origin, direction)
        assert r.origin == origin
        assert r.direction == direction

    def test_position(self):
        """Test computing points along the ray, including behind the origin."""
        r = Ray(point(2, 3, 4), vector(1, 0, 0))
        assert r.position(0) == point(2, 3, 4)
        assert r.position(1) == point(3, 3, 4)
        assert r.position(-1) == point(1, 3, 4)
        assert r.position(2.5) == point(4.5, 3, 4)

    def test_rays_are_immutable_values(self):
        """Test that equal rays compare equal."""
        assert Ray(point(1, 2, 3), vector(0, 1, 0)) == Ray(point(1, 2, 3), vector(0, 1, 0))


class TestRayTransform:
    """Tests for transforming rays."""

    def test_translate_ray(self):
        """Test that translation moves the origin only."""
        r = Ray(point(1, 2, 3), vector(0, 1, 0))
        r2 = r.transform(translation(3, 4, 5))
        assert r2.origin == point(4, 6, 8)
        assert r2.direction == vector(0, 1, 0)

    def test_scale_ray(self):
        """Test that scaling affects origin and direction."""
        r = Ray(point(1, 2, 3), vector(0, 1, 0))
        r2 = r.transform(scaling(2, 3, 4))
        assert r2.origin == point(2, 6, 12)
        assert r2.direction == vector(0, 3, 0)

    def test_transform_returns_new_ray(self):
        """Test that the original ray is left unchanged."""
        r = Ray(point(1, 2, 3), vector(0, 1, 0))
        r.transform(translation(3, 4, 5))
        assert r.origin == point(1, 2, 3)
