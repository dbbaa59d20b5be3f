"""Unit tests for sphere intersection and normals.

Tests cover:
- Ray hitting sphere from outside (two roots)
- Tangent ray (repeated root)
- Ray missing sphere
- Ray starting inside sphere and sphere behind the ray
- Intersecting transformed spheres
- Surface normals, including transformed spheres
- Transform validation and caching
"""

import math

import pytest

from src.python.core.matrix import Matrix, SingularMatrixError
from src.python.core.ray import Ray
from src.python.core.transforms import rotation_z, scaling, translation
from src.python.core.tuples import point, vector
from src.python.geometry.sphere import Sphere
from src.python.materials.phong import Material


def _ts(xs):
    return [x.t for x in xs]


class TestSphereIntersection:
    """Tests for ray-sphere intersection."""

    def test_ray_intersects_at_two_points(self):
        """Test a ray through the center."""
        xs = Sphere().intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))
        assert _ts(xs) == pytest.approx([4.0, 6.0])

    def test_tangent_ray_gives_repeated_root(self):
        """Test that a tangent ray reports the same t twice."""
        xs = Sphere().intersect(Ray(point(0, 1, -5), vector(0, 0, 1)))
        assert _ts(xs) == pytest.approx([5.0, 5.0])

    def test_ray_misses(self):
        """Test that a missing ray gives no intersections."""
        assert Sphere().intersect(Ray(point(0, 2, -5), vector(0, 0, 1))) == []

    def test_ray_originates_inside(self):
        """Test that a ray from the center has one root behind the origin."""
        xs = Sphere().intersect(Ray(point(0, 0, 0), vector(0, 0, 1)))
        assert _ts(xs) == pytest.approx([-1.0, 1.0])

    def test_sphere_behind_ray(self):
        """Test that both roots are negative when the sphere is behind."""
        xs = Sphere().intersect(Ray(point(0, 0, 5), vector(0, 0, 1)))
        assert _ts(xs) == pytest.approx([-6.0, -4.0])

    def test_intersections_reference_the_sphere(self):
        """Test that each intersection points back to the sphere."""
        s = Sphere()
        xs = s.intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))
        assert len(xs) == 2
        assert xs[0].object is s
        assert xs[1].object is s

    def test_scaled_sphere(self):
        """Test intersecting a scaled sphere."""
        s = Sphere(transform=scaling(2, 2, 2))
        xs = s.intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))
        assert _ts(xs) == pytest.approx([3.0, 7.0])

    def test_translated_sphere(self):
        """Test that a translated sphere is missed by a ray through the origin."""
        s = Sphere(transform=translation(5, 0, 0))
        assert s.intersect(Ray(point(0, 0, -5), vector(0, 0, 1))) == []

    def test_intersect_does_not_modify_ray(self):
        """Test that the world-space ray is left unchanged."""
        r = Ray(point(0, 0, -5), vector(0, 0, 1))
        Sphere(transform=scaling(2, 2, 2)).intersect(r)
        assert r.origin == point(0, 0, -5)
        assert r.direction == vector(0, 0, 1)


class TestSphereNormal:
    """Tests for surface normals."""

    @pytest.mark.parametrize(
        "p, expected",
        [
            (point(1, 0, 0), vector(1, 0, 0)),
            (point(0, 1, 0), vector(0, 1, 0)),
            (point(0, 0, 1), vector(0, 0, 1)),
        ],
    )
    def test_normal_on_axis(self, p, expected):
        """Test normals at points on the axes."""
        assert Sphere().normal_at(p) == expected

    def test_normal_at_nonaxial_point(self):
        """Test the normal at a non-axial point, which is also normalized."""
        k = math.sqrt(3) / 3
        n = Sphere().normal_at(point(k, k, k))
        assert n == vector(k, k, k)
        assert n == n.normalize()

    def test_normal_on_translated_sphere(self):
        """Test the normal on a translated sphere."""
        s = Sphere(transform=translation(0, 1, 0))
        assert s.normal_at(point(0, 1.70711, -0.70711)) == vector(0, 0.70711, -0.70711)

    def test_normal_on_transformed_sphere(self):
        """Test the normal on a scaled and rotated sphere."""
        s = Sphere(transform=scaling(1, 0.5, 1) * rotation_z(math.pi / 5))
        half = math.sqrt(2) / 2
        n = s.normal_at(point(0, half, -half))
        assert n.x == pytest.approx(0.0, abs=1e-5)
        assert n.y == pytest.approx(0.97014, abs=1e-5)
        assert n.z == pytest.approx(-0.24254, abs=1e-5)
        assert n.is_vector()


class TestSphereAttributes:
    """Tests for sphere transform and material."""

    def test_default_transform_and_material(self):
        """Test that a new sphere has the identity and the default material."""
        s = Sphere()
        assert s.transform == Matrix.identity()
        assert s.material == Material()

    def test_changing_transform_updates_inverse(self):
        """Test that assigning a transform refreshes the cached inverse."""
        s = Sphere()
        t = translation(2, 3, 4)
        s.transform = t
        assert s.transform == t
        assert s.inverse_transform == t.inverse()
        assert s.inverse_transpose == t.inverse().transpose()

    def test_assign_material(self):
        """Test assigning a material."""
        m = Material(ambient=1.0)
        s = Sphere(material=m)
        assert s.material == m

    def test_singular_transform_raises(self):
        """Test that a singular transform is rejected at construction."""
        with pytest.raises(SingularMatrixError):
            Sphere(transform=scaling(1, 0, 1))

    def test_tiny_sphere_still_intersects(self):
        """Test that a very small sphere is accepted and can be hit."""
        s = Sphere(transform=scaling(1e-5, 1e-5, 1e-5))
        xs = s.intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))
        assert _ts(xs) == pytest.approx([5.0 - 1e-5, 5.0 + 1e-5])

    def test_spheres_are_unhashable(self):
        """Test that value-compared spheres cannot be used as set members."""
        with pytest.raises(TypeError):
            hash(Sphere())

    def test_non_4x4_transform_raises(self):
        """Test that the transform must be 4x4."""
        with pytest.raises(ValueError, match="4x4"):
            Sphere(transform=Matrix(2, [1, 0, 0, 1]))

    def test_spheres_compare_by_value(self):
        """Test that equal transform and material make equal spheres."""
        assert Sphere(transform=scaling(0.5, 0.5, 0.5)) == Sphere(transform=scaling(0.5, 0.5, 0.5))
        assert Sphere() != Sphere(transform=scaling(0.5, 0.5, 0.5))
