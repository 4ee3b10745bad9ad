"""Tests for shapes."""

import math
import pytest

from phongtrace.materials import Phong
from phongtrace.matrix import Matrix, NotInvertibleError, Rotation
from phongtrace.ray import Ray
from phongtrace.shapes import Shape, Sphere
from phongtrace.tuples import Point, Vector


class TestSphereIntersection:
    """Test ray-sphere intersection."""

    def test_two_points(self):
        xs = Sphere().intersect(Ray(Point(0, 0, -5), Vector(0, 0, 1)))
        assert len(xs) == 2
        assert xs[0].t == pytest.approx(4.0)
        assert xs[1].t == pytest.approx(6.0)

    def test_tangent_returns_both_roots(self):
        xs = Sphere().intersect(Ray(Point(0, 1, -5), Vector(0, 0, 1)))
        assert len(xs) == 2
        assert xs[0].t == pytest.approx(5.0)
        assert xs[1].t == pytest.approx(5.0)

    def test_miss(self):
        xs = Sphere().intersect(Ray(Point(0, 2, -5), Vector(0, 0, 1)))
        assert len(xs) == 0

    def test_ray_inside(self):
        xs = Sphere().intersect(Ray(Point(0, 0, 0), Vector(0, 0, 1)))
        assert [i.t for i in xs] == pytest.approx([-1.0, 1.0])

    def test_sphere_behind_ray(self):
        xs = Sphere().intersect(Ray(Point(0, 0, 5), Vector(0, 0, 1)))
        assert [i.t for i in xs] == pytest.approx([-6.0, -4.0])

    def test_intersections_record_body(self):
        s = Sphere()
        xs = s.intersect(Ray(Point(0, 0, -5), Vector(0, 0, 1)))
        assert xs[0].body is s
        assert xs[1].body is s

    def test_scaled_sphere(self):
        s = Sphere(Matrix.scale(2, 2, 2))
        xs = s.intersect(Ray(Point(0, 0, -5), Vector(0, 0, 1)))
        assert [i.t for i in xs] == pytest.approx([3.0, 7.0])

    def test_translated_sphere(self):
        s = Sphere(Matrix.translate(5, 0, 0))
        xs = s.intersect(Ray(Point(0, 0, -5), Vector(0, 0, 1)))
        assert len(xs) == 0

    def test_intersections_keep_world_ray(self):
        ray = Ray(Point(0, 0, -5), Vector(0, 0, 1))
        xs = Sphere(Matrix.scale(2, 2, 2)).intersect(ray)
        assert xs[0].ray is ray


class TestSphereNormal:
    """Test surface normals."""

    @pytest.mark.parametrize("point,expected", [
        (Point(1, 0, 0), Vector(1, 0, 0)),
        (Point(0, 1, 0), Vector(0, 1, 0)),
        (Point(0, 0, 1), Vector(0, 0, 1)),
    ])
    def test_on_axes(self, point, expected):
        assert Sphere().normal_at(point) == expected

    def test_non_axial(self):
        k = math.sqrt(3) / 3
        n = Sphere().normal_at(Point(k, k, k))
        assert n == Vector(k, k, k)
        assert n == n.normalize()

    def test_translated(self):
        s = Sphere(Matrix.translate(0, 1, 0))
        n = s.normal_at(Point(0, 1.70711, -0.70711))
        assert n == Vector(0, 0.70711, -0.70711)

    def test_transformed(self):
        s = Sphere(Matrix.scale(1, 0.5, 1) * Matrix.rotate(Rotation.Z, math.pi / 5))
        n = s.normal_at(Point(0, math.sqrt(2) / 2, -math.sqrt(2) / 2))
        assert n == Vector(0, 0.97014, -0.24254)

    def test_normal_is_vector(self):
        n = Sphere(Matrix.translate(1, 2, 3)).normal_at(Point(2, 2, 3))
        assert isinstance(n, Vector)
        assert n.w == 0.0


class TestShapeAttributes:
    """Test transform and material handling."""

    def test_defaults(self):
        s = Sphere()
        assert s.transform == Matrix.identity()
        assert s.material == Phong()

    def test_with_transform(self):
        s = Sphere()
        t = Matrix.translate(2, 3, 4)
        s2 = s.with_transform(t)
        assert s2.transform == t
        assert s.transform == Matrix.identity()

    def test_with_material(self):
        m = Phong(ambient=1.0)
        s = Sphere().with_material(m)
        assert s.material == m

    def test_singular_transform_rejected(self):
        with pytest.raises(NotInvertibleError):
            Sphere(Matrix.scale(0, 1, 1))

    def test_equality(self):
        assert Sphere() == Sphere()
        assert Sphere() != Sphere(Matrix.translate(1, 0, 0))

    def test_abstract(self):
        with pytest.raises(TypeError):
            Shape()
