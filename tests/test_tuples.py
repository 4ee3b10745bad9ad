"""Tests for Vector and Point."""

import math
import pytest
import numpy as np

from phongtrace.tuples import Vector, Point, ZeroVectorError


class TestTupleCreation:
    """Test construction and component access."""

    def test_point_has_w_one(self):
        p = Point(4.3, -4.2, 3.1)
        assert p.x == pytest.approx(4.3)
        assert p.y == pytest.approx(-4.2)
        assert p.z == pytest.approx(3.1)
        assert p.w == 1.0

    def test_vector_has_w_zero(self):
        v = Vector(4.3, -4.2, 3.1)
        assert v.w == 0.0

    def test_indexing_and_iteration(self):
        p = Point(1, 2, 3)
        assert p[0] == 1.0
        assert p[3] == 1.0
        assert list(p) == [1.0, 2.0, 3.0, 1.0]
        assert len(p) == 4

    def test_from_array_ignores_w(self):
        v = Vector.from_array([1, 2, 3, 1])
        assert v.w == 0.0
        p = Point.from_array(np.array([1.0, 2.0, 3.0, 0.0]))
        assert p.w == 1.0

    def test_origin(self):
        assert Point.origin() == Point(0, 0, 0)

    def test_immutable_storage(self):
        v = Vector(1, 2, 3)
        with pytest.raises(ValueError):
            v._data[0] = 5.0

    def test_xyz_is_a_copy(self):
        v = Vector(1, 2, 3)
        xyz = v.xyz
        xyz[0] = 9.0
        assert v.x == 1.0


class TestTupleEquality:
    """Test fuzzy, kind-aware equality."""

    def test_equal_within_epsilon(self):
        assert Vector(1, 2, 3) == Vector(1.000001, 2, 3)

    def test_not_equal_outside_epsilon(self):
        assert Vector(1, 2, 3) != Vector(1.001, 2, 3)

    def test_point_never_equals_vector(self):
        assert Point(1, 2, 3) != Vector(1, 2, 3)

    def test_fuzzy_eq_method(self):
        assert Point(1, 2, 3).fuzzy_eq(Point(1, 2, 3.000001))

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Vector(1, 2, 3))


class TestTupleArithmetic:
    """Test the typed arithmetic rules."""

    def test_point_plus_vector(self):
        result = Point(3, -2, 5) + Vector(-2, 3, 1)
        assert isinstance(result, Point)
        assert result == Point(1, 1, 6)

    def test_vector_plus_point(self):
        result = Vector(-2, 3, 1) + Point(3, -2, 5)
        assert isinstance(result, Point)
        assert result == Point(1, 1, 6)

    def test_vector_plus_vector(self):
        assert Vector(1, 2, 3) + Vector(1, 1, 1) == Vector(2, 3, 4)

    def test_point_minus_point(self):
        result = Point(3, 2, 1) - Point(5, 6, 7)
        assert isinstance(result, Vector)
        assert result == Vector(-2, -4, -6)

    def test_point_minus_vector(self):
        result = Point(3, 2, 1) - Vector(5, 6, 7)
        assert isinstance(result, Point)
        assert result == Point(-2, -4, -6)

    def test_vector_minus_vector(self):
        assert Vector(3, 2, 1) - Vector(5, 6, 7) == Vector(-2, -4, -6)

    def test_point_plus_point_rejected(self):
        with pytest.raises(TypeError):
            Point(1, 2, 3) + Point(1, 2, 3)

    def test_vector_minus_point_rejected(self):
        with pytest.raises(TypeError):
            Vector(1, 2, 3) - Point(1, 2, 3)

    def test_negate(self):
        assert -Vector(1, -2, 3) == Vector(-1, 2, -3)

    def test_negate_point_keeps_w(self):
        p = -Point(1, -2, 3)
        assert p.w == 1.0
        assert p == Point(-1, 2, -3)

    def test_scalar_multiply(self):
        assert Vector(1, -2, 3) * 3.5 == Vector(3.5, -7, 10.5)
        assert 0.5 * Vector(1, -2, 3) == Vector(0.5, -1, 1.5)

    def test_numpy_scalar_multiply(self):
        result = np.float64(2.0) * Vector(1, 2, 3)
        assert isinstance(result, Vector)
        assert result == Vector(2, 4, 6)

    def test_scalar_divide(self):
        assert Vector(1, -2, 3) / 2 == Vector(0.5, -1, 1.5)

    def test_scale_point_keeps_w(self):
        p = Point(1, 2, 3) * 2
        assert p.w == 1.0


class TestVectorOperations:
    """Test magnitude, normalize, dot, cross and reflect."""

    @pytest.mark.parametrize("v,expected", [
        (Vector(1, 0, 0), 1.0),
        (Vector(0, 1, 0), 1.0),
        (Vector(1, 2, 3), math.sqrt(14)),
        (Vector(-1, -2, -3), math.sqrt(14)),
    ])
    def test_magnitude(self, v, expected):
        assert v.magnitude() == pytest.approx(expected)

    def test_normalize(self):
        assert Vector(4, 0, 0).normalize() == Vector(1, 0, 0)
        n = Vector(1, 2, 3).normalize()
        assert n == Vector(0.26726, 0.53452, 0.80178)
        assert n.magnitude() == pytest.approx(1.0)

    def test_normalize_zero_vector(self):
        with pytest.raises(ZeroVectorError):
            Vector(0, 0, 0).normalize()

    def test_zero_vector_error_is_value_error(self):
        assert issubclass(ZeroVectorError, ValueError)

    def test_dot(self):
        assert Vector(1, 2, 3).dot(Vector(2, 3, 4)) == pytest.approx(20.0)

    def test_cross(self):
        a = Vector(1, 2, 3)
        b = Vector(2, 3, 4)
        assert a.cross(b) == Vector(-1, 2, -1)
        assert b.cross(a) == Vector(1, -2, 1)

    def test_cross_is_vector(self):
        assert isinstance(Vector(1, 0, 0).cross(Vector(0, 1, 0)), Vector)

    def test_reflect_at_45_degrees(self):
        assert Vector(1, -1, 0).reflect(Vector(0, 1, 0)) == Vector(1, 1, 0)

    def test_reflect_off_slanted_surface(self):
        n = Vector(math.sqrt(2) / 2, math.sqrt(2) / 2, 0)
        assert Vector(0, -1, 0).reflect(n) == Vector(1, 0, 0)
