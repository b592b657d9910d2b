import math
import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from curvegeom.Affine2D import Affine2D
from curvegeom.BoundedList import BoundedList, CapacityError
from curvegeom.Line import Line, LineEquation, LineSegment
from curvegeom.PointFloat import PointFloat
from curvegeom.QuadraticBezierSegment import QuadraticBezierSegment
from curvegeom.RectFloat import RectFloat, rect
from curvegeom.Scalar import ScalarTraits
from curvegeom.Triangle import Triangle
from curvegeom.VectorFloat import VectorFloat


@pytest.fixture
def point():
    return lambda x, y: PointFloat(x, y)


def test_point_vector_arithmetic(point):
    a, b = point(1.0, 2.0), point(4.0, 6.0)
    v = b - a
    assert v == VectorFloat(3.0, 4.0)
    assert abs(v) == 5.0
    assert a + v == b
    assert b - v == a
    assert a.lerp(b, 0.5) == point(2.5, 4.0)
    assert v.cross(VectorFloat(1.0, 0.0)) == -4.0
    assert v.normalize() == VectorFloat(0.6, 0.8)
    assert VectorFloat(0.0, 0.0).normalize() == VectorFloat(0.0, 0.0)


def test_transform_commutes_with_sample(point):
    curve = QuadraticBezierSegment(point(1.0, 1.0), point(5.0, 5.0), point(10.0, 2.0))
    m = Affine2D.translation(3.0, -2.0) @ Affine2D.rotation_deg(30.0) @ Affine2D.scale(2.0, 0.5)
    moved = curve.transform(m)
    for i in range(11):
        t = i / 10
        expected = m.transform_point(curve.sample(t))
        got = moved.sample(t)
        assert got.x == pytest.approx(expected.x) and got.y == pytest.approx(expected.y)


def test_affine_then_and_inverse(point):
    a = Affine2D.translation(1.0, 0.0)
    b = Affine2D.scale(2.0)
    assert a.then(b).transform_point(point(1.0, 1.0)) == point(4.0, 2.0)
    assert (a @ b).transform_point(point(1.0, 1.0)) == point(3.0, 2.0)
    inv = b.inverse()
    assert inv is not None and inv.transform_point(point(4.0, 2.0)) == point(2.0, 1.0)
    assert Affine2D.scale(0.0).inverse() is None
    assert b.transform_vector(VectorFloat(1.0, 1.0)) == VectorFloat(2.0, 2.0)
    assert a.transform_vector(VectorFloat(1.0, 1.0)) == VectorFloat(1.0, 1.0)


def test_svg_transform_parsing(point):
    m = Affine2D.from_svg_transform("translate(10, 5) scale(2)")
    assert m.transform_point(point(1.0, 1.0)) == point(12.0, 7.0)
    r = Affine2D.from_svg_transform("rotate(90)").transform_point(point(1.0, 0.0))
    assert r.x == pytest.approx(0.0, abs=1e-12) and r.y == pytest.approx(1.0)
    assert Affine2D.from_svg_transform("") == Affine2D.identity()
    with pytest.raises(ValueError):
        Affine2D.from_svg_transform("rotate(1, 2)")


def test_svg_skew_and_centered_rotation(point):
    k = Affine2D.from_svg_transform("skewX(45)").transform_point(point(0.0, 2.0))
    assert k.x == pytest.approx(2.0) and k.y == pytest.approx(2.0)
    k = Affine2D.from_svg_transform("skewY(45)").transform_point(point(2.0, 0.0))
    assert k.x == pytest.approx(2.0) and k.y == pytest.approx(2.0)
    r = Affine2D.from_svg_transform("rotate(180 1 1)").transform_point(point(0.0, 0.0))
    assert r.x == pytest.approx(2.0) and r.y == pytest.approx(2.0)
    assert Affine2D.matrix(1, 2, 3, 4, 5, 6).coefficients() == (1.0, 2.0, 3.0, 4.0, 5.0, 6.0)
    assert Affine2D.matrix(2, 0, 0, 3, 0, 0).determinant() == 6.0


def test_line_equation(point):
    eq = Line(point(0.0, 1.0), VectorFloat(4.0, 0.0)).equation()
    assert math.hypot(eq.a, eq.b) == pytest.approx(1.0)
    assert eq.signed_distance_to_point(point(7.0, 3.0)) == pytest.approx(2.0)
    assert eq.signed_distance_to_point(point(7.0, -1.0)) == pytest.approx(-2.0)
    assert eq.distance_to_point(point(7.0, -1.0)) == pytest.approx(2.0)
    assert eq.offset(2.0).signed_distance_to_point(point(7.0, 3.0)) == pytest.approx(0.0)
    assert eq.solve_y_for_x(123.0) == pytest.approx(1.0)
    assert eq.solve_x_for_y(1.0) is None


def test_degenerate_line_equation():
    eq = LineEquation.new(0.0, 0.0, 0.0)
    assert eq.distance_to_point(PointFloat(5.0, 5.0)) == 0.0


def test_line_intersection(point):
    a = Line(point(0.0, 0.0), VectorFloat(1.0, 1.0))
    b = Line(point(0.0, 2.0), VectorFloat(1.0, -1.0))
    p = a.intersection(b)
    assert p is not None and p.x == pytest.approx(1.0) and p.y == pytest.approx(1.0)
    assert a.intersection(Line(point(0.0, 1.0), VectorFloat(2.0, 2.0))) is None


def test_line_segment(point):
    seg = LineSegment(point(0.0, 0.0), point(4.0, 0.0))
    assert seg.sample(0.25) == point(1.0, 0.0)
    assert seg.length() == 4.0
    assert seg.solve_t_for_point(point(3.0, 7.0)) == 0.75
    assert seg.flip().from_ == seg.to
    assert LineSegment(point(1.0, 1.0), point(1.0, 1.0)).solve_t_for_point(point(0.0, 0.0)) is None
    assert seg.distance_to_point(point(2.0, 3.0)) == 3.0
    assert seg.distance_to_point(point(7.0, 4.0)) == 5.0
    assert LineSegment(point(1.0, 1.0), point(1.0, 1.0)).distance_to_point(point(4.0, 5.0)) == 5.0


def test_rect(point):
    r = rect(0.0, 0.0, 2.0, 1.0)
    assert r.bounds() == (0.0, 0.0, 2.0, 1.0)
    assert r.contains_point(point(2.0, 1.0))
    assert not r.contains_point(point(2.1, 1.0))
    assert r.contains_rect(RectFloat(0.5, 0.5, 1.0, 0.5))
    assert r.intersects(RectFloat(2.0, 1.0, 3.0, 3.0))
    assert not r.intersects(RectFloat(2.5, 0.0, 1.0, 1.0))


def test_triangle(point):
    tri = Triangle(point(0.0, 0.0), point(4.0, 0.0), point(0.0, 4.0))
    assert tri.contains_point(point(1.0, 1.0))
    assert tri.contains_point(point(2.0, 2.0))
    assert not tri.contains_point(point(3.0, 3.0))
    reverse = Triangle(point(0.0, 0.0), point(0.0, 4.0), point(4.0, 0.0))
    assert reverse.contains_point(point(1.0, 1.0))
    flat = Triangle(point(0.0, 0.0), point(1.0, 0.0), point(2.0, 0.0))
    assert flat.contains_point(point(1.5, 0.0))
    assert not flat.contains_point(point(1.5, 0.5))
    assert tri.bounding_rect() == rect(0.0, 0.0, 4.0, 4.0)


def test_bounded_list():
    items = BoundedList(2)
    items.push(1)
    items.push(2)
    assert items.is_full()
    assert items == [1, 2]
    assert items[-1] == 2
    with pytest.raises(CapacityError):
        items.push(3)
    with pytest.raises(CapacityError):
        BoundedList(1, [1, 2])


def test_scalar_traits():
    assert ScalarTraits.for_value(1.5).kind is float
    assert ScalarTraits.for_value(3).kind is float
    assert ScalarTraits.for_value(np.int64(3)).kind is float
    assert ScalarTraits.for_value(np.int32(3)).kind is float
    assert ScalarTraits.for_value(np.bool_(True)).kind is float
    assert ScalarTraits.for_value(np.int64(3)).sqrt(np.int64(2)) == pytest.approx(math.sqrt(2.0))
    f32 = ScalarTraits.for_value(np.float32(1.0))
    assert f32.kind is np.float32
    assert isinstance(f32.sqrt(np.float32(2.0)), np.float32)
    assert isinstance(f32.hypot(np.float32(3.0), np.float32(4.0)), np.float32)
    assert f32.hypot(np.float32(3.0), np.float32(4.0)) == 5.0
    assert ScalarTraits.for_value(np.float32(2.0)) is f32
    traits = ScalarTraits.for_value(1.0)
    assert (traits.zero, traits.one, traits.two) == (0.0, 1.0, 2.0)
    assert traits.min(1.0, 2.0) == 1.0 and traits.max(1.0, 2.0) == 2.0
