import math
import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from curvegeom.CubicBezierSegment import CubicBezierSegment
from curvegeom.PointFloat import PointFloat
from curvegeom.QuadraticBezierSegment import QuadraticBezierSegment
from curvegeom.Segment import Flattened


def pt(x, y):
    return PointFloat(x, y)


def point_segment_distance(p, a, b):
    ab = b - a
    l2 = ab.square_length()
    if l2 == 0.0:
        return p.distance_to(a)
    t = max(0.0, min(1.0, (p - a).dot(ab) / l2))
    return p.distance_to(a + ab * t)


def polyline_distance(p, polyline):
    return min(point_segment_distance(p, a, b) for a, b in zip(polyline, polyline[1:]))


@pytest.fixture
def arch():
    return QuadraticBezierSegment(pt(0.0, 0.0), pt(50.0, 100.0), pt(100.0, 0.0))


def test_length_straight_line():
    # aligned points: both curves are the straight line (0,0) -> (2,0)
    length = QuadraticBezierSegment(pt(0.0, 0.0), pt(1.0, 0.0), pt(2.0, 0.0)).approximate_length(0.01)
    assert length == 2.0

    length = CubicBezierSegment(pt(0.0, 0.0), pt(1.0, 0.0), pt(1.0, 0.0), pt(2.0, 0.0)).approximate_length(0.01)
    assert length == 2.0


def test_flattening_step_is_one_for_flat_curve():
    curve = QuadraticBezierSegment(pt(0.0, 0.0), pt(1.0, 0.0), pt(2.0, 0.0))
    assert curve.flattening_step(0.1) == 1.0


def test_flattening_step_formula(arch):
    v1 = arch.ctrl - arch.from_
    v2 = arch.to - arch.from_
    h = math.hypot(v1.x, v1.y)
    expected = 2 * math.sqrt(0.1 * abs(h / (v2.x * v1.y - v2.y * v1.x)) / 3)
    assert arch.flattening_step(0.1) == pytest.approx(expected)
    assert 0.0 < arch.flattening_step(0.1) < 1.0


def test_flattening_step_is_clamped(arch):
    assert arch.flattening_step(1e6) == 1.0


def test_flattened_ends_at_end_point(arch):
    points = list(arch.flattened(0.1))
    assert len(points) > 2
    assert points[-1] == arch.to
    # the start point is not part of the output
    assert points[0] != arch.from_


def test_flattened_stays_within_tolerance(arch):
    tolerance = 0.1
    polyline = [arch.from_] + list(arch.flattened(tolerance))
    for i in range(501):
        assert polyline_distance(arch.sample(i / 500), polyline) <= tolerance


def test_flattened_points_lie_on_curve(arch):
    for p in arch.flattened(0.5):
        t = (p.x - arch.from_.x) / (arch.to.x - arch.from_.x)  # x is linear in t for this curve
        assert p.y == pytest.approx(arch.y(t), abs=1e-9)


def test_smaller_tolerance_gives_more_points(arch):
    assert len(list(arch.flattened(0.01))) > len(list(arch.flattened(1.0)))


def test_flattened_is_not_restartable(arch):
    it = arch.flattened(0.5)
    assert isinstance(it, Flattened)
    first = list(it)
    assert first
    assert list(it) == []
    with pytest.raises(StopIteration):
        next(it)


def test_flattened_for_each_matches_iterator(arch):
    collected = []
    arch.flattened_for_each(0.05, collected.append)
    assert collected == list(arch.flattened(0.05))


def test_degenerate_curve_flattens_to_single_point():
    p = pt(3.0, 3.0)
    curve = QuadraticBezierSegment(p, p, p)
    assert list(curve.flattened(0.1)) == [p]
    assert curve.approximate_length(0.1) == 0.0


def test_approximate_length_converges(arch):
    fine = [arch.sample(i / 20000) for i in range(20001)]
    reference = sum(a.distance_to(b) for a, b in zip(fine, fine[1:]))

    coarse = arch.approximate_length(1.0)
    precise = arch.approximate_length(0.001)
    assert coarse <= precise + 1e-9
    assert precise <= reference + 1e-9
    assert precise == pytest.approx(reference, rel=1e-4)


@pytest.mark.skipif(not __debug__, reason="tolerance check is an assertion")
def test_zero_tolerance_is_rejected(arch):
    with pytest.raises(AssertionError):
        arch.flattened(0.0)


def test_cubic_flattening_reaches_end_point():
    curve = CubicBezierSegment(pt(0.0, 0.0), pt(0.0, 50.0), pt(100.0, 50.0), pt(100.0, 0.0))
    points = list(curve.flattened(0.1))
    assert len(points) > 2
    assert points[-1] == curve.to


@pytest.mark.parametrize("points", [
    ((0.0, 0.0), (0.0, 0.0), (100.0, 100.0), (100.0, 0.0)),
    ((0.0, 0.0), (50.0, 50.0), (100.0, 100.0), (100.0, 0.0)),
    ((0.0, 0.0), (0.0, 50.0), (100.0, 50.0), (100.0, 0.0)),
    ((0.0, 0.0), (120.0, 80.0), (-20.0, 80.0), (100.0, 0.0)),
])
def test_cubic_flattened_stays_within_tolerance(points):
    curve = CubicBezierSegment(*(pt(x, y) for x, y in points))
    tolerance = 0.1
    polyline = [curve.from_] + list(curve.flattened(tolerance))
    assert len(polyline) > 3
    assert polyline[-1] == curve.to
    for i in range(501):
        assert polyline_distance(curve.sample(i / 500), polyline) <= tolerance


def test_cubic_flatness_is_zero_for_straight_curve():
    curve = CubicBezierSegment(pt(0.0, 0.0), pt(1.0, 0.0), pt(1.0, 0.0), pt(2.0, 0.0))
    assert curve.flatness() == 0.0
    assert curve.flattening_step(0.1) == 1.0


def test_cubic_flattening_step_halves():
    curve = CubicBezierSegment(pt(0.0, 0.0), pt(0.0, 0.0), pt(100.0, 100.0), pt(100.0, 0.0))
    t = curve.flattening_step(0.1)
    assert 0.0 < t < 1.0
    assert math.log2(1.0 / t) == int(math.log2(1.0 / t))
    assert curve.before_split(t).flatness() <= 0.1
    assert curve.before_split(2 * t).flatness() > 0.1


def test_numpy_integer_coordinates_flatten():
    xy = np.array([[0, 0], [50, 100], [100, 0]], dtype=np.int64)
    curve = QuadraticBezierSegment(*(PointFloat(x, y) for x, y in xy))
    reference = QuadraticBezierSegment(pt(0.0, 0.0), pt(50.0, 100.0), pt(100.0, 0.0))

    assert curve.flattening_step(0.1) == pytest.approx(reference.flattening_step(0.1))
    points = list(curve.flattened(0.1))
    expected = list(reference.flattened(0.1))
    assert len(points) == len(expected)
    for p, q in zip(points, expected):
        assert p.x == pytest.approx(q.x) and p.y == pytest.approx(q.y)
    assert curve.approximate_length(0.1) == pytest.approx(reference.approximate_length(0.1))
