from dataclasses import dataclass
from typing import Any, Callable, List, Tuple

import numpy as np

from curvegeom.Affine2D import Affine2D
from curvegeom.BoundedList import BoundedList
from curvegeom.Line import Line, LineSegment
from curvegeom.PointFloat import PointFloat
from curvegeom.RectFloat import RectFloat
from curvegeom.Scalar import ScalarTraits
from curvegeom.Segment import Flattened, approximate_length_from_flattening, flattened_for_each
from curvegeom.VectorFloat import VectorFloat

# halvings before a flattening step is taken regardless of flatness
MAX_FLATTENING_DEPTH = 18

# Roots are accepted with this much imaginary part (tangent lines give
# double roots that numpy reports as a slightly complex pair).
ROOT_IMAG_EPSILON = 1e-7
ROOT_RANGE_EPSILON = 1e-9


@dataclass(frozen=True, slots=True)
class CubicBezierSegment:
    from_: PointFloat
    ctrl1: PointFloat
    ctrl2: PointFloat
    to: PointFloat

    def sample(self, t: Any) -> PointFloat:
        one = ScalarTraits.for_value(self.from_.x).one
        t2 = t * t
        t3 = t2 * t
        one_t = one - t
        one_t2 = one_t * one_t
        one_t3 = one_t2 * one_t
        return PointFloat(
            self.from_.x * one_t3 + self.ctrl1.x * 3 * one_t2 * t + self.ctrl2.x * 3 * one_t * t2 + self.to.x * t3,
            self.from_.y * one_t3 + self.ctrl1.y * 3 * one_t2 * t + self.ctrl2.y * 3 * one_t * t2 + self.to.y * t3,
        )

    def x(self, t: Any) -> Any:
        return self.sample(t).x

    def y(self, t: Any) -> Any:
        return self.sample(t).y

    def derivative(self, t: Any) -> VectorFloat:
        one = ScalarTraits.for_value(self.from_.x).one
        one_t = one - t
        return ((self.ctrl1 - self.from_) * (3 * one_t * one_t)
                + (self.ctrl2 - self.ctrl1) * (6 * one_t * t)
                + (self.to - self.ctrl2) * (3 * t * t))

    def dx(self, t: Any) -> Any:
        return self.derivative(t).x

    def dy(self, t: Any) -> Any:
        return self.derivative(t).y

    def flip(self) -> "CubicBezierSegment":
        return CubicBezierSegment(self.to, self.ctrl2, self.ctrl1, self.from_)

    def transform(self, transform: Affine2D) -> "CubicBezierSegment":
        return CubicBezierSegment(
            transform.transform_point(self.from_),
            transform.transform_point(self.ctrl1),
            transform.transform_point(self.ctrl2),
            transform.transform_point(self.to),
        )

    def baseline(self) -> LineSegment:
        return LineSegment(self.from_, self.to)

    def split(self, t: Any) -> Tuple["CubicBezierSegment", "CubicBezierSegment"]:
        ctrl1a = self.from_.lerp(self.ctrl1, t)
        ctrl12 = self.ctrl1.lerp(self.ctrl2, t)
        ctrl2b = self.ctrl2.lerp(self.to, t)
        ctrl1aa = ctrl1a.lerp(ctrl12, t)
        ctrl2bb = ctrl12.lerp(ctrl2b, t)
        p = ctrl1aa.lerp(ctrl2bb, t)
        return (CubicBezierSegment(self.from_, ctrl1a, ctrl1aa, p),
                CubicBezierSegment(p, ctrl2bb, ctrl2b, self.to))

    def before_split(self, t: Any) -> "CubicBezierSegment":
        return self.split(t)[0]

    def after_split(self, t: Any) -> "CubicBezierSegment":
        ctrl12 = self.ctrl1.lerp(self.ctrl2, t)
        ctrl2b = self.ctrl2.lerp(self.to, t)
        ctrl2bb = ctrl12.lerp(ctrl2b, t)
        return CubicBezierSegment(self.sample(t), ctrl2bb, ctrl2b, self.to)

    def split_range(self, t1: Any, t2: Any) -> "CubicBezierSegment":
        assert 0 <= t1 <= t2 <= 1 and t1 != 1, f"invalid range [{t1}, {t2}]"
        one = ScalarTraits.for_value(self.from_.x).one
        return self.after_split(t1).before_split((t2 - t1) / (one - t1))

    def fast_bounding_rect(self) -> RectFloat:
        xs = (self.from_.x, self.ctrl1.x, self.ctrl2.x, self.to.x)
        ys = (self.from_.y, self.ctrl1.y, self.ctrl2.y, self.to.y)
        return RectFloat(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))

    def flatness(self) -> Any:
        """Upper bound of the distance between the curve and its chord.

        The curve stays inside the hull of its control points, so the farther
        control point from the chord bounds the error.
        """
        chord = self.baseline()
        return max(chord.distance_to_point(self.ctrl1), chord.distance_to_point(self.ctrl2))

    def flattening_step(self, tolerance: Any) -> Any:
        """Largest t in 1, 1/2, 1/4, ... whose leading piece is flat within tolerance."""
        traits = ScalarTraits.for_value(self.from_.x)
        t = traits.one
        for _ in range(MAX_FLATTENING_DEPTH):
            if self.before_split(t).flatness() <= tolerance:
                break
            t = t / traits.two
        return t

    def flattened(self, tolerance: Any) -> Flattened:
        assert tolerance > 0, "flattening tolerance must be positive"
        return Flattened(self, tolerance)

    def flattened_for_each(self, tolerance: Any, callback: Callable[[PointFloat], None]) -> None:
        assert tolerance > 0, "flattening tolerance must be positive"
        flattened_for_each(self, tolerance, callback)

    def approximate_length(self, tolerance: Any) -> Any:
        assert tolerance > 0, "flattening tolerance must be positive"
        return approximate_length_from_flattening(self, tolerance)

    def _polynomial(self) -> Tuple[VectorFloat, VectorFloat, VectorFloat, VectorFloat]:
        """Power basis coefficients: P(t) = a t^3 + b t^2 + c t + d."""
        p0 = self.from_.to_vector()
        p1 = self.ctrl1.to_vector()
        p2 = self.ctrl2.to_vector()
        p3 = self.to.to_vector()
        a = p3 - p2 * 3 + p1 * 3 - p0
        b = (p2 - p1 * 2 + p0) * 3
        c = (p1 - p0) * 3
        return a, b, c, p0

    def line_intersections_t(self, line: Line) -> BoundedList:
        """Sorted curve parameters in [0, 1] where the curve crosses `line`."""
        eq = line.equation()
        coeffs = np.array([eq.a * v.x + eq.b * v.y for v in self._polynomial()], dtype=float)
        coeffs[3] += eq.c

        result: BoundedList = BoundedList(3)
        scale = float(np.max(np.abs(coeffs)))
        if scale == 0.0:
            # Degenerate line, or the curve lies on it
            return result

        # Drop leading terms that are round-off (an elevated quadratic has a
        # cubic term that is zero up to float error)
        coeffs[np.abs(coeffs) < scale * 1e-12] = 0.0
        coeffs = np.trim_zeros(coeffs, "f")
        if len(coeffs) < 2:
            return result

        found: List[float] = []
        for root in np.roots(coeffs):
            if abs(root.imag) > ROOT_IMAG_EPSILON:
                continue
            t = float(root.real)
            if t < -ROOT_RANGE_EPSILON or t > 1.0 + ROOT_RANGE_EPSILON:
                continue
            t = min(max(t, 0.0), 1.0)
            if any(abs(t - f) <= ROOT_IMAG_EPSILON for f in found):
                continue
            found.append(t)

        for t in sorted(found):
            result.push(t)
        return result

    def line_intersections(self, line: Line) -> BoundedList:
        return BoundedList(3, [self.sample(t) for t in self.line_intersections_t(line)])

    def line_segment_intersections_t(self, segment: LineSegment) -> BoundedList:
        """(t on curve, t on segment) pairs where the curve crosses `segment`."""
        result: BoundedList = BoundedList(3)
        seg_box = RectFloat(min(segment.from_.x, segment.to.x), min(segment.from_.y, segment.to.y),
                            abs(segment.to.x - segment.from_.x), abs(segment.to.y - segment.from_.y))
        if not self.fast_bounding_rect().intersects(seg_box):
            return result

        for t in self.line_intersections_t(segment.to_line()):
            t2 = segment.solve_t_for_point(self.sample(t))
            if t2 is None or t2 < -ROOT_RANGE_EPSILON or t2 > 1.0 + ROOT_RANGE_EPSILON:
                continue
            result.push((t, min(max(t2, 0.0), 1.0)))
        return result

    def line_segment_intersections(self, segment: LineSegment) -> BoundedList:
        return BoundedList(3, [self.sample(t) for t, _ in self.line_segment_intersections_t(segment)])
