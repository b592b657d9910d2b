from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from curvegeom.Affine2D import Affine2D
from curvegeom.BoundedList import BoundedList
from curvegeom.CubicBezierSegment import CubicBezierSegment
from curvegeom.Line import Line, LineEquation, LineSegment
from curvegeom.Monotonic import Monotonic, assume_monotonic
from curvegeom.PointFloat import PointFloat
from curvegeom.RectFloat import RectFloat
from curvegeom.Scalar import ScalarTraits
from curvegeom.Segment import Flattened, approximate_length_from_flattening, flattened_for_each
from curvegeom.Triangle import Triangle
from curvegeom.VectorFloat import VectorFloat

LINEAR_EPSILON = 1e-6
FLATTENING_EPSILON = 1e-6


@dataclass(frozen=True, slots=True)
class QuadraticBezierSegment:
    """Quadratic bézier curve: start point, control point and end point.

        P(t) = (1 - t)^2 * from_ + 2 * (1 - t) * t * ctrl + t^2 * to,  t in [0, 1]

    Any three points make a valid segment, including degenerate ones where
    points coincide.
    """
    from_: PointFloat
    ctrl: PointFloat
    to: PointFloat

    def _traits(self) -> ScalarTraits:
        return ScalarTraits.for_value(self.from_.x)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def sample(self, t: Any) -> PointFloat:
        """Point of the curve at t (expecting t between 0 and 1)."""
        return PointFloat(self.x(t), self.y(t))

    def x(self, t: Any) -> Any:
        two = self._traits().two
        t2 = t * t
        one_t = self._traits().one - t
        one_t2 = one_t * one_t
        return self.from_.x * one_t2 + self.ctrl.x * two * one_t * t + self.to.x * t2

    def y(self, t: Any) -> Any:
        two = self._traits().two
        t2 = t * t
        one_t = self._traits().one - t
        one_t2 = one_t * one_t
        return self.from_.y * one_t2 + self.ctrl.y * two * one_t * t + self.to.y * t2

    def _derivative_coefficients(self, t: Any) -> Tuple[Any, Any, Any]:
        traits = self._traits()
        return (traits.two * t - traits.two, traits.constant(-4.0) * t + traits.two, traits.two * t)

    def derivative(self, t: Any) -> VectorFloat:
        return VectorFloat(self.dx(t), self.dy(t))

    def dx(self, t: Any) -> Any:
        c0, c1, c2 = self._derivative_coefficients(t)
        return self.from_.x * c0 + self.ctrl.x * c1 + self.to.x * c2

    def dy(self, t: Any) -> Any:
        c0, c1, c2 = self._derivative_coefficients(t)
        return self.from_.y * c0 + self.ctrl.y * c1 + self.to.y * c2

    def flip(self) -> "QuadraticBezierSegment":
        """Same curve walked from `to` back to `from_`."""
        return QuadraticBezierSegment(self.to, self.ctrl, self.from_)

    def transform(self, transform: Affine2D) -> "QuadraticBezierSegment":
        return QuadraticBezierSegment(
            transform.transform_point(self.from_),
            transform.transform_point(self.ctrl),
            transform.transform_point(self.to),
        )

    def baseline(self) -> LineSegment:
        return LineSegment(self.from_, self.to)

    def is_linear(self, tolerance: Any) -> bool:
        """True when the control point is within `tolerance` of the baseline.

        Segments whose end points coincide have no baseline and are never
        linear.
        """
        if (self.from_ - self.to).square_length() < LINEAR_EPSILON:
            return False
        line = self.baseline().to_line().equation()
        return line.distance_to_point(self.ctrl) < tolerance

    def fat_line(self) -> Tuple[LineEquation, LineEquation]:
        """Two parallel lines, lower bound first, that enclose the curve."""
        l1 = self.baseline().to_line().equation()
        d = l1.signed_distance_to_point(self.ctrl)
        l2 = l1.offset(d / self._traits().two)
        if d >= 0:
            return (l1, l2)
        return (l2, l1)

    # ------------------------------------------------------------------
    # Extrema
    # ------------------------------------------------------------------

    @staticmethod
    def _local_extremum(a: Any, b: Any, c: Any, traits: ScalarTraits) -> Optional[Any]:
        div = a - traits.two * b + c
        if div == traits.zero:
            return None
        t = (a - b) / div
        if traits.zero < t < traits.one:
            return t
        return None

    def find_local_x_extremum(self) -> Optional[Any]:
        """t of the x extremum strictly inside (0, 1), or None if x is monotonic."""
        return self._local_extremum(self.from_.x, self.ctrl.x, self.to.x, self._traits())

    def find_local_y_extremum(self) -> Optional[Any]:
        """t of the y extremum strictly inside (0, 1), or None if y is monotonic."""
        return self._local_extremum(self.from_.y, self.ctrl.y, self.to.y, self._traits())

    # These return the advancement along the curve, not the coordinate.
    # Endpoint ties resolve to t=1 for maxima and to t=0 for minima.

    def find_x_maximum(self) -> Any:
        traits = self._traits()
        t = self.find_local_x_extremum()
        if t is not None:
            x = self.x(t)
            if x > self.from_.x and x > self.to.x:
                return t
        return traits.zero if self.from_.x > self.to.x else traits.one

    def find_x_minimum(self) -> Any:
        traits = self._traits()
        t = self.find_local_x_extremum()
        if t is not None:
            x = self.x(t)
            if x < self.from_.x and x < self.to.x:
                return t
        return traits.one if self.to.x < self.from_.x else traits.zero

    def find_y_maximum(self) -> Any:
        traits = self._traits()
        t = self.find_local_y_extremum()
        if t is not None:
            y = self.y(t)
            if y > self.from_.y and y > self.to.y:
                return t
        return traits.zero if self.from_.y > self.to.y else traits.one

    def find_y_minimum(self) -> Any:
        traits = self._traits()
        t = self.find_local_y_extremum()
        if t is not None:
            y = self.y(t)
            if y < self.from_.y and y < self.to.y:
                return t
        return traits.one if self.to.y < self.from_.y else traits.zero

    # ------------------------------------------------------------------
    # Bounds
    # ------------------------------------------------------------------

    def bounding_triangle(self) -> Triangle:
        return Triangle(self.from_, self.ctrl, self.to)

    def fast_bounding_range_x(self) -> Tuple[Any, Any]:
        return (min(self.from_.x, self.ctrl.x, self.to.x), max(self.from_.x, self.ctrl.x, self.to.x))

    def fast_bounding_range_y(self) -> Tuple[Any, Any]:
        return (min(self.from_.y, self.ctrl.y, self.to.y), max(self.from_.y, self.ctrl.y, self.to.y))

    def fast_bounding_rect(self) -> RectFloat:
        """Conservative rectangle from the control points."""
        min_x, max_x = self.fast_bounding_range_x()
        min_y, max_y = self.fast_bounding_range_y()
        return RectFloat(min_x, min_y, max_x - min_x, max_y - min_y)

    def bounding_range_x(self) -> Tuple[Any, Any]:
        return (self.x(self.find_x_minimum()), self.x(self.find_x_maximum()))

    def bounding_range_y(self) -> Tuple[Any, Any]:
        return (self.y(self.find_y_minimum()), self.y(self.find_y_maximum()))

    def bounding_rect(self) -> RectFloat:
        """Smallest rectangle containing the curve."""
        min_x, max_x = self.bounding_range_x()
        min_y, max_y = self.bounding_range_y()
        return RectFloat(min_x, min_y, max_x - min_x, max_y - min_y)

    # ------------------------------------------------------------------
    # Subdivision
    # ------------------------------------------------------------------

    def split(self, t: Any) -> Tuple["QuadraticBezierSegment", "QuadraticBezierSegment"]:
        split_point = self.sample(t)
        return (QuadraticBezierSegment(self.from_, self.from_.lerp(self.ctrl, t), split_point),
                QuadraticBezierSegment(split_point, self.ctrl.lerp(self.to, t), self.to))

    def before_split(self, t: Any) -> "QuadraticBezierSegment":
        return QuadraticBezierSegment(self.from_, self.from_.lerp(self.ctrl, t), self.sample(t))

    def after_split(self, t: Any) -> "QuadraticBezierSegment":
        return QuadraticBezierSegment(self.sample(t), self.ctrl.lerp(self.to, t), self.to)

    def split_range(self, t1: Any, t2: Any) -> "QuadraticBezierSegment":
        """Sub-curve between t1 and t2, same as splitting at both ends.

        Requires 0 <= t1 <= t2 <= 1 and t1 != 1; only checked when
        assertions are enabled.
        """
        traits = self._traits()
        assert t1 >= traits.zero, f"t1 = {t1} < 0"
        assert t2 <= traits.one, f"t2 = {t2} > 1"
        assert t1 <= t2, f"t1 = {t1} > t2 = {t2}"
        assert t1 != traits.one, "t1 = 1 leaves an empty range"

        from_ = self.sample(t1)
        to = self.sample(t2)
        a = self.from_.lerp(self.ctrl, t1)
        b = self.ctrl.lerp(self.to, t1)
        ctrl = a.lerp(b, (t2 - t1) / (traits.one - t1))
        return QuadraticBezierSegment(from_, ctrl, to)

    def to_cubic(self) -> CubicBezierSegment:
        """Exact degree elevation."""
        three = self._traits().constant(3.0)
        two = self._traits().two
        return CubicBezierSegment(
            self.from_,
            (self.from_ + self.ctrl.to_vector() * two) / three,
            (self.to + self.ctrl.to_vector() * two) / three,
            self.to,
        )

    def monotonic_pieces(self) -> List[Monotonic["QuadraticBezierSegment"]]:
        """Split at the interior x and y extrema; every piece is monotonic."""
        cuts = sorted({t for t in (self.find_local_x_extremum(), self.find_local_y_extremum()) if t is not None})
        bounds = [self._traits().zero] + cuts + [self._traits().one]
        return [assume_monotonic(self.split_range(t1, t2)) for t1, t2 in zip(bounds, bounds[1:])]

    def assume_monotonic(self) -> Monotonic["QuadraticBezierSegment"]:
        """Wrap this curve as monotonic without checking it."""
        return assume_monotonic(self)

    # ------------------------------------------------------------------
    # Flattening
    # ------------------------------------------------------------------

    def flattening_step(self, tolerance: Any) -> Any:
        """Largest t such that the chord [from_, sample(t)] stays within tolerance."""
        traits = self._traits()
        v1 = self.ctrl - self.from_
        v2 = self.to - self.from_

        v1_cross_v2 = v2.x * v1.y - v2.y * v1.x
        h = traits.hypot(v1.x, v1.y)

        # Control point on the chord: the curve is flat
        if traits.abs(v1_cross_v2 * h) <= FLATTENING_EPSILON:
            return traits.one

        s2inv = h / v1_cross_v2
        t = traits.two * traits.sqrt(tolerance * traits.abs(s2inv) / traits.constant(3.0))
        return traits.min(t, traits.one)

    def flattened(self, tolerance: Any) -> Flattened:
        """Polyline points after `from_`, ending with `to`."""
        assert tolerance > 0, "flattening tolerance must be positive"
        return Flattened(self, tolerance)

    def flattened_for_each(self, tolerance: Any, callback: Callable[[PointFloat], None]) -> None:
        assert tolerance > 0, "flattening tolerance must be positive"
        flattened_for_each(self, tolerance, callback)

    def approximate_length(self, tolerance: Any) -> Any:
        assert tolerance > 0, "flattening tolerance must be positive"
        return approximate_length_from_flattening(self, tolerance)

    # ------------------------------------------------------------------
    # Intersections
    # ------------------------------------------------------------------

    # TODO: solve the quadratic directly instead of going through to_cubic()

    def line_intersections_t(self, line: Line) -> BoundedList:
        """Curve parameters where the curve crosses `line`, at most two."""
        return BoundedList(2, self.to_cubic().line_intersections_t(line))

    def line_intersections(self, line: Line) -> BoundedList:
        return BoundedList(2, [self.sample(t) for t in self.to_cubic().line_intersections_t(line)])

    def line_segment_intersections_t(self, segment: LineSegment) -> BoundedList:
        """(t on curve, t on segment) pairs, at most two."""
        return BoundedList(2, self.to_cubic().line_segment_intersections_t(segment))

    def line_segment_intersections(self, segment: LineSegment) -> BoundedList:
        return BoundedList(2, [self.sample(t) for t, _ in self.to_cubic().line_segment_intersections_t(segment)])
