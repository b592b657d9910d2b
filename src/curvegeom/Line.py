import math
from dataclasses import dataclass
from typing import Optional

from curvegeom.PointFloat import PointFloat
from curvegeom.VectorFloat import VectorFloat

PARALLEL_EPSILON = 1e-12


@dataclass(frozen=True, slots=True)
class LineEquation:
    """Implicit line a*x + b*y + c = 0 with (a, b) of unit length.

    The signed distance is positive on the left of the direction the
    equation was built from.
    """
    a: float
    b: float
    c: float

    @staticmethod
    def new(a: float, b: float, c: float) -> "LineEquation":
        n = math.hypot(a, b)
        # A zero normal describes no line at all; keep it so every distance is c
        if n == 0:
            return LineEquation(a, b, c)
        return LineEquation(a / n, b / n, c / n)

    def signed_distance_to_point(self, p: PointFloat) -> float:
        return self.a * p.x + self.b * p.y + self.c

    def distance_to_point(self, p: PointFloat) -> float:
        return abs(self.signed_distance_to_point(p))

    def offset(self, d: float) -> "LineEquation":
        """Parallel line moved by `d` along the normal."""
        return LineEquation(self.a, self.b, self.c - d)

    def solve_y_for_x(self, x: float) -> Optional[float]:
        if self.b == 0:
            return None
        return -(self.a * x + self.c) / self.b

    def solve_x_for_y(self, y: float) -> Optional[float]:
        if self.a == 0:
            return None
        return -(self.b * y + self.c) / self.a


@dataclass(frozen=True, slots=True)
class Line:
    """Infinite line through `point` along `vector`."""
    point: PointFloat
    vector: VectorFloat

    def equation(self) -> LineEquation:
        a = -self.vector.y
        b = self.vector.x
        c = -(a * self.point.x + b * self.point.y)
        return LineEquation.new(a, b, c)

    def intersection(self, other: "Line") -> Optional[PointFloat]:
        det = self.vector.cross(other.vector)
        if abs(det) <= PARALLEL_EPSILON:
            return None
        s = (other.point - self.point).cross(other.vector) / det
        return self.point + self.vector * s


@dataclass(frozen=True, slots=True)
class LineSegment:
    from_: PointFloat
    to: PointFloat

    def sample(self, t: float) -> PointFloat:
        return self.from_.lerp(self.to, t)

    def to_vector(self) -> VectorFloat:
        return self.to - self.from_

    def to_line(self) -> Line:
        return Line(self.from_, self.to_vector())

    def length(self) -> float:
        return self.to_vector().length()

    def flip(self) -> "LineSegment":
        return LineSegment(self.to, self.from_)

    def solve_t_for_point(self, p: PointFloat) -> Optional[float]:
        """Parameter of the projection of `p` on the supporting line."""
        v = self.to_vector()
        l2 = v.square_length()
        if l2 == 0:
            return None
        return (p - self.from_).dot(v) / l2

    def distance_to_point(self, p: PointFloat) -> float:
        """Distance from `p` to the closest point of the segment."""
        v = self.to_vector()
        l2 = v.square_length()
        if l2 == 0:
            return p.distance_to(self.from_)
        t = max(0.0, min(1.0, (p - self.from_).dot(v) / l2))
        return p.distance_to(self.sample(t))
