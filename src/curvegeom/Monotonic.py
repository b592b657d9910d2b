"""Segments known to be monotonic in both x and y.

Monotonicity is a promise made by the caller, never checked: a
`Monotonic` can only be obtained through `assume_monotonic`, so every
place that makes the promise is easy to find. Solving for t on a segment
that breaks the promise returns a meaningless (but finite) parameter.
"""
import logging
from typing import Any, Generic, Tuple, TypeVar

from curvegeom.PointFloat import PointFloat
from curvegeom.RectFloat import RectFloat
from curvegeom.Scalar import ScalarTraits

logger = logging.getLogger(__name__)

S = TypeVar("S")

DEFAULT_TOLERANCE = 1e-5
MAX_ITERATIONS = 64
_MONOTONIC_SAMPLES = 8

_ASSUMED = object()


class Monotonic(Generic[S]):
    __slots__ = ("_segment",)

    def __init__(self, segment: S, _token: object = None):
        if _token is not _ASSUMED:
            raise TypeError("Monotonic segments are only created by assume_monotonic()")
        self._segment = segment

    @property
    def segment(self) -> S:
        return self._segment

    @property
    def from_(self) -> PointFloat:
        return self._segment.from_

    @property
    def to(self) -> PointFloat:
        return self._segment.to

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Monotonic) and self._segment == other._segment

    def __hash__(self) -> int:
        return hash(self._segment)

    def __repr__(self) -> str:
        return f"Monotonic({self._segment!r})"

    def sample(self, t: Any) -> PointFloat: return self._segment.sample(t)
    def x(self, t: Any) -> Any: return self._segment.x(t)
    def y(self, t: Any) -> Any: return self._segment.y(t)

    def bounding_rect(self) -> RectFloat:
        # the extrema of a monotonic curve are its end points
        a, b = self._segment.from_, self._segment.to
        min_x, max_x = min(a.x, b.x), max(a.x, b.x)
        min_y, max_y = min(a.y, b.y), max(a.y, b.y)
        return RectFloat(min_x, min_y, max_x - min_x, max_y - min_y)

    def split(self, t: Any) -> Tuple["Monotonic[S]", "Monotonic[S]"]:
        a, b = self._segment.split(t)
        return assume_monotonic(a), assume_monotonic(b)

    def split_range(self, t1: Any, t2: Any) -> "Monotonic[S]":
        return assume_monotonic(self._segment.split_range(t1, t2))

    def solve_t_for_x(self, x: Any, t_range: Tuple[Any, Any] = (0.0, 1.0), tolerance: Any = DEFAULT_TOLERANCE) -> Any:
        """Parameter t in `t_range` where the curve reaches abscissa `x`."""
        if __debug__:
            self._warn_if_not_monotonic("x", self._segment.x)
        return self._solve(x, self._segment.x, self._segment.dx, t_range, tolerance)

    def solve_t_for_y(self, y: Any, t_range: Tuple[Any, Any] = (0.0, 1.0), tolerance: Any = DEFAULT_TOLERANCE) -> Any:
        """Parameter t in `t_range` where the curve reaches ordinate `y`."""
        if __debug__:
            self._warn_if_not_monotonic("y", self._segment.y)
        return self._solve(y, self._segment.y, self._segment.dy, t_range, tolerance)

    def _solve(self, value, f, df, t_range, tolerance):
        traits = ScalarTraits.for_value(self._segment.from_.x)
        t0, t1 = traits.constant(t_range[0]), traits.constant(t_range[1])
        v0, v1 = f(t0), f(t1)
        increasing = v1 >= v0

        # Outside of the covered range: the closest end wins
        if (value <= v0) if increasing else (value >= v0):
            return t0
        if (value >= v1) if increasing else (value <= v1):
            return t1

        # Newton steps, falling back to bisection whenever a step leaves the bracket
        t = (t0 + t1) / traits.two
        for _ in range(MAX_ITERATIONS):
            v = f(t)
            if abs(v - value) <= tolerance:
                return t
            if (v < value) == increasing:
                t0 = t
            else:
                t1 = t
            d = df(t)
            nt = t - (v - value) / d if d != 0 else t0
            t = nt if t0 < nt < t1 else (t0 + t1) / traits.two
        return t

    def _warn_if_not_monotonic(self, axis: str, f) -> None:
        values = [f(i / _MONOTONIC_SAMPLES) for i in range(_MONOTONIC_SAMPLES + 1)]
        steps = [b - a for a, b in zip(values, values[1:])]
        if any(s > 0 for s in steps) and any(s < 0 for s in steps):
            logger.warning("segment %r is not monotonic in %s, inversion results are unreliable",
                           self._segment, axis)


def assume_monotonic(segment: S) -> Monotonic[S]:
    """Wrap `segment` without checking that it is monotonic in x and y."""
    return Monotonic(segment, _ASSUMED)
