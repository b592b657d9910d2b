from typing import Any, Callable, Iterator, Protocol, TypeVar

from curvegeom.PointFloat import PointFloat

C = TypeVar("C", bound="FlatteningStep")


class FlatteningStep(Protocol):
    """What a curve needs to provide to be flattened by `Flattened`."""

    @property
    def from_(self) -> PointFloat: ...

    @property
    def to(self) -> PointFloat: ...

    def flattening_step(self, tolerance: Any) -> Any: ...

    def after_split(self, t: Any) -> Any: ...


class Flattened(Iterator[PointFloat]):
    """Lazy polyline approximation of a curve.

    Yields the polyline vertices after the start point, the last one being
    the curve's end point. The cursor is the part of the curve that is not
    flattened yet; every step narrows it. Not restartable.
    """

    __slots__ = ("_curve", "_tolerance", "_done")

    def __init__(self, curve: FlatteningStep, tolerance: Any):
        self._curve = curve
        self._tolerance = tolerance
        self._done = False

    def __iter__(self) -> "Flattened":
        return self

    def __next__(self) -> PointFloat:
        if self._done:
            raise StopIteration

        t = self._curve.flattening_step(self._tolerance)
        if t >= 1:
            self._done = True
            return self._curve.to

        self._curve = self._curve.after_split(t)
        return self._curve.from_


def flattened_for_each(curve: FlatteningStep, tolerance: Any, callback: Callable[[PointFloat], None]) -> None:
    """Push the flattened points of `curve` to `callback`, in order."""
    for p in Flattened(curve, tolerance):
        callback(p)


def approximate_length_from_flattening(curve: FlatteningStep, tolerance: Any) -> Any:
    start = curve.from_
    length = None
    for p in Flattened(curve, tolerance):
        d = start.distance_to(p)
        length = d if length is None else length + d
        start = p
    # Flattened always yields at least the end point
    return length
