from dataclasses import dataclass
import math
from typing import Tuple, Union, overload

from curvegeom.VectorFloat import VectorFloat


@dataclass(frozen=True, slots=True)
class PointFloat:
    x: float
    y: float
    def as_tuple(self) -> Tuple[float, float]: return (self.x, self.y)
    def __add__(self, v: VectorFloat) -> "PointFloat": return PointFloat(self.x + v.x, self.y + v.y)
    def __mul__(self, k: float) -> "PointFloat": return PointFloat(self.x * k, self.y * k)
    def __truediv__(self, k: float) -> "PointFloat": return PointFloat(self.x / k, self.y / k)
    def __abs__(self) -> float: return math.hypot(self.x, self.y)
    def to_vector(self) -> VectorFloat: return VectorFloat(self.x, self.y)
    def distance_to(self, p: "PointFloat") -> float: return math.hypot(self.x - p.x, self.y - p.y)

    @overload
    def __sub__(self, o: "PointFloat") -> VectorFloat: ...
    @overload
    def __sub__(self, o: VectorFloat) -> "PointFloat": ...

    def __sub__(self, o: Union["PointFloat", VectorFloat]) -> Union[VectorFloat, "PointFloat"]:
        # point - point is a displacement, point - vector moves the point
        if isinstance(o, VectorFloat):
            return PointFloat(self.x - o.x, self.y - o.y)
        return VectorFloat(self.x - o.x, self.y - o.y)

    def lerp(self, o: "PointFloat", t: float) -> "PointFloat":
        return PointFloat(self.x + (o.x - self.x) * t, self.y + (o.y - self.y) * t)


def point(x: float, y: float) -> PointFloat:
    return PointFloat(x, y)
