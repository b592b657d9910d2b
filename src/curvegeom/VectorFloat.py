from dataclasses import dataclass
import math


@dataclass(frozen=True, slots=True)
class VectorFloat:
    x: float
    y: float
    def __add__(self, o: "VectorFloat") -> "VectorFloat": return VectorFloat(self.x + o.x, self.y + o.y)
    def __sub__(self, o: "VectorFloat") -> "VectorFloat": return VectorFloat(self.x - o.x, self.y - o.y)
    def __mul__(self, k: float) -> "VectorFloat": return VectorFloat(self.x * k, self.y * k)
    __rmul__ = __mul__
    def __truediv__(self, k: float) -> "VectorFloat": return VectorFloat(self.x / k, self.y / k)
    def __neg__(self) -> "VectorFloat": return VectorFloat(-self.x, -self.y)
    def dot(self, o: "VectorFloat") -> float: return self.x * o.x + self.y * o.y
    def cross(self, o: "VectorFloat") -> float: return self.x * o.y - self.y * o.x
    def __abs__(self) -> float: return math.hypot(self.x, self.y)
    def length(self) -> float: return math.hypot(self.x, self.y)
    def square_length(self) -> float: return self.x * self.x + self.y * self.y

    def lerp(self, o: "VectorFloat", t: float) -> "VectorFloat":
        return VectorFloat(self.x + (o.x - self.x) * t, self.y + (o.y - self.y) * t)

    def normalize(self) -> "VectorFloat":
        n = self.length()
        if n == 0:
            return self
        return VectorFloat(self.x / n, self.y / n)

    def to_point(self) -> "PointFloat":
        from curvegeom.PointFloat import PointFloat
        return PointFloat(self.x, self.y)
