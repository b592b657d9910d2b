from dataclasses import dataclass
from typing import Tuple

from curvegeom.PointFloat import PointFloat


@dataclass(frozen=True, slots=True)
class RectFloat:
    """Axis aligned rectangle given by its min corner and its size."""
    x: float
    y: float
    width: float
    height: float

    @property
    def min_x(self) -> float: return self.x

    @property
    def min_y(self) -> float: return self.y

    @property
    def max_x(self) -> float: return self.x + self.width

    @property
    def max_y(self) -> float: return self.y + self.height

    def bounds(self) -> Tuple[float, float, float, float]:
        """(minx, miny, maxx, maxy)"""
        return (self.min_x, self.min_y, self.max_x, self.max_y)

    def contains_point(self, p: PointFloat, tolerance: float = 0.0) -> bool:
        return (self.min_x - tolerance <= p.x <= self.max_x + tolerance
                and self.min_y - tolerance <= p.y <= self.max_y + tolerance)

    def contains_rect(self, other: "RectFloat", tolerance: float = 0.0) -> bool:
        return (self.min_x - tolerance <= other.min_x and other.max_x <= self.max_x + tolerance
                and self.min_y - tolerance <= other.min_y and other.max_y <= self.max_y + tolerance)

    def intersects(self, other: "RectFloat") -> bool:
        # closed: touching edges intersect
        return (self.min_x <= other.max_x and other.min_x <= self.max_x
                and self.min_y <= other.max_y and other.min_y <= self.max_y)


def rect(x: float, y: float, w: float, h: float) -> RectFloat:
    return RectFloat(x, y, w, h)
