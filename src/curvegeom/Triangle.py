from dataclasses import dataclass

from curvegeom.PointFloat import PointFloat
from curvegeom.RectFloat import RectFloat


@dataclass(frozen=True, slots=True)
class Triangle:
    a: PointFloat
    b: PointFloat
    c: PointFloat

    def contains_point(self, p: PointFloat, tolerance: float = 1e-9) -> bool:
        """Closed containment: points on an edge count as inside.

        Works for both windings and for flat (collinear) triangles.
        """
        d1 = (self.b - self.a).cross(p - self.a)
        d2 = (self.c - self.b).cross(p - self.b)
        d3 = (self.a - self.c).cross(p - self.c)

        has_neg = d1 < -tolerance or d2 < -tolerance or d3 < -tolerance
        has_pos = d1 > tolerance or d2 > tolerance or d3 > tolerance
        if has_neg and has_pos:
            return False

        if not (has_neg or has_pos):
            # Degenerate triangle, fall back to its bounding box
            return self.bounding_rect().contains_point(p, tolerance)
        return True

    def bounding_rect(self) -> RectFloat:
        min_x = min(self.a.x, self.b.x, self.c.x)
        min_y = min(self.a.y, self.b.y, self.c.y)
        max_x = max(self.a.x, self.b.x, self.c.x)
        max_y = max(self.a.y, self.b.y, self.c.y)
        return RectFloat(min_x, min_y, max_x - min_x, max_y - min_y)
