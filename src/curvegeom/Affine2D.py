import math
import re
import numpy as np
from typing import Callable, Dict, Optional, Tuple

from curvegeom.PointFloat import PointFloat
from curvegeom.VectorFloat import VectorFloat

# determinant below which a transform is treated as singular
SINGULAR_EPSILON = 1e-12


class Affine2D:
    """Affine map of the plane, kept as a 3x3 homogeneous numpy matrix.

    Points are column vectors [x, y, 1]^T, so `A @ B` maps through B first and
    A second. `A.then(B)` reads left to right instead.

    Curves are transformed by mapping their control points, which is exact
    for bézier segments under any affine map.
    """

    def __init__(self, m: Optional[np.ndarray] = None):
        self.m = np.eye(3, dtype=float) if m is None else np.array(m, dtype=float).reshape(3, 3)

    def __matmul__(self, other: "Affine2D") -> "Affine2D":
        return Affine2D(self.m @ other.m)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Affine2D) and bool(np.array_equal(self.m, other.m))

    def __repr__(self) -> str:
        a, b, c, d, e, f = self.coefficients()
        return f"Affine2D(a={a!r}, b={b!r}, c={c!r}, d={d!r}, e={e!r}, f={f!r})"

    def coefficients(self) -> Tuple[float, float, float, float, float, float]:
        """The six SVG coefficients (a b c d e f)."""
        return (float(self.m[0, 0]), float(self.m[1, 0]), float(self.m[0, 1]),
                float(self.m[1, 1]), float(self.m[0, 2]), float(self.m[1, 2]))

    def then(self, other: "Affine2D") -> "Affine2D":
        return other @ self

    def apply(self, x: float, y: float) -> Tuple[float, float]:
        a, b, c, d, e, f = self.coefficients()
        return (a * x + c * y + e, b * x + d * y + f)

    def transform_point(self, p: PointFloat) -> PointFloat:
        return PointFloat(*self.apply(p.x, p.y))

    def transform_vector(self, v: VectorFloat) -> VectorFloat:
        # no translation for vectors
        a, b, c, d, _, _ = self.coefficients()
        return VectorFloat(a * v.x + c * v.y, b * v.x + d * v.y)

    def determinant(self) -> float:
        return float(self.m[0, 0] * self.m[1, 1] - self.m[0, 1] * self.m[1, 0])

    def inverse(self) -> Optional["Affine2D"]:
        if abs(self.determinant()) < SINGULAR_EPSILON:
            return None
        return Affine2D(np.linalg.inv(self.m))

    @staticmethod
    def identity() -> "Affine2D":
        return Affine2D()

    @staticmethod
    def matrix(a: float, b: float, c: float, d: float, e: float, f: float) -> "Affine2D":
        return Affine2D([[a, c, e], [b, d, f], [0.0, 0.0, 1.0]])

    @staticmethod
    def translation(tx: float, ty: float = 0.0) -> "Affine2D":
        return Affine2D.matrix(1.0, 0.0, 0.0, 1.0, tx, ty)

    @staticmethod
    def scale(sx: float, sy: Optional[float] = None) -> "Affine2D":
        return Affine2D.matrix(sx, 0.0, 0.0, sx if sy is None else sy, 0.0, 0.0)

    @staticmethod
    def rotation_deg(angle_deg: float, cx: float = 0.0, cy: float = 0.0) -> "Affine2D":
        a = math.radians(angle_deg)
        r = Affine2D.matrix(math.cos(a), math.sin(a), -math.sin(a), math.cos(a), 0.0, 0.0)
        if cx == 0.0 and cy == 0.0:
            return r
        return Affine2D.translation(cx, cy) @ r @ Affine2D.translation(-cx, -cy)

    @staticmethod
    def skew_x_deg(angle_deg: float) -> "Affine2D":
        return Affine2D.matrix(1.0, 0.0, math.tan(math.radians(angle_deg)), 1.0, 0.0, 0.0)

    @staticmethod
    def skew_y_deg(angle_deg: float) -> "Affine2D":
        return Affine2D.matrix(1.0, math.tan(math.radians(angle_deg)), 0.0, 1.0, 0.0, 0.0)

    @staticmethod
    def from_svg_transform(transform_str: str) -> "Affine2D":
        """Parse an SVG `transform` attribute, e.g. "translate(10 5) rotate(30)".

        Raises ValueError when a function gets the wrong number of arguments.
        """
        transform = Affine2D.identity()
        if not transform_str:
            return transform

        for name, args in _TRANSFORM_RE.findall(transform_str):
            counts, build = _SVG_FUNCTIONS[name]
            parts = [float(p) for p in re.split(r"[\s,]+", args.strip()) if p]
            if len(parts) not in counts:
                raise ValueError(f"Unsupported transform: {name}({args})")
            transform = transform @ build(*parts)
        return transform


_SVG_FUNCTIONS: Dict[str, Tuple[Tuple[int, ...], Callable[..., Affine2D]]] = {
    "matrix": ((6,), Affine2D.matrix),
    "translate": ((1, 2), Affine2D.translation),
    "scale": ((1, 2), Affine2D.scale),
    "rotate": ((1, 3), Affine2D.rotation_deg),
    "skewX": ((1,), Affine2D.skew_x_deg),
    "skewY": ((1,), Affine2D.skew_y_deg),
}

_TRANSFORM_RE = re.compile(r"(matrix|translate|scale|rotate|skewX|skewY)\s*\(([^)]*)\)")
