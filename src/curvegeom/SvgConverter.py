import logging
import math
from typing import Any, List, Optional

from svgelements import SVG, Arc, Close, CubicBezier, Line, Move, Path, QuadraticBezier, Shape

from curvegeom.Affine2D import Affine2D
from curvegeom.CubicBezierSegment import CubicBezierSegment
from curvegeom.PointFloat import PointFloat
from curvegeom.QuadraticBezierSegment import QuadraticBezierSegment

logger = logging.getLogger(__name__)


class SvgConverter:
    """SVG -> float polylines, curves flattened within a tolerance."""

    @staticmethod
    def to_point(pt: Any) -> PointFloat:
        return PointFloat(float(pt.x), float(pt.y))

    @staticmethod
    def quadratic_from_svg(seg: QuadraticBezier) -> QuadraticBezierSegment:
        return QuadraticBezierSegment(
            SvgConverter.to_point(seg.start),
            SvgConverter.to_point(seg.control),
            SvgConverter.to_point(seg.end))

    @staticmethod
    def cubic_from_svg(seg: CubicBezier) -> CubicBezierSegment:
        return CubicBezierSegment(
            SvgConverter.to_point(seg.start),
            SvgConverter.to_point(seg.control1),
            SvgConverter.to_point(seg.control2),
            SvgConverter.to_point(seg.end))

    @staticmethod
    def equal_with_tolerance(a: Optional[PointFloat], b: Optional[PointFloat], abs_tol: float) -> bool:
        if a is None or b is None:
            return False
        d = a.distance_to(b)
        m = max(abs(a), abs(b), 1.0)
        return d <= max(abs_tol, 1e-6 * m)

    @staticmethod
    def _segment_points(seg: Any, tol: float) -> List[PointFloat]:
        """Polyline for one path segment, start point included."""
        if isinstance(seg, QuadraticBezier):
            curve = SvgConverter.quadratic_from_svg(seg)
            return [curve.from_] + list(curve.flattened(tol))

        if isinstance(seg, CubicBezier):
            curve = SvgConverter.cubic_from_svg(seg)
            return [curve.from_] + list(curve.flattened(tol))

        if isinstance(seg, (Line, Close)):
            if seg.start is None or seg.end is None:
                return []
            return [SvgConverter.to_point(seg.start), SvgConverter.to_point(seg.end)]

        if isinstance(seg, Arc):
            length = max(seg.length(error=1e-4), 0.0)
            n = max(2, int(math.ceil(length / max(tol, 1e-9))))
            return [SvgConverter.to_point(seg.point(i / (n - 1))) for i in range(n)]

        return []

    @staticmethod
    def path_to_polylines(path: Path, tol: float) -> List[List[PointFloat]]:
        polylines: List[List[PointFloat]] = []
        current: List[PointFloat] = []
        last_end: Optional[PointFloat] = None

        for seg in path:
            if isinstance(seg, Move):
                continue
            pts = SvgConverter._segment_points(seg, tol)
            if len(pts) < 2:
                continue
            if current and SvgConverter.equal_with_tolerance(last_end, pts[0], tol):
                current.extend(pts[1:])
            else:
                if len(current) >= 2:
                    polylines.append(current)
                current = pts
            last_end = pts[-1]

        if len(current) >= 2:
            polylines.append(current)
        return polylines

    @staticmethod
    def convert(svg_path: str, tol: float = 0.1, transform: Optional[Affine2D] = None) -> List[List[PointFloat]]:
        """Read an SVG file and flatten every shape into polylines.

        Element transforms are applied by svgelements; `transform` is applied
        to the flattened points afterwards.
        """
        doc = SVG.parse(svg_path)

        polylines: List[List[PointFloat]] = []
        for elem in doc.elements():
            if not isinstance(elem, Shape):
                continue
            path = abs(Path(elem))
            found = SvgConverter.path_to_polylines(path, tol)
            logger.debug("%s: %d polylines", type(elem).__name__, len(found))
            polylines.extend(found)

        if transform is not None:
            polylines = [[transform.transform_point(p) for p in poly] for poly in polylines]

        logger.debug("Converted %s: %d polylines, %d points",
                     svg_path, len(polylines), sum(len(p) for p in polylines))
        return polylines
