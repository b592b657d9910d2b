from __future__ import annotations

import argparse
import json
import logging
from typing import List, Optional, Sequence

from curvegeom.Affine2D import Affine2D
from curvegeom.PointFloat import PointFloat
from curvegeom.QuadraticBezierSegment import QuadraticBezierSegment
from curvegeom.RectFloat import RectFloat

logger = logging.getLogger(__name__)


def visualize_polylines(polylines: List[List[PointFloat]],
                        curve: Optional[QuadraticBezierSegment] = None,
                        show_bounds: bool = True):
    """Plot the flattened polylines; for a single curve also its hull and bounds."""
    import matplotlib.pyplot as plt
    from matplotlib.patches import Rectangle

    fig, ax = plt.subplots(figsize=(8, 6))

    for pl in polylines:
        ax.plot([p.x for p in pl], [p.y for p in pl], marker=".", linewidth=1.0)

    if curve is not None:
        hull = [curve.from_, curve.ctrl, curve.to]
        ax.plot([p.x for p in hull], [p.y for p in hull], linestyle="--", color="0.6", linewidth=0.8)
        if show_bounds:
            r = curve.bounding_rect()
            ax.add_patch(Rectangle((r.x, r.y), r.width, r.height, fill=False, edgecolor="tab:red", linewidth=0.8))

    ax.set_aspect("equal", adjustable="datalim")
    ax.grid(True)
    plt.tight_layout()
    plt.show()


# -----------------------------
# Polyline export
# -----------------------------


def export_polylines_json(polylines: List[List[PointFloat]], path: str) -> None:
    """Export as JSON: { "polylines": [ [[x,y], ...], ... ] }"""
    obj = {
        "polylines": [[[p.x, p.y] for p in pl] for pl in polylines],
    }
    data = json.dumps(obj, ensure_ascii=False, separators=(",", ":"))
    if path == "-" or path == "stdout":
        print(data)
    else:
        with open(path, "w", encoding="utf-8") as f:
            f.write(data)


def export_polylines_txt(polylines: List[List[PointFloat]], path: str) -> None:
    """Export text: one polyline per line, 'x1,y1 x2,y2 ...'."""
    lines = []
    for pl in polylines:
        line = " ".join(f"{p.x:g},{p.y:g}" for p in pl)
        lines.append(line)
    data = "\n".join(lines) + "\n"
    if path == "-" or path == "stdout":
        print(data, end="")
    else:
        with open(path, "w", encoding="utf-8") as f:
            f.write(data)


def polylines_bounds(polylines: List[List[PointFloat]]) -> RectFloat:
    xs = [p.x for pl in polylines for p in pl]
    ys = [p.y for pl in polylines for p in pl]
    if not xs:
        return RectFloat(0.0, 0.0, 0.0, 0.0)
    return RectFloat(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Flatten quadratic bézier curves into polylines")
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument("--from", dest="from_", nargs=2, type=float, metavar=("X", "Y"), help="Curve start point")
    src.add_argument("--input", dest="svg", help="Input SVG file")
    ap.add_argument("--ctrl", nargs=2, type=float, metavar=("X", "Y"), help="Curve control point")
    ap.add_argument("--to", nargs=2, type=float, metavar=("X", "Y"), help="Curve end point")
    ap.add_argument("--tol", type=float, default=0.1, help="Flattening tolerance (default: 0.1)")
    ap.add_argument("--transform", default="", help="SVG transform applied to the curve, e.g. 'rotate(30)'")
    ap.add_argument("--view", action="store_true", help="Plot the result with matplotlib")
    ap.add_argument("--export-json", metavar="PATH", help="Write polylines to JSON (use '-' for stdout)")
    ap.add_argument("--export-txt", metavar="PATH", help="Write polylines to TXT (use '-' for stdout)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.tol <= 0:
        ap.error("--tol must be positive")
    try:
        transform = Affine2D.from_svg_transform(args.transform)
    except ValueError as ex:
        ap.error(str(ex))

    curve: Optional[QuadraticBezierSegment] = None
    if args.svg:
        from curvegeom.SvgConverter import SvgConverter
        polylines = SvgConverter.convert(args.svg, tol=args.tol, transform=transform)
    else:
        if args.ctrl is None or args.to is None:
            ap.error("--from needs --ctrl and --to")
        curve = QuadraticBezierSegment(PointFloat(*args.from_), PointFloat(*args.ctrl), PointFloat(*args.to))
        curve = curve.transform(transform)
        logger.debug("Flattening %r with tolerance %g", curve, args.tol)
        polylines = [[curve.from_] + list(curve.flattened(args.tol))]

    bounds = curve.bounding_rect() if curve is not None else polylines_bounds(polylines)
    print(f"Polylines: {len(polylines)}")
    print(f"Total points: {sum(len(pl) for pl in polylines)}")
    print(f"Bounds: min=({bounds.min_x:g},{bounds.min_y:g}) max=({bounds.max_x:g},{bounds.max_y:g})")
    if curve is not None:
        print(f"Approximate length: {curve.approximate_length(args.tol):g}")

    # Exports
    if args.export_json:
        export_polylines_json(polylines, args.export_json)
    if args.export_txt:
        export_polylines_txt(polylines, args.export_txt)

    if args.view:
        visualize_polylines(polylines, curve)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
