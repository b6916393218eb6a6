"""
geometry/anchor.py

Single representative point per annotation, used to place its label marker.
"""

from __future__ import annotations

from typing import Sequence, Tuple

from models import SHAPE_PRIORITY, Box, Circle, Geometry, Line, Point, Polygon, ShapeKind
from geometry.normalize import normalize_box, normalize_circle, normalize_line, normalize_polygon

Anchor = Tuple[float, float]


def _mean(points: Sequence[Point]) -> Anchor:
    n = max(1, len(points))
    return (sum(p.x for p in points) / n, sum(p.y for p in points) / n)


def polygon_centroid(points: Sequence[Point]) -> Anchor:
    """
    Area-weighted centroid of a simple polygon (shoelace formula).

    Points are taken as absolute coordinates; their norm flags are ignored.
    With fewer than three points, or zero signed area (collinear points),
    the arithmetic mean of the points is returned instead.  An empty list
    yields (0, 0).

    Args:
        points: Polygon vertices in order (either winding)

    Returns:
        (x, y) centroid
    """
    n = len(points)
    if n < 3:
        return _mean(points)

    area = 0.0
    cx = 0.0
    cy = 0.0
    for i in range(n):
        p1 = points[i]
        p2 = points[(i + 1) % n]
        cross = p1.x * p2.y - p2.x * p1.y
        area += cross
        cx += (p1.x + p2.x) * cross
        cy += (p1.y + p2.y) * cross
    area *= 0.5

    if area == 0:
        return _mean(points)
    return (cx / (6 * area), cy / (6 * area))


def _circle_anchor(c: Circle, width: float, height: float) -> Anchor:
    ac = normalize_circle(c, width, height)
    return (ac.cx, ac.cy)


def _box_anchor(b: Box, width: float, height: float) -> Anchor:
    ab = normalize_box(b, width, height)
    return (ab.x + ab.w / 2, ab.y + ab.h / 2)


def _line_anchor(ln: Line, width: float, height: float) -> Anchor:
    al = normalize_line(ln, width, height)
    return ((al.x1 + al.x2) / 2, (al.y1 + al.y2) / 2)


def _polygon_anchor(pg: Polygon, width: float, height: float) -> Anchor:
    return polygon_centroid(normalize_polygon(pg, width, height).points)


_ANCHOR_BY_KIND = {
    ShapeKind.CIRCLE: _circle_anchor,
    ShapeKind.BOX: _box_anchor,
    ShapeKind.LINE: _line_anchor,
    ShapeKind.POLYGON: _polygon_anchor,
}


def resolve_anchor(g: Geometry, width: float, height: float) -> Anchor:
    """
    Compute the anchor point of an annotation in absolute units.

    Only the first shape of the highest-priority non-empty kind is used
    (circle, then box, then line, then polygon); shapes of other kinds
    are never merged in.  Empty geometry anchors at the viewport center.

    Args:
        g: The annotation geometry
        width: Viewport width
        height: Viewport height

    Returns:
        (x, y) anchor
    """
    for kind in SHAPE_PRIORITY:
        shapes = g.shapes(kind)
        if shapes:
            return _ANCHOR_BY_KIND[kind](shapes[0], width, height)
    return (width * 0.5, height * 0.5)
