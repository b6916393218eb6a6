"""
geometry/normalize.py

Conversion of shape coordinates from viewport fractions to absolute units.

A shape with ``norm=True`` stores every coordinate as a fraction of the
viewport: x values of the width, y values of the height.  Circle radii are
scaled by ``min(width, height)`` so a circle stays circular on a
non-square viewport.
"""

from __future__ import annotations

from models import Box, Circle, Geometry, Line, Point, Polygon


def to_absolute(value: float, axis_size: float, normalized: bool) -> float:
    """Scale value by axis_size when it is a viewport fraction."""
    return value * axis_size if normalized else value


def to_absolute_radius(value: float, width: float, height: float, normalized: bool) -> float:
    """Scale a radius against the shorter viewport axis when normalized."""
    if not normalized:
        return value
    return value * min(width, height)


def normalize_point(p: Point, width: float, height: float, inherited_norm: bool = False) -> Point:
    """
    Convert a point to absolute units.

    Args:
        p: The point
        width: Viewport width
        height: Viewport height
        inherited_norm: Flag from the owning polygon; either level being
            set makes the point normalized.

    Returns:
        A new Point with norm=False
    """
    norm = inherited_norm or p.norm
    return Point(to_absolute(p.x, width, norm), to_absolute(p.y, height, norm))


def normalize_circle(c: Circle, width: float, height: float) -> Circle:
    return Circle(
        cx=to_absolute(c.cx, width, c.norm),
        cy=to_absolute(c.cy, height, c.norm),
        r=to_absolute_radius(c.r, width, height, c.norm),
    )


def normalize_line(ln: Line, width: float, height: float) -> Line:
    return Line(
        x1=to_absolute(ln.x1, width, ln.norm),
        y1=to_absolute(ln.y1, height, ln.norm),
        x2=to_absolute(ln.x2, width, ln.norm),
        y2=to_absolute(ln.y2, height, ln.norm),
    )


def normalize_box(b: Box, width: float, height: float) -> Box:
    return Box(
        x=to_absolute(b.x, width, b.norm),
        y=to_absolute(b.y, height, b.norm),
        w=to_absolute(b.w, width, b.norm),
        h=to_absolute(b.h, height, b.norm),
    )


def normalize_polygon(pg: Polygon, width: float, height: float) -> Polygon:
    return Polygon(points=tuple(normalize_point(p, width, height, pg.norm) for p in pg.points))


def normalize_geometry(g: Geometry, width: float, height: float) -> Geometry:
    """Return a copy of g with every shape in absolute units."""
    return Geometry(
        circles=tuple(normalize_circle(c, width, height) for c in g.circles),
        lines=tuple(normalize_line(ln, width, height) for ln in g.lines),
        boxes=tuple(normalize_box(b, width, height) for b in g.boxes),
        polygons=tuple(normalize_polygon(pg, width, height) for pg in g.polygons),
    )
