"""
geometry/bounds.py

Bounding boxes of annotation geometry and label clamping.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from models import Geometry
from geometry.normalize import normalize_geometry
from utils import clamp


@dataclass(frozen=True)
class Bounds:
    x: float
    y: float
    w: float
    h: float

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.w / 2, self.y + self.h / 2)


def geometry_bounds(g: Geometry, width: float, height: float) -> Bounds:
    """
    Union bounding box of all shapes in g, in absolute units.

    Circles contribute center +/- radius.  Geometry with no coordinates
    (no shapes, or only empty polygons) yields the whole viewport.
    """
    ag = normalize_geometry(g, width, height)
    min_x = min_y = math.inf
    max_x = max_y = -math.inf

    for c in ag.circles:
        min_x = min(min_x, c.cx - c.r)
        min_y = min(min_y, c.cy - c.r)
        max_x = max(max_x, c.cx + c.r)
        max_y = max(max_y, c.cy + c.r)
    for ln in ag.lines:
        min_x = min(min_x, ln.x1, ln.x2)
        min_y = min(min_y, ln.y1, ln.y2)
        max_x = max(max_x, ln.x1, ln.x2)
        max_y = max(max_y, ln.y1, ln.y2)
    for b in ag.boxes:
        min_x = min(min_x, b.x)
        min_y = min(min_y, b.y)
        max_x = max(max_x, b.x + b.w)
        max_y = max(max_y, b.y + b.h)
    for pg in ag.polygons:
        for p in pg.points:
            min_x = min(min_x, p.x)
            min_y = min(min_y, p.y)
            max_x = max(max_x, p.x)
            max_y = max(max_y, p.y)

    if not all(math.isfinite(v) for v in (min_x, min_y, max_x, max_y)):
        return Bounds(0.0, 0.0, float(width), float(height))
    return Bounds(min_x, min_y, max_x - min_x, max_y - min_y)


def ensure_label_in_bounds(x: float, y: float, width: float, height: float,
                           pad: float = 6.0) -> Tuple[float, float]:
    """Keep a label position inside the viewport, pad units from each edge.

    The top edge gets an extra 12 units so text drawn above its baseline
    stays visible.
    """
    return (clamp(x, pad, width - pad), clamp(y, pad + 12, height - pad))
