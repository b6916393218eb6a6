"""
geometry package

Coordinate normalization, anchor resolution and bounds for annotation shapes.
All functions are pure and safe to call from any thread.
"""

from geometry.normalize import (
    to_absolute,
    to_absolute_radius,
    normalize_point,
    normalize_circle,
    normalize_line,
    normalize_box,
    normalize_polygon,
    normalize_geometry,
)
from geometry.anchor import polygon_centroid, resolve_anchor
from geometry.bounds import Bounds, geometry_bounds, ensure_label_in_bounds

__all__ = [
    "to_absolute",
    "to_absolute_radius",
    "normalize_point",
    "normalize_circle",
    "normalize_line",
    "normalize_box",
    "normalize_polygon",
    "normalize_geometry",
    "polygon_centroid",
    "resolve_anchor",
    "Bounds",
    "geometry_bounds",
    "ensure_label_in_bounds",
]
