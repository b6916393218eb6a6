"""
models.py

Data models for annotation geometry and overlay items.

Geometry arrives from upstream finding data as plain dicts (the wire shape)
and is parsed here into frozen dataclasses.  Parsing is tolerant: a shape
with a missing or non-numeric field is dropped with a warning instead of
aborting the whole annotation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

log = logging.getLogger(__name__)

OverlayId = Union[str, int]


# ----------------------------
# Severity
# ----------------------------

SEVERITY_LOW = "low"
SEVERITY_MEDIUM = "medium"
SEVERITY_HIGH = "high"

SEVERITIES: Tuple[str, ...] = (SEVERITY_LOW, SEVERITY_MEDIUM, SEVERITY_HIGH)


# ----------------------------
# Primitive shapes
# ----------------------------

@dataclass(frozen=True)
class Point:
    x: float
    y: float
    norm: bool = False

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"x": self.x, "y": self.y}
        if self.norm:
            d["norm"] = True
        return d


@dataclass(frozen=True)
class Circle:
    cx: float
    cy: float
    r: float
    norm: bool = False

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"cx": self.cx, "cy": self.cy, "r": self.r}
        if self.norm:
            d["norm"] = True
        return d


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    norm: bool = False

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"x1": self.x1, "y1": self.y1, "x2": self.x2, "y2": self.y2}
        if self.norm:
            d["norm"] = True
        return d


@dataclass(frozen=True)
class Box:
    x: float
    y: float
    w: float
    h: float
    norm: bool = False

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"x": self.x, "y": self.y, "w": self.w, "h": self.h}
        if self.norm:
            d["norm"] = True
        return d


@dataclass(frozen=True)
class Polygon:
    points: Tuple[Point, ...] = ()
    norm: bool = False

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"points": [p.to_dict() for p in self.points]}
        if self.norm:
            d["norm"] = True
        return d


# ----------------------------
# Shape kinds
# ----------------------------

class ShapeKind(Enum):
    """The four primitive kinds a Geometry can hold."""
    CIRCLE = "circle"
    BOX = "box"
    LINE = "line"
    POLYGON = "polygon"


# Anchor precedence: the first non-empty kind in this order wins.
SHAPE_PRIORITY: Tuple[ShapeKind, ...] = (
    ShapeKind.CIRCLE,
    ShapeKind.BOX,
    ShapeKind.LINE,
    ShapeKind.POLYGON,
)

# Wire key for each kind
KIND_WIRE_KEY: Dict[ShapeKind, str] = {
    ShapeKind.CIRCLE: "circles",
    ShapeKind.LINE: "lines",
    ShapeKind.BOX: "boxes",
    ShapeKind.POLYGON: "polygons",
}

_NUMERIC_FIELDS: Dict[ShapeKind, Tuple[str, ...]] = {
    ShapeKind.CIRCLE: ("cx", "cy", "r"),
    ShapeKind.LINE: ("x1", "y1", "x2", "y2"),
    ShapeKind.BOX: ("x", "y", "w", "h"),
}


def _as_number(value: Any) -> Optional[float]:
    """Return value as float, or None for bools, missing and non-numeric values."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _parse_numbers(kind: ShapeKind, d: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(d, dict):
        log.warning("Skipping %s: expected an object, got %s", kind.value, type(d).__name__)
        return None
    values: Dict[str, Any] = {}
    for name in _NUMERIC_FIELDS[kind]:
        v = _as_number(d.get(name))
        if v is None:
            log.warning("Skipping %s: field %r is missing or not numeric", kind.value, name)
            return None
        values[name] = v
    values["norm"] = bool(d.get("norm", False))
    return values


def parse_point(d: Any) -> Optional[Point]:
    if not isinstance(d, dict):
        log.warning("Skipping polygon point: expected an object, got %s", type(d).__name__)
        return None
    x = _as_number(d.get("x"))
    y = _as_number(d.get("y"))
    if x is None or y is None:
        log.warning("Skipping polygon point: x/y missing or not numeric")
        return None
    return Point(x, y, bool(d.get("norm", False)))


def parse_circle(d: Any) -> Optional[Circle]:
    values = _parse_numbers(ShapeKind.CIRCLE, d)
    return Circle(**values) if values is not None else None


def parse_line(d: Any) -> Optional[Line]:
    values = _parse_numbers(ShapeKind.LINE, d)
    return Line(**values) if values is not None else None


def parse_box(d: Any) -> Optional[Box]:
    values = _parse_numbers(ShapeKind.BOX, d)
    return Box(**values) if values is not None else None


def parse_polygon(d: Any) -> Optional[Polygon]:
    if not isinstance(d, dict):
        log.warning("Skipping polygon: expected an object, got %s", type(d).__name__)
        return None
    raw_points = d.get("points") or []
    if not isinstance(raw_points, list):
        log.warning("Skipping polygon: 'points' is not a list")
        return None
    points = tuple(p for p in (parse_point(rp) for rp in raw_points) if p is not None)
    return Polygon(points=points, norm=bool(d.get("norm", False)))


_PARSERS = {
    ShapeKind.CIRCLE: parse_circle,
    ShapeKind.LINE: parse_line,
    ShapeKind.BOX: parse_box,
    ShapeKind.POLYGON: parse_polygon,
}


# ----------------------------
# Geometry aggregate
# ----------------------------

@dataclass(frozen=True)
class Geometry:
    """Independent lists of circles, lines, boxes and polygons.

    Any subset may be empty.  Callers pick shapes by kind through
    ``shapes()`` rather than probing the attributes directly.
    """
    circles: Tuple[Circle, ...] = ()
    lines: Tuple[Line, ...] = ()
    boxes: Tuple[Box, ...] = ()
    polygons: Tuple[Polygon, ...] = ()

    def shapes(self, kind: ShapeKind) -> tuple:
        """Return the shapes of one kind."""
        if kind is ShapeKind.CIRCLE:
            return self.circles
        if kind is ShapeKind.BOX:
            return self.boxes
        if kind is ShapeKind.LINE:
            return self.lines
        if kind is ShapeKind.POLYGON:
            return self.polygons
        raise ValueError(f"unknown shape kind: {kind!r}")

    def kinds(self) -> List[ShapeKind]:
        """Non-empty kinds, in anchor precedence order."""
        return [k for k in SHAPE_PRIORITY if len(self.shapes(k)) > 0]

    def is_empty(self) -> bool:
        return not self.kinds()

    def shape_count(self) -> int:
        return sum(len(self.shapes(k)) for k in SHAPE_PRIORITY)

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "Geometry":
        """Parse the wire shape ``{circles?, lines?, boxes?, polygons?}``.

        Args:
            d: Geometry dict; ``None`` or a non-dict yields empty geometry.

        Returns:
            A Geometry holding every shape that parsed cleanly.
        """
        if not isinstance(d, dict):
            return cls()
        parsed: Dict[str, tuple] = {}
        for kind, key in KIND_WIRE_KEY.items():
            raw = d.get(key) or []
            if not isinstance(raw, list):
                log.warning("Ignoring geometry %r: expected a list", key)
                raw = []
            parser = _PARSERS[kind]
            parsed[key] = tuple(s for s in (parser(r) for r in raw) if s is not None)
        return cls(**parsed)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the wire shape, omitting empty kinds."""
        out: Dict[str, Any] = {}
        for kind, key in KIND_WIRE_KEY.items():
            shapes = self.shapes(kind)
            if shapes:
                out[key] = [s.to_dict() for s in shapes]
        return out


# ----------------------------
# Annotation item
# ----------------------------

@dataclass(frozen=True)
class AnnotationItem:
    """One overlay annotation as handed to the overlay surface.

    ``id`` is opaque: string and integer ids with the same text are the
    same annotation (see ``overlay.ids.ids_equal``).
    """
    id: OverlayId
    geometry: Geometry = field(default_factory=Geometry)
    label: Optional[str] = None
    severity: Optional[str] = None    # low | medium | high
    color: Optional[str] = None       # any CSS color; severity color when unset
    visible: bool = True
    dashed: bool = False

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "AnnotationItem":
        """Create an AnnotationItem from its wire dict.

        Unknown severities are dropped (treated as absent).
        """
        severity = d.get("severity")
        if severity not in SEVERITIES:
            if severity is not None:
                log.warning("Ignoring unknown severity %r on annotation %r", severity, d.get("id"))
            severity = None
        label = d.get("label")
        return cls(
            id=d.get("id", ""),
            geometry=Geometry.from_dict(d.get("geometry")),
            label=str(label) if label is not None else None,
            severity=severity,
            color=d.get("color") if isinstance(d.get("color"), str) else None,
            visible=bool(d.get("visible", True)),
            dashed=bool(d.get("dashed", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"id": self.id, "geometry": self.geometry.to_dict()}
        if self.label is not None:
            d["label"] = self.label
        if self.severity is not None:
            d["severity"] = self.severity
        if self.color is not None:
            d["color"] = self.color
        if not self.visible:
            d["visible"] = False
        if self.dashed:
            d["dashed"] = True
        return d
