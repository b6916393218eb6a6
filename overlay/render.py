"""
overlay/render.py

Framework-neutral render descriptions for overlay annotations.

``render_items`` turns annotation items plus the current highlight/flash
state into plain records (absolute shapes, stroke, color, label marker)
that any drawing backend can paint.  Magnitudes that would make a shape
vanish (non-positive radius, width or height) are floored at
``overlay.min_magnitude`` so one bad shape never hides the rest.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from models import AnnotationItem, Box, Circle, Line, OverlayId, Polygon, ShapeKind
from geometry.anchor import resolve_anchor
from geometry.bounds import ensure_label_in_bounds
from geometry.normalize import normalize_geometry
from settings import AppSettings, get_settings
from utils import at_least, is_hex_color

# Blur strength of the glow drawn around each severity
GLOW_BY_SEVERITY = {
    "low": 1.5,
    "medium": 2.25,
    "high": 3.0,
}


@dataclass(frozen=True)
class RenderedShape:
    kind: ShapeKind
    shape: object            # absolute Circle | Line | Box | Polygon


@dataclass(frozen=True)
class LabelMarker:
    text: str
    x: float
    y: float
    radius: float


@dataclass(frozen=True)
class RenderedItem:
    """Everything needed to paint one annotation."""
    id: OverlayId
    color: str
    stroke_width: float
    dash: Tuple[float, ...]          # empty = solid
    glow: float
    opacity: float
    hot: bool
    anchor: Tuple[float, float]
    shapes: Tuple[RenderedShape, ...]
    label: Optional[LabelMarker] = None


def pick_color(index: int = 0, desired: Optional[str] = None, severity: Optional[str] = None,
               settings: Optional[AppSettings] = None) -> str:
    """
    Choose an annotation color.

    A valid hex ``desired`` color wins, then the severity color, then the
    palette entry for ``index`` (cycled).
    """
    colors = (settings or get_settings().settings).colors
    if is_hex_color(desired):
        return desired
    sev_colors = colors.severity_colors()
    if severity in sev_colors:
        return sev_colors[severity]
    return colors.palette[index % len(colors.palette)]


def assign_callout_labels(items: Sequence[AnnotationItem], start_index: int = 1) -> List[AnnotationItem]:
    """Give unlabelled items a running number, starting at start_index."""
    return [
        it if it.label else replace(it, label=str(start_index + i))
        for i, it in enumerate(items)
    ]


def _clamped_shapes(item: AnnotationItem, width: float, height: float,
                    min_magnitude: float) -> Tuple[RenderedShape, ...]:
    g = normalize_geometry(item.geometry, width, height)
    shapes: List[RenderedShape] = []
    for c in g.circles:
        shapes.append(RenderedShape(ShapeKind.CIRCLE, Circle(c.cx, c.cy, at_least(c.r, min_magnitude))))
    for ln in g.lines:
        shapes.append(RenderedShape(ShapeKind.LINE, Line(ln.x1, ln.y1, ln.x2, ln.y2)))
    for b in g.boxes:
        shapes.append(RenderedShape(ShapeKind.BOX, Box(
            b.x, b.y, at_least(b.w, min_magnitude), at_least(b.h, min_magnitude))))
    for pg in g.polygons:
        shapes.append(RenderedShape(ShapeKind.POLYGON, Polygon(points=pg.points)))
    return tuple(shapes)


def render_item(item: AnnotationItem, width: float, height: float, hot: bool = False,
                settings: Optional[AppSettings] = None,
                show_labels: Optional[bool] = None,
                clamp_labels: bool = False) -> RenderedItem:
    """Describe one annotation in absolute units.

    With clamp_labels the label marker is kept ``overlay.label_padding``
    inside the viewport; the anchor itself is never moved.
    """
    s = settings or get_settings().settings
    ov = s.overlay
    severity = item.severity or "low"
    color = item.color or s.colors.severity_colors().get(severity, s.colors.severity_low)
    anchor = resolve_anchor(item.geometry, width, height)

    if show_labels is None:
        show_labels = ov.show_labels
    label = None
    if show_labels and item.label:
        lx, ly = anchor
        if clamp_labels:
            lx, ly = ensure_label_in_bounds(lx, ly, width, height, ov.label_padding)
        label = LabelMarker(
            text=item.label,
            x=lx,
            y=ly,
            radius=ov.label_radius + (ov.label_hot_grow if hot else 0.0),
        )

    return RenderedItem(
        id=item.id,
        color=color,
        stroke_width=ov.stroke_width * ov.hot_stroke_multiplier if hot else ov.stroke_width,
        dash=tuple(ov.dash_pattern) if item.dashed else (),
        glow=GLOW_BY_SEVERITY.get(severity, GLOW_BY_SEVERITY["low"]),
        opacity=1.0 if hot else ov.idle_opacity,
        hot=hot,
        anchor=anchor,
        shapes=_clamped_shapes(item, width, height, ov.min_magnitude),
        label=label,
    )


def render_items(items: Iterable[AnnotationItem], width: float, height: float,
                 is_hot: Optional[Callable[[OverlayId], bool]] = None,
                 settings: Optional[AppSettings] = None,
                 show_labels: Optional[bool] = None,
                 clamp_labels: bool = False) -> List[RenderedItem]:
    """
    Describe all visible annotations, in input order.

    Args:
        items: Annotation items for this render cycle
        width: Viewport width
        height: Viewport height
        is_hot: Predicate telling whether an id is highlighted or flashing
        settings: Settings to use instead of the global ones
        show_labels: Override for ``overlay.show_labels``
        clamp_labels: Keep label markers inside the viewport

    Returns:
        One RenderedItem per visible item
    """
    out: List[RenderedItem] = []
    for it in items:
        if it is None or not it.visible:
            continue
        hot = bool(is_hot(it.id)) if is_hot is not None else False
        out.append(render_item(it, width, height, hot=hot, settings=settings,
                               show_labels=show_labels, clamp_labels=clamp_labels))
    return out
