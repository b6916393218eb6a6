"""
dental/findings.py

Tabular per-tooth findings and their link to image overlays.

A finding row names a tooth (FDI), the image it was seen on, and optionally
the geometry outlining it.  Rows and overlays are correlated through the
overlay id ``"{image_index}:{tooth_fdi}"``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from models import (
    SEVERITY_HIGH,
    SEVERITY_LOW,
    SEVERITY_MEDIUM,
    AnnotationItem,
    Geometry,
    ShapeKind,
)
from overlay.ids import make_overlay_id

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToothFinding:
    """One row of the findings table."""
    tooth_fdi: int
    image_index: int = 0
    findings: List[str] = field(default_factory=list)
    severity: Optional[str] = None       # free text as produced upstream
    confidence: Optional[float] = None   # scale unknown, see normalize_confidence
    image_id: str = ""
    geometry: Optional[Geometry] = None

    @property
    def overlay_id(self) -> str:
        return overlay_id_for_finding(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> Optional["ToothFinding"]:
        """Parse an upstream finding row; rows without a tooth number give None."""
        tooth = d.get("tooth_fdi")
        if isinstance(tooth, bool) or not isinstance(tooth, (int, str)):
            log.warning("Skipping finding without tooth_fdi: %r", d)
            return None
        try:
            tooth_fdi = int(tooth)
        except ValueError:
            log.warning("Skipping finding with non-numeric tooth_fdi %r", tooth)
            return None

        image_index = d.get("image_index")
        if isinstance(image_index, bool) or not isinstance(image_index, int):
            image_index = 0
        findings = d.get("findings")
        confidence = d.get("confidence")
        raw_geometry = d.get("geometry")
        return cls(
            tooth_fdi=tooth_fdi,
            image_index=image_index,
            findings=[str(f) for f in findings] if isinstance(findings, list) else [],
            severity=d.get("severity") if isinstance(d.get("severity"), str) else None,
            confidence=confidence if isinstance(confidence, (int, float)) and not isinstance(confidence, bool) else None,
            image_id=str(d.get("image_id") or ""),
            geometry=Geometry.from_dict(raw_geometry) if isinstance(raw_geometry, dict) else None,
        )


def overlay_id_for_finding(row: ToothFinding) -> str:
    return make_overlay_id(row.image_index, row.tooth_fdi)


def normalize_confidence(value: Any) -> float:
    """
    Map a confidence of unknown scale onto 0..1.

    Upstream producers disagree on scale, so the magnitude decides:
    values up to 1 are fractions, up to 100 are percentages, up to 10000
    are percentages scaled twice.  Anything larger is treated as a
    percentage and capped at 1.  Missing, non-finite and non-positive
    values give 0.
    """
    if isinstance(value, bool):
        return 0.0
    try:
        n = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(n) or n <= 0:
        return 0.0
    if n <= 1:
        return n
    if n <= 100:
        return n / 100
    if n <= 10000:
        return n / 100 / 100
    return min(1.0, max(0.0, n / 100))


def confidence_percent(value: Any) -> int:
    """Confidence as a whole percentage clamped to 0..100."""
    return min(100, max(0, round(normalize_confidence(value) * 100)))


def normalize_severity(text: Optional[str]) -> Optional[str]:
    """Fold free-text severity ("Severe", "moderate", ...) onto low/medium/high."""
    if not text:
        return None
    s = text.lower().strip()
    if "high" in s or "severe" in s:
        return SEVERITY_HIGH
    if "mod" in s or "medium" in s:
        return SEVERITY_MEDIUM
    return SEVERITY_LOW


def has_geometry(g: Optional[Geometry]) -> bool:
    return g is not None and not g.is_empty()


_GLYPHS = (
    (ShapeKind.CIRCLE, "◯"),
    (ShapeKind.LINE, "─"),
    (ShapeKind.POLYGON, "△"),
    (ShapeKind.BOX, "▭"),
)


def geometry_glyphs(g: Optional[Geometry]) -> str:
    """Compact shape summary for a table cell, e.g. "◯ ▭×2"."""
    if g is None:
        return ""
    parts = []
    for kind, glyph in _GLYPHS:
        count = len(g.shapes(kind))
        if count:
            parts.append(glyph + (f"×{count}" if count > 1 else ""))
    return " ".join(parts)


def group_overlay_ids(rows: Iterable[ToothFinding]) -> Dict[str, List[int]]:
    """Map each overlay id to the indices of the rows that share it."""
    groups: Dict[str, List[int]] = {}
    for i, row in enumerate(rows):
        groups.setdefault(row.overlay_id, []).append(i)
    return groups


def findings_to_items(rows: Iterable[ToothFinding], image_index: int,
                      dashed: bool = False) -> List[AnnotationItem]:
    """
    Build overlay items for the findings shown on one image.

    Rows from other images and rows without geometry are skipped.  Each
    item is labelled with its tooth number and keyed by the overlay id,
    so the findings table and the overlay can cross-highlight.
    """
    items: List[AnnotationItem] = []
    for row in rows:
        if row.image_index != image_index or not has_geometry(row.geometry):
            continue
        items.append(AnnotationItem(
            id=row.overlay_id,
            geometry=row.geometry,
            label=str(row.tooth_fdi),
            severity=normalize_severity(row.severity),
            dashed=dashed,
        ))
    return items
