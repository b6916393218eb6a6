"""
dental package

Tooth numbering (FDI / Universal / Palmer) and per-tooth finding rows.
"""

from dental.fdi import Tooth, ToothNumberingIndex, get_tooth_index
from dental.findings import (
    ToothFinding,
    findings_to_items,
    normalize_confidence,
    normalize_severity,
    overlay_id_for_finding,
)

__all__ = [
    "Tooth",
    "ToothNumberingIndex",
    "get_tooth_index",
    "ToothFinding",
    "findings_to_items",
    "normalize_confidence",
    "normalize_severity",
    "overlay_id_for_finding",
]
