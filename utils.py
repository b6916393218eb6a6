"""
utils.py

Small numeric and color helpers shared by the geometry and overlay modules.
"""

from __future__ import annotations

import re
from typing import Any

_HEX_COLOR_RE = re.compile(r"^#([0-9a-f]{3}|[0-9a-f]{6})$", re.IGNORECASE)


def clamp(n: float, lo: float, hi: float) -> float:
    """Clamp n into [lo, hi].  When lo > hi, lo wins."""
    return max(lo, min(hi, n))


def at_least(value: float, minimum: float) -> float:
    """Floor a render magnitude (radius, width, height) at minimum."""
    return value if value >= minimum else minimum


def is_hex_color(s: Any) -> bool:
    """
    Check whether s is a CSS-style hex color.

    Accepts "#RGB" and "#RRGGBB" (case-insensitive).  Alpha forms are
    rejected so annotation colors stay opaque.
    """
    return isinstance(s, str) and bool(_HEX_COLOR_RE.match(s))
