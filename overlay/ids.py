"""
overlay/ids.py

Overlay correlation ids.

An overlay id links a findings-table row to its annotation on an image.
It is treated as opaque text: ``5`` and ``"5"`` are the same id.
"""

from __future__ import annotations

from typing import Any, Optional, Tuple


def make_overlay_id(image_index: Any, tooth_fdi: Any) -> str:
    return f"{image_index}:{tooth_fdi}"


def parse_overlay_id(value: Any) -> Optional[Tuple[int, int]]:
    """Split "image:tooth" back into integers, or None if it is not one."""
    if value is None:
        return None
    head, sep, tail = str(value).partition(":")
    if not sep:
        return None
    try:
        return int(head), int(tail)
    except ValueError:
        return None


def ids_equal(a: Any, b: Any) -> bool:
    """Compare two overlay ids by their string form.  None only equals None."""
    if a is None or b is None:
        return a is None and b is None
    return str(a) == str(b)
