"""
overlay/commands.py

Messages accepted by ``OverlayStateController.dispatch``.

The host drives the overlay either through the controller's methods or by
dispatching these; pointer events from whatever draws the overlay arrive
the same way.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from models import OverlayId


@dataclass(frozen=True)
class Highlight:
    id: Optional[OverlayId]


@dataclass(frozen=True)
class ClearHighlight:
    pass


@dataclass(frozen=True)
class Flash:
    id: OverlayId
    duration_ms: Optional[int] = None   # None = settings overlay.flash_duration_ms


@dataclass(frozen=True)
class HoverEnter:
    id: OverlayId


@dataclass(frozen=True)
class HoverLeave:
    id: OverlayId


@dataclass(frozen=True)
class Click:
    id: OverlayId


OverlayCommand = Union[Highlight, ClearHighlight, Flash, HoverEnter, HoverLeave, Click]
