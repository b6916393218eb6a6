"""
overlay package

Highlight/flash interaction state, correlation ids and render descriptions
for annotation overlays.
"""

from overlay.ids import ids_equal, make_overlay_id, parse_overlay_id
from overlay.commands import Click, ClearHighlight, Flash, Highlight, HoverEnter, HoverLeave
from overlay.state import OverlayStateController
from overlay.render import (
    LabelMarker,
    RenderedItem,
    RenderedShape,
    assign_callout_labels,
    pick_color,
    render_item,
    render_items,
)
from overlay.surface import OverlaySurface

__all__ = [
    "ids_equal",
    "make_overlay_id",
    "parse_overlay_id",
    "Click",
    "ClearHighlight",
    "Flash",
    "Highlight",
    "HoverEnter",
    "HoverLeave",
    "OverlayStateController",
    "LabelMarker",
    "RenderedItem",
    "RenderedShape",
    "assign_callout_labels",
    "pick_color",
    "render_item",
    "render_items",
    "OverlaySurface",
]
