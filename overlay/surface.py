"""
overlay/surface.py

The overlay surface: render descriptions plus the imperative handle a host
uses to highlight and flash annotations.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, List, Optional

from PyQt6.QtCore import QObject

from models import AnnotationItem, OverlayId
from overlay.render import RenderedItem, render_items
from overlay.state import OverlayStateController
from settings import AppSettings


class OverlaySurface:
    """
    One overlay drawn over one image.

    Owns its own ``OverlayStateController``; create one surface per
    displayed image and call ``dispose()`` when it goes away.

    Args:
        parent: Optional QObject parent for the state controller.
        on_hover: Called with an id on pointer enter and None on leave.
        on_click: Called with the clicked id.
        pointer_events: When False, pointer input is ignored.
        show_labels: Override for ``overlay.show_labels``.
        settings: Settings to use instead of the global ones.
    """

    def __init__(self, parent: Optional[QObject] = None,
                 on_hover: Optional[Callable[[Optional[OverlayId]], Any]] = None,
                 on_click: Optional[Callable[[OverlayId], Any]] = None,
                 pointer_events: bool = True,
                 show_labels: Optional[bool] = None,
                 settings: Optional[AppSettings] = None):
        self.state = OverlayStateController(parent, on_hover=on_hover, on_click=on_click,
                                            pointer_events=pointer_events)
        self.show_labels = show_labels
        self.settings = settings

    def render(self, items: Iterable[AnnotationItem], width: float, height: float,
               clamp_labels: bool = False) -> List[RenderedItem]:
        """Describe the visible items with the current highlight/flash applied."""
        return render_items(items, width, height, is_hot=self.state.is_hot,
                            settings=self.settings, show_labels=self.show_labels,
                            clamp_labels=clamp_labels)

    # Imperative handle

    def highlight(self, item_id: Optional[OverlayId]) -> None:
        self.state.set_highlight(item_id)

    def clear_highlight(self) -> None:
        self.state.clear_highlight()

    def flash(self, item_id: OverlayId, ms: Optional[int] = None) -> None:
        self.state.flash(item_id, ms)

    # Pointer input from the drawing backend

    def hover_enter(self, item_id: OverlayId) -> None:
        self.state.hover_enter(item_id)

    def hover_leave(self, item_id: OverlayId) -> None:
        self.state.hover_leave(item_id)

    def click(self, item_id: OverlayId) -> None:
        self.state.click(item_id)

    def dispose(self) -> None:
        self.state.dispose()
