"""
overlay/state.py

Highlight and flash state of one overlay surface.

The controller owns two ephemeral ids: the highlighted annotation (set by
hover or by the host) and the flashing annotation (set by ``flash`` and
cleared by a single-shot timer).  It is single-writer: only its own
methods and its own timer touch the state, so it needs no locking, but it
must not be shared between surfaces.  The timer runs on the Qt event loop
of the thread that created the controller.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from PyQt6.QtCore import QObject, Qt, QTimer, pyqtSignal

from models import OverlayId
from overlay.commands import Click, ClearHighlight, Flash, Highlight, HoverEnter, HoverLeave, OverlayCommand
from overlay.ids import ids_equal
from settings import get_settings
from utils import clamp

log = logging.getLogger(__name__)

# QTimer intervals are signed 32-bit milliseconds
MAX_FLASH_MS = 2**31 - 1


class OverlayStateController(QObject):
    """
    Highlight/flash state machine for one overlay surface.

    Signals:
        highlightChanged(object): new highlighted id, or None
        flashChanged(object): new flashing id, or None when the flash ends
        hovered(object): pointer entered an annotation (id) or left one (None)
        clicked(object): an annotation was clicked
    """

    highlightChanged = pyqtSignal(object)
    flashChanged = pyqtSignal(object)
    hovered = pyqtSignal(object)
    clicked = pyqtSignal(object)

    def __init__(self, parent: Optional[QObject] = None,
                 on_hover: Optional[Callable[[Optional[OverlayId]], Any]] = None,
                 on_click: Optional[Callable[[OverlayId], Any]] = None,
                 pointer_events: bool = True):
        super().__init__(parent)
        self._highlighted_id: Optional[OverlayId] = None
        self._flashing_id: Optional[OverlayId] = None
        self._disposed = False
        self.pointer_events = pointer_events

        # Single timer slot: start() on an active timer restarts it, so a
        # new flash always replaces the pending one.
        self._flash_timer = QTimer(self)
        self._flash_timer.setSingleShot(True)
        self._flash_timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._flash_timer.timeout.connect(self._on_flash_timeout)

        if on_hover is not None:
            self.hovered.connect(on_hover)
        if on_click is not None:
            self.clicked.connect(on_click)

    # ----------------------------
    # State accessors
    # ----------------------------

    @property
    def highlighted_id(self) -> Optional[OverlayId]:
        return self._highlighted_id

    @property
    def flashing_id(self) -> Optional[OverlayId]:
        return self._flashing_id

    @property
    def disposed(self) -> bool:
        return self._disposed

    def is_flash_pending(self) -> bool:
        return self._flash_timer.isActive()

    def is_hot(self, item_id: OverlayId) -> bool:
        """True if item_id is highlighted or flashing."""
        return ids_equal(item_id, self._highlighted_id) or ids_equal(item_id, self._flashing_id)

    # ----------------------------
    # Host commands
    # ----------------------------

    def set_highlight(self, item_id: Optional[OverlayId]) -> None:
        if self._disposed:
            return
        if ids_equal(item_id, self._highlighted_id):
            self._highlighted_id = item_id
            return
        self._highlighted_id = item_id
        log.debug("highlight -> %r", item_id)
        self.highlightChanged.emit(item_id)

    def clear_highlight(self) -> None:
        self.set_highlight(None)

    def flash(self, item_id: OverlayId, duration_ms: Optional[int] = None) -> None:
        """
        Flash an annotation for duration_ms, replacing any flash in progress.

        Args:
            item_id: Annotation to flash
            duration_ms: Flash length; defaults to overlay.flash_duration_ms
        """
        if self._disposed:
            return
        if duration_ms is None:
            duration_ms = get_settings().settings.overlay.flash_duration_ms
        duration_ms = int(clamp(duration_ms, 0, MAX_FLASH_MS))

        self._flash_timer.stop()
        self._flashing_id = item_id
        log.debug("flash %r for %d ms", item_id, duration_ms)
        self.flashChanged.emit(item_id)
        self._flash_timer.start(duration_ms)

    def _on_flash_timeout(self) -> None:
        if self._disposed:
            return
        log.debug("flash %r expired", self._flashing_id)
        self._flashing_id = None
        self.flashChanged.emit(None)

    # ----------------------------
    # Pointer events
    # ----------------------------

    def hover_enter(self, item_id: OverlayId) -> None:
        if self._disposed or not self.pointer_events:
            return
        self.set_highlight(item_id)
        self.hovered.emit(item_id)

    def hover_leave(self, item_id: OverlayId) -> None:
        # Enter/leave may arrive out of order; only clear our own highlight.
        if self._disposed or not self.pointer_events:
            return
        if ids_equal(item_id, self._highlighted_id):
            self.set_highlight(None)
        self.hovered.emit(None)

    def click(self, item_id: OverlayId) -> None:
        if self._disposed or not self.pointer_events:
            return
        self.clicked.emit(item_id)

    # ----------------------------
    # Command interface
    # ----------------------------

    def dispatch(self, command: OverlayCommand) -> None:
        """Apply one command from ``overlay.commands``."""
        if isinstance(command, Highlight):
            self.set_highlight(command.id)
        elif isinstance(command, ClearHighlight):
            self.clear_highlight()
        elif isinstance(command, Flash):
            self.flash(command.id, command.duration_ms)
        elif isinstance(command, HoverEnter):
            self.hover_enter(command.id)
        elif isinstance(command, HoverLeave):
            self.hover_leave(command.id)
        elif isinstance(command, Click):
            self.click(command.id)
        else:
            raise TypeError(f"unsupported overlay command: {command!r}")

    # ----------------------------
    # Teardown
    # ----------------------------

    def dispose(self) -> None:
        """Cancel any pending flash; the controller ignores all input afterwards."""
        if self._disposed:
            return
        self._flash_timer.stop()
        self._disposed = True
        log.debug("overlay state disposed")
