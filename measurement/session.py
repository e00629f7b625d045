"""
measurement/session.py

Wires an ArrowLabelSynchronizer, a GridSnapper and an undo stack to one
host scene, and tracks the drawing's scale choice and page.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from PyQt6.QtGui import QUndoStack

import debug_trace
from models import DEFAULT_GRID_SIZE, ArrowCounterStats
from measurement.grid import GridSnapper
from measurement.scale import inches_per_scene_unit_for_preset
from measurement.synchronizer import ArrowLabelSynchronizer
from settings import SettingsManager, get_settings
from undo_commands import SetArrowOverrideCommand

log = logging.getLogger(__name__)


class MeasurementSession:
    """Dimension labelling for a host editor showing one drawing page at a time.

    Args:
        host: Scene host exposing ``get_scene_elements``, ``update_scene``,
            ``get_selected_elements`` and ``set_change_callback``.
        settings: Settings manager. Defaults to the global one. Its
            ``[debug]`` section also drives process-wide tracing.
        scheduler: Deferred tick passed to the synchronizer.
        on_stats: Receives an ``ArrowCounterStats`` after every recompute.
    """

    def __init__(self, host, settings: Optional[SettingsManager] = None,
                 scheduler=None,
                 on_stats: Optional[Callable[[ArrowCounterStats], None]] = None):
        self.host = host
        self._settings = (settings or get_settings()).settings
        self.on_stats = on_stats
        self.synchronizer = ArrowLabelSynchronizer(scheduler, self._settings.labels)
        debug_trace.configure(self._settings.debug)
        try:
            self.grid = GridSnapper.from_settings(self._settings.grid)
        except KeyError:
            log.warning("Unknown grid size %r in settings; using %s",
                        self._settings.grid.size, DEFAULT_GRID_SIZE)
            self.grid = GridSnapper(DEFAULT_GRID_SIZE, self._settings.grid.enabled)
        self.undo_stack = QUndoStack()
        self.page_id: Optional[str] = None

        self._scale_preset = self._settings.measurement.scale_preset
        try:
            self._inches_per_scene_unit: Optional[float] = \
                inches_per_scene_unit_for_preset(self._scale_preset)
        except KeyError:
            log.warning("Unknown scale preset %r in settings; labelling disabled", self._scale_preset)
            self._inches_per_scene_unit = None
        self.counter_enabled = self._settings.measurement.counter_enabled

        host.set_change_callback(self.handle_change)

    # ------------------------------------------------------------------
    # Scale and page
    # ------------------------------------------------------------------

    @property
    def scale_preset(self) -> str:
        return self._scale_preset

    @property
    def inches_per_scene_unit(self) -> Optional[float]:
        return self._inches_per_scene_unit

    def set_scale_preset(self, label: str) -> None:
        """Switch the drawing scale. Raises ``KeyError`` for unknown presets."""
        self._inches_per_scene_unit = inches_per_scene_unit_for_preset(label)
        self._scale_preset = label

    def set_counter_enabled(self, enabled: bool) -> None:
        self.counter_enabled = enabled

    def set_page(self, page_id: Optional[str]) -> None:
        """Switch to another drawing page.

        Must run before the new page's elements reach the host.
        """
        if page_id == self.page_id:
            return
        self.synchronizer.reset()
        self.undo_stack.clear()
        self.page_id = page_id
        log.debug("Switched to drawing page %s", page_id)

    # ------------------------------------------------------------------
    # Host callbacks
    # ------------------------------------------------------------------

    def handle_change(self, elements: List[Dict[str, Any]]) -> None:
        """Host change callback."""
        if not self.counter_enabled:
            if self.on_stats:
                self.on_stats(ArrowCounterStats(0, []))
            return
        self.synchronizer.on_scene_changed(
            elements, self.host, self._inches_per_scene_unit, self.on_stats
        )

    def snap(self, x: float, y: float) -> Tuple[float, float]:
        return self.grid.snap(x, y)

    # ------------------------------------------------------------------
    # Overrides
    # ------------------------------------------------------------------

    def set_override(self, value: Optional[str]) -> bool:
        """Override the dimension text of the selected arrows (undoable).

        Returns:
            True if any tracked arrow was affected.
        """
        arrow_ids = self.synchronizer.selected_arrow_ids(self.host)
        if not arrow_ids:
            return False
        self.undo_stack.push(
            SetArrowOverrideCommand(self.synchronizer, self.host, value, arrow_ids)
        )
        return True

    def clear_override(self) -> bool:
        """Revert the selected arrows to their computed text (undoable)."""
        return self.set_override(None)

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Detach from the host and close the trace file."""
        self.host.set_change_callback(None)
        self.synchronizer.reset()
        self.undo_stack.clear()
        debug_trace.close_log()
