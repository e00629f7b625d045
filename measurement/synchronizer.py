"""
measurement/synchronizer.py

Keeps a live dimension label attached to every arrow in a host scene.

The host calls :meth:`ArrowLabelSynchronizer.on_scene_changed` after every
scene mutation. New arrows get a label in one batched write; a deferred
tick then recomputes every label's text and position from its arrow.
Writes made by the synchronizer itself are guarded so the host's change
notification for them is ignored.

Host API (duck-typed):
    get_scene_elements() -> list of element dicts
    update_scene(elements=...) -> None
    get_selected_elements() -> list of element dicts
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterable, List, Optional

from debug_trace import trace, trace_call
from models import ArrowCounterStats, ArrowInfo, ElementType, is_live, is_live_arrow
from measurement.geometry import length_of_arrow, midpoint_of_arrow, value_for_arrow
from measurement.labels import make_text_element_at
from measurement.scale import value_for_length
from settings import LabelSettings

log = logging.getLogger(__name__)

StatsCallback = Callable[[ArrowCounterStats], None]


class ArrowLabelSynchronizer:
    """Arrow-to-label binding for one open drawing.

    Create one per document and call :meth:`reset` before loading another
    drawing's elements into the same host.

    Args:
        scheduler: Single-pending deferred tick (``schedule``/``cancel``).
            Defaults to a :class:`~measurement.scheduling.QtFrameScheduler`.
        label_settings: Presentation for new labels. Defaults to settings.
    """

    def __init__(self, scheduler=None, label_settings: Optional[LabelSettings] = None):
        if scheduler is None:
            from measurement.scheduling import QtFrameScheduler
            scheduler = QtFrameScheduler()
        self._scheduler = scheduler
        self._label_settings = label_settings
        self._arrow_meta: Dict[str, ArrowInfo] = {}
        self._updating_scene = False

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._arrow_meta)

    def tracked_arrow_ids(self) -> List[str]:
        return list(self._arrow_meta)

    def label_id_for(self, arrow_id: str) -> Optional[str]:
        info = self._arrow_meta.get(arrow_id)
        return info.text_id if info else None

    def override_for(self, arrow_id: str) -> Optional[str]:
        info = self._arrow_meta.get(arrow_id)
        return info.override if info else None

    @property
    def is_updating_scene(self) -> bool:
        return self._updating_scene

    # ------------------------------------------------------------------
    # Scene change handling
    # ------------------------------------------------------------------

    @contextmanager
    def _writing_scene(self):
        """Mark a synchronizer-initiated write for its duration."""
        self._updating_scene = True
        try:
            yield
        finally:
            self._updating_scene = False

    def on_scene_changed(self, elements: List[Dict[str, Any]], api,
                         inches_per_scene_unit: Optional[float],
                         on_stats: Optional[StatsCallback] = None) -> None:
        """React to a host scene change.

        No-op while one of our own writes is in flight or when the drawing
        has no scale.
        """
        if self._updating_scene or not inches_per_scene_unit:
            return

        new_arrows = [
            el for el in elements
            if is_live_arrow(el) and el.get("id") not in self._arrow_meta
        ]

        if new_arrows:
            scene = api.get_scene_elements()
            new_texts = []
            for el in new_arrows:
                mid_x, mid_y = midpoint_of_arrow(el)
                text = value_for_length(length_of_arrow(el), inches_per_scene_unit)
                label = make_text_element_at(mid_x, mid_y, text, self._label_settings)
                new_texts.append(label)
                self._arrow_meta[el["id"]] = ArrowInfo(text_id=label["id"])
            trace(f"Labelling {len(new_texts)} new arrow(s)", "SYNC")
            with self._writing_scene():
                api.update_scene(elements=[*scene, *new_texts])

        self._scheduler.schedule(
            lambda: self._recompute(api, inches_per_scene_unit, on_stats)
        )

    def _recompute(self, api, inches_per_scene_unit: float,
                   on_stats: Optional[StatsCallback]) -> None:
        """Deferred tick: refresh every tracked label from its arrow."""
        scene = list(api.get_scene_elements())
        by_id = {el.get("id"): el for el in scene}
        staged: Dict[str, Dict[str, Any]] = {}

        for arrow_id, info in list(self._arrow_meta.items()):
            arrow = by_id.get(arrow_id)
            if not is_live(arrow):
                del self._arrow_meta[arrow_id]
                trace(f"Untracked arrow {arrow_id}", "SYNC")
                continue
            text_el = by_id.get(info.text_id)
            if not is_live(text_el):
                continue

            value = value_for_arrow(arrow, inches_per_scene_unit, info)
            mid_x, mid_y = midpoint_of_arrow(arrow)
            if (text_el.get("text") != value
                    or text_el.get("x") != mid_x
                    or text_el.get("y") != mid_y):
                staged[info.text_id] = {
                    **text_el,
                    "text": value,
                    "originalText": value,
                    "x": mid_x,
                    "y": mid_y,
                }

        trace(f"Tick: {len(self._arrow_meta)} tracked, {len(staged)} stale", "TICK")
        if staged:
            with self._writing_scene():
                api.update_scene(elements=[staged.get(el.get("id"), el) for el in scene])

        if on_stats is not None:
            values = [
                value_for_arrow(by_id[arrow_id], inches_per_scene_unit, info)
                for arrow_id, info in self._arrow_meta.items()
            ]
            on_stats(ArrowCounterStats(count=len(self._arrow_meta), values=values))

    # ------------------------------------------------------------------
    # Manual overrides
    # ------------------------------------------------------------------

    def selected_arrow_ids(self, api, selected: Optional[Iterable[Dict[str, Any]]] = None) -> List[str]:
        if selected is None:
            selected = api.get_selected_elements()
        return [
            el["id"] for el in selected
            if el.get("type") == ElementType.ARROW and el.get("id") in self._arrow_meta
        ]

    def _refresh(self, api) -> None:
        # Unguarded: the host's change notification drives the recompute.
        api.update_scene(elements=list(api.get_scene_elements()))

    def set_override(self, api, value: Optional[str],
                     selected: Optional[Iterable[Dict[str, Any]]] = None) -> List[str]:
        """Replace the computed text of the selected tracked arrows.

        An empty or blank *value* removes the override instead.

        Returns:
            Ids of the arrows that were changed.
        """
        trimmed = (value or "").strip()
        arrow_ids = self.selected_arrow_ids(api, selected)
        for arrow_id in arrow_ids:
            self._arrow_meta[arrow_id].override = trimmed or None
        if arrow_ids:
            log.debug("Override %r applied to %d arrow(s)", trimmed, len(arrow_ids))
            self._refresh(api)
        return arrow_ids

    def clear_override(self, api,
                       selected: Optional[Iterable[Dict[str, Any]]] = None) -> List[str]:
        """Revert the selected tracked arrows to their computed text."""
        arrow_ids = self.selected_arrow_ids(api, selected)
        for arrow_id in arrow_ids:
            self._arrow_meta[arrow_id].override = None
        if arrow_ids:
            self._refresh(api)
        return arrow_ids

    def restore_overrides(self, api, overrides: Dict[str, Optional[str]]) -> None:
        """Set each arrow's override to a previously captured value.

        Arrows that are no longer tracked are skipped.
        """
        changed = False
        for arrow_id, value in overrides.items():
            info = self._arrow_meta.get(arrow_id)
            if info is None:
                continue
            info.override = value
            changed = True
        if changed:
            self._refresh(api)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @trace_call("SYNC")
    def reset(self) -> None:
        """Forget every binding and cancel the pending tick."""
        self._arrow_meta.clear()
        self._scheduler.cancel()
        self._updating_scene = False
