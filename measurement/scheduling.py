"""
measurement/scheduling.py

Single-pending deferred callbacks.

Scheduling a new callback always replaces the pending one, so a burst of
scene changes within one frame collapses into a single recompute.
"""

from __future__ import annotations

from typing import Callable, Optional

from PyQt6.QtCore import QTimer

from settings import get_settings


class QtFrameScheduler:
    """Debounced tick backed by a single-shot ``QTimer``.

    Restarting a running single-shot timer discards the earlier timeout,
    which gives cancel-and-reschedule for free.

    Args:
        interval_ms: Delay before the callback fires. Defaults to
            ``[sync] frame_interval_ms``.
    """

    def __init__(self, interval_ms: Optional[int] = None, parent=None):
        if interval_ms is None:
            interval_ms = get_settings().settings.sync.frame_interval_ms
        self._callback: Optional[Callable[[], None]] = None
        self._timer = QTimer(parent)
        self._timer.setSingleShot(True)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._fire)

    @property
    def pending(self) -> bool:
        return self._timer.isActive()

    def schedule(self, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._timer.start()

    def cancel(self) -> None:
        self._timer.stop()
        self._callback = None

    def _fire(self) -> None:
        callback, self._callback = self._callback, None
        if callback is not None:
            callback()


class ManualFrameScheduler:
    """Deferred tick that fires only when :meth:`flush` is called.

    For headless hosts that drive their own frame loop.
    """

    def __init__(self):
        self._callback: Optional[Callable[[], None]] = None
        self.scheduled_count = 0

    @property
    def pending(self) -> bool:
        return self._callback is not None

    def schedule(self, callback: Callable[[], None]) -> None:
        self._callback = callback
        self.scheduled_count += 1

    def cancel(self) -> None:
        self._callback = None

    def flush(self) -> bool:
        """Run the pending callback, if any. Returns True if one ran."""
        callback, self._callback = self._callback, None
        if callback is None:
            return False
        callback()
        return True
