"""
measurement/grid.py

Snap pointer coordinates to a fixed grid pitch.
"""

from __future__ import annotations

from typing import Optional, Tuple

from models import DEFAULT_GRID_SIZE, GRID_PRESETS
from measurement.scale import round_half_up
from settings import GridSettings, get_settings


class GridSnapper:
    """Quantizes coordinates to the nearest multiple of a preset grid pitch.

    Stateless apart from its configuration, so it is safe to call on every
    pointer-move event.

    Args:
        size: Key into ``GRID_PRESETS`` (``'1"'``, ``'6"'`` or ``'12"'``).
        enabled: When False, :meth:`snap` returns its input unchanged.
    """

    def __init__(self, size: str = DEFAULT_GRID_SIZE, enabled: bool = False):
        self._size = size
        self._pitch = GRID_PRESETS[size]
        self.enabled = enabled

    @classmethod
    def from_settings(cls, grid_settings: Optional[GridSettings] = None) -> "GridSnapper":
        gs = grid_settings or get_settings().settings.grid
        return cls(gs.size, gs.enabled)

    @property
    def size(self) -> str:
        return self._size

    @property
    def pitch(self) -> int:
        return self._pitch

    def set_size(self, size: str) -> None:
        """Switch to another preset. Raises ``KeyError`` for unknown keys."""
        self._pitch = GRID_PRESETS[size]
        self._size = size

    def snap(self, x: float, y: float) -> Tuple[float, float]:
        if not self.enabled:
            return (x, y)
        p = self._pitch
        return (round_half_up(x / p) * p, round_half_up(y / p) * p)
