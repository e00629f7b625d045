"""
models.py

Data models and constants for the DimSync measurement engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


# ----------------------------
# Scene element constants
# ----------------------------

class ElementType:
    """Element ``type`` discriminators the engine cares about.

    Every other type is passed through untouched.
    """
    ARROW = "arrow"
    TEXT = "text"


def is_live(el: Optional[Dict[str, Any]]) -> bool:
    """True if *el* exists and is not soft-deleted."""
    return el is not None and not el.get("isDeleted", False)


def is_live_arrow(el: Optional[Dict[str, Any]]) -> bool:
    """True if *el* is a non-deleted arrow element."""
    return is_live(el) and el.get("type") == ElementType.ARROW


# ----------------------------
# Preset tables
# ----------------------------

# Drawing scale label -> inches of paper per foot of real-world distance.
SCALE_PRESETS: Dict[str, float] = {
    "1/8\" = 1'":  1 / 8,
    "3/16\" = 1'": 3 / 16,
    "1/4\" = 1'":  1 / 4,
    "1/2\" = 1'":  1 / 2,
    "1\" = 1'":    1.0,
}

DEFAULT_SCALE_PRESET = "1/4\" = 1'"

# Grid label -> pitch in PDF points (72 per inch).
GRID_PRESETS: Dict[str, int] = {
    "1\"":  72,
    "6\"":  432,
    "12\"": 864,
}

DEFAULT_GRID_SIZE = "12\""


# ----------------------------
# Tracking and stats records
# ----------------------------

@dataclass
class ArrowInfo:
    """Bookkeeping for one labelled arrow.

    ``text_id`` names the label element this engine created for the arrow.
    ``override`` replaces the computed dimension text when set.
    """
    text_id: str
    override: Optional[str] = None


@dataclass
class ArrowCounterStats:
    """Live summary of labelled arrows for UI display."""
    count: int = 0
    values: List[str] = field(default_factory=list)
