"""
measurement/scale.py

Conversion between scene-distance units and real-world inches, and
architectural feet-inches formatting.

Calibrated against a 1/4" = 1' baseline drawing: at that scale one scene
unit measures 1.493 real-world inches.
"""

from __future__ import annotations

import math

from models import SCALE_PRESETS

# Empirical inches-per-scene-unit at the 1/4" = 1' baseline.
BASELINE_INCHES_PER_UNIT = 1.493
# Real-world inches per paper inch at the baseline (12 / (1/4)).
BASELINE_SCALE_FACTOR = 48


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity."""
    return math.floor(value + 0.5)


def inches_per_scene_unit(drawing_inches_per_foot: float) -> float:
    """Return real-world inches per scene unit for a drawing scale.

    Args:
        drawing_inches_per_foot: Paper inches per real-world foot, e.g.
            ``0.25`` for 1/4" = 1'.

    Raises:
        ValueError: If the scale is not positive.
    """
    if drawing_inches_per_foot <= 0:
        raise ValueError(f"Drawing scale must be positive, got {drawing_inches_per_foot!r}")
    scale_factor = 12 / drawing_inches_per_foot
    return BASELINE_INCHES_PER_UNIT * (scale_factor / BASELINE_SCALE_FACTOR)


def inches_per_scene_unit_for_preset(label: str) -> float:
    """Look up a scale preset by label (e.g. ``'1/4" = 1\\''``) and convert it.

    Raises:
        KeyError: If *label* is not a known preset.
    """
    return inches_per_scene_unit(SCALE_PRESETS[label])


def format_feet_inches(total_inches: float) -> str:
    """Format inches as feet-inches, e.g. ``149`` -> ``12'-05"``.

    The remainder is rounded but never carried into feet, so ``143.6``
    renders as ``11'-12"``.
    """
    feet = math.floor(total_inches / 12)
    inches = round_half_up(total_inches % 12)
    return f"{feet}'-{inches:02d}\""


def inches_for_length(scene_length: float, inches_per_unit: float) -> int:
    """Quantize a scene length to whole real-world inches (floor, 1" steps)."""
    px_per_step = 1 / inches_per_unit
    steps = max(0, math.floor(scene_length / px_per_step))
    return steps * 1


def value_for_length(scene_length: float, inches_per_unit: float) -> str:
    """Formatted dimension text for a scene length."""
    return format_feet_inches(inches_for_length(scene_length, inches_per_unit))
