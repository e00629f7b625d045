"""
measurement package

Scale conversion, arrow dimension labels and grid snapping for drawings.
"""

from measurement.grid import GridSnapper
from measurement.host import ElementScene
from measurement.scale import (
    format_feet_inches,
    inches_per_scene_unit,
    inches_per_scene_unit_for_preset,
    value_for_length,
)
from measurement.scheduling import ManualFrameScheduler, QtFrameScheduler
from measurement.session import MeasurementSession
from measurement.synchronizer import ArrowLabelSynchronizer

__all__ = [
    "ArrowLabelSynchronizer",
    "ElementScene",
    "GridSnapper",
    "ManualFrameScheduler",
    "MeasurementSession",
    "QtFrameScheduler",
    "format_feet_inches",
    "inches_per_scene_unit",
    "inches_per_scene_unit_for_preset",
    "value_for_length",
]
