"""
measurement/geometry.py

Polyline measurements for arrow elements.

Arrow ``points`` are offsets relative to the element's ``(x, y)``.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Tuple

from models import ArrowInfo, ElementType
from measurement.scale import value_for_length


def _has_polyline(el: Dict[str, Any]) -> bool:
    points = el.get("points")
    return (
        el.get("type") == ElementType.ARROW
        and isinstance(points, (list, tuple))
        and len(points) >= 2
    )


def length_of_arrow(el: Dict[str, Any]) -> float:
    """Total arc length of an arrow's polyline.

    Returns 0 for non-arrows and arrows with fewer than two points.
    """
    if not _has_polyline(el):
        return 0.0
    points = el["points"]
    total = 0.0
    for (x1, y1), (x2, y2) in zip(points, points[1:]):
        total += math.hypot(x2 - x1, y2 - y1)
    return total


def absolute_vertices(el: Dict[str, Any]) -> List[Tuple[float, float]]:
    """Scene-space vertices of an arrow's polyline."""
    ox = el.get("x", 0.0)
    oy = el.get("y", 0.0)
    return [(ox + dx, oy + dy) for dx, dy in el.get("points", [])]


def _bbox_center(el: Dict[str, Any]) -> Tuple[float, float]:
    return (
        el.get("x", 0.0) + el.get("width", 0.0) / 2,
        el.get("y", 0.0) + el.get("height", 0.0) / 2,
    )


def midpoint_of_arrow(el: Dict[str, Any]) -> Tuple[float, float]:
    """Point halfway along an arrow's polyline, in scene coordinates.

    Walks the segments until the cumulative length reaches half the total
    and interpolates inside that segment. Zero-length and single-point
    polylines fall back to the bounding-box centre.
    """
    if not _has_polyline(el):
        return _bbox_center(el)

    verts = absolute_vertices(el)
    segments = []
    total = 0.0
    for (x1, y1), (x2, y2) in zip(verts, verts[1:]):
        d = math.hypot(x2 - x1, y2 - y1)
        segments.append((x1, y1, x2, y2, d))
        total += d

    if total == 0:
        return _bbox_center(el)

    half = total / 2
    run = 0.0
    for x1, y1, x2, y2, d in segments:
        if run + d >= half:
            if d == 0:
                return (x1, y1)
            t = (half - run) / d
            return (x1 + (x2 - x1) * t, y1 + (y2 - y1) * t)
        run += d
    return _bbox_center(el)


def value_for_arrow(el: Dict[str, Any], inches_per_unit: float,
                    info: Optional[ArrowInfo] = None) -> str:
    """Displayed dimension text for an arrow: override if set, else its length."""
    if info is not None and info.override is not None:
        return info.override
    return value_for_length(length_of_arrow(el), inches_per_unit)
