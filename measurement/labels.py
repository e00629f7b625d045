"""
measurement/labels.py

Factory for dimension label text elements.
"""

from __future__ import annotations

import random
import uuid
from typing import Any, Dict, Optional

from models import ElementType
from settings import LabelSettings, get_settings


def new_element_id() -> str:
    """Generate a unique element id."""
    return str(uuid.uuid4())


def _nonce() -> int:
    return random.randrange(1_000_000_000)


def make_text_element_at(x: float, y: float, text: str,
                         label_settings: Optional[LabelSettings] = None,
                         element_id: Optional[str] = None) -> Dict[str, Any]:
    """Build a text element the host editor will accept.

    ``originalText`` mirrors ``text``; the host's export path requires it.
    Presentation fields come from ``[labels]`` settings and are never
    updated after creation.
    """
    ls = label_settings or get_settings().settings.labels
    return {
        "id": element_id or new_element_id(),
        "type": ElementType.TEXT,
        "text": text,
        "originalText": text,
        "fontSize": ls.font_size,
        "fontFamily": ls.font_family,
        "textAlign": ls.text_align,
        "verticalAlign": ls.vertical_align,
        "lineHeight": ls.line_height,
        "autoResize": True,
        "x": x,
        "y": y,
        "width": 0,
        "height": 0,
        "angle": 0,
        "opacity": 100,
        "strokeColor": ls.stroke_color,
        "backgroundColor": "transparent",
        "fillStyle": "solid",
        "strokeWidth": 1,
        "roundness": None,
        "groupIds": [],
        "seed": _nonce(),
        "version": 1,
        "versionNonce": _nonce(),
        "isDeleted": False,
        "locked": False,
        "boundElements": None,
        "containerId": None,
    }
