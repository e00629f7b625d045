"""
viewer package

3D model viewer helpers.
"""

from viewer.hidden_line import FlatMaterial, HiddenLineMode

__all__ = [
    "FlatMaterial",
    "HiddenLineMode",
]
