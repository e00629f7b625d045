"""
measurement/host.py

In-memory scene host with the same surface as the whiteboard editor API.

Like the real editor, ``update_scene`` notifies the change callback
synchronously, before it returns.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Optional

ChangeCallback = Callable[[List[Dict[str, Any]]], None]


class ElementScene:
    """A flat list of element dicts plus a selection."""

    def __init__(self, elements: Optional[Iterable[Dict[str, Any]]] = None):
        self._elements: List[Dict[str, Any]] = list(elements or [])
        self._selected_ids: set = set()
        self._on_change: Optional[ChangeCallback] = None
        self.update_count = 0

    def set_change_callback(self, callback: Optional[ChangeCallback]) -> None:
        """Set callback fired after every scene mutation."""
        self._on_change = callback

    # Editor API -----------------------------------------------------------

    def get_scene_elements(self) -> List[Dict[str, Any]]:
        return list(self._elements)

    def update_scene(self, elements: Optional[Iterable[Dict[str, Any]]] = None) -> None:
        if elements is not None:
            self._elements = list(elements)
        self.update_count += 1
        self._notify()

    def get_selected_elements(self) -> List[Dict[str, Any]]:
        return [el for el in self._elements if el.get("id") in self._selected_ids]

    # Convenience edits ----------------------------------------------------

    def element(self, element_id: str) -> Optional[Dict[str, Any]]:
        for el in self._elements:
            if el.get("id") == element_id:
                return el
        return None

    def elements_of_type(self, element_type: str) -> List[Dict[str, Any]]:
        return [el for el in self._elements if el.get("type") == element_type]

    def select(self, ids: Iterable[str]) -> None:
        self._selected_ids = set(ids)

    def add_elements(self, *elements: Dict[str, Any]) -> None:
        self.update_scene(elements=[*self._elements, *elements])

    def update_element(self, element_id: str, **changes: Any) -> None:
        """Replace one element with a changed copy and notify."""
        self.update_scene(elements=[
            {**el, **changes} if el.get("id") == element_id else el
            for el in self._elements
        ])

    def _notify(self) -> None:
        if self._on_change:
            self._on_change(self.get_scene_elements())
