"""
undo_commands.py

QUndoCommand implementations for undo/redo of dimension label overrides.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

from PyQt6.QtGui import QUndoCommand

if TYPE_CHECKING:
    from measurement.synchronizer import ArrowLabelSynchronizer


class SetArrowOverrideCommand(QUndoCommand):
    """Command for setting (or clearing) the override text of arrows.

    A ``None`` or blank *value* clears the override. The affected arrows and
    their previous overrides are captured at construction, so later
    selection changes do not alter what undo/redo touch. A command that
    affects no tracked arrow marks itself obsolete and is dropped by the
    stack.
    """

    def __init__(self, synchronizer: "ArrowLabelSynchronizer", api, value: Optional[str],
                 arrow_ids: Iterable[str], parent=None):
        super().__init__(parent)
        self.synchronizer = synchronizer
        self.api = api
        self.arrow_ids: List[str] = list(arrow_ids)
        trimmed = (value or "").strip() or None
        self.old_overrides: Dict[str, Optional[str]] = {
            aid: synchronizer.override_for(aid) for aid in self.arrow_ids
        }
        self.new_overrides: Dict[str, Optional[str]] = {aid: trimmed for aid in self.arrow_ids}
        if trimmed is None:
            self.setText(f"Clear dimension override ({len(self.arrow_ids)})")
        else:
            self.setText(f"Set dimension {trimmed} ({len(self.arrow_ids)})")
        if not self.arrow_ids:
            self.setObsolete(True)

    def undo(self):
        self.synchronizer.restore_overrides(self.api, self.old_overrides)

    def redo(self):
        if self.arrow_ids:
            self.synchronizer.restore_overrides(self.api, self.new_overrides)
