"""Change entries describing what a write did to a summons."""
from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from summons_tracker.core.summons import Summons
from summons_tracker.data.config import FIELD_LABELS, field_label


class ActivityAction(Enum):
    """Kinds of activity entries."""

    UPDATED = "updated"
    STATUS_CHANGED = "status_changed"
    FIELD_CHANGED = "field_changed"


@dataclass(frozen=True)
class ActivityEntry:
    """Single change on a summons."""

    summons_id: str
    action: ActivityAction
    description: str
    field_name: Optional[str] = None
    old_value: Optional[str] = None
    new_value: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for logging."""
        return {
            "summons_id": self.summons_id,
            "action": self.action.value,
            "field_name": self.field_name,
            "old_value": self.old_value,
            "new_value": self.new_value,
            "description": self.description,
        }


def _display(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return json.dumps(list(value))
    if value is None or value is False:
        return ""
    if value is True:
        return "true"
    return str(value)


def diff_changes(old: Summons, new: Summons) -> List[ActivityEntry]:
    """Describe every labelled field that differs between two versions.

    The derived status is compared like any other field and reported as
    ``status_changed``. A trailing ``updated`` entry summarizes the labels
    touched; no entries are returned when nothing changed.
    """
    entries: List[ActivityEntry] = []
    changed_labels: List[str] = []
    old_data = old.to_dict()
    new_data = new.to_dict()

    for name in FIELD_LABELS:
        old_str = _display(old_data.get(name))
        new_str = _display(new_data.get(name))
        if old_str == new_str:
            continue
        label = field_label(name)
        entries.append(ActivityEntry(
            summons_id=new.id,
            action=ActivityAction.STATUS_CHANGED if name == "status" else ActivityAction.FIELD_CHANGED,
            field_name=name,
            old_value=old_str or "(empty)",
            new_value=new_str or "(empty)",
            description=f'{label} changed from "{old_str}" to "{new_str}"',
        ))
        changed_labels.append(label)

    if changed_labels:
        entries.append(ActivityEntry(
            summons_id=new.id,
            action=ActivityAction.UPDATED,
            description=f"Updated: {', '.join(changed_labels)}",
        ))
    return entries
