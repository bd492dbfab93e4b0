"""Case entity.

Cases group summons for display. Their own lifecycle is managed elsewhere;
this module only carries the fields the worklists display and the derived
summons counts.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional

from summons_tracker.core.summons import Summons, SummonsStatus


@dataclass(frozen=True)
class Case:
    """A case owning zero or more summons.

    Attributes:
        id: Unique identifier
        name: Case title
        status: Workflow label (To Do, Doing, Done, On Hold)
        assigned_officer: Officers working the case
        total_summons: Number of summons on the case (derived)
        active_summons: Summons not yet completed (derived)
    """

    id: str
    name: str = ""
    status: str = "To Do"
    ecir_no: Optional[str] = None
    assigned_officer: List[str] = field(default_factory=list)
    activity: List[str] = field(default_factory=list)
    created_at: Optional[str] = None
    last_edited: Optional[str] = None
    total_summons: int = 0
    active_summons: int = 0

    def with_counts(self, records: Iterable[Summons]) -> "Case":
        """Return a copy with summons counts recomputed from ``records``."""
        total, active = case_counts(self.id, records)
        return replace(self, total_summons=total, active_summons=active)


def case_counts(case_id: str, records: Iterable[Summons]) -> tuple[int, int]:
    """Count (total, active) summons belonging to a case."""
    total = 0
    active = 0
    for record in records:
        if record.case_id != case_id:
            continue
        total += 1
        if record.status != SummonsStatus.COMPLETED:
            active += 1
    return total, active
