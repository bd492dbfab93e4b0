"""Free-text search over summons."""
from __future__ import annotations

from typing import Iterable, List

from summons_tracker.core.summons import Summons

SEARCH_FIELDS = ("person_name", "case_id", "person_role")


def search_summons(records: Iterable[Summons], term: str) -> List[Summons]:
    """Case-insensitive substring match on name, case and role.

    An empty term returns every record.
    """
    snapshot = list(records)
    if not term or not term.strip():
        return snapshot
    needle = term.strip().lower()
    return [
        record for record in snapshot
        if any(needle in (getattr(record, name) or "").lower() for name in SEARCH_FIELDS)
    ]
