"""Calendar grouping of summons by effective appearance date."""
from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Optional

from summons_tracker.core.summons import Summons


def group_by_effective_date(
    records: Iterable[Summons],
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> Dict[date, List[Summons]]:
    """Group summons by the day they are due to appear.

    Args:
        records: Summons to group
        start: First day to include (inclusive), or None for no bound
        end: Last day to include (inclusive), or None for no bound

    Returns:
        Mapping of day -> summons in input order, days ascending.
        Summons without an effective date are omitted.
    """
    grouped: Dict[date, List[Summons]] = defaultdict(list)
    for record in records:
        day = record.effective_date
        if day is None:
            continue
        if start is not None and day < start:
            continue
        if end is not None and day > end:
            continue
        grouped[day].append(record)
    return {day: grouped[day] for day in sorted(grouped)}
