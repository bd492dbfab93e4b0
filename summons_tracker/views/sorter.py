"""Deterministic ordering for worklists.

Sorting never mutates its input and is stable: records with equal keys keep
their relative order, so sorting an already sorted list is a no-op.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Iterable, List, Tuple, Union

from summons_tracker.core.dates import EPOCH, parse_timestamp
from summons_tracker.core.summons import Summons
from summons_tracker.views.classifier import ViewKind, normalize_view

# Views ordered by most recently issued first
ISSUE_DESC_VIEWS = frozenset({ViewKind.NOT_ISSUED})
ISSUE_ONLY_DESC_VIEWS = frozenset({ViewKind.ISSUED_NOT_SERVED})
# Views ordered by appearance date, soonest first
DATE_ASC_VIEWS = frozenset({
    ViewKind.SERVED_NOT_APPEARED,
    ViewKind.RESCHEDULE_PENDING,
    ViewKind.UPCOMING_7_DAYS,
})


def _timestamp(value) -> datetime:
    return parse_timestamp(value) or EPOCH


def _issued_or_created(record: Summons) -> datetime:
    issued = parse_timestamp(record.issue_date)
    return issued if issued is not None else _timestamp(record.created_at)


def _appearance_key(record: Summons) -> Tuple[bool, date]:
    effective = record.effective_date
    return (effective is None, effective or date.min)


def sort_key(view: Union[ViewKind, str]) -> Tuple[Callable[[Summons], object], bool]:
    """Return (key function, reverse) for ``view``."""
    kind = normalize_view(view)
    if kind in ISSUE_DESC_VIEWS:
        return _issued_or_created, True
    if kind in ISSUE_ONLY_DESC_VIEWS:
        return (lambda r: _timestamp(r.issue_date)), True
    if kind in DATE_ASC_VIEWS:
        return _appearance_key, False
    return (lambda r: _timestamp(r.created_at)), True


def sort_summons(view: Union[ViewKind, str], records: Iterable[Summons]) -> List[Summons]:
    """Order ``records`` for display in ``view``.

    - Not Issued: issue date descending, falling back to creation time
    - Issued but Not Served: issue date descending, undated last
    - Didn't Appear / Reschedule Pending / Upcoming: effective date ascending,
      undated last in original order
    - everything else: newest created first
    """
    key, reverse = sort_key(view)
    # list.sort is stable for reverse=True as well
    return sorted(records, key=key, reverse=reverse)
