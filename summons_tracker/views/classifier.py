"""Worklist classification for summons.

Each worklist ("view") is a predicate over a summons and a reference day.
Historical view names from the dashboard, the calendar and the external
document service are normalized to one canonical ViewKind before any
predicate runs.
"""
from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Union, overload

from summons_tracker.core.dates import Clock, DateLike, days_between, normalize_date, resolve_today
from summons_tracker.core.errors import UnknownViewError
from summons_tracker.core.summons import Summons
from summons_tracker.data.config import UPCOMING_WINDOW_DAYS


class ViewKind(Enum):
    """Canonical worklist views."""

    ALL = "All Summons"
    NOT_ISSUED = "Not Issued"
    ISSUED_NOT_SERVED = "Issued but Not Served"
    SERVED_NOT_APPEARED = "Served but Didn't Appear"
    RESCHEDULE_PENDING = "Reschedule Pending"
    ONGOING_STATEMENTS = "Ongoing Statements"
    UPCOMING_7_DAYS = "Upcoming 7 Days"
    ALL_PENDING_WORKS = "All Pending Works"
    STATEMENT_RECORDED = "Final Statement Recorded"

    @property
    def is_date_bounded(self) -> bool:
        """Views that can only match records with an effective date."""
        return self in (ViewKind.SERVED_NOT_APPEARED, ViewKind.UPCOMING_7_DAYS)


# Historical aliases (matched case-insensitively)
VIEW_ALIASES: Dict[str, ViewKind] = {
    "all": ViewKind.ALL,
    "all summons": ViewKind.ALL,
    "role_tone_purpose": ViewKind.ALL,
    "first entry": ViewKind.NOT_ISSUED,
    "first_entry": ViewKind.NOT_ISSUED,
    "draft - not issued": ViewKind.NOT_ISSUED,
    "draft_not_issued": ViewKind.NOT_ISSUED,
    "not issued": ViewKind.NOT_ISSUED,
    "issued but not served": ViewKind.ISSUED_NOT_SERVED,
    "issued - not served": ViewKind.ISSUED_NOT_SERVED,
    "issued_not_served": ViewKind.ISSUED_NOT_SERVED,
    "served but didn't appear": ViewKind.SERVED_NOT_APPEARED,
    "didn't attend": ViewKind.SERVED_NOT_APPEARED,
    "didnt_attend": ViewKind.SERVED_NOT_APPEARED,
    "reschedule pending": ViewKind.RESCHEDULE_PENDING,
    "reschedule - date not communicated": ViewKind.RESCHEDULE_PENDING,
    "reschedule_date_not_communicated": ViewKind.RESCHEDULE_PENDING,
    "ongoing statements": ViewKind.ONGOING_STATEMENTS,
    "ongoing_statement": ViewKind.ONGOING_STATEMENTS,
    "upcoming 7 days": ViewKind.UPCOMING_7_DAYS,
    "next_7_days": ViewKind.UPCOMING_7_DAYS,
    "all pending works": ViewKind.ALL_PENDING_WORKS,
    "all_pending_works": ViewKind.ALL_PENDING_WORKS,
    "final statement recorded": ViewKind.STATEMENT_RECORDED,
    "final_statement_recorded": ViewKind.STATEMENT_RECORDED,
}


def normalize_view(view: Union[ViewKind, str]) -> ViewKind:
    """Map a view name or alias to its canonical ViewKind.

    Raises:
        UnknownViewError: name matches no view or alias
    """
    if isinstance(view, ViewKind):
        return view
    key = str(view).strip().lower()
    if key in VIEW_ALIASES:
        return VIEW_ALIASES[key]
    for kind in ViewKind:
        if kind.name.lower() == key:
            return kind
    raise UnknownViewError(str(view))


def aliases_for(view: Union[ViewKind, str]) -> List[str]:
    """List the accepted aliases of a view, canonical name excluded."""
    kind = normalize_view(view)
    return sorted(alias for alias, target in VIEW_ALIASES.items()
                  if target == kind and alias != kind.value.lower())


class ViewClassifier:
    """Decide worklist membership for summons records.

    All predicates compare the effective appearance date against the
    reference day at day granularity. Records without an effective date
    never match a date-bounded view.
    """

    UPCOMING_WINDOW_DAYS = UPCOMING_WINDOW_DAYS

    @classmethod
    def is_upcoming(cls, record: Summons, today: date) -> bool:
        """Effective date between today and today + window, inclusive."""
        effective = record.effective_date
        if effective is None:
            return False
        diff = days_between(today, effective)
        return 0 <= diff <= cls.UPCOMING_WINDOW_DAYS

    @classmethod
    def is_overdue_appearance(cls, record: Summons, today: date) -> bool:
        """Served, no reschedule or statement activity, and the date has passed."""
        effective = record.effective_date
        if effective is None:
            return False
        return (
            record.is_served
            and not record.requests_reschedule
            and not record.statement_recorded
            and not record.statement_ongoing
            and effective < today
        )

    @classmethod
    def is_pending_work(cls, record: Summons, today: date) -> bool:
        """Any condition needing attention; recorded summons are always excluded."""
        needs_attention = (
            cls.is_upcoming(record, today)
            or not record.is_issued
            or not record.is_served
            or record.statement_ongoing
            or record.followup_required
            or (record.requests_reschedule and not record.rescheduled_date_communicated)
        )
        return needs_attention and not record.statement_recorded

    @classmethod
    def _predicates(cls) -> Dict[ViewKind, Callable[[Summons, date], bool]]:
        return {
            ViewKind.ALL: lambda r, d: True,
            ViewKind.NOT_ISSUED: lambda r, d: not r.is_issued,
            ViewKind.ISSUED_NOT_SERVED: lambda r, d: r.is_issued and not r.is_served,
            ViewKind.SERVED_NOT_APPEARED: cls.is_overdue_appearance,
            ViewKind.RESCHEDULE_PENDING: (
                lambda r, d: r.requests_reschedule and normalize_date(r.rescheduled_date) is None
            ),
            ViewKind.ONGOING_STATEMENTS: (
                lambda r, d: r.statement_ongoing and not r.statement_recorded
            ),
            ViewKind.UPCOMING_7_DAYS: cls.is_upcoming,
            ViewKind.ALL_PENDING_WORKS: cls.is_pending_work,
            ViewKind.STATEMENT_RECORDED: lambda r, d: r.statement_recorded,
        }

    @classmethod
    def matches(
        cls,
        record: Summons,
        view: Union[ViewKind, str],
        today: DateLike = None,
        clock: Optional[Clock] = None,
    ) -> bool:
        """Check if ``record`` belongs to ``view`` on the reference day.

        Args:
            record: Summons to test
            view: Canonical view or any accepted alias
            today: Reference day (defaults to the clock, then the wall clock)
            clock: Injected time source

        Returns:
            True if the record is a member of the view
        """
        kind = normalize_view(view)
        day = resolve_today(today, clock)
        return bool(cls._predicates()[kind](record, day))

    @classmethod
    def filter(
        cls,
        records: Iterable[Summons],
        view: Union[ViewKind, str],
        today: DateLike = None,
        clock: Optional[Clock] = None,
    ) -> List[Summons]:
        """Records belonging to ``view``, in input order."""
        kind = normalize_view(view)
        day = resolve_today(today, clock)
        predicate = cls._predicates()[kind]
        return [record for record in records if predicate(record, day)]


@overload
def classify(view: Union[ViewKind, str], target: Summons, today: DateLike = ...,
             clock: Optional[Clock] = ...) -> bool: ...


@overload
def classify(view: Union[ViewKind, str], target: Iterable[Summons], today: DateLike = ...,
             clock: Optional[Clock] = ...) -> List[Summons]: ...


def classify(view, target, today=None, clock=None):
    """Membership test for one summons, or the members of a collection."""
    if isinstance(target, Summons):
        return ViewClassifier.matches(target, view, today, clock)
    return ViewClassifier.filter(target, view, today, clock)
