"""Dashboard counts derived from the worklist classifier."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Iterable, Optional, Union

from summons_tracker.core.dates import Clock, DateLike, resolve_today
from summons_tracker.core.summons import Summons
from summons_tracker.views.classifier import ViewClassifier, ViewKind, normalize_view

# Stat field -> view it counts
STAT_VIEWS: Dict[str, ViewKind] = {
    "total": ViewKind.ALL,
    "pending_works": ViewKind.ALL_PENDING_WORKS,
    "not_issued": ViewKind.NOT_ISSUED,
    "not_served": ViewKind.ISSUED_NOT_SERVED,
    "reschedule_pending": ViewKind.RESCHEDULE_PENDING,
    "ongoing_statements": ViewKind.ONGOING_STATEMENTS,
    "upcoming_7_days": ViewKind.UPCOMING_7_DAYS,
    "recorded": ViewKind.STATEMENT_RECORDED,
}


@dataclass(frozen=True)
class SummonsStats:
    """Counts shown on the dashboard tiles."""

    total: int = 0
    pending_works: int = 0
    not_issued: int = 0
    not_served: int = 0
    reschedule_pending: int = 0
    ongoing_statements: int = 0
    upcoming_7_days: int = 0
    recorded: int = 0

    def count(self, view: Union[ViewKind, str]) -> int:
        """Count for ``view``.

        Raises:
            KeyError: view has no dashboard tile
        """
        kind = normalize_view(view)
        for name, counted in STAT_VIEWS.items():
            if counted == kind:
                return getattr(self, name)
        raise KeyError(kind.value)

    def __getitem__(self, view: Union[ViewKind, str]) -> int:
        return self.count(view)

    def to_dict(self) -> dict:
        return asdict(self)


def compute_stats(
    records: Iterable[Summons],
    today: DateLike = None,
    clock: Optional[Clock] = None,
) -> SummonsStats:
    """Count every dashboard view over one snapshot.

    Each count equals ``len(classify(view, records))`` for its view.
    """
    snapshot = list(records)
    day = resolve_today(today, clock)
    counts = {
        name: len(ViewClassifier.filter(snapshot, view, today=day))
        for name, view in STAT_VIEWS.items()
    }
    return SummonsStats(**counts)
