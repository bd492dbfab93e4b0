from datetime import date
from itertools import product

from summons_tracker.core.editability import get_editable_fields
from summons_tracker.core.lifecycle import validate_transition
from summons_tracker.core.summons import Summons, SummonsStatus, derive_status
from summons_tracker.data.config import FLAG_FIELDS
from summons_tracker.views.classifier import ViewKind, classify
from summons_tracker.views.sorter import sort_summons
from summons_tracker.views.stats import STAT_VIEWS, compute_stats

FLAGS = sorted(FLAG_FIELDS)
TODAY = date(2026, 1, 30)


def _all_flag_combinations():
    """Every flag combination, alternating dated and undated records."""
    records = []
    for i, values in enumerate(product([False, True], repeat=len(FLAGS))):
        kwargs = dict(zip(FLAGS, values))
        if i % 3 == 0:
            kwargs["appearance_date"] = "2026-01-24"
        elif i % 3 == 1:
            kwargs["appearance_date"] = "2026-02-03"
            kwargs["rescheduled_date"] = "2026-02-06" if i % 2 else None
        records.append(Summons(id=f"S-{i}", created_at=f"2026-01-{1 + i % 28:02d}T08:00:00", **kwargs))
    return records


RECORDS = _all_flag_combinations()


def test_derive_status_is_idempotent():
    for record in RECORDS:
        assert derive_status(record) == derive_status(record) == record.status


def test_completed_has_no_editable_fields():
    assert get_editable_fields(SummonsStatus.COMPLETED) == frozenset()


def test_accepted_results_keep_served_implies_issued():
    draft = Summons(id="S-X", appearance_date="2026-02-02")
    for values in product([False, True], repeat=len(FLAGS)):
        patch = dict(zip(FLAGS, values))
        patch["issue_date"] = "2026-01-10"
        result = validate_transition(draft, patch)
        if result.ok:
            assert not result.record.is_served or result.record.is_issued


def test_not_issued_never_issued_not_served():
    for record in RECORDS:
        if not record.is_issued:
            assert classify(ViewKind.ISSUED_NOT_SERVED, record, today=TODAY) is False


def test_stats_match_view_sizes():
    stats = compute_stats(RECORDS, today=TODAY)
    for name, view in STAT_VIEWS.items():
        assert getattr(stats, name) == len(classify(view, RECORDS, today=TODAY))


def test_sort_is_stable_and_pure():
    for view in ViewKind:
        before = list(RECORDS)
        once = sort_summons(view, RECORDS)
        assert sort_summons(view, once) == once
        assert RECORDS == before
