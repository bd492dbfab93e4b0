"""Unit tests for worklist ordering."""

import pytest

from summons_tracker.views.classifier import ViewKind
from summons_tracker.views.sorter import sort_key, sort_summons


def _ids(records):
    return [record.id for record in records]


@pytest.mark.unit
class TestSortOrders:
    """Test the ordering rule of each view family."""

    def test_not_issued_falls_back_to_created_at(self, make_summons):
        """A record without an issue date still sorts, by creation time."""
        issued = make_summons("A", issue_date="2026-01-20", created_at="2026-01-01T08:00:00")
        fallback = make_summons("B", created_at="2026-01-10T08:00:00")
        newest = make_summons("C", issue_date="2026-01-25", created_at="2026-01-02T08:00:00")

        ordered = sort_summons("Not Issued", [fallback, issued, newest])

        assert _ids(ordered) == ["C", "A", "B"]

    def test_issued_not_served_undated_last(self, make_summons):
        early = make_summons("early", is_issued=True, issue_date="2026-01-05")
        undated = make_summons("undated", is_issued=True)
        late = make_summons("late", is_issued=True, issue_date="2026-01-15")

        ordered = sort_summons(ViewKind.ISSUED_NOT_SERVED, [undated, early, late])

        assert _ids(ordered) == ["late", "early", "undated"]

    @pytest.mark.parametrize(
        "view",
        [ViewKind.SERVED_NOT_APPEARED, ViewKind.RESCHEDULE_PENDING, ViewKind.UPCOMING_7_DAYS],
    )
    def test_date_views_ascending_with_undated_last(self, make_summons, view):
        records = [
            make_summons("none-1"),
            make_summons("feb", appearance_date="2026-02-02"),
            make_summons("none-2"),
            make_summons("jan", appearance_date="2026-01-20", rescheduled_date="2026-01-29"),
            make_summons("early", appearance_date="2026-01-21"),
        ]

        ordered = sort_summons(view, records)

        assert _ids(ordered) == ["early", "jan", "feb", "none-1", "none-2"]

    def test_default_newest_created_first(self, make_summons):
        records = [
            make_summons("old", created_at="2025-12-01T10:00:00"),
            make_summons("new", created_at="2026-01-20T10:00:00"),
            make_summons("mid", created_at="2026-01-05T10:00:00"),
        ]

        assert _ids(sort_summons(ViewKind.ALL, records)) == ["new", "mid", "old"]
        assert _ids(sort_summons("all_pending_works", records)) == ["new", "mid", "old"]

    def test_created_at_compares_time_of_day(self, make_summons):
        morning = make_summons("morning", created_at="2026-01-20T08:00:00")
        evening = make_summons("evening", created_at="2026-01-20T18:00:00")

        assert _ids(sort_summons(ViewKind.ALL, [morning, evening])) == ["evening", "morning"]

    def test_sort_key_reports_direction(self):
        assert sort_key(ViewKind.UPCOMING_7_DAYS)[1] is False
        assert sort_key("Not Issued")[1] is True


@pytest.mark.unit
class TestSortProperties:
    """Test stability and purity."""

    def test_equal_keys_keep_input_order(self, make_summons):
        records = [make_summons(f"S-{i}", created_at="2026-01-20T08:00:00") for i in range(5)]

        assert _ids(sort_summons(ViewKind.ALL, records)) == [f"S-{i}" for i in range(5)]

    def test_sorting_twice_is_a_noop(self, snapshot):
        for view in ViewKind:
            once = sort_summons(view, snapshot)
            assert sort_summons(view, once) == once

    def test_input_not_mutated(self, snapshot):
        before = list(snapshot)
        sort_summons(ViewKind.ALL, snapshot)
        assert snapshot == before

    @pytest.mark.edge_case
    def test_garbled_dates_never_raise(self, make_summons):
        records = [
            make_summons("bad", created_at="yesterday", issue_date="??"),
            make_summons("good", created_at="2026-01-20T08:00:00"),
        ]
        for view in ViewKind:
            assert len(sort_summons(view, records)) == 2
        assert _ids(sort_summons(ViewKind.ALL, records)) == ["good", "bad"]
