"""Unit tests for per-status field editability."""

import pytest

from summons_tracker.core.editability import (
    check_editable,
    get_editable_fields,
    is_field_editable,
)
from summons_tracker.core.errors import FrozenRecordError, ValidationError
from summons_tracker.core.summons import SummonsStatus
from summons_tracker.data.config import WRITABLE_FIELDS


@pytest.mark.unit
class TestEditableFields:
    """Test the editable field sets per status."""

    def test_draft_edits_everything_writable(self):
        assert get_editable_fields(SummonsStatus.DRAFT) == WRITABLE_FIELDS
        assert "created_at" not in get_editable_fields("Draft")

    def test_issue_date_locks_once_issued(self):
        assert is_field_editable("Issued", "issue_date") is False
        assert is_field_editable("Issued", "person_name") is True
        assert is_field_editable("Issued", "appearance_date") is True

    def test_subject_locks_once_served(self):
        assert is_field_editable("Served", "person_name") is False
        assert is_field_editable("Served", "appearance_date") is False
        assert is_field_editable("Served", "requests_reschedule") is True
        assert is_field_editable("Served", "statement_recorded") is True

    def test_rescheduled_allows_new_date(self):
        assert is_field_editable("Rescheduled", "rescheduled_date") is True
        assert is_field_editable("Rescheduled", "rescheduled_date_communicated") is True
        assert is_field_editable("Rescheduled", "is_served") is False

    def test_completed_is_empty(self):
        assert get_editable_fields(SummonsStatus.COMPLETED) == frozenset()

    def test_sets_shrink_along_the_lifecycle(self):
        draft = get_editable_fields("Draft")
        issued = get_editable_fields("Issued")
        served = get_editable_fields("Served")
        assert served < issued < draft

    @pytest.mark.failure
    def test_unknown_status_raises(self):
        with pytest.raises(ValueError):
            get_editable_fields("Archived")


@pytest.mark.unit
class TestCheckEditable:
    """Test enforcement against a concrete record."""

    def test_allowed_fields_pass(self, served_summons):
        check_editable(served_summons, ["statement_ongoing", "followup_required"])

    def test_no_fields_always_pass(self, completed_summons):
        check_editable(completed_summons, [])

    @pytest.mark.failure
    def test_locked_fields_reported(self, served_summons):
        with pytest.raises(ValidationError) as excinfo:
            check_editable(served_summons, ["person_name", "notes", "statement_ongoing"])
        assert excinfo.value.fields == ("notes", "person_name")
        assert excinfo.value.rule == "field_locked"

    @pytest.mark.failure
    def test_completed_record_frozen(self, completed_summons):
        with pytest.raises(FrozenRecordError) as excinfo:
            check_editable(completed_summons, ["notes"])
        assert excinfo.value.summons_id == "S-DONE"
