"""Unit tests for activity entries produced by a write."""

import pytest

from summons_tracker.control.activity import ActivityAction, diff_changes


@pytest.mark.unit
class TestDiffChanges:
    """Test field-level change descriptions."""

    def test_no_changes_no_entries(self, draft_summons):
        assert diff_changes(draft_summons, draft_summons) == []

    def test_field_change_described_with_label(self, draft_summons):
        changed = draft_summons.with_changes({"person_name": "Asha R. Rao"})

        entries = diff_changes(draft_summons, changed)

        assert entries[0].action == ActivityAction.FIELD_CHANGED
        assert entries[0].field_name == "person_name"
        assert entries[0].description == 'Person Name changed from "Asha Rao" to "Asha R. Rao"'
        assert entries[-1].action == ActivityAction.UPDATED
        assert entries[-1].description == "Updated: Person Name"

    def test_status_change_reported(self, draft_summons):
        issued = draft_summons.with_changes({"is_issued": True, "issue_date": "2026-01-10"})

        entries = diff_changes(draft_summons, issued)
        by_field = {entry.field_name: entry for entry in entries}

        status = by_field["status"]
        assert status.action == ActivityAction.STATUS_CHANGED
        assert (status.old_value, status.new_value) == ("Draft", "Issued")
        assert by_field["is_issued"].new_value == "true"
        assert by_field["is_issued"].old_value == "(empty)"
        assert by_field["issue_date"].old_value == "(empty)"

    def test_list_fields_compared_by_content(self, draft_summons):
        changed = draft_summons.with_changes({"purpose": ["Fact finding"]})

        entries = diff_changes(draft_summons, changed)

        assert entries[0].field_name == "purpose"
        assert entries[0].new_value == '["Fact finding"]'

    def test_actions_are_those_a_write_emits(self):
        assert {action.value for action in ActivityAction} == {
            "updated",
            "status_changed",
            "field_changed",
        }

    def test_entries_carry_summons_id(self, served_summons):
        changed = served_summons.with_changes({"statement_ongoing": True})
        entries = diff_changes(served_summons, changed)
        assert {entry.summons_id for entry in entries} == {"S-SERVED"}
        assert entries[0].to_dict()["action"] == "field_changed"
