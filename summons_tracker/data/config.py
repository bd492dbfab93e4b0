"""Configuration constants for the summons lifecycle engine.

Field groups drive the editability rules, labels feed the activity diff and
the CLI, and the window constants bound the date-driven worklists.
"""

# Upcoming window, inclusive on both ends (day 0 through day 7)
UPCOMING_WINDOW_DAYS = 7

# Field groups --------------------------------------------------------------

SUBJECT_FIELDS = frozenset({
    "person_name",
    "person_role",
    "case_id",
    "contact_number",
    "email",
    "officer_assigned_id",
    "priority",
    "tone",
    "purpose",
    "notes",
    "mode_of_service",
})

ISSUANCE_FIELDS = frozenset({"is_issued", "issue_date"})

SERVICE_FIELDS = frozenset({
    "is_served",
    "served_date",
    "appearance_date",
    "appearance_time",
})

RESCHEDULE_FIELDS = frozenset({
    "requests_reschedule",
    "rescheduled_date",
    "rescheduled_date_communicated",
})

STATEMENT_FIELDS = frozenset({
    "statement_ongoing",
    "statement_recorded",
    "statement_status",
    "date_of_1st_statement",
    "date_of_2nd_statement",
    "date_of_3rd_statement",
    "followup_required",
})

# Everything a patch may touch. id, created_at and status are never writable.
WRITABLE_FIELDS = (
    SUBJECT_FIELDS | ISSUANCE_FIELDS | SERVICE_FIELDS | RESCHEDULE_FIELDS | STATEMENT_FIELDS
)

IMMUTABLE_FIELDS = frozenset({"id", "created_at"})

# Calendar-day fields; a written value must parse
DATE_FIELDS = frozenset({
    "issue_date",
    "served_date",
    "appearance_date",
    "rescheduled_date",
    "date_of_1st_statement",
    "date_of_2nd_statement",
    "date_of_3rd_statement",
})

DERIVED_FIELDS = frozenset({"status"})

FLAG_FIELDS = frozenset({
    "is_issued",
    "is_served",
    "requests_reschedule",
    "statement_ongoing",
    "statement_recorded",
    "rescheduled_date_communicated",
    "followup_required",
})

LIST_FIELDS = frozenset({"purpose", "mode_of_service"})

# Human-readable labels (activity descriptions, CLI tables, error messages)
FIELD_LABELS = {
    "person_name": "Person Name",
    "person_role": "Person Role",
    "case_id": "Case",
    "contact_number": "Contact Number",
    "email": "Email",
    "officer_assigned_id": "Assigned Officer",
    "priority": "Priority",
    "tone": "Tone",
    "purpose": "Purpose",
    "notes": "Notes",
    "mode_of_service": "Mode of Service",
    "is_issued": "Summon Issued",
    "issue_date": "Issue Date",
    "is_served": "Summon Served",
    "served_date": "Served Date",
    "appearance_date": "Appearance Date",
    "appearance_time": "Appearance Time",
    "requests_reschedule": "Reschedule Request Received",
    "rescheduled_date": "Rescheduled Date",
    "rescheduled_date_communicated": "Rescheduled Date Communicated",
    "statement_ongoing": "Statement Ongoing",
    "statement_recorded": "Statement Recorded",
    "statement_status": "Statement Status",
    "date_of_1st_statement": "1st Statement Date",
    "date_of_2nd_statement": "2nd Statement Date",
    "date_of_3rd_statement": "3rd Statement Date",
    "followup_required": "Follow-up Required",
    "status": "Status",
}


def field_label(field_name: str) -> str:
    """Return the display label for a field, falling back to its name."""
    return FIELD_LABELS.get(field_name, field_name)
