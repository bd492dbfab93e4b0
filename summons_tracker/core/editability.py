"""Field editability per lifecycle status.

Fields lock progressively as a summons advances: the issue date once
issued, subject and appearance data once served, everything once the final
statement is recorded.
"""
from __future__ import annotations

from typing import FrozenSet, Iterable

from summons_tracker.core.errors import FrozenRecordError, ValidationError
from summons_tracker.core.summons import Summons, SummonsStatus
from summons_tracker.data.config import (
    RESCHEDULE_FIELDS,
    SERVICE_FIELDS,
    STATEMENT_FIELDS,
    SUBJECT_FIELDS,
    WRITABLE_FIELDS,
)

EDITABLE_FIELDS_BY_STATUS: dict[SummonsStatus, FrozenSet[str]] = {
    SummonsStatus.DRAFT: WRITABLE_FIELDS,
    SummonsStatus.ISSUED: SUBJECT_FIELDS | SERVICE_FIELDS | RESCHEDULE_FIELDS | STATEMENT_FIELDS,
    SummonsStatus.SERVED: RESCHEDULE_FIELDS | STATEMENT_FIELDS,
    SummonsStatus.RESCHEDULED: frozenset(
        {"rescheduled_date", "rescheduled_date_communicated"}
    ) | STATEMENT_FIELDS,
    SummonsStatus.COMPLETED: frozenset(),
}


def get_editable_fields(status: SummonsStatus | str) -> FrozenSet[str]:
    """Get the set of fields a user may edit in ``status``.

    Raises:
        ValueError: status is not a known lifecycle status
    """
    resolved = SummonsStatus.parse(status)
    return EDITABLE_FIELDS_BY_STATUS[resolved]


def is_field_editable(status: SummonsStatus | str, field_name: str) -> bool:
    """Check if a specific field is editable in ``status``."""
    return field_name in get_editable_fields(status)


def check_editable(record: Summons, field_names: Iterable[str]) -> None:
    """Ensure every field in ``field_names`` may be written on ``record``.

    Raises:
        FrozenRecordError: record is completed and at least one field is touched
        ValidationError: some fields are locked in the record's status
    """
    touched = set(field_names)
    if not touched:
        return
    status = record.status
    if status.is_terminal:
        raise FrozenRecordError(record.id, touched)
    locked = touched - get_editable_fields(status)
    if locked:
        raise ValidationError(
            locked,
            "field_locked",
            f"Fields locked in status {status.value}: {', '.join(sorted(locked))}",
        )
