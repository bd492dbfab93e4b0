"""Summons lifecycle state machine.

Transitions are validated against the record that would result from a
patch, not against the patch alone. A patch that sets several flags at once
is accepted when every edge on the path from the current status to the
resulting status has its requirements satisfied by the resulting record, so
compound updates work while skipped stages are still rejected.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Tuple

from summons_tracker.core.dates import normalize_date
from summons_tracker.core.editability import check_editable
from summons_tracker.core.errors import (
    FrozenRecordError,
    IllegalTransitionError,
    SummonsError,
    ValidationError,
)
from summons_tracker.core.summons import Summons, SummonsStatus, coerce_field, effective_date
from summons_tracker.data.config import (
    DATE_FIELDS,
    DERIVED_FIELDS,
    IMMUTABLE_FIELDS,
    WRITABLE_FIELDS,
)

if TYPE_CHECKING:
    from summons_tracker.control.activity import ActivityEntry

S = SummonsStatus

TRANSITIONS: Dict[SummonsStatus, Tuple[SummonsStatus, ...]] = {
    S.DRAFT: (S.ISSUED,),
    S.ISSUED: (S.SERVED,),
    S.SERVED: (S.RESCHEDULED, S.COMPLETED),
    S.RESCHEDULED: (S.SERVED, S.COMPLETED),
    S.COMPLETED: (),  # Terminal
}

# Fields each edge needs on the resulting record
EDGE_REQUIREMENTS: Dict[Tuple[SummonsStatus, SummonsStatus], Tuple[str, ...]] = {
    (S.DRAFT, S.ISSUED): ("is_issued", "issue_date"),
    (S.ISSUED, S.SERVED): ("is_served", "appearance_date"),
    (S.SERVED, S.RESCHEDULED): ("requests_reschedule",),
    (S.RESCHEDULED, S.SERVED): ("rescheduled_date",),
    (S.SERVED, S.COMPLETED): ("statement_recorded",),
    (S.RESCHEDULED, S.COMPLETED): ("statement_recorded",),
}


def get_next_statuses(status: SummonsStatus | str) -> Tuple[SummonsStatus, ...]:
    """Get the statuses reachable from ``status`` by a single edge."""
    return TRANSITIONS[SummonsStatus.parse(status)]


def can_transition(current: SummonsStatus | str, target: SummonsStatus | str) -> bool:
    """Check if a single edge connects ``current`` to ``target``."""
    return SummonsStatus.parse(target) in get_next_statuses(current)


def required_fields(current: SummonsStatus | str, target: SummonsStatus | str) -> Tuple[str, ...]:
    """Fields required to take the edge ``current -> target``.

    Raises:
        IllegalTransitionError: no such edge
    """
    edge = (SummonsStatus.parse(current), SummonsStatus.parse(target))
    if edge not in EDGE_REQUIREMENTS:
        raise IllegalTransitionError(*edge)
    return EDGE_REQUIREMENTS[edge]


def find_path(
    current: SummonsStatus, target: SummonsStatus
) -> Optional[List[Tuple[SummonsStatus, SummonsStatus]]]:
    """Shortest list of edges from ``current`` to ``target`` (None if unreachable)."""
    if current == target:
        return []
    previous: Dict[SummonsStatus, SummonsStatus] = {}
    queue = deque([current])
    while queue:
        node = queue.popleft()
        for nxt in TRANSITIONS[node]:
            if nxt in previous or nxt == current:
                continue
            previous[nxt] = node
            if nxt == target:
                path = []
                while nxt != current:
                    path.append((previous[nxt], nxt))
                    nxt = previous[nxt]
                return list(reversed(path))
            queue.append(nxt)
    return None


def _requirement_met(record: Summons, field_name: str) -> bool:
    if field_name == "appearance_date":
        return effective_date(record) is not None
    if field_name in ("issue_date", "rescheduled_date"):
        # Writes fail closed on garbled dates
        return normalize_date(getattr(record, field_name)) is not None
    return bool(getattr(record, field_name))


def missing_requirements(
    record: Summons, path: List[Tuple[SummonsStatus, SummonsStatus]]
) -> List[str]:
    """Fields required along ``path`` that ``record`` does not satisfy."""
    missing: List[str] = []
    for edge in path:
        for field_name in EDGE_REQUIREMENTS[edge]:
            if field_name not in missing and not _requirement_met(record, field_name):
                missing.append(field_name)
    return missing


def check_invariants(record: Summons) -> None:
    """Raise ValidationError if ``record`` breaks a flag invariant."""
    if record.is_served and not record.is_issued:
        raise ValidationError(
            ("is_issued", "is_served"),
            "served_requires_issued",
            "Cannot mark a summons served before it is issued",
        )


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of validating a patch against a summons.

    ``record`` holds the resulting summons when valid; ``error`` holds the
    ValidationError, IllegalTransitionError or FrozenRecordError otherwise.
    ``activity`` lists the change entries of a persisted write (empty for
    validation-only results).
    """

    original: Summons
    record: Optional[Summons] = None
    changes: Mapping[str, Any] = field(default_factory=dict)
    error: Optional[SummonsError] = None
    activity: Tuple[ActivityEntry, ...] = ()

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def from_status(self) -> SummonsStatus:
        return self.original.status

    @property
    def to_status(self) -> Optional[SummonsStatus]:
        return self.record.status if self.record is not None else None

    @property
    def status_changed(self) -> bool:
        return self.ok and self.to_status != self.from_status

    def unwrap(self) -> Summons:
        """Return the resulting record or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.record

    def __bool__(self) -> bool:
        return self.ok


def _changed_fields(record: Summons, patch: Mapping[str, Any]) -> Dict[str, Any]:
    known = Summons.field_names()
    unknown = [name for name in patch if name not in known and name not in DERIVED_FIELDS]
    if unknown:
        raise ValidationError(unknown, "unknown_field")

    changes: Dict[str, Any] = {}
    for name, value in patch.items():
        if name in DERIVED_FIELDS:
            if str(value).strip().lower() != record.status.value.lower():
                raise ValidationError(
                    (name,), "status_is_derived", "Status is derived from flags and cannot be set"
                )
            continue
        coerced = coerce_field(name, value)
        if coerced == getattr(record, name):
            continue
        changes[name] = coerced

    immutable = [name for name in changes if name in IMMUTABLE_FIELDS or name not in WRITABLE_FIELDS]
    if immutable:
        raise ValidationError(immutable, "immutable_field")
    return changes


def _check_dates(changes: Mapping[str, Any]) -> None:
    malformed = [
        name for name, value in changes.items()
        if name in DATE_FIELDS and value is not None and normalize_date(value) is None
    ]
    if malformed:
        raise ValidationError(malformed, "malformed_date")


def validate_transition(
    record: Summons,
    patch: Mapping[str, Any],
    target: SummonsStatus | str | None = None,
) -> TransitionResult:
    """Validate a patch (and optional explicit target status) against a summons.

    Args:
        record: Current persisted summons
        patch: Field updates; unchanged values are ignored
        target: Status the caller intends to reach; defaults to the status
            derived from the resulting record

    Returns:
        TransitionResult carrying either the resulting summons or the error

    Algorithm:
    1. Reduce the patch to real changes; reject unknown, immutable and status keys
    2. Reject any change on a completed summons (FrozenRecordError)
    3. Reject changes to fields locked in the current status, and unparseable dates
    4. Build the resulting record and check flag invariants
    5. Find the edge path to the intended status (IllegalTransitionError if none)
    6. Require every edge's fields on the resulting record (ValidationError)
    """
    try:
        changes = _changed_fields(record, patch)
        current = record.status
        wanted = SummonsStatus.parse(target) if target is not None else None

        if current.is_terminal and (changes or (wanted is not None and wanted != current)):
            raise FrozenRecordError(record.id, changes.keys())

        check_editable(record, changes.keys())
        _check_dates(changes)

        result = record.with_changes(changes) if changes else record
        check_invariants(result)

        resulting = result.status
        goal = wanted if wanted is not None else resulting
        path = find_path(current, goal)
        if path is None:
            raise IllegalTransitionError(current, goal)

        missing = missing_requirements(result, path)
        if missing:
            raise ValidationError(
                missing,
                "missing_required_fields",
                f"Required to reach {goal.value}: {', '.join(sorted(missing))}",
            )
        if goal != resulting:
            raise ValidationError(
                EDGE_REQUIREMENTS[path[-1]] if path else (),
                "target_not_reached",
                f"Resulting flags derive {resulting.value}, not {goal.value}",
            )
    except SummonsError as e:
        return TransitionResult(original=record, error=e)

    return TransitionResult(original=record, record=result, changes=changes)


def apply_transition(
    record: Summons,
    patch: Mapping[str, Any],
    target: SummonsStatus | str | None = None,
) -> Summons:
    """Validate and return the resulting summons, raising on any error."""
    return validate_transition(record, patch, target).unwrap()
