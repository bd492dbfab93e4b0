"""Lifecycle core: summons entity, status derivation, transitions, editability."""

from .case import Case, case_counts
from .dates import Clock, FixedClock, SystemClock, normalize_date, parse_timestamp
from .editability import check_editable, get_editable_fields, is_field_editable
from .errors import (
    FrozenRecordError,
    IllegalTransitionError,
    MalformedDateError,
    SummonsError,
    UnknownViewError,
    ValidationError,
)
from .lifecycle import (
    TransitionResult,
    apply_transition,
    can_transition,
    get_next_statuses,
    required_fields,
    validate_transition,
)
from .summons import (
    ResponseLabel,
    Summons,
    SummonsStatus,
    derive_response_label,
    derive_status,
    effective_date,
)

__all__ = [
    'Case',
    'case_counts',
    'Clock',
    'FixedClock',
    'SystemClock',
    'normalize_date',
    'parse_timestamp',
    'check_editable',
    'get_editable_fields',
    'is_field_editable',
    'SummonsError',
    'ValidationError',
    'IllegalTransitionError',
    'FrozenRecordError',
    'MalformedDateError',
    'UnknownViewError',
    'TransitionResult',
    'apply_transition',
    'can_transition',
    'get_next_statuses',
    'required_fields',
    'validate_transition',
    'ResponseLabel',
    'Summons',
    'SummonsStatus',
    'derive_response_label',
    'derive_status',
    'effective_date',
]
