"""Summons entity and status derivation.

A summons carries a set of lifecycle flags and dates. Its status is never
stored as independent truth: ``Summons.status`` is recomputed from the flags
on every access by ``derive_status``, which is the single writer of the
status label.
"""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field, fields, replace
from datetime import date
from enum import Enum
from typing import Any, List, Mapping, Optional

from summons_tracker.core.dates import DateLike, normalize_date, resolve_today
from summons_tracker.data.config import DERIVED_FIELDS, FLAG_FIELDS, LIST_FIELDS

logger = logging.getLogger(__name__)


class SummonsStatus(Enum):
    """Lifecycle status of a summons."""

    DRAFT = "Draft"  # Being prepared
    ISSUED = "Issued"  # Formally issued, awaiting service
    SERVED = "Served"  # Delivered, appearance pending or rescheduled date set
    RESCHEDULED = "Rescheduled"  # Reschedule requested, new date not yet set
    COMPLETED = "Completed"  # Final statement recorded, record frozen

    @classmethod
    def parse(cls, value: "SummonsStatus | str") -> "SummonsStatus":
        """Coerce a status label (case-insensitive) to the enum."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            wanted = value.strip().lower()
            for status in cls:
                if status.value.lower() == wanted or status.name.lower() == wanted:
                    return status
        raise ValueError(f"Unknown summons status: {value!r}")

    @property
    def is_terminal(self) -> bool:
        return self == SummonsStatus.COMPLETED


class ResponseLabel(Enum):
    """Finer presentation labels layered over SummonsStatus."""

    DRAFT = "Draft"
    ISSUED_BEING_SERVED = "Issued and being served"
    SERVICE_FAILED = "Service Failed"
    SERVED = "Served"
    NO_RESPONSE = "No response"
    REQUESTED_RESCHEDULING = "Requested Rescheduling"
    RESCHEDULED_COMMUNICATED = "Rescheduled and communicated"


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "y", "t")
    return bool(value)


def to_str_list(value: Any) -> List[str]:
    if value is None or value == "":
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("["):
            try:
                loaded = json.loads(text)
            except json.JSONDecodeError:
                loaded = None
            if isinstance(loaded, list):
                return [str(v) for v in loaded]
        return [part.strip() for part in text.split(",") if part.strip()]
    return [str(value)]


def _to_optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, date):
        return value.isoformat()
    text = str(value)
    return text if text.strip() else None


@dataclass(frozen=True)
class Summons:
    """A single summons issued on behalf of a case.

    Date fields hold the raw ISO strings supplied by the persistence layer;
    use ``effective_date`` and ``normalize_date`` for comparisons.

    Attributes:
        id: Stable unique identifier
        case_id: Owning case
        person_name: Person summoned
        created_at: Creation timestamp (immutable)
        issue_date: Date the summons was issued
        appearance_date: Originally scheduled appearance date
        rescheduled_date: New appearance date after a reschedule request
        is_issued / is_served / requests_reschedule / statement_ongoing /
        statement_recorded / rescheduled_date_communicated /
        followup_required: Lifecycle flags
    """

    id: str
    case_id: str = ""
    person_name: str = ""
    person_role: Optional[str] = None
    contact_number: Optional[str] = None
    email: Optional[str] = None
    officer_assigned_id: Optional[str] = None
    priority: Optional[str] = None
    tone: Optional[str] = None
    purpose: List[str] = field(default_factory=list)
    notes: Optional[str] = None
    mode_of_service: List[str] = field(default_factory=list)

    # Lifecycle flags
    is_issued: bool = False
    is_served: bool = False
    requests_reschedule: bool = False
    statement_ongoing: bool = False
    statement_recorded: bool = False
    rescheduled_date_communicated: bool = False
    followup_required: bool = False

    # Lifecycle dates (ISO strings)
    created_at: Optional[str] = None
    issue_date: Optional[str] = None
    served_date: Optional[str] = None
    appearance_date: Optional[str] = None
    appearance_time: Optional[str] = None
    rescheduled_date: Optional[str] = None
    date_of_1st_statement: Optional[str] = None
    date_of_2nd_statement: Optional[str] = None
    date_of_3rd_statement: Optional[str] = None

    statement_status: Optional[str] = None

    @property
    def status(self) -> SummonsStatus:
        """Lifecycle status derived from the flags."""
        return derive_status(self)

    @property
    def effective_date(self) -> Optional[date]:
        """Rescheduled date if present, else the scheduled appearance date."""
        return effective_date(self)

    @property
    def is_frozen(self) -> bool:
        return self.status.is_terminal

    def with_changes(self, changes: Mapping[str, Any]) -> "Summons":
        """Return a copy with ``changes`` applied (values coerced by field type)."""
        coerced = {name: coerce_field(name, value) for name, value in changes.items()}
        return replace(self, **coerced)

    @classmethod
    def field_names(cls) -> frozenset:
        return frozenset(f.name for f in fields(cls))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Summons":
        """Build a summons from a persistence row.

        Unknown keys are ignored. A stored ``status`` is not trusted; when
        it disagrees with the derived status the drift is logged.
        """
        known = cls.field_names()
        kwargs = {}
        for key, value in data.items():
            if key in known:
                kwargs[key] = coerce_field(key, value)
            elif key not in DERIVED_FIELDS:
                logger.debug("Ignoring unknown summons field %r", key)
        if "id" not in kwargs or not kwargs["id"]:
            raise ValueError("Summons record requires an id")
        kwargs["id"] = str(kwargs["id"])
        summons = cls(**kwargs)

        stored = data.get("status")
        if stored:
            derived = summons.status
            if str(stored).strip().lower() != derived.value.lower():
                logger.warning(
                    "Summons %s stored status %r disagrees with derived %r; using derived",
                    summons.id,
                    stored,
                    derived.value,
                )
        return summons

    def to_dict(self) -> dict:
        """Convert summons to dictionary for serialization."""
        data = asdict(self)
        data["status"] = self.status.value
        return data

    def __repr__(self) -> str:
        return (
            f"Summons(id={self.id}, case={self.case_id}, person={self.person_name!r}, "
            f"status={self.status.value})"
        )


def coerce_field(name: str, value: Any) -> Any:
    if name in FLAG_FIELDS:
        return _to_bool(value)
    if name in LIST_FIELDS:
        return to_str_list(value)
    if name in ("id", "case_id", "person_name"):
        return "" if value is None else str(value)
    return _to_optional_str(value)


def effective_date(record: Summons) -> Optional[date]:
    """Effective appearance date, normalized to a calendar day."""
    rescheduled = normalize_date(record.rescheduled_date)
    if rescheduled is not None:
        return rescheduled
    return normalize_date(record.appearance_date)


def derive_status(record: Summons) -> SummonsStatus:
    """Derive lifecycle status from flags.

    Ordered cascade, first match wins:
    1. statement recorded -> COMPLETED
    2. reschedule requested, no usable rescheduled date -> RESCHEDULED
    3. served -> SERVED
    4. issued -> ISSUED
    5. otherwise DRAFT
    """
    if record.statement_recorded:
        return SummonsStatus.COMPLETED
    if record.requests_reschedule and normalize_date(record.rescheduled_date) is None:
        return SummonsStatus.RESCHEDULED
    if record.is_served:
        return SummonsStatus.SERVED
    if record.is_issued:
        return SummonsStatus.ISSUED
    return SummonsStatus.DRAFT


def derive_response_label(record: Summons, today: DateLike = None) -> ResponseLabel:
    """Presentation label for cards and tables.

    Derived from the same flags as ``derive_status``; a date in the past
    with no progress marks the summons as unanswered or unserved.
    """
    if not record.is_issued:
        return ResponseLabel.DRAFT
    if record.statement_recorded or record.statement_ongoing:
        return ResponseLabel.SERVED
    if record.requests_reschedule:
        if normalize_date(record.rescheduled_date) is not None and record.rescheduled_date_communicated:
            return ResponseLabel.RESCHEDULED_COMMUNICATED
        return ResponseLabel.REQUESTED_RESCHEDULING

    day = resolve_today(today)
    effective = effective_date(record)
    overdue = effective is not None and effective < day
    if record.is_served:
        return ResponseLabel.NO_RESPONSE if overdue else ResponseLabel.SERVED
    return ResponseLabel.SERVICE_FAILED if overdue else ResponseLabel.ISSUED_BEING_SERVED
