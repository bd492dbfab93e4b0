"""Date normalization for lifecycle rules.

Every rule in the engine compares calendar days, never instants. Values
arrive as ISO strings from the persistence layer (date-only, naive
datetimes, or offset-aware datetimes with a trailing ``Z``) and are reduced
to a ``date`` in the reference timezone. Anything that cannot be parsed is
treated as absent.
"""
from __future__ import annotations

import logging
from datetime import date, datetime, timezone, tzinfo
from typing import Callable, Optional, Protocol, Union

from summons_tracker.core.errors import MalformedDateError

logger = logging.getLogger(__name__)

DateLike = Union[str, date, datetime, None]

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Clock(Protocol):
    """Source of the current calendar day."""

    def today(self) -> date: ...


class SystemClock:
    """Clock backed by the wall clock of the running process."""

    def today(self) -> date:
        return date.today()


class FixedClock:
    """Clock pinned to a single day (tests, replays, CLI ``--today``)."""

    def __init__(self, day: date):
        self._day = day

    def today(self) -> date:
        return self._day

    def __repr__(self) -> str:
        return f"FixedClock({self._day.isoformat()})"


def _parse(value: str) -> datetime | date:
    text = value.strip()
    if not text:
        raise MalformedDateError("empty date string")
    # Date-only strings are calendar days already; do not route through UTC.
    if len(text) == 10:
        try:
            return date.fromisoformat(text)
        except ValueError as e:
            raise MalformedDateError(str(e)) from e
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise MalformedDateError(str(e)) from e


def _convert(value: datetime, tz: Optional[tzinfo]) -> Optional[datetime]:
    """astimezone(), or None when the shifted value leaves the datetime range."""
    try:
        return value.astimezone(tz)
    except (OverflowError, OSError, ValueError) as e:
        logger.debug("Treating out-of-range date %r as absent (%s)", value, e)
        return None


def normalize_date(value: DateLike, tz: Optional[tzinfo] = None) -> Optional[date]:
    """Reduce a nullable ISO date/time value to a calendar day.

    Args:
        value: ISO string, date, datetime or None
        tz: Reference timezone for offset-aware values (defaults to the
            local timezone of the process). Naive values are taken as
            already being in the reference timezone.

    Returns:
        The calendar day, or None when the value is absent or unparseable
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed: datetime | date = value
    elif isinstance(value, date):
        return value
    elif isinstance(value, str):
        try:
            parsed = _parse(value)
        except MalformedDateError as e:
            logger.debug("Treating malformed date %r as absent (%s)", value, e)
            return None
    else:
        logger.debug("Treating non-date value %r as absent", value)
        return None

    if isinstance(parsed, datetime):
        if parsed.tzinfo is not None:
            parsed = _convert(parsed, tz)
            if parsed is None:
                return None
        return parsed.date()
    return parsed


def parse_timestamp(value: DateLike, tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """Parse a value into an aware datetime for ordering.

    Date-only values map to midnight. Naive values are placed in the
    reference timezone. Unparseable values return None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed: datetime | date = value
    elif isinstance(value, date):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = _parse(value)
        except MalformedDateError:
            return None
    else:
        return None

    if not isinstance(parsed, datetime):
        parsed = datetime(parsed.year, parsed.month, parsed.day)
    if parsed.tzinfo is None:
        if tz is not None:
            return parsed.replace(tzinfo=tz)
        # astimezone() on a naive value interprets it as local time
        return _convert(parsed, None)
    return parsed


def days_between(start: date, end: date) -> int:
    """Whole calendar days from start to end (negative if end is earlier)."""
    return (end - start).days


def resolve_today(today: DateLike = None, clock: Clock | Callable[[], date] | None = None) -> date:
    """Pick the reference day: explicit value, then clock, then wall clock."""
    if today is not None:
        resolved = normalize_date(today)
        if resolved is None:
            raise ValueError(f"Invalid reference day: {today!r}")
        return resolved
    if clock is not None:
        return clock.today() if hasattr(clock, "today") else clock()
    return SystemClock().today()
