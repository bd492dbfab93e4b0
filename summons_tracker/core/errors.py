"""Error taxonomy for the summons lifecycle engine.

ValidationError, IllegalTransitionError and FrozenRecordError are data
errors a caller is expected to branch on; they travel inside a
TransitionResult and are only raised by ``TransitionResult.unwrap()`` or by
the editability resolver. MalformedDateError never leaves the date
normalizer.
"""
from __future__ import annotations

from typing import Iterable


class SummonsError(Exception):
    """Base class for all lifecycle errors."""


class ValidationError(SummonsError):
    """A patch is missing required data or breaks a record invariant.

    Attributes:
        fields: Offending field names, sorted
        rule: Short identifier of the violated rule
    """

    def __init__(self, fields: Iterable[str], rule: str, message: str | None = None):
        self.fields = tuple(sorted(set(fields)))
        self.rule = rule
        if message is None:
            message = f"{rule}: {', '.join(self.fields)}"
        super().__init__(message)


class IllegalTransitionError(SummonsError):
    """Target status is not reachable from the current status."""

    def __init__(self, current, target):
        self.current = current
        self.target = target
        super().__init__(
            f'Cannot transition from "{_label(current)}" to "{_label(target)}". '
            "Invalid workflow path."
        )


class FrozenRecordError(SummonsError):
    """Mutation attempted on a completed summons."""

    def __init__(self, summons_id: str = "", fields: Iterable[str] = ()):
        self.summons_id = summons_id
        self.fields = tuple(sorted(set(fields)))
        target = f"Summons {summons_id}" if summons_id else "Summons"
        super().__init__(f"{target} is completed; no further modifications allowed")


class MalformedDateError(SummonsError, ValueError):
    """Raised internally when a date string cannot be parsed."""


class UnknownViewError(SummonsError, ValueError):
    """View name does not match any canonical view or alias."""

    def __init__(self, view: str):
        self.view = view
        super().__init__(f"Unknown view: {view!r}")


def _label(status) -> str:
    return getattr(status, "value", str(status))
