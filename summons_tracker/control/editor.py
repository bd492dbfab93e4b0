"""Read-validate-write editing of summons against a store."""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping, Optional

from summons_tracker.control.activity import diff_changes
from summons_tracker.core.dates import Clock, SystemClock
from summons_tracker.core.errors import SummonsError
from summons_tracker.core.lifecycle import TransitionResult, validate_transition
from summons_tracker.core.summons import Summons, SummonsStatus
from summons_tracker.data.store import SummonsStore

logger = logging.getLogger(__name__)


class StoreWriteError(SummonsError):
    """The store rejected a validated patch (conflict or backend failure)."""


class SummonsEditor:
    """Apply patches to stored summons, re-validating on every write.

    The editor always validates against the latest record fetched from the
    store, so a stale form cannot push a locked or frozen field through.
    Retrying after a failed write is left to the caller.
    """

    def __init__(self, store: SummonsStore, clock: Optional[Clock] = None):
        self.store = store
        self.clock = clock or SystemClock()

    def apply_patch(
        self,
        summons_id: str,
        patch: Mapping[str, Any],
        target: SummonsStatus | str | None = None,
    ) -> TransitionResult:
        """Validate ``patch`` against the stored summons and persist it.

        The returned result carries the activity entries of a successful
        write in ``activity``.

        Raises:
            KeyError: no summons with ``summons_id`` in the store
        """
        current = self.store.fetch(summons_id)
        if current is None:
            raise KeyError(f"Summons not found: {summons_id}")

        result = validate_transition(current, patch, target)
        if not result.ok:
            logger.info("Rejected patch on summons %s: %s", summons_id, result.error)
            return result
        if not result.changes:
            return result

        if not self.store.write(summons_id, dict(result.changes)):
            logger.warning("Store write failed for summons %s", summons_id)
            return TransitionResult(
                original=current,
                error=StoreWriteError(f"Store rejected write for summons {summons_id}"),
            )

        activity = tuple(diff_changes(current, result.record))
        for entry in activity:
            logger.info("summons %s: %s", summons_id, entry.description)
        if result.status_changed:
            logger.info(
                "Summons %s moved %s -> %s on %s",
                summons_id,
                result.from_status.value,
                result.to_status.value,
                self.clock.today().isoformat(),
            )
        return replace(result, activity=activity)
