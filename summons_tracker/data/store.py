"""Record store interface consumed by the editing service."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol

from summons_tracker.core.summons import Summons

logger = logging.getLogger(__name__)


class SummonsStore(Protocol):
    """Persistence collaborator: snapshot reads and atomic patch writes."""

    def fetch_all(self) -> List[Summons]: ...

    def fetch(self, summons_id: str) -> Optional[Summons]: ...

    def write(self, summons_id: str, patch: Mapping[str, Any]) -> bool: ...


class InMemorySummonsStore:
    """Dict-backed store used by the CLI and tests."""

    def __init__(self, records: Iterable[Summons] = ()):
        self._records: Dict[str, Summons] = {}
        for record in records:
            if record.id in self._records:
                logger.warning("Duplicate summons id %s in snapshot; keeping the last", record.id)
            self._records[record.id] = record

    def fetch_all(self) -> List[Summons]:
        return list(self._records.values())

    def fetch(self, summons_id: str) -> Optional[Summons]:
        return self._records.get(summons_id)

    def write(self, summons_id: str, patch: Mapping[str, Any]) -> bool:
        current = self._records.get(summons_id)
        if current is None:
            return False
        self._records[summons_id] = current.with_changes(patch)
        return True

    def __len__(self) -> int:
        return len(self._records)
