"""Pytest configuration and shared fixtures for summons tracker tests.

Provides common fixtures for:
- A fixed reference day and clock
- Summons at every lifecycle stage
- A mixed snapshot covering every worklist
- Snapshot files on disk
"""

import json
from datetime import date
from pathlib import Path
from typing import List

import pytest

from summons_tracker.core.dates import FixedClock
from summons_tracker.core.summons import Summons

TODAY = date(2026, 1, 30)


# Test markers
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line(
        "markers", "integration: Integration tests for multi-component workflows"
    )
    config.addinivalue_line(
        "markers", "edge_case: Edge case and boundary condition tests"
    )
    config.addinivalue_line("markers", "failure: Failure scenario tests")


@pytest.fixture
def today() -> date:
    """Reference day used across worklist tests."""
    return TODAY


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(TODAY)


@pytest.fixture
def draft_summons() -> Summons:
    """Create a summons that has not been issued.

    Returns:
        Summons in DRAFT status
    """
    return Summons(
        id="S-DRAFT",
        case_id="CASE-1",
        person_name="Asha Rao",
        person_role="Witness",
        created_at="2026-01-05T09:00:00",
    )


@pytest.fixture
def issued_summons() -> Summons:
    """Create a summons that is issued but not served.

    Returns:
        Summons in ISSUED status with an appearance date
    """
    return Summons(
        id="S-ISSUED",
        case_id="CASE-1",
        person_name="Vikram Shah",
        is_issued=True,
        issue_date="2026-01-10",
        appearance_date="2026-02-04",
        created_at="2026-01-08T10:00:00",
    )


@pytest.fixture
def served_summons() -> Summons:
    """Create a served summons whose appearance date has passed.

    Returns:
        Summons in SERVED status, appearance 2026-01-24
    """
    return Summons(
        id="S-SERVED",
        case_id="CASE-2",
        person_name="Meera Iyer",
        is_issued=True,
        is_served=True,
        issue_date="2026-01-02",
        appearance_date="2026-01-24",
        created_at="2026-01-01T08:00:00",
    )


@pytest.fixture
def reschedule_summons() -> Summons:
    """Create a served summons with a pending reschedule request.

    Returns:
        Summons in RESCHEDULED status (no new date yet)
    """
    return Summons(
        id="S-RESCHED",
        case_id="CASE-2",
        person_name="Karan Mehta",
        is_issued=True,
        is_served=True,
        requests_reschedule=True,
        issue_date="2026-01-03",
        appearance_date="2026-01-20",
        created_at="2026-01-02T08:00:00",
    )


@pytest.fixture
def completed_summons() -> Summons:
    """Create a summons whose final statement is recorded.

    Returns:
        Summons in COMPLETED status
    """
    return Summons(
        id="S-DONE",
        case_id="CASE-3",
        person_name="Nisha Gupta",
        is_issued=True,
        is_served=True,
        statement_recorded=True,
        issue_date="2025-12-01",
        appearance_date="2025-12-15",
        date_of_1st_statement="2025-12-15",
        created_at="2025-11-30T08:00:00",
    )


@pytest.fixture
def snapshot(
    draft_summons, issued_summons, served_summons, reschedule_summons, completed_summons
) -> List[Summons]:
    """Mixed snapshot with one summons per lifecycle stage plus two extras."""
    ongoing = Summons(
        id="S-ONGOING",
        case_id="CASE-3",
        person_name="Rahul Verma",
        is_issued=True,
        is_served=True,
        statement_ongoing=True,
        issue_date="2026-01-12",
        appearance_date="2026-01-28",
        created_at="2026-01-11T08:00:00",
    )
    upcoming = Summons(
        id="S-UPCOMING",
        case_id="CASE-1",
        person_name="Priya Nair",
        is_issued=True,
        is_served=True,
        requests_reschedule=True,
        rescheduled_date="2026-02-05",
        rescheduled_date_communicated=True,
        issue_date="2026-01-15",
        appearance_date="2026-01-29",
        created_at="2026-01-14T08:00:00",
    )
    return [
        draft_summons,
        issued_summons,
        served_summons,
        reschedule_summons,
        completed_summons,
        ongoing,
        upcoming,
    ]


@pytest.fixture
def snapshot_json(tmp_path: Path, snapshot) -> Path:
    """Write the mixed snapshot, plus cases, to a JSON file."""
    path = tmp_path / "summons.json"
    payload = {
        "summons": [record.to_dict() for record in snapshot],
        "cases": [
            {"id": "CASE-1", "name": "ECIR/01/2025", "status": "Doing"},
            {"id": "CASE-2", "name": "ECIR/02/2025", "status": "To Do"},
            {"id": "CASE-3", "name": "ECIR/03/2025", "status": "Done"},
        ],
    }
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture
def make_summons():
    """Factory for summons with defaults for fields not under test."""

    def _make(summons_id: str = "S-X", **kwargs) -> Summons:
        kwargs.setdefault("case_id", "CASE-X")
        kwargs.setdefault("person_name", "Test Person")
        return Summons(id=summons_id, **kwargs)

    return _make
