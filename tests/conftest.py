"""Shared test fixtures and data loading for priority-placement.

All test data lives in data/fixtures/ as JSON files.  This module loads
that data and exposes helper functions + pytest fixtures for the tests.

Reference day ("today"): Wed 2025-01-01.  With the default two-day lead
time the first candidate day is Fri 2025-01-03; Sun 2025-01-05 is the
first double-header day.
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
FIXTURES_DIR = Path(__file__).resolve().parent.parent / "data" / "fixtures"
SCENARIOS_DIR = FIXTURES_DIR / "scenarios"


# ---------------------------------------------------------------------------
# Data loaders
# ---------------------------------------------------------------------------
def _load_json(path: Path):
    with open(path) as f:
        return json.load(f)


_reference = _load_json(FIXTURES_DIR / "reference.json")


# ---------------------------------------------------------------------------
# Reference constants derived from reference.json
# ---------------------------------------------------------------------------
TODAY = date.fromisoformat(_reference["today"])
FIRST_DAY = date.fromisoformat(_reference["first_candidate_day"])

# Day lookup:  DAYS["sun"] → date(2025, 1, 5)
DAYS: dict[str, date] = {
    d["name"]: date.fromisoformat(d["date"]) for d in _reference["days"]
}


# ---------------------------------------------------------------------------
# Convenience helpers (importable by test modules)
# ---------------------------------------------------------------------------
def day(name: str) -> date:
    """Date object for a named day."""
    return DAYS[name]


def parse_day(value: str | None) -> date | None:
    """ISO string → date; None stays None (used for expected rejections)."""
    return date.fromisoformat(value) if value is not None else None


def make_match(
    team_a: str,
    team_b: str,
    priority: int = 0,
    broadcaster: str | None = None,
    security_unit: str | None = None,
    venue: str = "Stadium",
):
    """Build a Match with sensible defaults for the auxiliary identities."""
    from priority_placement.types import Match

    return Match(
        team_a=team_a,
        team_b=team_b,
        venue=venue,
        broadcaster=broadcaster,
        security_unit=security_unit,
        priority=priority,
    )


def make_activity(name: str, priority: int, duration: int, *resources: str):
    from priority_placement.types import Activity

    return Activity(
        name=name,
        priority=priority,
        duration=duration,
        required_resources=tuple(resources),
    )


def write_json(path: Path, data) -> Path:
    with open(path, "w") as f:
        json.dump(data, f)
    return path


# ---------------------------------------------------------------------------
# Scenario loader
# ---------------------------------------------------------------------------
def load_scenarios(name: str):
    """Load a scenario file from data/fixtures/scenarios/{name}.json."""
    return _load_json(SCENARIOS_DIR / f"{name}.json")


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def placed_events():
    """Empty placed-events state."""
    from priority_placement.slots import PlacedEvents

    return PlacedEvents()


@pytest.fixture
def timeline():
    """Empty resource timeline."""
    from priority_placement.timeline import ResourceTimeline

    return ResourceTimeline()
