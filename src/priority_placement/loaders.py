"""Data loading utilities for candidate batches and calendar configuration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from priority_placement.config import CalendarConfig
from priority_placement.schema import (
    parse_int,
    validate_activity_rows,
    validate_match_rows,
)
from priority_placement.types import Activity, Match, ValidationError


def _read_json(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        try:
            return json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ValidationError([f"{path.name}: invalid JSON ({e})"]) from e


def _optional_name(value: str | None) -> str | None:
    if value is None or value.strip() == "":
        return None
    return value.strip()


def activities_from_rows(rows: list[dict]) -> list[Activity]:
    """Build activities from raw rows. Raises ValidationError."""
    errors = validate_activity_rows(rows)
    if errors:
        raise ValidationError(errors)
    return [
        Activity(
            name=row["name"].strip(),
            priority=parse_int(row["priority"]),  # type: ignore[arg-type]
            duration=parse_int(row["duration"]),  # type: ignore[arg-type]
            required_resources=tuple(r.strip() for r in row.get("resources", [])),
        )
        for row in rows
    ]


def matches_from_rows(rows: list[dict]) -> list[Match]:
    """Build matches from raw rows. Raises ValidationError.

    Blank broadcaster or security unit entries become None.
    """
    errors = validate_match_rows(rows)
    if errors:
        raise ValidationError(errors)
    return [
        Match(
            team_a=row["team_a"].strip(),
            team_b=row["team_b"].strip(),
            venue=row["venue"].strip(),
            broadcaster=_optional_name(row.get("broadcaster")),
            security_unit=_optional_name(row.get("security_unit")),
            priority=parse_int(row["priority"]),  # type: ignore[arg-type]
        )
        for row in rows
    ]


def load_activities_json(path: str | Path) -> list[Activity]:
    """Load activities from a JSON file.

    The JSON file must have the format:
    {
        "activities": [
            {"name": "...", "priority": 1, "duration": 3, "resources": ["r1"]},
            ...
        ]
    }

    Raises ValidationError listing every malformed row.
    """
    path = Path(path)
    data = _read_json(path)
    if not isinstance(data, dict) or "activities" not in data:
        raise ValidationError([f"{path.name}: missing 'activities' list"])
    try:
        return activities_from_rows(data["activities"])
    except ValidationError as e:
        raise ValidationError([f"{path.name}: {msg}" for msg in e.errors]) from e


def load_matches_json(path: str | Path) -> tuple[list[Match], CalendarConfig]:
    """Load matches and an optional calendar config from a JSON file.

    The JSON file must have the format:
    {
        "matches": [
            {"team_a": "...", "team_b": "...", "venue": "...",
             "broadcaster": "...", "security_unit": "...", "priority": 5},
            ...
        ],
        "config": { "horizon_days": 30, "capacity": {...}, ... }
    }

    ``config`` is optional; missing keys keep their defaults.
    Raises ValidationError listing every problem found.
    """
    path = Path(path)
    data = _read_json(path)
    if not isinstance(data, dict) or "matches" not in data:
        raise ValidationError([f"{path.name}: missing 'matches' list"])

    errors: list[str] = []
    matches: list[Match] = []
    try:
        matches = matches_from_rows(data["matches"])
    except ValidationError as e:
        errors.extend(f"{path.name}: {msg}" for msg in e.errors)

    config = CalendarConfig()
    raw_config = data.get("config", {})
    try:
        if not isinstance(raw_config, dict):
            raise ValueError("'config' must be an object")
        config = CalendarConfig.from_dict(raw_config)
    except (TypeError, ValueError) as e:
        errors.append(f"{path.name}: invalid config ({e})")

    if errors:
        raise ValidationError(errors)
    return matches, config
