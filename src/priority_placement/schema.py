"""Input validation for candidate batches and raw candidate rows.

Every validator returns a list of error messages (empty = valid). Entry
points aggregate them into a single ValidationError.
"""

from __future__ import annotations

from typing import Any, Sequence

from priority_placement.types import Activity, Match

ACTIVITY_FIELDS = ("name", "priority", "duration")
MATCH_NAME_FIELDS = ("team_a", "team_b", "venue")


def parse_int(value: Any) -> int | None:
    """Integer value of ``value``, or None if it is not an integer.

    Accepts ints and strings such as ``" 3"`` or ``"-1"``. Booleans, floats
    and anything else are refused.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _is_name(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def validate_activities(activities: Sequence[Activity]) -> list[str]:
    """Validate typed activities before scheduling.

    Checks:
    - Names are non-empty strings
    - Priorities are integers
    - Durations are positive integers
    - Resource names are non-empty strings
    """
    errors: list[str] = []
    for i, activity in enumerate(activities):
        where = f"Activity {i}"
        if not _is_name(activity.name):
            errors.append(f"{where}: name must be a non-empty string")
        else:
            where = f"Activity {i} ({activity.name!r})"
        if isinstance(activity.priority, bool) or not isinstance(activity.priority, int):
            errors.append(f"{where}: priority must be an integer, got {activity.priority!r}")
        if isinstance(activity.duration, bool) or not isinstance(activity.duration, int):
            errors.append(f"{where}: duration must be an integer, got {activity.duration!r}")
        elif activity.duration <= 0:
            errors.append(f"{where}: duration must be positive, got {activity.duration}")
        for resource in activity.required_resources:
            if not _is_name(resource):
                errors.append(f"{where}: invalid resource name {resource!r}")
    return errors


def validate_matches(matches: Sequence[Match], max_batch_size: int) -> list[str]:
    """Validate typed matches before scheduling.

    Checks:
    - Batch size does not exceed ``max_batch_size``
    - Teams and venue are non-empty strings
    - Broadcaster and security unit are None or non-empty strings
    - Priorities are integers
    - No match already carries a date
    - Each match object appears once
    """
    errors: list[str] = []
    if len(matches) > max_batch_size:
        errors.append(
            f"Batch of {len(matches)} matches exceeds the season bound "
            f"of {max_batch_size}"
        )

    seen: dict[int, int] = {}
    for i, match in enumerate(matches):
        where = f"Match {i}"
        if id(match) in seen:
            errors.append(f"{where}: same object as match {seen[id(match)]}")
        seen.setdefault(id(match), i)
        for name in MATCH_NAME_FIELDS:
            if not _is_name(getattr(match, name)):
                errors.append(f"{where}: {name} must be a non-empty string")
        for name in ("broadcaster", "security_unit"):
            value = getattr(match, name)
            if value is not None and not _is_name(value):
                errors.append(f"{where}: {name} must be None or a non-empty string")
        if isinstance(match.priority, bool) or not isinstance(match.priority, int):
            errors.append(f"{where}: priority must be an integer, got {match.priority!r}")
        if match.date is not None:
            errors.append(
                f"{where}: already placed on {match.date.isoformat()}"
            )
    return errors


def validate_activity_rows(rows: Any) -> list[str]:
    """Validate raw activity rows as read from JSON.

    Checks:
    - ``rows`` is a list of objects
    - Required fields are present
    - Priority and duration parse as integers, duration positive
    - ``resources`` (optional) is a list of non-empty strings
    """
    if not isinstance(rows, list):
        return [f"'activities' must be a list, got {type(rows).__name__}"]

    errors: list[str] = []
    for i, row in enumerate(rows):
        if not isinstance(row, dict):
            errors.append(f"Activity {i}: expected an object, got {row!r}")
            continue
        for name in ACTIVITY_FIELDS:
            if name not in row or row[name] in (None, ""):
                errors.append(f"Activity {i}: missing required field '{name}'")
        if "name" in row and row["name"] not in (None, "") and not _is_name(row["name"]):
            errors.append(f"Activity {i}: name must be a non-empty string")
        if row.get("priority") not in (None, "") and parse_int(row["priority"]) is None:
            errors.append(
                f"Activity {i}: invalid priority {row['priority']!r}, "
                f"expected an integer"
            )
        if row.get("duration") not in (None, ""):
            duration = parse_int(row["duration"])
            if duration is None:
                errors.append(
                    f"Activity {i}: invalid duration {row['duration']!r}, "
                    f"expected an integer"
                )
            elif duration <= 0:
                errors.append(f"Activity {i}: duration must be positive, got {duration}")
        resources = row.get("resources", [])
        if not isinstance(resources, list) or not all(_is_name(r) for r in resources):
            errors.append(f"Activity {i}: resources must be a list of names")
    return errors


def validate_match_rows(rows: Any) -> list[str]:
    """Validate raw match rows as read from JSON.

    Checks:
    - ``rows`` is a list of objects
    - Team 1, Team 2 and Venue are present and non-empty
    - Priority parses as an integer
    - Broadcaster and security unit, when given, are strings
    """
    if not isinstance(rows, list):
        return [f"'matches' must be a list, got {type(rows).__name__}"]

    errors: list[str] = []
    for i, row in enumerate(rows):
        if not isinstance(row, dict):
            errors.append(f"Match {i}: expected an object, got {row!r}")
            continue
        missing = [name for name in MATCH_NAME_FIELDS if not _is_name(row.get(name))]
        if missing:
            errors.append(
                f"Match {i}: please fill in all required fields "
                f"({', '.join(missing)})"
            )
        if row.get("priority") in (None, ""):
            errors.append(f"Match {i}: missing required field 'priority'")
        elif parse_int(row["priority"]) is None:
            errors.append(
                f"Match {i}: invalid priority {row['priority']!r}, "
                f"expected an integer"
            )
        for name in ("broadcaster", "security_unit"):
            value = row.get(name)
            if value is not None and not isinstance(value, str):
                errors.append(f"Match {i}: {name} must be a string")
    return errors
