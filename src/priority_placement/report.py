"""Plain-text rendering of scheduling results.

The show_* helpers return the rendered string and also print it to stdout.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Sequence

from priority_placement.config import DEFAULT_CAPACITY, CapacityRule
from priority_placement.types import (
    ActivityPlacement,
    DatePlacement,
    MatchResult,
    Rejected,
)

DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def format_activity_line(placement: ActivityPlacement) -> str:
    activity = placement.activity
    return (
        f"Activity: {activity.name}, Start: {placement.start}, "
        f"End: {placement.end}, Priority: {activity.priority}, "
        f"Resources: {', '.join(activity.required_resources)}"
    )


def format_match_line(result: MatchResult) -> str:
    """One display row per match: date as dd-Mon-yyyy, or the rejection."""
    match = result.match if isinstance(result, DatePlacement) else result.candidate
    line = (
        f"Priority: {match.priority}, {match.team_a} vs {match.team_b} "
        f"at {match.venue}, Broadcasting Team: {match.broadcaster or '-'}, "
        f"Security Team: {match.security_unit or '-'}, "
    )
    if isinstance(result, Rejected):
        return line + f"NOT SCHEDULED ({result.reason})"
    return line + result.date.strftime("%d-%b-%Y")


def show_resource_timeline(
    placements: Sequence[ActivityPlacement],
    units_per_char: int = 1,
) -> str:
    """Print an ASCII Gantt view, one row per resource.

    Legend: '.' = idle, 'A'-'Z' = held by an activity. Activities without
    resources are listed on a separate '(none)' row.
    """
    lines: list[str] = []
    label_chars = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

    labels: dict[str, str] = {}
    for p in placements:
        if p.activity.name not in labels:
            labels[p.activity.name] = label_chars[len(labels) % len(label_chars)]

    makespan = max((p.end for p in placements), default=0)
    width = -(-makespan // units_per_char)

    rows: dict[str, list[str]] = {}
    for p in placements:
        keys = p.activity.required_resources or ("(none)",)
        for key in keys:
            row = rows.setdefault(key, list("." * width))
            for c in range(p.start // units_per_char, -(-p.end // units_per_char)):
                row[c] = labels[p.activity.name]

    name_width = max((len(k) for k in rows), default=1)
    header = "".join(
        str((c * units_per_char) // 10 % 10) if (c * units_per_char) % 10 == 0 else " "
        for c in range(width)
    )
    lines.append(f"{'':>{name_width}s}  {header}")
    for key in sorted(rows, key=lambda k: (k == "(none)", k)):
        lines.append(f"{key:>{name_width}s}  {''.join(rows[key])}")

    if labels:
        legend = ", ".join(f"{v}={k}" for k, v in labels.items())
        lines.append(f"\nLegend: . = idle, {legend}")

    result = "\n".join(lines)
    print(result)
    return result


def show_calendar(
    results: Sequence[MatchResult],
    start: date,
    end: date,
    capacity: CapacityRule = DEFAULT_CAPACITY,
) -> str:
    """Print one row per day in [start, end) with occupancy and matches.

    Each row shows ``occupied/limit`` followed by the matches on that day.
    """
    lines: list[str] = []
    by_day: dict[date, list[str]] = {}
    for r in results:
        if isinstance(r, DatePlacement):
            by_day.setdefault(r.date, []).append(r.match.label)

    current = start
    while current < end:
        label = f"{DAY_NAMES[current.weekday()]} {current.strftime('%d %b')}"
        day_matches = by_day.get(current, [])
        limit = capacity.limit_for(current.weekday())
        lines.append(f"{label:>10s}  {len(day_matches)}/{limit}  {'; '.join(day_matches)}".rstrip())
        current += timedelta(days=1)

    rejected = [r for r in results if isinstance(r, Rejected)]
    if rejected:
        lines.append("")
        lines.append("Not scheduled:")
        for r in rejected:
            lines.append(f"  {r.candidate.label} ({r.reason})")

    result = "\n".join(lines)
    print(result)
    return result
