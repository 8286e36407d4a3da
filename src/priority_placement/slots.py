"""Calendar slot finder: assigns dates to matches under capacity and gap rules.

Provides probe_date (read-only day search), find_date (search + commit) and
schedule_matches (validated, priority-ordered batch run).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterator, Sequence

from priority_placement.config import DEFAULT_CALENDAR_CONFIG, CalendarConfig
from priority_placement.gaps import GapConstraintSet
from priority_placement.ordering import priority_order
from priority_placement.schema import validate_matches
from priority_placement.types import (
    DatePlacement,
    InternalInvariantViolation,
    Match,
    MatchResult,
    PlacementRejected,
    Rejected,
    ValidationError,
)

logger = logging.getLogger(__name__)

NO_FEASIBLE_DATE = "no feasible date within horizon"


@dataclass
class PlacedEvents:
    """Caller-owned, insertion-ordered list of matches that hold a date.

    Dates are never revised once a match is added.
    """

    _events: list[Match] = field(default_factory=list)

    def add(self, match: Match) -> None:
        if match.date is None:
            raise InternalInvariantViolation(
                f"cannot record undated match {match.label!r} as placed"
            )
        if any(event is match for event in self._events):
            raise InternalInvariantViolation(f"match {match.label!r} placed twice")
        self._events.append(match)

    def occupancy(self, day: date) -> int:
        """Number of placed events on ``day``."""
        return sum(1 for event in self._events if event.date == day)

    def on(self, day: date) -> list[Match]:
        return [event for event in self._events if event.date == day]

    def reset(self) -> None:
        self._events.clear()

    def __iter__(self) -> Iterator[Match]:
        return iter(self._events)

    def __len__(self) -> int:
        return len(self._events)


def _candidate_days(start: date, horizon_days: int) -> Iterator[date]:
    for offset in range(horizon_days):
        yield start + timedelta(days=offset)


def probe_date(
    match: Match,
    placed: PlacedEvents,
    config: CalendarConfig = DEFAULT_CALENDAR_CONFIG,
    today: date | None = None,
) -> date:
    """Read-only: find the earliest feasible day. Does NOT mutate anything.

    Walks ``horizon_days`` days starting ``lead_days`` after ``today``. A day
    qualifies when its occupancy is under the capacity limit for its weekday
    and every gap constraint holds.

    Raises:
        PlacementRejected: If no day in the horizon qualifies.
    """
    if today is None:
        today = date.today()
    start = today + timedelta(days=config.lead_days)
    gaps = GapConstraintSet.for_match(match, placed)

    for day in _candidate_days(start, config.horizon_days):
        limit = config.capacity.limit_for(day.weekday())
        if placed.occupancy(day) >= limit:
            continue
        if gaps.allows(day, config.min_gap_days):
            return day

    raise PlacementRejected(
        candidate=match.label,
        reason=NO_FEASIBLE_DATE,
        days_searched=config.horizon_days,
    )


def find_date(
    match: Match,
    placed: PlacedEvents,
    config: CalendarConfig = DEFAULT_CALENDAR_CONFIG,
    today: date | None = None,
) -> date:
    """Probe + commit. Sets the match date and appends it to ``placed``.

    Raises:
        PlacementRejected: If no day qualifies. ``placed`` is left unchanged.
    """
    day = probe_date(match, placed, config, today)
    match.assign(day)
    placed.add(match)
    logger.debug("Placed match %s on %s", match.label, day.isoformat())
    return day


def schedule_matches(
    matches: Sequence[Match],
    config: CalendarConfig = DEFAULT_CALENDAR_CONFIG,
    today: date | None = None,
    placed: PlacedEvents | None = None,
) -> list[MatchResult]:
    """Validate, order by priority, and date a batch of matches.

    Rejections are recorded per match and the batch continues; a rejected
    match never constrains later ones.

    Args:
        matches: Matches in submission order.
        config: Horizon, lead time, gap, capacity and sort direction.
        today: Reference day; defaults to ``date.today()``.
        placed: Caller-owned placed-events state to continue from.

    Returns:
        One DatePlacement or Rejected per match, in submission order.

    Raises:
        ValidationError: If any match is malformed or the batch exceeds
            ``max_batch_size``. Nothing is placed.
    """
    errors = validate_matches(matches, config.max_batch_size)
    if errors:
        raise ValidationError(errors)

    if today is None:
        today = date.today()
    if placed is None:
        placed = PlacedEvents()

    results: list[MatchResult | None] = [None] * len(matches)
    for index in priority_order(matches, config.direction):
        match = matches[index]
        try:
            day = find_date(match, placed, config, today)
        except PlacementRejected as e:
            logger.warning("Failed to schedule match: %s (%s)", match.label, e.reason)
            results[index] = Rejected(candidate=match, reason=e.reason)
            continue
        results[index] = DatePlacement(match=match, date=day)

    rejected = sum(1 for r in results if isinstance(r, Rejected))
    logger.info(
        "Scheduled %d of %d matches (%d rejected)",
        len(matches) - rejected, len(matches), rejected,
    )
    return results  # type: ignore[return-value]
