"""Shared types: candidates, placement results and the error taxonomy."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Union


@dataclass(frozen=True)
class Activity:
    """A unit of work competing for named shared resources.

    Lower priority values are processed first by the duration scheduler.
    Duplicate resource names are dropped, keeping first-seen order.
    """

    name: str
    priority: int
    duration: int
    required_resources: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if isinstance(self.required_resources, str):
            raise TypeError(
                f"required_resources must be a sequence of names, got {self.required_resources!r}"
            )
        object.__setattr__(
            self,
            "required_resources",
            tuple(dict.fromkeys(self.required_resources)),
        )


@dataclass
class Match:
    """A paired event awaiting a calendar date.

    ``date`` is unset until the scheduler commits a placement and is
    assigned at most once.
    """

    team_a: str
    team_b: str
    venue: str
    broadcaster: str | None
    security_unit: str | None
    priority: int
    date: date | None = field(default=None, compare=False)

    @property
    def label(self) -> str:
        return f"{self.team_a} vs {self.team_b}"

    @property
    def identities(self) -> tuple[str | None, ...]:
        """All four identity slots, in key order."""
        return (self.team_a, self.team_b, self.broadcaster, self.security_unit)

    def assign(self, day: date) -> None:
        if self.date is not None:
            raise InternalInvariantViolation(
                f"match {self.label!r} already placed on {self.date.isoformat()}"
            )
        self.date = day


@dataclass(frozen=True)
class ActivityPlacement:
    """Committed [start, end) window for an activity. Integer time units."""

    activity: Activity
    start: int
    end: int

    @property
    def placed(self) -> bool:
        return True


@dataclass(frozen=True)
class DatePlacement:
    """Committed calendar date for a match."""

    match: Match
    date: date

    @property
    def placed(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    """A candidate that could not be placed. Non-fatal to the batch."""

    candidate: Union[Activity, Match]
    reason: str

    @property
    def placed(self) -> bool:
        return False


MatchResult = Union[DatePlacement, Rejected]


class ValidationError(ValueError):
    """Raised before any scheduling mutation when the input batch is malformed."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__(
            "Invalid scheduling input:\n" + "\n".join(f"  - {e}" for e in self.errors)
        )


class PlacementRejected(Exception):
    """Raised when a candidate has no feasible placement within the horizon."""

    def __init__(self, candidate: str, reason: str, days_searched: int) -> None:
        self.candidate = candidate
        self.reason = reason
        self.days_searched = days_searched
        super().__init__(
            f"Rejected: {candidate!r} could not be placed after "
            f"{days_searched} day(s) (reason: {reason})"
        )


class InternalInvariantViolation(RuntimeError):
    """A programming defect: the engine produced an inconsistent state."""
