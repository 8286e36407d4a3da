"""GapConstraintSet: minimum separation between events sharing an identity."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable

from priority_placement.types import Match


class IdentityKey(str, Enum):
    """The four identity slots of a match, in check order."""

    TEAM_A = "team_a"
    TEAM_B = "team_b"
    BROADCASTER = "broadcaster"
    SECURITY_UNIT = "security_unit"


def last_date_for(identity: str | None, placed: Iterable[Match]) -> date | None:
    """Most recent date among placed matches naming ``identity`` in any slot.

    A team counts whether it appeared as team A or team B. Returns None
    when the identity has never been placed, or is itself None.
    """
    if identity is None:
        return None
    latest: date | None = None
    for event in placed:
        if event.date is None:
            continue
        if identity in event.identities:
            if latest is None or event.date > latest:
                latest = event.date
    return latest


@dataclass(frozen=True)
class GapConstraintSet:
    """Last active date per identity key for one candidate match."""

    last_dates: dict[IdentityKey, date | None]

    @classmethod
    def for_match(cls, match: Match, placed: Iterable[Match]) -> GapConstraintSet:
        placed = list(placed)
        return cls(
            last_dates={
                key: last_date_for(getattr(match, key.value), placed)
                for key in IdentityKey
            }
        )

    def violations(self, day: date, min_gap_days: int) -> list[IdentityKey]:
        """Keys whose last placement is fewer than ``min_gap_days`` before ``day``.

        A day earlier than the last placement is always a violation.
        """
        return [
            key
            for key, last in self.last_dates.items()
            if last is not None and (day - last).days < min_gap_days
        ]

    def allows(self, day: date, min_gap_days: int) -> bool:
        return not self.violations(day, min_gap_days)
