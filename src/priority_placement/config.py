"""Scheduling parameters. Immutable, passed explicitly to every run."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any

from priority_placement.ordering import SortDirection

SUNDAY = 6

# Length of one league season; larger calendar batches are refused outright.
SEASON_MATCHES = 74


def _require_int(owner: object, name: str) -> int:
    value = getattr(owner, name)
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {value!r}")
    return value


@dataclass(frozen=True)
class CapacityRule:
    """How many events a calendar day may hold.

    Every day allows ``normal_limit`` events except ``designated_weekday``
    (``date.weekday()`` numbering, Monday=0), which allows ``designated_limit``.
    """

    normal_limit: int = 1
    designated_limit: int = 2
    designated_weekday: int = SUNDAY

    def __post_init__(self) -> None:
        for name in ("normal_limit", "designated_limit", "designated_weekday"):
            _require_int(self, name)
        if self.normal_limit < 0 or self.designated_limit < 0:
            raise ValueError(
                f"capacity limits must be >= 0, got normal={self.normal_limit}, "
                f"designated={self.designated_limit}"
            )
        if not 0 <= self.designated_weekday <= 6:
            raise ValueError(
                f"designated_weekday must be 0-6, got {self.designated_weekday}"
            )

    def limit_for(self, weekday: int) -> int:
        if weekday == self.designated_weekday:
            return max(self.normal_limit, self.designated_limit)
        return self.normal_limit


@dataclass(frozen=True)
class DurationConfig:
    """Parameters for the duration (resource timeline) scheduler."""

    direction: SortDirection = SortDirection.ASCENDING


@dataclass(frozen=True)
class CalendarConfig:
    """Parameters for the calendar slot scheduler."""

    direction: SortDirection = SortDirection.DESCENDING
    lead_days: int = 2
    horizon_days: int = 30
    min_gap_days: int = 2
    capacity: CapacityRule = field(default_factory=CapacityRule)
    max_batch_size: int = SEASON_MATCHES

    def __post_init__(self) -> None:
        for name in ("lead_days", "horizon_days", "min_gap_days", "max_batch_size"):
            _require_int(self, name)
        for name in ("lead_days", "horizon_days", "min_gap_days"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be >= 0, got {value}")
        if self.max_batch_size < 1:
            raise ValueError(
                f"max_batch_size must be >= 1, got {self.max_batch_size}"
            )
        if not isinstance(self.capacity, CapacityRule):
            raise TypeError(
                f"capacity must be a CapacityRule, got {self.capacity!r}"
            )
        if not isinstance(self.direction, SortDirection):
            raise TypeError(
                f"direction must be a SortDirection, got {self.direction!r}"
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CalendarConfig:
        """Build from a partial mapping; missing keys keep their defaults.

        ``capacity`` may be a nested mapping of CapacityRule fields and
        ``direction`` one of ``"ascending"`` / ``"descending"``.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown calendar config keys: {', '.join(unknown)}")

        kwargs = dict(data)
        if "direction" in kwargs:
            kwargs["direction"] = SortDirection(kwargs["direction"])
        if "capacity" in kwargs:
            capacity = kwargs["capacity"]
            if isinstance(capacity, dict):
                kwargs["capacity"] = CapacityRule(**capacity)
            elif not isinstance(capacity, CapacityRule):
                raise ValueError(
                    f"capacity must be an object of capacity rules, got {capacity!r}"
                )
        return cls(**kwargs)


DEFAULT_CAPACITY = CapacityRule()
DEFAULT_DURATION_CONFIG = DurationConfig()
DEFAULT_CALENDAR_CONFIG = CalendarConfig()
