"""Stable priority ordering of candidates."""

from __future__ import annotations

from enum import Enum
from typing import Protocol, Sequence, TypeVar


class SortDirection(str, Enum):
    """Which end of the priority scale is processed first."""

    ASCENDING = "ascending"
    DESCENDING = "descending"


class _Prioritised(Protocol):
    priority: int


C = TypeVar("C", bound=_Prioritised)


def priority_order(
    candidates: Sequence[_Prioritised],
    direction: SortDirection,
) -> list[int]:
    """Return submission indices in processing order.

    Ties keep submission order in both directions.
    """
    sign = 1 if direction is SortDirection.ASCENDING else -1
    return sorted(
        range(len(candidates)),
        key=lambda i: (sign * candidates[i].priority, i),
    )


def order_by_priority(
    candidates: Sequence[C],
    direction: SortDirection,
) -> list[C]:
    """Pure: return a new list of candidates sorted by priority.

    ASCENDING processes lower values first, DESCENDING higher values first.
    Equal priorities preserve input order.
    """
    return [candidates[i] for i in priority_order(candidates, direction)]
