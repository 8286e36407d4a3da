"""ResourceTimeline: latest committed end time per named resource."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from priority_placement.types import InternalInvariantViolation


@dataclass
class ResourceTimeline:
    """Mutable per-resource state for one duration scheduling run.

    Only the maximum end time per resource is kept, not an interval list.
    Activities naming the same resource are serialised in processing
    order; activities with disjoint resource sets may overlap in time.
    """

    _end_times: dict[str, int] = field(default_factory=dict)

    def end_time(self, resource: str) -> int | None:
        """Latest committed end time, or None if the resource is unused."""
        return self._end_times.get(resource)

    def earliest_start(self, resources: Iterable[str]) -> int:
        """Read-only: earliest start for an activity holding ``resources``.

        Resources never seen before impose no wait. No resources at all
        means the activity can start at 0.
        """
        start = 0
        for resource in resources:
            if resource in self._end_times:
                start = max(start, self._end_times[resource])
        return start

    def commit(self, resources: Iterable[str], end: int) -> None:
        """Advance every named resource to at least ``end``."""
        if end < 0:
            raise InternalInvariantViolation(f"negative end time {end}")
        for resource in resources:
            previous = self._end_times.get(resource, 0)
            self._end_times[resource] = max(previous, end)

    def snapshot(self) -> dict[str, int]:
        """Copy of the resource -> end time mapping."""
        return dict(self._end_times)

    def reset(self) -> None:
        self._end_times.clear()

    def __contains__(self, resource: str) -> bool:
        return resource in self._end_times

    def __len__(self) -> int:
        return len(self._end_times)
