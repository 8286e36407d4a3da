"""Duration scheduler: packs activities onto named resources in priority order."""

from __future__ import annotations

import logging
from typing import Sequence

from priority_placement.config import DEFAULT_DURATION_CONFIG, DurationConfig
from priority_placement.ordering import priority_order
from priority_placement.schema import validate_activities
from priority_placement.timeline import ResourceTimeline
from priority_placement.types import (
    Activity,
    ActivityPlacement,
    InternalInvariantViolation,
    ValidationError,
)

logger = logging.getLogger(__name__)


def place_activity(activity: Activity, timeline: ResourceTimeline) -> ActivityPlacement:
    """Compute start/end for one activity and commit it to the timeline.

    start = latest end time among the activity's resources (0 if none).
    """
    start = timeline.earliest_start(activity.required_resources)
    end = start + activity.duration
    if start < 0 or end < start:
        raise InternalInvariantViolation(
            f"activity {activity.name!r}: invalid window [{start}, {end})"
        )

    for resource in activity.required_resources:
        previous = timeline.end_time(resource)
        if previous is not None and end < previous:
            raise InternalInvariantViolation(
                f"activity {activity.name!r} would move {resource!r} "
                f"back from {previous} to {end}"
            )

    timeline.commit(activity.required_resources, end)
    logger.debug(
        "Placed activity %r at [%d, %d) on %s",
        activity.name, start, end,
        ", ".join(activity.required_resources) or "no resources",
    )
    return ActivityPlacement(activity=activity, start=start, end=end)


def schedule_in_order(
    activities: Sequence[Activity],
    timeline: ResourceTimeline | None = None,
) -> list[ActivityPlacement]:
    """Schedule already-ordered activities. Results follow input order.

    Every activity is placed; resources always free up eventually.

    Args:
        activities: Activities in processing order.
        timeline: Caller-owned state to continue from. A fresh one is used
            if omitted.
    """
    if timeline is None:
        timeline = ResourceTimeline()
    return [place_activity(activity, timeline) for activity in activities]


def schedule_activities(
    activities: Sequence[Activity],
    config: DurationConfig = DEFAULT_DURATION_CONFIG,
    timeline: ResourceTimeline | None = None,
) -> list[ActivityPlacement]:
    """Validate, order by priority, and schedule a batch of activities.

    Args:
        activities: Activities in submission order.
        config: Sort direction (ascending by default).
        timeline: Caller-owned state to continue from.

    Returns:
        One ActivityPlacement per activity, in submission order.

    Raises:
        ValidationError: If any activity is malformed. Nothing is committed.
    """
    errors = validate_activities(activities)
    if errors:
        raise ValidationError(errors)

    if timeline is None:
        timeline = ResourceTimeline()

    order = priority_order(activities, config.direction)
    results: list[ActivityPlacement | None] = [None] * len(activities)
    for index in order:
        results[index] = place_activity(activities[index], timeline)

    logger.info(
        "Scheduled %d activities across %d resources (makespan %d)",
        len(activities), len(timeline),
        max((r.end for r in results if r is not None), default=0),
    )
    return results  # type: ignore[return-value]
