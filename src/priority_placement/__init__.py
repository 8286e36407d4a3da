"""priority-placement: Greedy, priority-ordered constrained placement."""

from priority_placement.config import (
    DEFAULT_CALENDAR_CONFIG,
    DEFAULT_CAPACITY,
    DEFAULT_DURATION_CONFIG,
    SEASON_MATCHES,
    CalendarConfig,
    CapacityRule,
    DurationConfig,
)
from priority_placement.duration import (
    place_activity,
    schedule_activities,
    schedule_in_order,
)
from priority_placement.gaps import GapConstraintSet, IdentityKey, last_date_for
from priority_placement.ordering import SortDirection, order_by_priority, priority_order
from priority_placement.slots import (
    NO_FEASIBLE_DATE,
    PlacedEvents,
    find_date,
    probe_date,
    schedule_matches,
)
from priority_placement.timeline import ResourceTimeline
from priority_placement.types import (
    Activity,
    ActivityPlacement,
    DatePlacement,
    InternalInvariantViolation,
    Match,
    PlacementRejected,
    Rejected,
    ValidationError,
)

__all__ = [
    "Activity",
    "ActivityPlacement",
    "CalendarConfig",
    "CapacityRule",
    "DEFAULT_CALENDAR_CONFIG",
    "DEFAULT_CAPACITY",
    "DEFAULT_DURATION_CONFIG",
    "DatePlacement",
    "DurationConfig",
    "GapConstraintSet",
    "IdentityKey",
    "InternalInvariantViolation",
    "Match",
    "NO_FEASIBLE_DATE",
    "PlacedEvents",
    "PlacementRejected",
    "Rejected",
    "ResourceTimeline",
    "SEASON_MATCHES",
    "SortDirection",
    "ValidationError",
    "find_date",
    "last_date_for",
    "order_by_priority",
    "place_activity",
    "priority_order",
    "probe_date",
    "schedule_activities",
    "schedule_in_order",
    "schedule_matches",
]
