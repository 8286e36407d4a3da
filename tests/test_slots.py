"""Tests for the calendar slot finder and batch match scheduling.

Test data loaded from: data/fixtures/scenarios/matches.json
"""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from conftest import FIRST_DAY, TODAY, day, load_scenarios, make_match, parse_day

_data = load_scenarios("matches")
SCENARIOS = _data["schedule"]


def _config(spec: dict):
    from priority_placement.config import CalendarConfig

    return CalendarConfig.from_dict(spec.get("config", {}))


# ---------------------------------------------------------------------------
# PlacedEvents
# ---------------------------------------------------------------------------
class TestPlacedEvents:

    def test_occupancy(self, placed_events):
        for name in ("fri", "sun", "sun"):
            m = make_match(f"T{len(placed_events)}", "opp")
            m.assign(day(name))
            placed_events.add(m)
        assert placed_events.occupancy(day("fri")) == 1
        assert placed_events.occupancy(day("sun")) == 2
        assert placed_events.occupancy(day("sat")) == 0
        assert len(placed_events.on(day("sun"))) == 2

    def test_undated_match_refused(self, placed_events):
        from priority_placement.types import InternalInvariantViolation

        with pytest.raises(InternalInvariantViolation):
            placed_events.add(make_match("A", "B"))

    def test_same_match_twice_refused(self, placed_events):
        from priority_placement.types import InternalInvariantViolation

        m = make_match("A", "B")
        m.assign(day("fri"))
        placed_events.add(m)
        with pytest.raises(InternalInvariantViolation):
            placed_events.add(m)

    def test_iterates_in_insertion_order(self, placed_events):
        matches = []
        for name in ("sun", "fri", "sat"):
            m = make_match(name, "opp")
            m.assign(day(name))
            placed_events.add(m)
            matches.append(m)
        assert list(placed_events) == matches

    def test_reset(self, placed_events):
        m = make_match("A", "B")
        m.assign(day("fri"))
        placed_events.add(m)
        placed_events.reset()
        assert len(placed_events) == 0


# ---------------------------------------------------------------------------
# probe_date / find_date
# ---------------------------------------------------------------------------
class TestFindDate:

    def test_first_candidate_day_is_lead_time_after_today(self, placed_events):
        from priority_placement.slots import find_date

        assert find_date(make_match("A", "B"), placed_events, today=TODAY) == FIRST_DAY

    def test_commit_sets_date_and_appends(self, placed_events):
        from priority_placement.slots import find_date

        match = make_match("A", "B")
        result = find_date(match, placed_events, today=TODAY)
        assert match.date == result
        assert list(placed_events) == [match]

    def test_probe_does_not_mutate(self, placed_events):
        from priority_placement.slots import probe_date

        match = make_match("A", "B")
        assert probe_date(match, placed_events, today=TODAY) == FIRST_DAY
        assert match.date is None
        assert len(placed_events) == 0

    def test_rejection_leaves_state_unchanged(self, placed_events):
        from priority_placement.config import CalendarConfig
        from priority_placement.slots import NO_FEASIBLE_DATE, find_date
        from priority_placement.types import PlacementRejected

        config = CalendarConfig(horizon_days=1)
        first = make_match("X", "Y")
        find_date(first, placed_events, config, today=TODAY)

        second = make_match("X", "Z")
        with pytest.raises(PlacementRejected) as exc_info:
            find_date(second, placed_events, config, today=TODAY)

        assert exc_info.value.reason == NO_FEASIBLE_DATE
        assert exc_info.value.days_searched == 1
        assert second.date is None
        assert list(placed_events) == [first]

    def test_zero_horizon_always_rejects(self, placed_events):
        from priority_placement.config import CalendarConfig
        from priority_placement.slots import find_date
        from priority_placement.types import PlacementRejected

        with pytest.raises(PlacementRejected):
            find_date(make_match("A", "B"), placed_events, CalendarConfig(horizon_days=0), today=TODAY)

    def test_custom_designated_weekday(self, placed_events):
        """Saturday as the double-header day instead of Sunday."""
        from priority_placement.config import CalendarConfig, CapacityRule
        from priority_placement.slots import find_date

        config = CalendarConfig(capacity=CapacityRule(designated_weekday=5), lead_days=3)
        dates = [
            find_date(make_match(f"T{i}", f"U{i}"), placed_events, config, today=TODAY)
            for i in range(3)
        ]
        assert dates == [day("sat"), day("sat"), day("sun")]

    def test_defaults_to_today(self, placed_events):
        from priority_placement.slots import probe_date

        result = probe_date(make_match("A", "B"), placed_events)
        assert result == date.today() + timedelta(days=2)


# ---------------------------------------------------------------------------
# schedule_matches
# ---------------------------------------------------------------------------
class TestScheduleMatches:

    @pytest.mark.parametrize("spec", SCENARIOS, ids=lambda s: s["id"])
    def test_scenario(self, spec):
        from priority_placement.loaders import matches_from_rows
        from priority_placement.slots import schedule_matches
        from priority_placement.types import DatePlacement, Rejected

        matches = matches_from_rows(spec["matches"])
        results = schedule_matches(
            matches, _config(spec), today=date.fromisoformat(spec["today"]),
        )

        expected = [parse_day(d) for d in spec["expected_dates"]]
        actual = [r.date if isinstance(r, DatePlacement) else None for r in results]
        assert actual == expected

        for match, result in zip(matches, results):
            if isinstance(result, Rejected):
                assert result.candidate is match
                assert match.date is None
            else:
                assert result.match is match
                assert match.date == result.date

    def test_rejection_does_not_stop_batch(self):
        from priority_placement.config import CalendarConfig
        from priority_placement.slots import PlacedEvents, schedule_matches

        placed = PlacedEvents()
        matches = [make_match("X", "Y", 3), make_match("X", "Z", 2), make_match("A", "B", 1)]
        results = schedule_matches(matches, CalendarConfig(horizon_days=2), TODAY, placed)

        assert [r.placed for r in results] == [True, False, True]
        assert len(placed) == 2
        assert all(m is not matches[1] for m in placed)

    def test_batch_size_bound(self, placed_events):
        from priority_placement.config import SEASON_MATCHES
        from priority_placement.slots import schedule_matches
        from priority_placement.types import ValidationError

        matches = [make_match(f"T{i}", f"U{i}") for i in range(SEASON_MATCHES + 1)]
        with pytest.raises(ValidationError, match="season bound"):
            schedule_matches(matches, today=TODAY, placed=placed_events)
        assert len(placed_events) == 0
        assert all(m.date is None for m in matches)

    def test_batch_at_bound_accepted(self):
        from priority_placement.config import CalendarConfig
        from priority_placement.slots import schedule_matches

        matches = [make_match(f"T{i}", f"U{i}") for i in range(4)]
        results = schedule_matches(matches, CalendarConfig(max_batch_size=4), TODAY)
        assert len(results) == 4

    def test_invalid_match_places_nothing(self, placed_events):
        from priority_placement.slots import schedule_matches
        from priority_placement.types import ValidationError

        matches = [make_match("A", "B"), make_match("C", "")]
        with pytest.raises(ValidationError, match="team_b"):
            schedule_matches(matches, today=TODAY, placed=placed_events)
        assert len(placed_events) == 0
        assert matches[0].date is None

    def test_already_dated_match_refused(self):
        from priority_placement.slots import schedule_matches
        from priority_placement.types import ValidationError

        match = make_match("A", "B")
        match.assign(day("fri"))
        with pytest.raises(ValidationError, match="already placed"):
            schedule_matches([match], today=TODAY)

    def test_duplicate_object_refused(self):
        from priority_placement.slots import schedule_matches
        from priority_placement.types import ValidationError

        match = make_match("A", "B")
        with pytest.raises(ValidationError, match="same object"):
            schedule_matches([match, match], today=TODAY)

    def test_continues_from_caller_state(self, placed_events):
        from priority_placement.slots import schedule_matches

        schedule_matches([make_match("X", "Y")], today=TODAY, placed=placed_events)
        results = schedule_matches([make_match("X", "Z")], today=TODAY, placed=placed_events)
        assert results[0].date == day("sun")
        assert len(placed_events) == 2

    def test_ascending_direction(self):
        from priority_placement.config import CalendarConfig
        from priority_placement.ordering import SortDirection
        from priority_placement.slots import schedule_matches

        matches = [make_match("A", "B", 9), make_match("C", "D", 1)]
        config = CalendarConfig(direction=SortDirection.ASCENDING)
        results = schedule_matches(matches, config, TODAY)
        assert [r.date for r in results] == [day("sat"), day("fri")]

    def test_rejection_logged(self, caplog):
        from priority_placement.config import CalendarConfig
        from priority_placement.slots import schedule_matches

        matches = [make_match("X", "Y", 2), make_match("X", "Z", 1)]
        with caplog.at_level("WARNING", logger="priority_placement.slots"):
            schedule_matches(matches, CalendarConfig(horizon_days=1), TODAY)
        assert "Failed to schedule match: X vs Z" in caplog.text

    def test_deterministic(self):
        from priority_placement.slots import schedule_matches

        def run():
            matches = [
                make_match(t, u, p, broadcaster=b)
                for t, u, p, b in [
                    ("A", "B", 1, "TV1"), ("C", "A", 3, "TV2"), ("B", "D", 3, "TV1"),
                    ("C", "D", 2, "TV2"), ("A", "D", 1, "TV1"),
                ]
            ]
            return [(r.placed, getattr(r, "date", None)) for r in schedule_matches(matches, today=TODAY)]

        assert run() == run()
