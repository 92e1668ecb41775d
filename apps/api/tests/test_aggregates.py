"""
Tests for aggregate computation over journal entries.

Entries are plain namespaces shaped like the ORM rows, so no database is
needed here.
"""
from datetime import date
from types import SimpleNamespace

from services.aggregates import (
    AggregateMetrics,
    averages,
    compute_aggregates,
    most_active_sport,
    sport_breakdown,
    weekly_buckets,
)


def entry(day, *sports, effort=3, confidence=3, feel=None):
    return SimpleNamespace(
        entry_date=date.fromisoformat(day),
        effort=effort,
        confidence=confidence,
        body_feel_before=feel,
        sports=[SimpleNamespace(sport=s, minutes=m) for s, m in sports],
    )


JUNE = [
    entry("2024-06-03", ("Soccer", 60), ("Swimming", 30), effort=5, confidence=4, feel="Great"),
    entry("2024-06-04", ("Soccer", 45), effort=4, confidence=5, feel="Sore"),
    entry("2024-06-05", ("Tennis", 90), effort=3, confidence=3, feel="Hurt"),
    entry("2024-06-20", ("Soccer", 30), effort=4, confidence=4, feel="OK"),
]


class TestComputeAggregates:

    def test_month_window(self):
        metrics = compute_aggregates(JUNE, date(2024, 6, 1), date(2024, 6, 30))

        assert metrics.total_minutes == 255
        assert metrics.hours == 4
        assert metrics.days_logged == 4
        assert metrics.entry_count == 4
        assert metrics.avg_effort == 4.0
        assert metrics.avg_confidence == 4.0
        assert metrics.sore_days == 2
        assert metrics.great_days == 1
        assert metrics.sports_count == 3
        assert metrics.most_active_sport == "Soccer"
        assert metrics.most_active_sport_minutes == 135
        assert metrics.longest_streak == 3

    def test_window_bounds_are_inclusive(self):
        metrics = compute_aggregates(JUNE, "2024-06-04", "2024-06-05")
        assert metrics.entry_count == 2
        assert metrics.total_minutes == 135

    def test_empty_window_reports_zero_averages(self):
        metrics = compute_aggregates(JUNE, date(2024, 7, 1), date(2024, 7, 31))
        assert metrics == AggregateMetrics()
        assert metrics.avg_effort == 0
        assert metrics.avg_confidence == 0
        assert metrics.most_active_sport is None

    def test_no_entries_at_all(self):
        assert compute_aggregates([], date(2024, 1, 1), date(2024, 12, 31)).total_minutes == 0

    def test_averages_helper(self):
        assert averages([]) == (0.0, 0.0)
        assert averages(JUNE[:2]) == (4.5, 4.5)


class TestMostActiveSport:

    def test_most_minutes_wins(self):
        assert most_active_sport(JUNE) == ("Soccer", 135)

    def test_minute_tie_goes_to_more_entries(self):
        entries = [
            entry("2024-06-01", ("Tennis", 60)),
            entry("2024-06-02", ("Golf", 30)),
            entry("2024-06-03", ("Golf", 30)),
        ]
        assert most_active_sport(entries) == ("Golf", 60)

    def test_full_tie_is_alphabetical_and_stable(self):
        entries = [
            entry("2024-06-01", ("Tennis", 60)),
            entry("2024-06-02", ("Basketball", 60)),
        ]
        assert most_active_sport(entries) == ("Basketball", 60)
        assert most_active_sport(list(reversed(entries))) == ("Basketball", 60)

    def test_none_when_empty(self):
        assert most_active_sport([]) == (None, 0)


class TestWeeklyBuckets:

    def test_eight_weeks_oldest_first_with_zero_weeks(self):
        buckets = weekly_buckets(JUNE, as_of=date(2024, 6, 21))

        assert len(buckets) == 8
        assert buckets[-1].week_start == date(2024, 6, 17)
        assert buckets[0].week_start == date(2024, 4, 29)
        assert [b.minutes for b in buckets] == [0, 0, 0, 0, 0, 225, 0, 30]
        assert buckets[5].label == "Jun 3"

    def test_entries_older_than_the_chart_are_ignored(self):
        old = [entry("2023-01-02", ("Golf", 100))]
        assert sum(b.minutes for b in weekly_buckets(old, as_of=date(2024, 6, 21))) == 0

    def test_sunday_entry_lands_in_its_monday_week(self):
        buckets = weekly_buckets([entry("2024-06-09", ("Golf", 40))], as_of=date(2024, 6, 10))
        assert buckets[-2].week_start == date(2024, 6, 3)
        assert buckets[-2].minutes == 40
        assert buckets[-1].minutes == 0


class TestSportBreakdown:

    def test_sorted_by_minutes_desc(self):
        totals = sport_breakdown(JUNE)
        assert [(t.sport, t.minutes) for t in totals] == [
            ("Soccer", 135),
            ("Tennis", 90),
            ("Swimming", 30),
        ]

    def test_respects_window(self):
        totals = sport_breakdown(JUNE, date(2024, 6, 10), date(2024, 6, 30))
        assert [(t.sport, t.minutes) for t in totals] == [("Soccer", 30)]
