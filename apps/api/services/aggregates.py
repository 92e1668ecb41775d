"""
Aggregate Computation

Reduces a set of journal entries (with their sport rows) to the figures
shown on the home, stats and summary screens.

Works on ORM rows or any object exposing entry_date, effort, confidence,
body_feel_before and sports (objects with sport and minutes), so the
functions stay pure and are tested without a database.
"""
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from services.dates import DateLike, longest_streak, to_date, week_monday

SORE_FEELS = ("Sore", "Hurt")
WEEKS_CHARTED = 8


@dataclass
class AggregateMetrics:
    """Summary figures for one window (week, month, year)."""
    total_minutes: int = 0
    hours: int = 0
    days_logged: int = 0
    entry_count: int = 0
    avg_effort: float = 0.0
    avg_confidence: float = 0.0
    sore_days: int = 0
    great_days: int = 0
    sports_count: int = 0
    most_active_sport: Optional[str] = None
    most_active_sport_minutes: int = 0
    longest_streak: int = 0


@dataclass
class WeekBucket:
    week_start: date
    label: str
    minutes: int = 0


@dataclass
class SportTotal:
    sport: str
    minutes: int


def _in_window(entry, start: Optional[date], end: Optional[date]) -> bool:
    d = to_date(entry.entry_date)
    if start and d < start:
        return False
    if end and d > end:
        return False
    return True


def filter_window(entries: Iterable, window_start: Optional[DateLike] = None, window_end: Optional[DateLike] = None) -> List:
    start = to_date(window_start) if window_start else None
    end = to_date(window_end) if window_end else None
    return [e for e in entries if _in_window(e, start, end)]


def entry_minutes(entry) -> int:
    return sum(s.minutes for s in (entry.sports or []))


def averages(entries: Sequence) -> Tuple[float, float]:
    """(avg effort, avg confidence); (0.0, 0.0) when there is nothing to average."""
    if not entries:
        return 0.0, 0.0
    n = len(entries)
    return (
        sum(e.effort for e in entries) / n,
        sum(e.confidence for e in entries) / n,
    )


def _sport_stats(entries: Iterable) -> Dict[str, Dict[str, int]]:
    stats: Dict[str, Dict[str, int]] = defaultdict(lambda: {"minutes": 0, "entries": 0})
    for entry in entries:
        seen = set()
        for row in entry.sports or []:
            stats[row.sport]["minutes"] += row.minutes
            if row.sport not in seen:
                stats[row.sport]["entries"] += 1
                seen.add(row.sport)
    return stats


def most_active_sport(entries: Iterable) -> Tuple[Optional[str], int]:
    """
    Sport with the most minutes, and those minutes.

    Ties go to the sport logged on more entries, then to the alphabetically
    first name, so identical input always picks the same sport.
    """
    stats = _sport_stats(entries)
    if not stats:
        return None, 0
    sport = min(stats, key=lambda s: (-stats[s]["minutes"], -stats[s]["entries"], s))
    return sport, stats[sport]["minutes"]


def compute_aggregates(entries: Iterable, window_start: Optional[DateLike] = None, window_end: Optional[DateLike] = None) -> AggregateMetrics:
    """Summary metrics for the entries whose entry_date falls in [window_start, window_end]."""
    window = filter_window(entries, window_start, window_end)
    if not window:
        return AggregateMetrics()

    total = sum(entry_minutes(e) for e in window)
    avg_effort, avg_confidence = averages(window)
    dates = [to_date(e.entry_date) for e in window]
    sport, sport_minutes = most_active_sport(window)

    return AggregateMetrics(
        total_minutes=total,
        hours=total // 60,
        days_logged=len(set(dates)),
        entry_count=len(window),
        avg_effort=avg_effort,
        avg_confidence=avg_confidence,
        sore_days=sum(1 for e in window if e.body_feel_before in SORE_FEELS),
        great_days=sum(1 for e in window if e.body_feel_before == "Great"),
        sports_count=len({row.sport for e in window for row in (e.sports or [])}),
        most_active_sport=sport,
        most_active_sport_minutes=sport_minutes,
        longest_streak=longest_streak(dates),
    )


def weekly_buckets(entries: Iterable, as_of: Optional[DateLike] = None, weeks: int = WEEKS_CHARTED) -> List[WeekBucket]:
    """
    Minutes per Monday-Sunday week for the last `weeks` weeks, oldest first.

    The current week is the last bucket; empty weeks are kept with 0.
    """
    current = week_monday(as_of)
    buckets = []
    for i in range(weeks - 1, -1, -1):
        monday = current - timedelta(weeks=i)
        buckets.append(WeekBucket(week_start=monday, label=f"{monday:%b} {monday.day}"))

    by_monday = {b.week_start: b for b in buckets}
    for entry in entries:
        bucket = by_monday.get(week_monday(entry.entry_date))
        if bucket:
            bucket.minutes += entry_minutes(entry)
    return buckets


def sport_breakdown(entries: Iterable, window_start: Optional[DateLike] = None, window_end: Optional[DateLike] = None) -> List[SportTotal]:
    """Minutes per sport in the window, most minutes first."""
    stats = _sport_stats(filter_window(entries, window_start, window_end))
    totals = [SportTotal(sport=s, minutes=v["minutes"]) for s, v in stats.items()]
    return sorted(totals, key=lambda t: (-t.minutes, t.sport))
