"""
Calendar helpers for the journal.

All "today" questions are answered in the configured local calendar
(settings.APP_TIMEZONE), never in server UTC, so an entry logged late in
the evening counts for the day the athlete lived it.

Functions accept datetime.date objects or ISO "YYYY-MM-DD" strings.
"""
import calendar
import re
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional, Tuple, Union
from zoneinfo import ZoneInfo

from core.config import settings

DateLike = Union[date, str]

_MONTH_RE = re.compile(r"^\d{4}-\d{2}$")


def to_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def format_date(d: DateLike) -> str:
    """YYYY-MM-DD"""
    return to_date(d).isoformat()


def today(tz: Optional[str] = None) -> date:
    """Current date in the athlete's local calendar."""
    name = tz or settings.APP_TIMEZONE
    zone = timezone.utc if name.upper() == "UTC" else ZoneInfo(name)
    return datetime.now(zone).date()


def week_monday(on: Optional[DateLike] = None) -> date:
    """Monday of the (Monday-Sunday) week containing `on`."""
    d = to_date(on) if on else today()
    return d - timedelta(days=d.weekday())


def week_sunday(on: Optional[DateLike] = None) -> date:
    """Sunday closing the week containing `on`. A Sunday is its own week end."""
    d = to_date(on) if on else today()
    return d + timedelta(days=6 - d.weekday())


def prev_day(d: DateLike) -> date:
    return to_date(d) - timedelta(days=1)


def next_day(d: DateLike) -> date:
    return to_date(d) + timedelta(days=1)


def calc_streak(dates: Iterable[DateLike], as_of: Optional[DateLike] = None) -> int:
    """
    Consecutive logged days ending today.

    Walks backward from `as_of` (default: today) one day at a time. Today
    only counts if it is logged, so a missing today means a streak of 0;
    the first gap ends the walk. Dates after `as_of` are ignored.
    """
    cursor = to_date(as_of) if as_of else today()
    streak = 0
    for d in sorted({to_date(x) for x in dates}, reverse=True):
        if d == cursor:
            streak += 1
            cursor = prev_day(cursor)
        elif d < cursor:
            break
    return streak


def longest_streak(dates: Iterable[DateLike]) -> int:
    """Length of the longest run of consecutive days anywhere in `dates`."""
    ordered = sorted({to_date(x) for x in dates})
    if not ordered:
        return 0

    longest = current = 1
    for prev, curr in zip(ordered, ordered[1:]):
        if next_day(prev) == curr:
            current += 1
            longest = max(longest, current)
        else:
            current = 1
    return longest


def parse_month(month: str) -> Tuple[int, int]:
    """'2024-06' -> (2024, 6). Raises ValueError on anything else."""
    if not _MONTH_RE.match(month or ""):
        raise ValueError(f"Month must be YYYY-MM: {month!r}")
    year, mon = int(month[:4]), int(month[5:])
    if not 1 <= mon <= 12:
        raise ValueError(f"Month must be YYYY-MM: {month!r}")
    return year, mon


def format_month(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_bounds(month: str) -> Tuple[date, date]:
    """First and last day of a YYYY-MM month."""
    year, mon = parse_month(month)
    return date(year, mon, 1), date(year, mon, days_in_month(year, mon))


def prev_month(month: str) -> str:
    year, mon = parse_month(month)
    return format_month(year - 1, 12) if mon == 1 else format_month(year, mon - 1)


def next_month(month: str) -> str:
    year, mon = parse_month(month)
    return format_month(year + 1, 1) if mon == 12 else format_month(year, mon + 1)


def format_display_date(d: DateLike) -> str:
    """e.g. 'Mon, Jun 3'"""
    d = to_date(d)
    return f"{d:%a}, {d:%b} {d.day}"


def month_label(month: str) -> str:
    """e.g. '2024-06' -> 'June 2024'"""
    year, mon = parse_month(month)
    return f"{calendar.month_name[mon]} {year}"
