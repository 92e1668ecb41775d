"""
Stats API Router

Chart data: minutes per week for the last 8 weeks, minutes per sport for
the last 30 days, and effort/confidence averages for the last 7 days.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from pydantic import BaseModel
from typing import List
from datetime import date, timedelta

from core.database import get_db
from core.auth import get_current_user
from models import Athlete
from routers.home import local_today
from schemas import SportMinutes, WeekBucketResponse
from services import aggregates, journal_entries
from services.dates import week_monday

router = APIRouter(prefix="/v1/stats", tags=["stats"])

SPORT_WINDOW_DAYS = 30
RECENT_WINDOW_DAYS = 7


class StatsResponse(BaseModel):
    weekly_minutes: List[WeekBucketResponse]
    sport_minutes: List[SportMinutes]
    recent_avg_effort: float
    recent_avg_confidence: float
    recent_entry_count: int


@router.get("", response_model=StatsResponse)
def get_stats(
    today: date = Depends(local_today),
    db: Session = Depends(get_db),
    current_user: Athlete = Depends(get_current_user)
):
    first_monday = week_monday(today) - timedelta(weeks=aggregates.WEEKS_CHARTED - 1)
    sport_start = today - timedelta(days=SPORT_WINDOW_DAYS)
    recent_start = today - timedelta(days=RECENT_WINDOW_DAYS - 1)

    # Lower bounds only: entries dated later this week still count in its bucket
    entries = journal_entries.entries_in_window(db, current_user.id, min(first_monday, sport_start))

    weeks = aggregates.weekly_buckets(entries, as_of=today)
    sports = aggregates.sport_breakdown(entries, sport_start)
    recent = aggregates.filter_window(entries, recent_start)
    avg_effort, avg_confidence = aggregates.averages(recent)

    return StatsResponse(
        weekly_minutes=[WeekBucketResponse(week_start=w.week_start, label=w.label, minutes=w.minutes) for w in weeks],
        sport_minutes=[SportMinutes(sport=s.sport, minutes=s.minutes) for s in sports],
        recent_avg_effort=round(avg_effort, 1),
        recent_avg_confidence=round(avg_confidence, 1),
        recent_entry_count=len(recent),
    )
