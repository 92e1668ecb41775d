"""
Home API Router

Everything the landing screen shows in one call: greeting, current streak,
minutes this week, whether today is logged, and the last seven entries.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from pydantic import BaseModel
from typing import List, Optional
from datetime import date
from zoneinfo import ZoneInfoNotFoundError
import logging

from core.database import get_db
from core.auth import get_current_user
from core.exceptions import ValidationError
from models import Athlete
from schemas import JournalEntryResponse
from services import dates, journal_entries
from services.aggregates import compute_aggregates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/home", tags=["home"])

RECENT_ENTRIES = 7


def local_today(tz: Optional[str] = Query(default=None, description="IANA time zone of the athlete, e.g. America/Chicago")) -> date:
    """Today in the caller's calendar; falls back to APP_TIMEZONE."""
    try:
        return dates.today(tz)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(f"Unknown time zone: {tz}", field="tz")


class HomeResponse(BaseModel):
    first_name: Optional[str] = None
    today: date
    today_logged: bool
    streak_days: int
    week_start: date
    week_end: date
    week_minutes: int
    recent_entries: List[JournalEntryResponse]


@router.get("", response_model=HomeResponse)
def get_home_data(
    today: date = Depends(local_today),
    db: Session = Depends(get_db),
    current_user: Athlete = Depends(get_current_user)
):
    monday, sunday = dates.week_monday(today), dates.week_sunday(today)

    all_dates = journal_entries.all_entry_dates(db, current_user.id)
    week = journal_entries.entries_in_window(db, current_user.id, monday, sunday)
    recent = journal_entries.list_recent_entries(db, current_user.id, limit=RECENT_ENTRIES)

    return HomeResponse(
        first_name=current_user.profile.first_name if current_user.profile else None,
        today=today,
        today_logged=today in set(all_dates),
        streak_days=dates.calc_streak(all_dates, as_of=today),
        week_start=monday,
        week_end=sunday,
        week_minutes=compute_aggregates(week, monday, sunday).total_minutes,
        recent_entries=[JournalEntryResponse.model_validate(e) for e in recent],
    )
