"""
Summaries API Router

Monthly and yearly reports: aggregate figures, best streak, generated
insights, and the athlete's monthly reflection.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from pydantic import BaseModel
from typing import List, Optional
from datetime import date
import logging

from core.database import get_db
from core.auth import get_current_user
from core.exceptions import ValidationError
from models import Athlete
from routers.home import local_today
from schemas import AggregateResponse, ReflectionResponse, ReflectionUpdate
from services import dates, journal_entries, reflections
from services.aggregates import compute_aggregates
from services.insights import generate_monthly_insights, generate_yearly_insights

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/summaries", tags=["summaries"])


class MonthlySummaryResponse(BaseModel):
    month: str
    label: str
    start_date: date
    end_date: date
    prev_month: str
    next_month: Optional[str] = None  # None while the next month hasn't started
    metrics: AggregateResponse
    insights: List[str]
    reflection: Optional[ReflectionResponse] = None


class MonthFlag(BaseModel):
    month: str
    label: str
    has_entries: bool


class YearlySummaryResponse(BaseModel):
    year: int
    prev_year: int
    next_year: Optional[int] = None
    metrics: AggregateResponse
    insights: List[str]
    months: List[MonthFlag]


def _month_or_422(month: str) -> str:
    try:
        return dates.format_month(*dates.parse_month(month))
    except ValueError as e:
        raise ValidationError(str(e), field="month")


@router.get("/monthly", response_model=MonthlySummaryResponse)
def get_monthly_summary(
    month: Optional[str] = Query(default=None, description="YYYY-MM, defaults to the current month"),
    today: date = Depends(local_today),
    db: Session = Depends(get_db),
    current_user: Athlete = Depends(get_current_user)
):
    month = _month_or_422(month) if month else dates.format_month(today.year, today.month)
    start, end = dates.month_bounds(month)

    entries = journal_entries.entries_in_window(db, current_user.id, start, end)
    metrics = compute_aggregates(entries, start, end)
    reflection = reflections.get_reflection(db, current_user.id, month)

    following = dates.next_month(month)
    current = dates.format_month(today.year, today.month)

    return MonthlySummaryResponse(
        month=month,
        label=dates.month_label(month),
        start_date=start,
        end_date=end,
        prev_month=dates.prev_month(month),
        next_month=following if following <= current else None,
        metrics=AggregateResponse.model_validate(metrics),
        insights=generate_monthly_insights(metrics),
        reflection=ReflectionResponse.model_validate(reflection) if reflection else None,
    )


@router.put("/monthly/{month}/reflection", response_model=ReflectionResponse)
def save_monthly_reflection(
    month: str,
    body: ReflectionUpdate,
    db: Session = Depends(get_db),
    current_user: Athlete = Depends(get_current_user)
):
    """Create or overwrite the reflection for a month."""
    reflection = reflections.upsert_reflection(
        db,
        current_user.id,
        month,
        biggest_win=body.biggest_win_month,
        improve_next=body.improve_next_month,
    )
    return ReflectionResponse.model_validate(reflection)


@router.get("/yearly", response_model=YearlySummaryResponse)
def get_yearly_summary(
    year: Optional[int] = Query(default=None, ge=1900, le=9999),
    today: date = Depends(local_today),
    db: Session = Depends(get_db),
    current_user: Athlete = Depends(get_current_user)
):
    year = year or today.year
    start, end = date(year, 1, 1), date(year, 12, 31)

    entries = journal_entries.entries_in_window(db, current_user.id, start, end)
    metrics = compute_aggregates(entries, start, end)

    logged_months = {e.entry_date.month for e in entries}
    months = [
        MonthFlag(
            month=dates.format_month(year, m),
            label=date(year, m, 1).strftime("%b"),
            has_entries=m in logged_months,
        )
        for m in range(1, 13)
    ]

    return YearlySummaryResponse(
        year=year,
        prev_year=year - 1,
        next_year=year + 1 if year < today.year else None,
        metrics=AggregateResponse.model_validate(metrics),
        insights=generate_yearly_insights(metrics),
        months=months,
    )
