from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime, date
from uuid import UUID
from typing import Optional, List, Union

# Accepts anything a form might send; services.journal_entries decides what is valid
Number = Union[int, float, str]


class ProfileResponse(BaseModel):
    first_name: str
    birth_year: Optional[int] = None
    favorite_sport: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProfileUpdate(BaseModel):
    """Schema for editing the athlete profile"""
    first_name: str = Field(min_length=1, max_length=50)
    birth_year: Optional[int] = None
    favorite_sport: Optional[str] = None


class AthleteResponse(BaseModel):
    id: UUID
    email: str
    created_at: datetime
    profile: Optional[ProfileResponse] = None

    model_config = ConfigDict(from_attributes=True)


class SportRow(BaseModel):
    """
    One sport/minutes pair as submitted from the log form.

    Deliberately lax: blank rows are dropped and type and range checks
    happen in services.journal_entries so the athlete gets one readable
    message instead of a list of field errors.
    """
    sport: Optional[str] = ""
    minutes: Optional[Number] = 0


class EntrySubmission(BaseModel):
    entry_date: date
    sports: List[SportRow] = Field(default_factory=list)
    # Lax for the same reason as SportRow.minutes
    effort: Optional[Number] = None
    confidence: Optional[Number] = None
    energy: Optional[Number] = None
    body_feel_before: Optional[str] = None
    body_feel_after: Optional[str] = None
    win_today: str = ""
    lesson_today: str = ""
    tomorrow_focus: str = ""


class EntrySportResponse(BaseModel):
    sport: str
    minutes: int

    model_config = ConfigDict(from_attributes=True)


class JournalEntryResponse(BaseModel):
    id: UUID
    entry_date: date
    effort: int
    confidence: int
    energy: Optional[int] = None
    body_feel_before: Optional[str] = None
    body_feel_after: Optional[str] = None
    win_today: str
    lesson_today: str
    tomorrow_focus: str
    created_at: datetime
    updated_at: datetime
    sports: List[EntrySportResponse] = Field(default_factory=list)
    total_minutes: int = 0

    model_config = ConfigDict(from_attributes=True)


class ReflectionUpdate(BaseModel):
    biggest_win_month: str = ""
    improve_next_month: str = ""


class ReflectionResponse(BaseModel):
    month: str
    biggest_win_month: str
    improve_next_month: str
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SportMinutes(BaseModel):
    sport: str
    minutes: int


class WeekBucketResponse(BaseModel):
    week_start: date
    label: str
    minutes: int


class AggregateResponse(BaseModel):
    total_minutes: int
    hours: int
    days_logged: int
    entry_count: int
    avg_effort: float
    avg_confidence: float
    sore_days: int
    great_days: int
    sports_count: int
    most_active_sport: Optional[str] = None
    most_active_sport_minutes: int = 0
    longest_streak: int

    model_config = ConfigDict(from_attributes=True)
