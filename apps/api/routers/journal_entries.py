"""
Journal Entries API Router

One entry per athlete per day. POST is create-or-replace by date, so the
log form can always submit without knowing whether the day was logged.
"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
from pydantic import BaseModel
from typing import List, Optional
from datetime import date
from uuid import UUID

from core.database import get_db
from core.auth import get_current_user
from models import Athlete, AthleteProfile
from schemas import EntrySubmission, JournalEntryResponse
from services import journal_entries

router = APIRouter(prefix="/v1/entries", tags=["Journal Entries"])


class EntryListResponse(BaseModel):
    entries: List[JournalEntryResponse]
    count: int


class EntryForDateResponse(BaseModel):
    entry_date: date
    entry: Optional[JournalEntryResponse] = None
    default_sport: Optional[str] = None  # pre-fills the first sport row on a new log


@router.get("", response_model=EntryListResponse)
def list_entries(
    limit: int = Query(default=7, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: Athlete = Depends(get_current_user)
):
    """Most recent entries, newest first."""
    entries = journal_entries.list_recent_entries(db, current_user.id, limit=limit)
    return EntryListResponse(
        entries=[JournalEntryResponse.model_validate(e) for e in entries],
        count=len(entries),
    )


@router.get("/{entry_date}", response_model=EntryForDateResponse)
def get_entry_for_date(
    entry_date: date,
    db: Session = Depends(get_db),
    current_user: Athlete = Depends(get_current_user)
):
    """The entry for a day (or null), plus the athlete's default sport."""
    entry = journal_entries.get_entry_for_date(db, current_user.id, entry_date)
    favorite = db.query(AthleteProfile.favorite_sport).filter(
        AthleteProfile.athlete_id == current_user.id
    ).scalar()

    return EntryForDateResponse(
        entry_date=entry_date,
        entry=JournalEntryResponse.model_validate(entry) if entry else None,
        default_sport=favorite,
    )


@router.post("", response_model=JournalEntryResponse, status_code=status.HTTP_201_CREATED)
def submit_entry(
    submission: EntrySubmission,
    db: Session = Depends(get_db),
    current_user: Athlete = Depends(get_current_user)
):
    """
    Create or update the entry for submission.entry_date.

    The sport rows sent here replace whatever the entry had before.
    """
    entry = journal_entries.submit_entry(db, current_user.id, submission)
    return JournalEntryResponse.model_validate(entry)


@router.put("/{entry_id}", response_model=JournalEntryResponse)
def update_entry(
    entry_id: UUID,
    submission: EntrySubmission,
    db: Session = Depends(get_db),
    current_user: Athlete = Depends(get_current_user)
):
    """Overwrite a specific entry (may move it to another free date)."""
    entry = journal_entries.submit_entry(db, current_user.id, submission, entry_id=entry_id)
    return JournalEntryResponse.model_validate(entry)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_entry(
    entry_id: UUID,
    db: Session = Depends(get_db),
    current_user: Athlete = Depends(get_current_user)
):
    """Delete an entry and its sport rows. Irreversible."""
    journal_entries.delete_entry(db, current_user.id, entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
