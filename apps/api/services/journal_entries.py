"""
Journal Entry Service

Validation and persistence for daily training entries.

A save is one unit of work: the entry header is inserted or updated, its
sport rows are deleted and the submitted set inserted, and the whole
thing is committed once. If any step fails the session is rolled back, so
an entry never ends up with a stale or empty set of sport rows.
"""
import logging
from datetime import date, datetime, timezone
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from core.exceptions import ConflictError, NotFoundError, StorageError, ValidationError
from models import BODY_FEELS, SPORTS, EntrySport, JournalEntry
from schemas import EntrySubmission, SportRow

logger = logging.getLogger(__name__)

MAX_SPORT_ROWS = 3
MIN_MINUTES = 1
MAX_MINUTES = 600
MIN_RATING = 1
MAX_RATING = 5
MAX_TEXT_LENGTH = 140

RATING_FIELDS = (
    ("effort", "Effort"),
    ("confidence", "Confidence"),
    ("energy", "Energy"),
)

BODY_FEEL_FIELDS = ("body_feel_before", "body_feel_after")

TEXT_FIELDS = (
    ("win_today", "Win Today"),
    ("lesson_today", "Lesson Today"),
    ("tomorrow_focus", "Tomorrow Focus"),
)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_whole_in_range(value, low: int, high: int) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and low <= value <= high


def _is_blank_minutes(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return _is_number(value) and value <= 0


def normalize_sport_rows(rows: Iterable[SportRow]) -> List[SportRow]:
    """
    Drop rows the form left blank: no sport picked, or no positive minutes.

    Minutes that are present but not a whole number are kept so validation
    can reject them.
    """
    kept = []
    for row in rows:
        sport = (row.sport or "").strip()
        if not sport or _is_blank_minutes(row.minutes):
            continue
        kept.append(SportRow(sport=sport, minutes=row.minutes))
    return kept


def validate_entry(submission: EntrySubmission) -> Optional[str]:
    """
    Check a submission and return the first problem found, or None.

    Order: sport rows, minutes, ratings, body feel, text lengths.
    """
    rows = normalize_sport_rows(submission.sports)
    if not rows:
        return "At least one sport is required"
    if len(rows) > MAX_SPORT_ROWS:
        return f"You can log up to {MAX_SPORT_ROWS} sports per session"

    for row in rows:
        if row.sport not in SPORTS:
            return f"Unknown sport: {row.sport}"
        if not _is_whole_in_range(row.minutes, MIN_MINUTES, MAX_MINUTES):
            return f"Minutes must be between {MIN_MINUTES} and {MAX_MINUTES}"

    for field, label in RATING_FIELDS:
        if not _is_whole_in_range(getattr(submission, field), MIN_RATING, MAX_RATING):
            return f"{label} must be {MIN_RATING}–{MAX_RATING}"

    for field in BODY_FEEL_FIELDS:
        value = getattr(submission, field)
        if value is not None and value not in BODY_FEELS:
            return f"Body feel must be one of {', '.join(BODY_FEELS)}"

    for field, label in TEXT_FIELDS:
        if len(getattr(submission, field) or "") > MAX_TEXT_LENGTH:
            return f"{label} must be {MAX_TEXT_LENGTH} characters or less"

    return None


def _resolve_entry(db: Session, athlete_id: UUID, entry_date: date, entry_id: Optional[UUID]) -> JournalEntry:
    """Existing entry to overwrite, or a new pending one."""
    same_day = db.query(JournalEntry).filter(
        JournalEntry.athlete_id == athlete_id,
        JournalEntry.entry_date == entry_date,
    ).first()

    if entry_id is None:
        if same_day:
            return same_day
        entry = JournalEntry(athlete_id=athlete_id, entry_date=entry_date)
        db.add(entry)
        return entry

    # Scoped by owner as well as id: another athlete's entry is simply "not found"
    entry = db.query(JournalEntry).filter(
        JournalEntry.id == entry_id,
        JournalEntry.athlete_id == athlete_id,
    ).first()
    if not entry:
        raise NotFoundError("Journal entry", str(entry_id))
    if same_day and same_day.id != entry.id:
        raise ConflictError(f"There is already an entry for {entry_date.isoformat()}")
    entry.entry_date = entry_date
    return entry


def submit_entry(
    db: Session,
    athlete_id: UUID,
    submission: EntrySubmission,
    entry_id: Optional[UUID] = None,
) -> JournalEntry:
    """
    Create or overwrite the athlete's entry for submission.entry_date.

    Raises ValidationError before touching the database, NotFoundError /
    ConflictError for a bad entry_id, StorageError if the write fails.
    """
    error = validate_entry(submission)
    if error:
        raise ValidationError(error)

    rows = normalize_sport_rows(submission.sports)

    try:
        entry = _resolve_entry(db, athlete_id, submission.entry_date, entry_id)
        is_new = entry.id is None

        entry.effort = submission.effort
        entry.confidence = submission.confidence
        entry.energy = submission.energy
        entry.body_feel_before = submission.body_feel_before
        entry.body_feel_after = submission.body_feel_after
        for field, _ in TEXT_FIELDS:
            setattr(entry, field, getattr(submission, field) or "")
        entry.updated_at = datetime.now(timezone.utc)
        db.flush()

        # Replace, never patch: old rows are deleted before the new set goes in
        entry.sports.clear()
        db.flush()
        for position, row in enumerate(rows):
            entry.sports.append(EntrySport(
                athlete_id=athlete_id,
                sport=row.sport,
                minutes=row.minutes,
                position=position,
            ))

        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(
            f"Failed to save journal entry for {submission.entry_date}: {e}",
            extra={"extra_fields": {"athlete_id": str(athlete_id), "entry_date": str(submission.entry_date)}},
        )
        raise StorageError() from e

    db.refresh(entry)
    logger.info(
        f"{'Created' if is_new else 'Updated'} journal entry {entry.id} with {len(rows)} sport row(s)",
        extra={"extra_fields": {"athlete_id": str(athlete_id), "entry_date": str(entry.entry_date)}},
    )
    return entry


def delete_entry(db: Session, athlete_id: UUID, entry_id: UUID) -> None:
    """Delete an entry and, through the cascade, all of its sport rows."""
    entry = db.query(JournalEntry).filter(
        JournalEntry.id == entry_id,
        JournalEntry.athlete_id == athlete_id,
    ).first()
    if not entry:
        raise NotFoundError("Journal entry", str(entry_id))

    try:
        db.delete(entry)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to delete journal entry {entry_id}: {e}")
        raise StorageError("Could not delete the entry. Please try again.") from e

    logger.info(f"Deleted journal entry {entry_id}", extra={"extra_fields": {"athlete_id": str(athlete_id)}})


def get_entry_for_date(db: Session, athlete_id: UUID, entry_date: date) -> Optional[JournalEntry]:
    return db.query(JournalEntry).options(selectinload(JournalEntry.sports)).filter(
        JournalEntry.athlete_id == athlete_id,
        JournalEntry.entry_date == entry_date,
    ).first()


def list_recent_entries(db: Session, athlete_id: UUID, limit: int = 7) -> List[JournalEntry]:
    return db.query(JournalEntry).options(selectinload(JournalEntry.sports)).filter(
        JournalEntry.athlete_id == athlete_id,
    ).order_by(JournalEntry.entry_date.desc()).limit(limit).all()


def entries_in_window(
    db: Session,
    athlete_id: UUID,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> List[JournalEntry]:
    """Entries with their sport rows, oldest first, optionally bounded by [start, end]."""
    query = db.query(JournalEntry).options(selectinload(JournalEntry.sports)).filter(
        JournalEntry.athlete_id == athlete_id,
    )
    if start:
        query = query.filter(JournalEntry.entry_date >= start)
    if end:
        query = query.filter(JournalEntry.entry_date <= end)
    return query.order_by(JournalEntry.entry_date).all()


def all_entry_dates(db: Session, athlete_id: UUID) -> List[date]:
    rows = db.query(JournalEntry.entry_date).filter(JournalEntry.athlete_id == athlete_id).all()
    return [r[0] for r in rows]
