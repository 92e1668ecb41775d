"""
Monthly reflections: two free-text answers per athlete per month,
overwritten on every save.
"""
import logging
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import StorageError, ValidationError
from models import MonthlyReflection
from services.dates import format_month, parse_month

logger = logging.getLogger(__name__)

MAX_REFLECTION_LENGTH = 500


def get_reflection(db: Session, athlete_id: UUID, month: str) -> Optional[MonthlyReflection]:
    return db.query(MonthlyReflection).filter(
        MonthlyReflection.athlete_id == athlete_id,
        MonthlyReflection.month == month,
    ).first()


def upsert_reflection(
    db: Session,
    athlete_id: UUID,
    month: str,
    biggest_win: str,
    improve_next: str,
) -> MonthlyReflection:
    """Insert the (athlete, month) reflection or overwrite the existing one."""
    try:
        month = format_month(*parse_month(month))
    except ValueError as e:
        raise ValidationError(str(e), field="month")

    biggest_win = biggest_win or ""
    improve_next = improve_next or ""
    if len(biggest_win) > MAX_REFLECTION_LENGTH:
        raise ValidationError(f"Biggest win must be {MAX_REFLECTION_LENGTH} characters or less")
    if len(improve_next) > MAX_REFLECTION_LENGTH:
        raise ValidationError(f"Improvement focus must be {MAX_REFLECTION_LENGTH} characters or less")

    try:
        reflection = get_reflection(db, athlete_id, month)
        if reflection is None:
            reflection = MonthlyReflection(athlete_id=athlete_id, month=month)
            db.add(reflection)
        reflection.biggest_win_month = biggest_win
        reflection.improve_next_month = improve_next
        reflection.updated_at = datetime.now(timezone.utc)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to save reflection for {month}: {e}")
        raise StorageError() from e

    db.refresh(reflection)
    return reflection
