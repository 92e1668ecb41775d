"""
Athlete Profile Router

First name, birth year and favorite sport (the log form's default sport).
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from datetime import date

from core.database import get_db
from core.auth import get_current_user
from core.exceptions import ValidationError
from models import SPORTS, Athlete, AthleteProfile
from schemas import ProfileResponse, ProfileUpdate

router = APIRouter(prefix="/v1/profile", tags=["Athlete Profile"])

MIN_BIRTH_YEAR = 1900


def _get_or_create_profile(db: Session, athlete: Athlete) -> AthleteProfile:
    profile = db.query(AthleteProfile).filter(AthleteProfile.athlete_id == athlete.id).first()
    if profile is None:
        # Accounts created before profiles existed get one on first read
        profile = AthleteProfile(athlete_id=athlete.id, first_name=athlete.email.split("@")[0])
        db.add(profile)
        db.commit()
        db.refresh(profile)
    return profile


@router.get("", response_model=ProfileResponse)
def get_profile(
    db: Session = Depends(get_db),
    current_user: Athlete = Depends(get_current_user)
):
    return ProfileResponse.model_validate(_get_or_create_profile(db, current_user))


@router.put("", response_model=ProfileResponse)
def update_profile(
    updates: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: Athlete = Depends(get_current_user)
):
    """
    Edit the profile.

    Blank favorite_sport clears it; birth_year must be a plausible past year.
    """
    first_name = updates.first_name.strip()
    if not first_name:
        raise ValidationError("First name is required", field="first_name")

    if updates.birth_year is not None and not MIN_BIRTH_YEAR <= updates.birth_year <= date.today().year:
        raise ValidationError(f"Birth year must be between {MIN_BIRTH_YEAR} and {date.today().year}", field="birth_year")

    favorite = (updates.favorite_sport or "").strip() or None
    if favorite is not None and favorite not in SPORTS:
        raise ValidationError(f"Unknown sport: {favorite}", field="favorite_sport")

    profile = _get_or_create_profile(db, current_user)
    profile.first_name = first_name
    profile.birth_year = updates.birth_year
    profile.favorite_sport = favorite
    db.commit()
    db.refresh(profile)

    return ProfileResponse.model_validate(profile)
