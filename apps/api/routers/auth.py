"""
Authentication API endpoints.

Provides:
- Registration (account + athlete profile in one step)
- Login (JWT token generation)
- Current athlete lookup
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime, timezone
import logging

from core.database import get_db
from core.security import (
    verify_password,
    get_password_hash,
    create_access_token,
    ACCESS_TOKEN_EXPIRE_MINUTES,
)
from core.auth import get_current_user
from core.exceptions import ValidationError
from models import Athlete, AthleteProfile
from schemas import AthleteResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/auth", tags=["auth"])


class UserRegister(BaseModel):
    """Schema for user registration."""
    email: EmailStr
    password: str
    first_name: str = Field(min_length=1, max_length=50)


class UserLogin(BaseModel):
    """Schema for user login."""
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    """Schema for token response."""
    access_token: str
    token_type: str = "bearer"
    expires_in: int = ACCESS_TOKEN_EXPIRE_MINUTES * 60  # seconds
    athlete: Optional[AthleteResponse] = None


def _token_response(athlete: Athlete) -> TokenResponse:
    access_token = create_access_token(data={"sub": str(athlete.id), "email": athlete.email})
    return TokenResponse(
        access_token=access_token,
        athlete=AthleteResponse.model_validate(athlete),
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    db: Session = Depends(get_db)
):
    """
    Register a new athlete.

    Creates the login account and its profile, and returns a token so the
    client can go straight to logging.
    """
    email = user_data.email.strip().lower()
    first_name = user_data.first_name.strip()
    if not first_name:
        raise ValidationError("First name is required", field="first_name")

    existing = db.query(Athlete).filter(Athlete.email == email).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    if len(user_data.password) < 8:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Password must be at least 8 characters"
        )

    athlete = Athlete(
        email=email,
        password_hash=get_password_hash(user_data.password),
    )
    athlete.profile = AthleteProfile(first_name=first_name)

    db.add(athlete)
    db.commit()
    db.refresh(athlete)

    logger.info(f"Registered athlete {athlete.id}")
    return _token_response(athlete)


@router.post("/login", response_model=TokenResponse)
def login(
    credentials: UserLogin,
    db: Session = Depends(get_db)
):
    """
    Authenticate user and return JWT token.
    """
    email = credentials.email.strip().lower()
    user = db.query(Athlete).filter(Athlete.email == email).first()

    if not user or not verify_password(credentials.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user.last_login_at = datetime.now(timezone.utc)
    db.commit()

    return _token_response(user)


@router.get("/me", response_model=AthleteResponse)
def get_current_user_info(
    current_user: Athlete = Depends(get_current_user)
):
    """Get current authenticated athlete with profile."""
    return AthleteResponse.model_validate(current_user)
