from sqlalchemy import Column, Integer, CheckConstraint, Date, DateTime, ForeignKey, Text, String, Index, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from core.database import Base
import uuid


SPORTS = (
    "Basketball", "Football", "Baseball", "Soccer", "Hockey", "Lacrosse",
    "Softball", "Volleyball", "Tennis", "Golf", "Track & Field", "Swimming",
    "Wrestling", "Gymnastics", "Ski/Snowboard", "Other",
)

BODY_FEELS = ("Great", "OK", "Sore", "Hurt")


class Athlete(Base):
    """Login account. Everything else in the schema hangs off athlete.id."""
    __tablename__ = "athlete"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    email = Column(Text, unique=True, nullable=False)
    password_hash = Column(Text, nullable=False)
    last_login_at = Column(DateTime(timezone=True), nullable=True)

    profile = relationship("AthleteProfile", back_populates="athlete", uselist=False, cascade="all, delete-orphan")


class AthleteProfile(Base):
    """
    Name and defaults shown on the log form.

    Created at sign-up; favorite_sport pre-fills the first sport row.
    """
    __tablename__ = "athlete_profile"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    athlete_id = Column(Uuid(as_uuid=True), ForeignKey("athlete.id", ondelete="CASCADE"), nullable=False, unique=True)
    first_name = Column(Text, nullable=False)
    birth_year = Column(Integer, nullable=True)
    favorite_sport = Column(String(32), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    athlete = relationship("Athlete", back_populates="profile")


class JournalEntry(Base):
    """
    One athlete's training log for one calendar day.

    Minutes live on the sport rows; an entry always has 1-3 of them after a
    successful save.
    """
    __tablename__ = "journal_entry"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    athlete_id = Column(Uuid(as_uuid=True), ForeignKey("athlete.id", ondelete="CASCADE"), nullable=False)
    entry_date = Column(Date, nullable=False)

    # Subjective ratings, 1 (low) to 5 (high)
    effort = Column(Integer, nullable=False)
    confidence = Column(Integer, nullable=False)
    energy = Column(Integer, nullable=True)

    body_feel_before = Column(String(8), nullable=True)
    body_feel_after = Column(String(8), nullable=True)

    win_today = Column(String(140), nullable=False, default="")
    lesson_today = Column(String(140), nullable=False, default="")
    tomorrow_focus = Column(String(140), nullable=False, default="")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    sports = relationship(
        "EntrySport",
        back_populates="entry",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="EntrySport.position",
    )

    __table_args__ = (
        UniqueConstraint("athlete_id", "entry_date", name="uq_journal_entry_athlete_date"),
        Index("ix_journal_entry_athlete_date", "athlete_id", "entry_date"),
        CheckConstraint("effort BETWEEN 1 AND 5", name="ck_journal_entry_effort_range"),
        CheckConstraint("confidence BETWEEN 1 AND 5", name="ck_journal_entry_confidence_range"),
        CheckConstraint("energy IS NULL OR energy BETWEEN 1 AND 5", name="ck_journal_entry_energy_range"),
    )

    @property
    def total_minutes(self) -> int:
        return sum(s.minutes for s in self.sports)


class EntrySport(Base):
    """One (sport, minutes) pair of a journal entry. Replaced as a set on every save."""
    __tablename__ = "entry_sport"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    entry_id = Column(Uuid(as_uuid=True), ForeignKey("journal_entry.id", ondelete="CASCADE"), nullable=False)
    athlete_id = Column(Uuid(as_uuid=True), ForeignKey("athlete.id", ondelete="CASCADE"), nullable=False)
    sport = Column(String(32), nullable=False)
    minutes = Column(Integer, nullable=False)
    position = Column(Integer, nullable=False, default=0)  # order the athlete entered the rows
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    entry = relationship("JournalEntry", back_populates="sports")

    __table_args__ = (
        Index("ix_entry_sport_entry_id", "entry_id"),
        Index("ix_entry_sport_athlete_id", "athlete_id"),
        CheckConstraint("minutes BETWEEN 1 AND 600", name="ck_entry_sport_minutes_range"),
    )


class MonthlyReflection(Base):
    __tablename__ = "monthly_reflection"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    athlete_id = Column(Uuid(as_uuid=True), ForeignKey("athlete.id", ondelete="CASCADE"), nullable=False)
    month = Column(String(7), nullable=False)  # YYYY-MM
    biggest_win_month = Column(Text, nullable=False, default="")
    improve_next_month = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("athlete_id", "month", name="uq_monthly_reflection_athlete_month"),
    )
