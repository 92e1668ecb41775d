"""
Pytest configuration and fixtures

Tests run against an in-memory SQLite database. The schema is created from
the ORM metadata before every test and dropped afterwards, so nothing
leaks between tests.
"""
import os
import sys

# Must be set before anything imports core.config
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-at-least-32-chars")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("APP_TIMEZONE", "UTC")

# Add the parent directory to the path so we can import from services
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from uuid import uuid4

from core.database import Base, SessionLocal, engine
from core.security import create_access_token, get_password_hash
from models import Athlete, AthleteProfile

TEST_PASSWORD = "correct-horse-battery"


@pytest.fixture(autouse=True)
def _schema():
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)


@pytest.fixture
def db_session(_schema):
    """
    A session on the test database.

    Commit test data before calling the API: requests share the same
    in-memory connection and see only committed rows.
    """
    session = SessionLocal()
    yield session
    session.rollback()
    session.close()


def _make_athlete(db_session, first_name: str, favorite_sport=None) -> Athlete:
    athlete = Athlete(
        email=f"test_{uuid4()}@example.com",
        password_hash=get_password_hash(TEST_PASSWORD),
    )
    athlete.profile = AthleteProfile(first_name=first_name, favorite_sport=favorite_sport)
    db_session.add(athlete)
    db_session.commit()
    db_session.refresh(athlete)
    return athlete


@pytest.fixture
def test_athlete(db_session):
    """Create a test athlete with a profile."""
    return _make_athlete(db_session, "Jordan", favorite_sport="Soccer")


@pytest.fixture
def other_athlete(db_session):
    """A second athlete, for ownership checks."""
    return _make_athlete(db_session, "Riley")


@pytest.fixture
def auth_headers(test_athlete):
    token = create_access_token({"sub": str(test_athlete.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_auth_headers(other_athlete):
    token = create_access_token({"sub": str(other_athlete.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client(_schema):
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)


@pytest.fixture
def athlete_password():
    """Plain-text password of the fixture athletes."""
    return TEST_PASSWORD
