"""
Shared fixtures: an in-memory SQLite store and small record factories.
"""

import os

# settings are read at import time; keep tests away from any real .env store
os.environ["DB_URL"] = "sqlite://"
os.environ["AUTH_URL"] = "http://auth.test"

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobboard.db import init_db
from jobboard.models import JobPosting, UserProfile

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def recruiter(db):
    user = UserProfile(
        id="rec-1",
        email="rec@acme.test",
        user_type="recruiter",
        first_name="Rita",
        last_name="Cruz",
        company="Acme",
    )
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def seeker(db):
    user = UserProfile(
        id="seek-1",
        email="sam@mail.test",
        user_type="jobseeker",
        first_name="Sam",
        last_name="Lee",
    )
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def make_job(db, recruiter):
    """Insert a posting; keyword overrides win over the defaults."""

    def _make(**overrides):
        fields = dict(
            title="Software Developer",
            company="Acme",
            location="Toronto, ON",
            job_type="full-time",
            salary_currency="USD",
            description="Build things.",
            posted_by=recruiter.id,
            is_active=True,
            created_at=NOW - timedelta(hours=1),
            expires_at=NOW + timedelta(days=30),
        )
        fields.update(overrides)
        job = JobPosting(**fields)
        db.add(job)
        db.commit()
        db.refresh(job)
        return job

    return _make


@pytest.fixture
def now():
    return NOW
