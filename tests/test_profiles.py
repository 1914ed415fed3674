"""
Tests for profile completion.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from jobboard.errors import NotFoundError, PermissionDeniedError
from jobboard.schemas import ProfileIn
from jobboard.services.profiles import get_profile, require_profile, upsert_profile


def test_upsert_creates_then_updates(db):
    p = upsert_profile(db, "u-1", "u1@mail.test", ProfileIn(user_type="jobseeker", first_name=" Ana ", last_name="Ruiz"))
    assert p.first_name == "Ana"
    assert p.company is None

    p = upsert_profile(db, "u-1", "u1@mail.test", ProfileIn(user_type="recruiter", first_name="Ana", last_name="Ruiz", company="Hire Co"))
    assert p.user_type == "recruiter"
    assert p.company == "Hire Co"
    assert get_profile(db, "u-1").company == "Hire Co"


def test_recruiter_requires_company():
    with pytest.raises(PydanticValidationError):
        ProfileIn(user_type="recruiter", first_name="A", last_name="B", company="  ")


def test_require_profile(db, seeker):
    assert require_profile(db, seeker.id).id == seeker.id
    with pytest.raises(PermissionDeniedError):
        require_profile(db, seeker.id, "recruiter")
    with pytest.raises(NotFoundError):
        require_profile(db, "nobody")
