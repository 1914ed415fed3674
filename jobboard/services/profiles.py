from __future__ import annotations
from sqlalchemy.orm import Session

from ..errors import NotFoundError, PermissionDeniedError
from ..models import UserProfile
from ..schemas import ProfileIn
from . import store


def get_profile(db: Session, user_id: str) -> UserProfile | None:
    return store.read(db, "profile lookup", lambda: db.get(UserProfile, user_id))


def require_profile(db: Session, user_id: str, user_type: str | None = None) -> UserProfile:
    """Load the caller's profile, optionally insisting on a user type."""
    profile = get_profile(db, user_id)
    if profile is None:
        raise NotFoundError("profile not completed")
    if user_type and profile.user_type != user_type:
        raise PermissionDeniedError(f"only {user_type}s may do this")
    return profile


def upsert_profile(db: Session, user_id: str, email: str, payload: ProfileIn) -> UserProfile:
    profile = get_profile(db, user_id)
    if profile is None:
        profile = UserProfile(id=user_id, email=email)
        db.add(profile)
    profile.email = email
    profile.user_type = payload.user_type
    profile.first_name = payload.first_name.strip()
    profile.last_name = payload.last_name.strip()
    profile.company = (payload.company or "").strip() or None

    store.commit(db, "profile update")
    db.refresh(profile)
    return profile
