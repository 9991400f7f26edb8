from typing import Optional

from sqlalchemy.orm import Session

from app.models import models
from app.schemas import ProfileUpdate
from app.services.common import commit


def get_profile(db: Session, user_id: str) -> Optional[models.Profile]:
    return db.get(models.Profile, user_id)


def ensure_profile(db: Session, user_id: str, full_name: str = None) -> models.Profile:
    """Profile row for a new account; new accounts are always students."""
    profile = get_profile(db, user_id)
    if profile is None:
        profile = models.Profile(id=user_id, full_name=full_name, role="student")
        db.add(profile)
        commit(db, "Create profile")
        db.refresh(profile)
    return profile


def update_profile(db: Session, user_id: str, data: ProfileUpdate) -> models.Profile:
    # role is never taken from the form
    profile = get_profile(db, user_id) or models.Profile(id=user_id, role="student")
    profile.full_name = data.full_name
    profile.branch = data.branch
    profile.semester = data.semester
    db.add(profile)
    commit(db, "Update profile")
    db.refresh(profile)
    return profile


def count_profiles(db: Session) -> int:
    return db.query(models.Profile).count()
