from __future__ import annotations
import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from ..config import settings
from ..errors import NotFoundError, PermissionDeniedError, ValidationError
from ..models import JobPosting
from ..schemas import JobPostingIn
from . import store
from .profiles import require_profile

logger = logging.getLogger(__name__)


def create_posting(db: Session, owner_id: str, payload: JobPostingIn, now: datetime | None = None) -> JobPosting:
    recruiter = require_profile(db, owner_id, "recruiter")
    now = now or datetime.now(timezone.utc)

    company = (recruiter.company or "").strip() or (payload.company or "").strip()
    if not company:
        raise ValidationError("company is required")

    job = JobPosting(
        title=payload.title.strip(),
        company=company,
        location=payload.location.strip(),
        job_type=payload.job_type,
        salary_min=payload.salary_min,
        salary_max=payload.salary_max,
        salary_currency=payload.salary_currency or settings.DEFAULT_CURRENCY,
        description=payload.description,
        requirements=payload.requirements,
        benefits=payload.benefits,
        experience_level=payload.experience_level,
        company_size=payload.company_size,
        posted_by=owner_id,
        is_active=True,
        created_at=now,
        updated_at=now,
        expires_at=now + timedelta(days=settings.JOB_TTL_DAYS),
    )
    db.add(job)
    store.commit(db, "job posting create")
    db.refresh(job)
    logger.info("[postings] %s created posting %s", owner_id, job.id)
    return job


def get_posting(db: Session, job_id: int) -> JobPosting:
    job = store.read(db, "job posting lookup", lambda: db.get(JobPosting, job_id))
    if job is None:
        raise NotFoundError("job posting not found")
    return job


def list_owner_postings(db: Session, owner_id: str) -> list[JobPosting]:
    return store.read(
        db,
        "owner postings",
        lambda: db.query(JobPosting)
        .filter(JobPosting.posted_by == owner_id)
        .order_by(JobPosting.created_at.desc(), JobPosting.id.desc())
        .all(),
    )


def deactivate_posting(db: Session, owner_id: str, job_id: int) -> JobPosting:
    job = get_posting(db, job_id)
    if job.posted_by != owner_id:
        raise PermissionDeniedError("only the owner may change this posting")
    if job.is_active:
        job.is_active = False
        store.commit(db, "job posting deactivate")
        db.refresh(job)
        logger.info("[postings] %s deactivated posting %s", owner_id, job_id)
    return job


def expire_postings(db: Session, now: datetime | None = None) -> int:
    """Deactivate active postings whose expiry time has passed."""
    now = now or datetime.now(timezone.utc)
    expired = store.read(
        db,
        "expired postings",
        lambda: db.query(JobPosting)
        .filter(JobPosting.is_active.is_(True), JobPosting.expires_at.is_not(None), JobPosting.expires_at < now)
        .all(),
    )
    if not expired:
        return 0
    for job in expired:
        job.is_active = False
    store.commit(db, "posting expiry")
    logger.info("[expiry] deactivated %d postings", len(expired))
    return len(expired)
