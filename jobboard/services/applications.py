from __future__ import annotations
import logging

from sqlalchemy.orm import Session, joinedload

from ..errors import ConflictError, NotFoundError, PermissionDeniedError
from ..models import Application, JobPosting
from . import store
from .postings import get_posting
from .profiles import require_profile

logger = logging.getLogger(__name__)


def apply_to_job(
    db: Session,
    applicant_id: str,
    job_id: int,
    cover_letter: str | None = None,
    resume_url: str | None = None,
) -> Application:
    require_profile(db, applicant_id, "jobseeker")
    job = get_posting(db, job_id)
    if not job.is_active:
        raise NotFoundError("job posting is no longer active")

    existing = store.read(
        db,
        "application lookup",
        lambda: db.query(Application.id)
        .filter(Application.job_id == job_id, Application.applicant_id == applicant_id)
        .first(),
    )
    if existing:
        raise ConflictError("already applied to this job")

    app_row = Application(
        job_id=job_id,
        applicant_id=applicant_id,
        status="pending",
        cover_letter=cover_letter,
        resume_url=resume_url,
    )
    db.add(app_row)
    store.commit(db, "application create")
    db.refresh(app_row)
    logger.info("[applications] %s applied to %s", applicant_id, job_id)
    return app_row


def list_applications(db: Session, applicant_id: str) -> list[Application]:
    return store.read(
        db,
        "applicant applications",
        lambda: db.query(Application)
        .options(joinedload(Application.job))
        .filter(Application.applicant_id == applicant_id)
        .order_by(Application.applied_at.desc(), Application.id.desc())
        .all(),
    )


def _owned_posting(db: Session, owner_id: str, job_id: int) -> JobPosting:
    job = get_posting(db, job_id)
    if job.posted_by != owner_id:
        raise PermissionDeniedError("only the posting owner may view its applications")
    return job


def list_job_applications(db: Session, owner_id: str, job_id: int) -> list[Application]:
    _owned_posting(db, owner_id, job_id)
    return store.read(
        db,
        "job applications",
        lambda: db.query(Application)
        .filter(Application.job_id == job_id)
        .order_by(Application.applied_at.desc(), Application.id.desc())
        .all(),
    )


def update_application_status(db: Session, owner_id: str, application_id: int, status: str) -> Application:
    app_row = store.read(db, "application lookup", lambda: db.get(Application, application_id))
    if app_row is None:
        raise NotFoundError("application not found")
    _owned_posting(db, owner_id, app_row.job_id)

    app_row.status = status
    store.commit(db, "application status update")
    db.refresh(app_row)
    logger.info("[applications] %s set application %s to %s", owner_id, application_id, status)
    return app_row
