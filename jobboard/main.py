# jobboard/main.py
from __future__ import annotations

import logging

from fastapi import FastAPI, Depends, Query, Header, Request, Response
from fastapi.responses import JSONResponse

from sqlalchemy.orm import Session

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from .config import settings
from .db import SessionLocal, init_db
from .errors import (
    AuthError,
    ConflictError,
    JobBoardError,
    NotFoundError,
    PermissionDeniedError,
    StoreError,
    ValidationError,
)
from .providers.base import AuthIdentity, AuthProvider
from .providers.hosted_auth import HostedAuthProvider
from .schemas import (
    ApplicationIn,
    ApplicationOut,
    ApplicationStatusIn,
    JobPostingIn,
    JobPostingOut,
    ProfileIn,
    ProfileOut,
)
from .services import applications, postings, profiles
from .services.query import parse_filters, search_jobs

logger = logging.getLogger(__name__)

app = FastAPI(title="Job Board")

_auth_provider = HostedAuthProvider()

ERROR_STATUS = {
    ValidationError: 422,
    AuthError: 401,
    PermissionDeniedError: 403,
    NotFoundError: 404,
    ConflictError: 409,
    StoreError: 503,
}


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_auth_provider() -> AuthProvider:
    return _auth_provider


async def get_identity(
    authorization: str | None = Header(None),
    provider: AuthProvider = Depends(get_auth_provider),
) -> AuthIdentity:
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthError("missing bearer token")
    return await provider.get_user(token.strip())


@app.exception_handler(JobBoardError)
async def on_jobboard_error(req: Request, exc: JobBoardError):
    status = next((code for cls, code in ERROR_STATUS.items() if isinstance(exc, cls)), 500)
    # store failures are reported without internals
    detail = "data store unavailable" if isinstance(exc, StoreError) else str(exc)
    return JSONResponse(status_code=status, content={"detail": detail})


def configure_logging():
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


@app.on_event("startup")
async def on_start():
    configure_logging()
    init_db()

    sched = AsyncIOScheduler()
    sched.add_job(expire_sweep, "interval", minutes=settings.EXPIRY_SWEEP_MINUTES)
    sched.start()


def expire_sweep():
    with SessionLocal() as db:
        try:
            n = postings.expire_postings(db)
        except StoreError as e:
            logger.error("[expiry] sweep failed: %s", e)
            return
        logger.info("[expiry] expired: %d", n)


@app.get("/api/jobs", response_model=list[JobPostingOut])
def api_jobs(
    response: Response,
    q: str = Query("", description="keyword search: title/company/description"),
    job_type: str = Query(""),
    location: str = Query(""),
    experience_level: str = Query(""),
    salary_min: int = Query(settings.SALARY_FLOOR),
    salary_max: int = Query(settings.SALARY_CEILING),
    date_posted: str = Query("", description="24h | 3d | 1w | 1m"),
    company_size: str = Query(""),
    sort_by: str = Query("date"),
    quick: list[str] = Query([]),
    seq: int | None = Query(None, description="echoed back in X-Request-Seq"),
    db: Session = Depends(get_db),
):
    filters = parse_filters({
        "search_term": q,
        "job_type": job_type,
        "location": location,
        "experience_level": experience_level,
        "salary_range": (salary_min, salary_max),
        "date_posted": date_posted,
        "company_size": company_size,
        "sort_by": sort_by,
        "quick_filters": quick,
    })
    rows = search_jobs(db, filters)

    response.headers["X-Total-Count"] = str(len(rows))
    if seq is not None:
        response.headers["X-Request-Seq"] = str(seq)
    return [JobPostingOut.model_validate(x) for x in rows]


@app.get("/api/jobs/{job_id}", response_model=JobPostingOut)
def api_job_detail(job_id: int, db: Session = Depends(get_db)):
    return JobPostingOut.model_validate(postings.get_posting(db, job_id))


@app.post("/api/jobs", response_model=JobPostingOut, status_code=201)
def api_create_job(payload: JobPostingIn, me: AuthIdentity = Depends(get_identity), db: Session = Depends(get_db)):
    return JobPostingOut.model_validate(postings.create_posting(db, me.id, payload))


@app.get("/api/recruiter/jobs", response_model=list[JobPostingOut])
def api_recruiter_jobs(me: AuthIdentity = Depends(get_identity), db: Session = Depends(get_db)):
    return [JobPostingOut.model_validate(x) for x in postings.list_owner_postings(db, me.id)]


@app.post("/api/jobs/{job_id}/deactivate", response_model=JobPostingOut)
def api_deactivate_job(job_id: int, me: AuthIdentity = Depends(get_identity), db: Session = Depends(get_db)):
    return JobPostingOut.model_validate(postings.deactivate_posting(db, me.id, job_id))


@app.post("/api/jobs/{job_id}/apply", response_model=ApplicationOut, status_code=201)
def api_apply(job_id: int, payload: ApplicationIn, me: AuthIdentity = Depends(get_identity), db: Session = Depends(get_db)):
    row = applications.apply_to_job(db, me.id, job_id, payload.cover_letter, payload.resume_url)
    return ApplicationOut.model_validate(row)


@app.get("/api/applications", response_model=list[ApplicationOut])
def api_my_applications(me: AuthIdentity = Depends(get_identity), db: Session = Depends(get_db)):
    return [ApplicationOut.model_validate(x) for x in applications.list_applications(db, me.id)]


@app.get("/api/jobs/{job_id}/applications", response_model=list[ApplicationOut])
def api_job_applications(job_id: int, me: AuthIdentity = Depends(get_identity), db: Session = Depends(get_db)):
    return [ApplicationOut.model_validate(x) for x in applications.list_job_applications(db, me.id, job_id)]


@app.patch("/api/applications/{application_id}", response_model=ApplicationOut)
def api_application_status(
    application_id: int,
    payload: ApplicationStatusIn,
    me: AuthIdentity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    row = applications.update_application_status(db, me.id, application_id, payload.status)
    return ApplicationOut.model_validate(row)


@app.get("/api/profile", response_model=ProfileOut)
def api_get_profile(me: AuthIdentity = Depends(get_identity), db: Session = Depends(get_db)):
    return ProfileOut.model_validate(profiles.require_profile(db, me.id))


@app.put("/api/profile", response_model=ProfileOut)
def api_put_profile(payload: ProfileIn, me: AuthIdentity = Depends(get_identity), db: Session = Depends(get_db)):
    return ProfileOut.model_validate(profiles.upsert_profile(db, me.id, me.email, payload))
