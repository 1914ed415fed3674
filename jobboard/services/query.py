"""Job search: turn a FilterConfig into a store query, then order the rows.

Filtering is pushed down to the store as ANDed predicates. The secondary
ordering (salary, company, relevance) is applied in memory to the rows the
store returns, so every ``sort_by`` shares one query shape.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Iterable, Mapping

from pydantic import ValidationError as PydanticValidationError
from pyuca import Collator
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from ..config import settings
from ..errors import StoreError, ValidationError
from ..models import JobPosting
from ..schemas import FilterConfig

logger = logging.getLogger(__name__)

DATE_POSTED_WINDOWS: dict[str, timedelta] = {
    "24h": timedelta(hours=24),
    "3d": timedelta(days=3),
    "1w": timedelta(days=7),
    "1m": timedelta(days=30),
}


def _like_escape(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", r"\%").replace("_", r"\_")


def _contains(column, term: str):
    return column.ilike(f"%{_like_escape(term)}%", escape="\\")


def _remote_clause():
    return or_(JobPosting.job_type == "remote", _contains(JobPosting.location, "remote"))


def _tech_clause():
    return or_(*[_contains(JobPosting.title, t) for t in settings.TECH_TITLE_TERMS])


QUICK_FILTERS: dict[str, Callable[[], Any]] = {
    "remote": _remote_clause,
    "entry-level": lambda: JobPosting.experience_level == "entry",
    "high-salary": lambda: JobPosting.salary_min >= settings.HIGH_SALARY_THRESHOLD,
    "full-time": lambda: JobPosting.job_type == "full-time",
    "startup": lambda: JobPosting.company_size == "startup",
    "tech": _tech_clause,
}


def parse_filters(raw: Mapping[str, Any] | FilterConfig | None) -> FilterConfig:
    """Validate loose caller input (camelCase or snake_case keys)."""
    if raw is None:
        return FilterConfig()
    if isinstance(raw, FilterConfig):
        return raw
    try:
        return FilterConfig.model_validate(dict(raw))
    except PydanticValidationError as e:
        raise ValidationError(str(e)) from e


def date_cutoff(bucket: str, now: datetime) -> datetime | None:
    window = DATE_POSTED_WINDOWS.get(bucket)
    if window is None:
        return None
    return now - window


def build_predicates(filters: FilterConfig, now: datetime) -> list:
    """Return the ANDed clauses for ``filters``; always starts with is_active.

    Salary bounds only apply when they differ from the slider defaults.
    A posting with no value in the bounded salary column never matches an
    active bound.
    """
    preds = [JobPosting.is_active.is_(True)]

    if filters.search_term:
        term = filters.search_term
        preds.append(
            or_(
                _contains(JobPosting.title, term),
                _contains(JobPosting.company, term),
                _contains(JobPosting.description, term),
            )
        )

    if filters.job_type:
        preds.append(JobPosting.job_type == filters.job_type)

    if filters.location:
        preds.append(_contains(JobPosting.location, filters.location))

    if filters.experience_level:
        preds.append(JobPosting.experience_level == filters.experience_level)

    if filters.company_size:
        preds.append(JobPosting.company_size == filters.company_size)

    lo, hi = filters.salary_range
    if lo > settings.SALARY_FLOOR:
        preds.append(JobPosting.salary_min >= lo)
    if hi < settings.SALARY_CEILING:
        preds.append(JobPosting.salary_max <= hi)

    cutoff = date_cutoff(filters.date_posted, now)
    if cutoff is not None:
        preds.append(JobPosting.created_at >= cutoff)

    for tag in sorted(filters.quick_filters):
        preds.append(QUICK_FILTERS[tag]())

    return preds


def build_query(db: Session, filters: FilterConfig, now: datetime) -> Query:
    return (
        db.query(JobPosting)
        .filter(*build_predicates(filters, now))
        .order_by(JobPosting.created_at.desc(), JobPosting.id.desc())
    )


def relevance_score(job: JobPosting, term: str) -> int:
    t = term.lower()
    score = 0
    if t in (job.title or "").lower():
        score += 2
    if t in (job.company or "").lower():
        score += 1
    return score


@lru_cache(maxsize=1)
def _collator() -> Collator:
    # Unicode collation (DUCET): accents and case are secondary to the base letter
    return Collator()


def _created_key(job: JobPosting):
    # postings without a timestamp sort last
    return (job.created_at is not None, job.created_at)


def sort_jobs(jobs: Iterable[JobPosting], sort_by: str, search_term: str = "") -> list[JobPosting]:
    """Order already-filtered rows. Every ordering is stable."""
    out = list(jobs)
    if sort_by == "salary":
        out.sort(key=lambda j: j.salary_max or 0, reverse=True)
    elif sort_by == "company":
        collator = _collator()
        out.sort(key=lambda j: collator.sort_key(j.company or ""))
    elif sort_by == "relevance":
        if search_term:
            out.sort(key=lambda j: relevance_score(j, search_term), reverse=True)
    else:
        out.sort(key=_created_key, reverse=True)
    return out


def search_jobs(db: Session, filters: FilterConfig, now: datetime | None = None) -> list[JobPosting]:
    """Run one search. Raises StoreError on any store failure, never retries."""
    now = now or datetime.now(timezone.utc)
    try:
        rows = build_query(db, filters, now).all()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("[search] store query failed: %s", e)
        raise StoreError("job search failed") from e

    jobs = sort_jobs(rows, filters.sort_by, filters.search_term)
    logger.debug("[search] %d postings, sort_by=%s", len(jobs), filters.sort_by)
    return jobs
