"""Async HTTP client for the search endpoint, for Python callers.

Each ``search`` call goes through a SearchSession, so a slow response to an
older filter never overwrites the result of a newer one.
"""
from __future__ import annotations

import logging

import httpx

from .errors import StoreError
from .schemas import FilterConfig, JobPostingOut
from .services.sequencing import SearchSession

logger = logging.getLogger(__name__)


def filters_to_params(filters: FilterConfig) -> list[tuple[str, str]]:
    params: list[tuple[str, str]] = []
    if filters.search_term:
        params.append(("q", filters.search_term))
    for key in ("job_type", "experience_level", "company_size"):
        val = getattr(filters, key)
        if val:
            params.append((key, val))
    if filters.location:
        params.append(("location", filters.location))
    lo, hi = filters.salary_range
    params.append(("salary_min", str(lo)))
    params.append(("salary_max", str(hi)))
    if filters.date_posted:
        params.append(("date_posted", filters.date_posted))
    params.append(("sort_by", filters.sort_by))
    for tag in sorted(filters.quick_filters):
        params.append(("quick", tag))
    return params


class JobBoardClient:
    def __init__(self, http: httpx.AsyncClient, session: SearchSession | None = None):
        self.http = http
        self.session = session or SearchSession()

    async def _fetch(self, filters: FilterConfig, seq: int) -> list[JobPostingOut]:
        params = filters_to_params(filters) + [("seq", str(seq))]
        try:
            r = await self.http.get("/api/jobs", params=params)
            r.raise_for_status()
            return [JobPostingOut.model_validate(x) for x in r.json()]
        except httpx.HTTPError as e:
            logger.warning("[client] search seq=%d failed: %s", seq, e)
            raise StoreError("job search failed") from e
        except (ValueError, TypeError) as e:
            # undecodable JSON or rows that do not fit JobPostingOut
            logger.warning("[client] search seq=%d returned a malformed body: %s", seq, e)
            raise StoreError("job search returned a malformed response") from e

    async def search(self, filters: FilterConfig) -> bool:
        """Run a search; True if its result became the session's current one."""
        return await self.session.refresh(filters, self._fetch)
