"""Caller-side search state with stale-response discard.

Every filter change dispatches a new search. Responses may come back out of
order, so each dispatch gets a sequence number and only the response for the
latest dispatch is applied. Mutations happen on one event loop; no locking.
"""
from __future__ import annotations

import logging
from typing import Awaitable, Callable, Sequence

from ..errors import StoreError
from ..schemas import FilterConfig

logger = logging.getLogger(__name__)


class SearchSession:
    def __init__(self, filters: FilterConfig | None = None):
        self.filters = filters or FilterConfig()
        self.jobs: list = []
        self.error: StoreError | None = None
        self.loading = False
        self._latest_seq = 0
        self._applied_seq = 0

    @property
    def latest_seq(self) -> int:
        return self._latest_seq

    @property
    def applied_seq(self) -> int:
        return self._applied_seq

    def begin(self, filters: FilterConfig) -> int:
        self._latest_seq += 1
        self.filters = filters
        self.loading = True
        return self._latest_seq

    def complete(self, seq: int, jobs: Sequence | None = None, error: StoreError | None = None) -> bool:
        """Apply a response. Returns False when ``seq`` is stale and was dropped."""
        if seq != self._latest_seq:
            logger.debug("[search] discarding stale response seq=%d latest=%d", seq, self._latest_seq)
            return False
        self._applied_seq = seq
        self.loading = False
        if error is not None:
            self.jobs = []
            self.error = error
        else:
            self.jobs = list(jobs or [])
            self.error = None
        return True

    async def refresh(self, filters: FilterConfig, fetch: Callable[[FilterConfig, int], Awaitable[Sequence]]) -> bool:
        seq = self.begin(filters)
        try:
            jobs = await fetch(filters, seq)
        except StoreError as e:
            return self.complete(seq, error=e)
        finally:
            # an unexpected error still ends this search's loading state
            if seq == self._latest_seq:
                self.loading = False
        return self.complete(seq, jobs=jobs)
