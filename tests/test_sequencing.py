"""
Tests for SearchSession: only the newest dispatched search may update state.
"""

import asyncio

import pytest

from jobboard.errors import StoreError
from jobboard.schemas import FilterConfig
from jobboard.services.sequencing import SearchSession


def test_sequence_numbers_increase():
    s = SearchSession()
    assert s.begin(FilterConfig()) == 1
    assert s.begin(FilterConfig(search_term="x")) == 2
    assert s.latest_seq == 2
    assert s.filters.search_term == "x"


def test_stale_response_is_discarded():
    s = SearchSession()
    old = s.begin(FilterConfig(search_term="py"))
    new = s.begin(FilterConfig(search_term="python"))

    assert s.complete(new, jobs=["fresh"]) is True
    assert s.complete(old, jobs=["stale"]) is False
    assert s.jobs == ["fresh"]
    assert s.applied_seq == new
    assert s.loading is False


def test_older_response_dropped_even_before_newer_arrives():
    s = SearchSession()
    old = s.begin(FilterConfig())
    s.begin(FilterConfig(location="remote"))

    assert s.complete(old, jobs=["stale"]) is False
    assert s.jobs == []
    assert s.loading is True


def test_failure_clears_results():
    s = SearchSession()
    seq = s.begin(FilterConfig())
    s.complete(seq, jobs=["a"])

    seq = s.begin(FilterConfig(search_term="b"))
    err = StoreError("down")
    assert s.complete(seq, error=err) is True
    assert s.jobs == []
    assert s.error is err

    seq = s.begin(FilterConfig())
    s.complete(seq, jobs=[])
    assert s.error is None


@pytest.mark.asyncio
async def test_refresh_out_of_order_completion():
    s = SearchSession()
    release_slow = asyncio.Event()

    async def fetch(filters, seq):
        if filters.search_term == "slow":
            await release_slow.wait()
            return ["slow result"]
        return ["fast result"]

    slow = asyncio.create_task(s.refresh(FilterConfig(search_term="slow"), fetch))
    await asyncio.sleep(0)
    fast_applied = await s.refresh(FilterConfig(search_term="fast"), fetch)
    release_slow.set()
    slow_applied = await slow

    assert fast_applied is True
    assert slow_applied is False
    assert s.jobs == ["fast result"]
    assert s.filters.search_term == "fast"


@pytest.mark.asyncio
async def test_refresh_records_store_error():
    s = SearchSession()

    async def fetch(filters, seq):
        raise StoreError("boom")

    assert await s.refresh(FilterConfig(), fetch) is True
    assert isinstance(s.error, StoreError)
    assert s.jobs == []


@pytest.mark.asyncio
async def test_unexpected_error_still_ends_loading():
    s = SearchSession()

    async def fetch(filters, seq):
        raise RuntimeError("bug in fetch")

    with pytest.raises(RuntimeError):
        await s.refresh(FilterConfig(), fetch)
    assert s.loading is False


@pytest.mark.asyncio
async def test_stale_unexpected_error_leaves_newer_search_loading():
    s = SearchSession()
    release = asyncio.Event()

    async def failing(filters, seq):
        await release.wait()
        raise RuntimeError("late failure")

    stale = asyncio.create_task(s.refresh(FilterConfig(search_term="old"), failing))
    await asyncio.sleep(0)
    s.begin(FilterConfig(search_term="new"))
    release.set()
    with pytest.raises(RuntimeError):
        await stale
    assert s.loading is True
