"""
Tests for the in-memory ordering applied after the store query.
"""

from datetime import datetime, timezone
from types import SimpleNamespace

from jobboard.services.query import relevance_score, sort_jobs


def job(title="Job", company="Co", salary_max=None, created_at=None):
    return SimpleNamespace(title=title, company=company, salary_max=salary_max, created_at=created_at)


def titles(jobs):
    return [j.title for j in jobs]


def test_relevance_score_weights():
    j = job(title="Data Engineer", company="DataCorp")
    assert relevance_score(j, "data") == 3
    assert relevance_score(j, "engineer") == 2
    assert relevance_score(j, "corp") == 1
    assert relevance_score(j, "chef") == 0


def test_relevance_ties_keep_input_order():
    jobs = [job("Alpha dev"), job("Beta"), job("Gamma dev"), job("Delta dev")]
    assert titles(sort_jobs(jobs, "relevance", "dev")) == ["Alpha dev", "Gamma dev", "Delta dev", "Beta"]


def test_relevance_without_term_keeps_input_order():
    jobs = [job("B"), job("A"), job("C")]
    assert titles(sort_jobs(jobs, "relevance", "")) == ["B", "A", "C"]


def test_salary_descending_missing_counts_as_zero():
    jobs = [job("none"), job("low", salary_max=50000), job("high", salary_max=150000), job("zero", salary_max=0)]
    assert titles(sort_jobs(jobs, "salary")) == ["high", "low", "none", "zero"]


def test_company_ascending_ignores_case():
    jobs = [job("1", company="zenith"), job("2", company="Acme"), job("3", company="beta")]
    assert [j.company for j in sort_jobs(jobs, "company")] == ["Acme", "beta", "zenith"]


def test_company_accented_names_collate_with_base_letter():
    jobs = [job("1", company="Zenith"), job("2", company="Émile"), job("3", company="Acme"), job("4", company="Éclair")]
    assert [j.company for j in sort_jobs(jobs, "company")] == ["Acme", "Éclair", "Émile", "Zenith"]


def test_date_descending_with_missing_last():
    t = lambda h: datetime(2026, 10, 19, h, tzinfo=timezone.utc)
    jobs = [job("old", created_at=t(1)), job("none"), job("new", created_at=t(9)), job("mid", created_at=t(5))]
    assert titles(sort_jobs(jobs, "date")) == ["new", "mid", "old", "none"]


def test_sort_does_not_mutate_input():
    jobs = [job("a", salary_max=1), job("b", salary_max=2)]
    sort_jobs(jobs, "salary")
    assert titles(jobs) == ["a", "b"]
