from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .config import settings

JobType = Literal["full-time", "part-time", "contract", "internship", "remote"]
ExperienceLevel = Literal["entry", "mid", "senior", "executive"]
CompanySize = Literal["startup", "small", "medium", "large"]
UserType = Literal["jobseeker", "recruiter"]
ApplicationStatus = Literal["pending", "reviewed", "accepted", "rejected"]
SortBy = Literal["date", "salary", "company", "relevance"]
QuickFilter = Literal["remote", "entry-level", "high-salary", "full-time", "startup", "tech"]


def _default_salary_range() -> tuple[int, int]:
    return (settings.SALARY_FLOOR, settings.SALARY_CEILING)


class FilterConfig(BaseModel):
    """Search filters as chosen in the UI.

    Immutable; an empty or default field imposes no predicate. Accepts both
    snake_case and the UI's camelCase field names.
    """

    search_term: str = ""
    job_type: Optional[JobType] = None
    location: str = ""
    experience_level: Optional[ExperienceLevel] = None
    salary_range: tuple[int, int] = Field(default_factory=_default_salary_range)
    date_posted: str = ""
    company_size: Optional[CompanySize] = None
    sort_by: SortBy = "date"
    quick_filters: frozenset[QuickFilter] = frozenset()

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    @field_validator("job_type", "experience_level", "company_size", mode="before")
    @classmethod
    def _blank_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("search_term", "location", "date_posted", mode="before")
    @classmethod
    def _strip(cls, v):
        if v is None:
            return ""
        return v.strip() if isinstance(v, str) else v

    @model_validator(mode="after")
    def _check_salary_range(self):
        lo, hi = self.salary_range
        if lo < 0 or hi < 0:
            raise ValueError("salary bounds must not be negative")
        if lo > hi:
            raise ValueError(f"salary minimum {lo} is greater than maximum {hi}")
        return self


class JobPostingIn(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    company: Optional[str] = Field(default=None, max_length=300)
    location: str = Field(min_length=1, max_length=300)
    job_type: JobType = "full-time"
    salary_min: Optional[float] = Field(default=None, ge=0)
    salary_max: Optional[float] = Field(default=None, ge=0)
    salary_currency: Optional[str] = Field(default=None, max_length=10)
    description: str = Field(min_length=1)
    requirements: Optional[str] = None
    benefits: Optional[str] = None
    experience_level: Optional[ExperienceLevel] = "mid"
    company_size: Optional[CompanySize] = None

    @model_validator(mode="after")
    def _check_salary(self):
        if self.salary_min is not None and self.salary_max is not None and self.salary_min > self.salary_max:
            raise ValueError("salary_min must not exceed salary_max")
        return self


class JobPostingOut(BaseModel):
    id: int
    title: str
    company: str
    location: str
    job_type: str
    salary_min: float | None
    salary_max: float | None
    salary_currency: str
    description: str
    requirements: str | None
    benefits: str | None
    experience_level: str | None
    company_size: str | None
    posted_by: str
    is_active: bool
    created_at: datetime | None
    updated_at: datetime | None
    expires_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class JobSummaryOut(BaseModel):
    id: int
    title: str
    company: str
    location: str
    job_type: str

    model_config = ConfigDict(from_attributes=True)


class ApplicationIn(BaseModel):
    cover_letter: Optional[str] = None
    resume_url: Optional[str] = Field(default=None, max_length=1000)


class ApplicationStatusIn(BaseModel):
    status: ApplicationStatus


class ApplicationOut(BaseModel):
    id: int
    job_id: int
    applicant_id: str
    status: str
    cover_letter: str | None
    resume_url: str | None
    applied_at: datetime | None
    job: JobSummaryOut | None = None

    model_config = ConfigDict(from_attributes=True)


class ProfileIn(BaseModel):
    user_type: UserType
    first_name: str = Field(min_length=1, max_length=120)
    last_name: str = Field(min_length=1, max_length=120)
    company: Optional[str] = Field(default=None, max_length=300)

    @model_validator(mode="after")
    def _recruiter_needs_company(self):
        if self.user_type == "recruiter" and not (self.company or "").strip():
            raise ValueError("recruiters must provide a company")
        return self


class ProfileOut(BaseModel):
    id: str
    email: str
    user_type: str
    first_name: str
    last_name: str
    company: str | None
    created_at: datetime | None

    model_config = ConfigDict(from_attributes=True)
