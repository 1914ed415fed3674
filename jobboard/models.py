from sqlalchemy import Column, Integer, String, DateTime, Text, Float, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from .db import Base

JOB_TYPES = ("full-time", "part-time", "contract", "internship", "remote")
EXPERIENCE_LEVELS = ("entry", "mid", "senior", "executive")
COMPANY_SIZES = ("startup", "small", "medium", "large")
USER_TYPES = ("jobseeker", "recruiter")
APPLICATION_STATUSES = ("pending", "reviewed", "accepted", "rejected")


class UserProfile(Base):
    __tablename__ = "users"
    # id is the auth provider's opaque user identifier
    id = Column(String(64), primary_key=True)
    email = Column(String(320), nullable=False, index=True)
    user_type = Column(String(20), nullable=False)
    first_name = Column(String(120), nullable=False)
    last_name = Column(String(120), nullable=False)
    company = Column(String(300), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())


class JobPosting(Base):
    __tablename__ = "job_postings"
    id = Column(Integer, primary_key=True)
    title = Column(String(300), nullable=False, index=True)
    company = Column(String(300), nullable=False, index=True)
    location = Column(String(300), nullable=False, index=True)
    job_type = Column(String(20), nullable=False, index=True)
    salary_min = Column(Float, nullable=True)
    salary_max = Column(Float, nullable=True)
    salary_currency = Column(String(10), nullable=False, default="USD")
    description = Column(Text, nullable=False)
    requirements = Column(Text, nullable=True)
    benefits = Column(Text, nullable=True)
    experience_level = Column(String(20), nullable=True, index=True)
    company_size = Column(String(20), nullable=True, index=True)
    posted_by = Column(String(64), ForeignKey("users.id"), nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    expires_at = Column(DateTime(timezone=True), nullable=True, index=True)

    applications = relationship("Application", back_populates="job")


class Application(Base):
    __tablename__ = "applications"
    id = Column(Integer, primary_key=True)
    job_id = Column(Integer, ForeignKey("job_postings.id"), nullable=False, index=True)
    applicant_id = Column(String(64), ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="pending")
    cover_letter = Column(Text, nullable=True)
    resume_url = Column(String(1000), nullable=True)

    applied_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    job = relationship("JobPosting", back_populates="applications")

    __table_args__ = (
        UniqueConstraint("job_id", "applicant_id", name="uq_application_job_applicant"),
    )
