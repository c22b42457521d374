from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, List, Optional, Union
from datetime import datetime


# -----------------------
# Canonical listing
# -----------------------
class UnifiedListing(BaseModel):
    """One job posting after normalization, before it is stored."""

    external_id: str
    title: str
    city: str
    state: str
    full_address: str
    is_remote: bool = False
    employment_type: str
    salary_min: Optional[Decimal] = None
    salary_max: Optional[Decimal] = None
    salary_currency: str = "USD"
    salary_original_range: Optional[str] = None  # raw source text, kept for audit
    company_name: str
    company_industry: Optional[str] = None
    company_website: Optional[str] = None
    experience_years: Optional[int] = None
    skills: List[str] = Field(default_factory=list)
    posted_date: datetime
    provider: str


# -----------------------
# Provider 1 payload
# -----------------------
# Raw records are lenient on purpose: upstream data is partially malformed and
# the normalizers decide what each bad field degrades to.
class _RawModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class Provider1Details(_RawModel):
    location: Optional[Any] = None
    type: Optional[Any] = None
    salaryRange: Optional[Any] = None


class Provider1Company(_RawModel):
    name: Optional[Any] = None
    industry: Optional[Any] = None


class Provider1Job(_RawModel):
    jobId: Optional[Any] = None
    title: Optional[Any] = None
    details: Optional[Provider1Details] = None
    company: Optional[Provider1Company] = None
    skills: Optional[Any] = None
    postedDate: Optional[Any] = None


class Provider1Response(_RawModel):
    metadata: Optional[Dict[str, Any]] = None
    jobs: List[Any] = Field(default_factory=list)


# -----------------------
# Provider 2 payload
# -----------------------
class Provider2Location(_RawModel):
    city: Optional[Any] = None
    state: Optional[Any] = None
    remote: Optional[Any] = None


class Provider2Compensation(_RawModel):
    min: Optional[Any] = None
    max: Optional[Any] = None
    currency: Optional[Any] = None


class Provider2Employer(_RawModel):
    companyName: Optional[Any] = None
    website: Optional[Any] = None


class Provider2Requirements(_RawModel):
    experience: Optional[Any] = None
    technologies: Optional[Any] = None


class Provider2Job(_RawModel):
    position: Optional[Any] = None
    location: Optional[Provider2Location] = None
    compensation: Optional[Provider2Compensation] = None
    employer: Optional[Provider2Employer] = None
    requirements: Optional[Provider2Requirements] = None
    datePosted: Optional[Any] = None


class Provider2Data(_RawModel):
    jobsList: Union[Dict[str, Any], List[Any]] = Field(default_factory=dict)


class Provider2Response(_RawModel):
    status: str
    data: Provider2Data


# -----------------------
# API responses
# -----------------------
class JobOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    external_id: str
    title: str
    city: Optional[str] = None
    state: Optional[str] = None
    full_address: str
    is_remote: bool
    employment_type: str
    salary_min: Optional[Decimal] = None
    salary_max: Optional[Decimal] = None
    salary_currency: str
    salary_original_range: Optional[str] = None
    company_name: str
    company_industry: Optional[str] = None
    company_website: Optional[str] = None
    experience_years: Optional[int] = None
    skills: List[str] = []
    posted_date: datetime
    fetched_date: datetime
    provider: str

    @field_validator("skills", mode="before")
    @classmethod
    def _skill_names(cls, value):
        # ORM rows carry SkillORM objects; the API exposes their names
        return [getattr(s, "name", s) for s in value or []]


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int


class JobListResponse(BaseModel):
    success: bool = True
    message: str
    data: List[JobOut] = []
    pagination: Pagination


class SearchResponse(JobListResponse):
    query: str


class SingleJobResponse(BaseModel):
    success: bool = True
    message: str
    data: JobOut


class TopSkill(BaseModel):
    name: str
    count: int


class JobStats(BaseModel):
    total_jobs: int
    remote_jobs: int
    remote_percentage: int
    top_skills: List[TopSkill] = []
    last_updated: datetime


class JobStatsResponse(BaseModel):
    success: bool = True
    message: str
    data: JobStats


class TriggerResponse(BaseModel):
    success: bool
    message: str
    triggered_at: datetime
    already_running: bool = False


__all__ = [
    "UnifiedListing",
    "Provider1Job",
    "Provider1Response",
    "Provider2Job",
    "Provider2Response",
    "JobOut",
    "JobListResponse",
    "SearchResponse",
    "SingleJobResponse",
    "JobStatsResponse",
    "TriggerResponse",
]
