from typing import List, Optional

from pydantic import BaseModel
from sqlalchemy import or_
from sqlalchemy.orm import Query

from .models import JobORM, SkillORM


class JobFilters(BaseModel):
    location: Optional[str] = None
    is_remote: Optional[bool] = None
    min_salary: Optional[float] = None
    max_salary: Optional[float] = None
    skills: List[str] = []
    title: Optional[str] = None
    company: Optional[str] = None


def build_job_filters(
    location: Optional[str] = None,
    is_remote: Optional[bool] = None,
    min_salary: Optional[float] = None,
    max_salary: Optional[float] = None,
    skills: Optional[str] = None,
    title: Optional[str] = None,
    company: Optional[str] = None,
) -> JobFilters:
    """Turn raw query parameters into filters; blanks and non-positive salaries are dropped."""
    return JobFilters(
        location=(location or "").strip() or None,
        is_remote=is_remote,
        min_salary=min_salary if min_salary and min_salary > 0 else None,
        max_salary=max_salary if max_salary and max_salary > 0 else None,
        skills=[s.strip() for s in (skills or "").split(",") if s.strip()],
        title=(title or "").strip() or None,
        company=(company or "").strip() or None,
    )


def apply_filters(query: Query, filters: JobFilters) -> Query:
    if filters.location:
        pattern = f"%{filters.location}%"
        query = query.filter(
            or_(
                JobORM.city.ilike(pattern),
                JobORM.state.ilike(pattern),
                JobORM.full_address.ilike(pattern),
            )
        )
    if filters.is_remote is not None:
        query = query.filter(JobORM.is_remote == filters.is_remote)
    if filters.min_salary is not None:
        query = query.filter(JobORM.salary_min >= filters.min_salary)
    if filters.max_salary is not None:
        query = query.filter(JobORM.salary_max <= filters.max_salary)
    if filters.title:
        query = query.filter(JobORM.title.ilike(f"%{filters.title}%"))
    if filters.company:
        query = query.filter(JobORM.company_name.ilike(f"%{filters.company}%"))
    if filters.skills:
        query = query.filter(JobORM.skills.any(SkillORM.name.in_(filters.skills)))
    return query
