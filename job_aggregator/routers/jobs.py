import math
from datetime import datetime, timezone

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query
from sqlalchemy import desc, func, or_
from sqlalchemy.orm import Session, selectinload

from ..aggregator import JobAggregator
from ..deps import get_aggregator, get_db, require_api_key
from ..filters import apply_filters, build_job_filters
from ..logging_config import get_logger
from ..models import JobORM, SkillORM, job_skills
from ..schemas import (
    JobListResponse,
    JobOut,
    JobStats,
    JobStatsResponse,
    Pagination,
    SearchResponse,
    SingleJobResponse,
    TopSkill,
    TriggerResponse,
)

router = APIRouter(prefix="/jobs", tags=["jobs"])
logger = get_logger(__name__)


def _paginate(query, page: int, limit: int):
    total = query.order_by(None).count()
    rows = (
        query.options(selectinload(JobORM.skills))
        .order_by(JobORM.posted_date.desc(), JobORM.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    pagination = Pagination(total=total, page=page, limit=limit, total_pages=math.ceil(total / limit))
    return [JobOut.model_validate(r) for r in rows], pagination


@router.get("", response_model=JobListResponse)
def list_jobs(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    location: str | None = Query(None, description="substring of city, state or address"),
    is_remote: bool | None = Query(None),
    min_salary: float | None = Query(None),
    max_salary: float | None = Query(None),
    skills: str | None = Query(None, description="comma separated skill names"),
    title: str | None = Query(None),
    company: str | None = Query(None),
    db: Session = Depends(get_db),
):
    filters = build_job_filters(location, is_remote, min_salary, max_salary, skills, title, company)
    query = apply_filters(db.query(JobORM), filters)
    data, pagination = _paginate(query, page, limit)
    return JobListResponse(message=f"Retrieved {len(data)} jobs", data=data, pagination=pagination)


@router.get("/stats", response_model=JobStatsResponse)
def stats(db: Session = Depends(get_db)):
    total = db.query(func.count(JobORM.id)).scalar() or 0
    remote = db.query(func.count(JobORM.id)).filter(JobORM.is_remote.is_(True)).scalar() or 0
    job_count = func.count(job_skills.c.job_offer_id).label("job_count")
    rows = (
        db.query(SkillORM.name, job_count)
        .outerjoin(job_skills, job_skills.c.skill_id == SkillORM.id)
        .group_by(SkillORM.id, SkillORM.name)
        .order_by(desc(job_count), SkillORM.name)
        .limit(10)
        .all()
    )
    data = JobStats(
        total_jobs=total,
        remote_jobs=remote,
        remote_percentage=round(remote / total * 100) if total else 0,
        top_skills=[TopSkill(name=r.name, count=int(r.job_count)) for r in rows],
        last_updated=datetime.now(timezone.utc),
    )
    return JobStatsResponse(message="Statistics retrieved successfully", data=data)


@router.get("/search", response_model=SearchResponse)
def search(
    q: str = Query(..., description="matches title, company or skill"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    term = q.strip()
    if len(term) < 2:
        raise HTTPException(status_code=400, detail="Search query must be at least 2 characters")
    pattern = f"%{term}%"
    query = db.query(JobORM).filter(
        or_(
            JobORM.title.ilike(pattern),
            JobORM.company_name.ilike(pattern),
            JobORM.skills.any(SkillORM.name.ilike(pattern)),
        )
    )
    data, pagination = _paginate(query, page, limit)
    return SearchResponse(
        message=f'Found {pagination.total} jobs matching "{term}"',
        query=term,
        data=data,
        pagination=pagination,
    )


@router.post(
    "/admin/trigger-aggregation",
    response_model=TriggerResponse,
    dependencies=[Depends(require_api_key)],
)
def trigger_aggregation(
    background_tasks: BackgroundTasks,
    aggregator: JobAggregator = Depends(get_aggregator),
):
    """Start an aggregation run in the background and return immediately."""
    already_running = aggregator.is_running
    logger.info("Manual job aggregation triggered")
    background_tasks.add_task(aggregator.trigger)
    return TriggerResponse(
        success=True,
        message=(
            "Job aggregation already in progress" if already_running
            else "Job aggregation triggered successfully"
        ),
        triggered_at=datetime.now(timezone.utc),
        already_running=already_running,
    )


@router.get("/{job_id}", response_model=SingleJobResponse)
def get_job(job_id: int, db: Session = Depends(get_db)):
    job = db.query(JobORM).options(selectinload(JobORM.skills)).filter(JobORM.id == job_id).one_or_none()
    if job is None:
        raise HTTPException(status_code=404, detail=f"Job with ID {job_id} not found")
    return SingleJobResponse(message="Job retrieved successfully", data=JobOut.model_validate(job))
