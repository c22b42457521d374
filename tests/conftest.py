"""Shared fixtures: in-memory database, sample provider payloads, mock HTTP."""

import os

# must run before job_aggregator.config is imported anywhere
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SCHEDULER_ENABLED", "false")

import httpx
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from job_aggregator.db import init_db

@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


def provider1_job(job_id="P1-001", **overrides):
    job = {
        "jobId": job_id,
        "title": "Backend Engineer",
        "details": {"location": "San Francisco, CA", "type": "Full-Time", "salaryRange": "$80k - $120k"},
        "company": {"name": "Acme Corp", "industry": "Technology"},
        "skills": ["Python", "FastAPI", "PostgreSQL"],
        "postedDate": "2024-01-15T10:00:00Z",
    }
    job.update(overrides)
    return job


def provider2_job(position="Data Engineer", **overrides):
    job = {
        "position": position,
        "location": {"city": "Austin", "state": "TX", "remote": False},
        "compensation": {"min": 90000, "max": 130000, "currency": "USD"},
        "employer": {"companyName": "DataWorks", "website": "https://dataworks.example"},
        "requirements": {"experience": 3, "technologies": ["Python", "Spark"]},
        "datePosted": "2024-02-01T09:30:00Z",
    }
    job.update(overrides)
    return job


@pytest.fixture
def provider1_payload():
    return {
        "metadata": {"requestId": "req-1", "timestamp": "2024-02-01T00:00:00Z"},
        "jobs": [
            provider1_job("P1-001"),
            provider1_job(
                "P1-002",
                title="Frontend Developer",
                details={"location": "Remote", "type": "Contract", "salaryRange": "80k-120K"},
                skills=["React", "TypeScript"],
            ),
            provider1_job(
                "P1-003",
                title="DevOps Engineer",
                details={"location": "Seattle, WA", "type": "Full-Time", "salaryRange": "Competitive"},
                skills=["Kubernetes", "Go"],
            ),
        ],
    }


@pytest.fixture
def provider2_payload():
    return {
        "status": "success",
        "data": {
            "jobsList": {
                "job-1": provider2_job("Data Engineer"),
                "job-2": provider2_job(
                    "Machine Learning Researcher",
                    location={"city": "Boston", "state": "MA", "remote": True},
                    requirements={"experience": 5, "technologies": ["PyTorch", "Python"]},
                ),
            }
        },
    }


def client_factory(handler):
    """Build an AsyncClient factory whose requests are answered by ``handler``."""
    return lambda: httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def make_provider1_job():
    return provider1_job


@pytest.fixture
def make_provider2_job():
    return provider2_job


@pytest.fixture
def mock_clients():
    return client_factory
