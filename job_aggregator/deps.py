# job_aggregator/deps.py
from fastapi import Header, HTTPException
from .aggregator import JobAggregator
from .config import settings
from .db import SessionLocal

aggregator = JobAggregator.from_settings(settings, SessionLocal)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_aggregator() -> JobAggregator:
    return aggregator


def require_api_key(x_api_key: str | None = Header(None)):
    """Require a matching X-API-Key header when API_KEY is configured.

    - If API_KEY is empty/missing, auth is effectively disabled (no-op).
    - If API_KEY is set and header doesn't match, raise 401.
    """
    if not settings.API_KEY:
        # auth disabled when no API key configured
        return
    if x_api_key != settings.API_KEY:
        raise HTTPException(status_code=401, detail="Unauthorized: invalid API key")
    return
