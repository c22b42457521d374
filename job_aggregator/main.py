from fastapi import FastAPI

from .config import settings
from .db import init_db
from .deps import aggregator
from .logging_config import configure_logging, get_logger
from .routers import jobs as jobs_router
from .scheduler import start_scheduler, stop_scheduler

configure_logging()
logger = get_logger(__name__)

app = FastAPI(title=settings.APP_NAME, version="1.0.0")

# ✅ Mount routers explicitly
app.include_router(jobs_router.router)

_scheduler = None


@app.on_event("startup")
def _on_startup():
    global _scheduler
    # create tables on startup (development convenience). Use migrations for prod.
    init_db()
    try:
        _scheduler = start_scheduler(aggregator, settings)
    except Exception as e:
        # do not crash app if scheduling fails (e.g. a malformed CRON_SCHEDULE)
        logger.error("Failed to start scheduler: %s", e)


@app.on_event("shutdown")
def _on_shutdown():
    stop_scheduler(_scheduler)


@app.get("/health")
def health():
    return {"ok": True, "env": settings.APP_ENV}
