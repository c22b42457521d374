from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from .aggregator import JobAggregator
from .config import Settings
from .logging_config import get_logger

logger = get_logger(__name__)

JOB_ID = "aggregate_jobs"


def start_scheduler(aggregator: JobAggregator, settings: Settings) -> Optional[BackgroundScheduler]:
    """Run ``aggregator.trigger`` on the configured crontab in a background thread."""
    if not settings.SCHEDULER_ENABLED:
        logger.info("Scheduler disabled; aggregation runs only on manual trigger.")
        return None

    scheduler = BackgroundScheduler(timezone="UTC")
    scheduler.add_job(
        aggregator.trigger,
        CronTrigger.from_crontab(settings.CRON_SCHEDULE, timezone="UTC"),
        id=JOB_ID,
        max_instances=1,
        coalesce=True,
        replace_existing=True,
    )
    scheduler.start()
    logger.info("Scheduled job aggregation with cron=%r", settings.CRON_SCHEDULE)
    return scheduler


def stop_scheduler(scheduler: Optional[BackgroundScheduler]) -> None:
    if scheduler is not None and scheduler.running:
        scheduler.shutdown(wait=False)
