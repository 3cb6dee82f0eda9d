"""Celery application configuration."""

import logging

from celery import Celery
from celery.schedules import crontab
from celery.signals import setup_logging

from app.config import settings

logger = logging.getLogger(__name__)

celery_app = Celery(
    "builder_automation",
    broker=settings.redis_url,
    backend=settings.redis_url,
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone=settings.timezone,
    enable_utc=True,
    task_track_started=True,
    task_time_limit=600,  # 10 minutes
    task_soft_time_limit=540,
    # Import tasks when worker starts
    imports=("app.worker.tasks",),
)


@setup_logging.connect
def configure_worker_logging(**kwargs):
    from app.logging_config import configure_logging

    configure_logging()


# Parse run time (HH:MM format)
try:
    run_hour, run_minute = map(int, settings.weekly_report_time_hhmm.split(":"))
except ValueError:
    logger.warning(f"Invalid WEEKLY_REPORT_TIME_HHMM {settings.weekly_report_time_hhmm!r}, using 17:00")
    run_hour, run_minute = 17, 0

# Celery Beat schedule
# Note: timezone is set globally in celery_app.conf.timezone above
celery_app.conf.beat_schedule = {
    "weekly-report": {
        "task": "app.worker.tasks.generate_weekly_report_task",
        "schedule": crontab(
            hour=run_hour,
            minute=run_minute,
            day_of_week=settings.weekly_report_day_of_week,
        ),
    },
}
