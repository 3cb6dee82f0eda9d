"""Celery tasks for scheduled reporting."""

import logging

from app.core.report_store import get_report_store
from app.core.reporting import generate_weekly_report
from app.worker.celery_app import celery_app

logger = logging.getLogger(__name__)


@celery_app.task
def generate_weekly_report_task() -> str:
    """Generate and save the weekly PR report; returns the report filename."""
    logger.info("Starting weekly report job")
    filename, report = generate_weekly_report(get_report_store())
    logger.info(f"Weekly report job finished: {filename} ({report.total} PRs)")
    return filename
