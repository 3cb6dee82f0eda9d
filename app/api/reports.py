"""Weekly report endpoints."""

import logging
from typing import List

from fastapi import APIRouter, Depends

from app.api.auth import require_admin
from app.api.deps import report_store
from app.core.report_store import ReportStore
from app.core.reporting import generate_weekly_report

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/weekly-report")
def create_weekly_report(
    store: ReportStore = Depends(report_store),
    current_user=Depends(require_admin),
):
    """Fetch last week's merged PRs and save a new report."""
    logger.info(f"Weekly report requested by {current_user.subject}")
    filename, report = generate_weekly_report(store)
    return {
        "success": True,
        "filename": filename,
        "report": report.to_json_dict(),
    }


@router.get("/reports", response_model=List[str])
def list_reports(store: ReportStore = Depends(report_store)):
    """List report filenames, newest first."""
    return store.list()


@router.get("/reports/latest")
def get_latest_report(store: ReportStore = Depends(report_store)):
    """Get the most recent report."""
    filename, report, markdown = store.latest()
    return {
        "report": report.to_json_dict(),
        "markdown": markdown,
        "filename": filename,
    }


@router.get("/reports/{filename}")
def get_report(filename: str, store: ReportStore = Depends(report_store)):
    """Get a report by filename (e.g. weekly-2025-01-08)."""
    report, markdown = store.read(filename)
    return {
        "report": report.to_json_dict(),
        "markdown": markdown,
    }
