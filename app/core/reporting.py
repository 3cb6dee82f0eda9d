"""Weekly report generation utilities."""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple

from app.config import settings
from app.core.classification import categorize
from app.models.pull_request import CATEGORY_ORDER, CategorizedPR, MergedPullRequest, PRCategory
from app.models.report import ReportCategories, WeeklyReport

logger = logging.getLogger(__name__)


REPORT_TITLE = "Builder Weekly Report"
EMPTY_REPORT_LINE = "No PRs merged this week."
REPORT_FOOTER = "Generated automatically by Builder Automation."

SECTION_TITLES = {
    PRCategory.FEATURE: "Feature",
    PRCategory.FIX: "Fix",
    PRCategory.DOCS: "Docs",
    PRCategory.REFACTOR: "Refactor",
    PRCategory.OTHER: "Other",
}


def build_report(prs: List[MergedPullRequest], now: Optional[datetime] = None) -> WeeklyReport:
    """Categorize PRs and group them into a report for the trailing window."""
    now = now or datetime.now(timezone.utc)

    grouped: Dict[PRCategory, List[CategorizedPR]] = {category: [] for category in CATEGORY_ORDER}
    for pr in prs:
        categorized = CategorizedPR(**pr.model_dump(), category=categorize(pr))
        grouped[categorized.category].append(categorized)

    report = WeeklyReport(
        week_start=(now - timedelta(days=settings.report_window_days)).date(),
        week_end=now.date(),
        total=len(prs),
        categories=ReportCategories(**{category.value: items for category, items in grouped.items()}),
    )
    logger.info(
        f"Built report {report.key}: "
        + ", ".join(f"{category.value}={len(grouped[category])}" for category in CATEGORY_ORDER)
    )
    return report


def format_date_range(week_start: date, week_end: date) -> str:
    """'Jan 1–8' within a month, 'Jan 29–Feb 5' across months."""
    month_start = week_start.strftime("%b")
    month_end = week_end.strftime("%b")
    if month_start == month_end:
        return f"{month_start} {week_start.day}–{week_end.day}"
    return f"{month_start} {week_start.day}–{month_end} {week_end.day}"


def generate_markdown(report: WeeklyReport) -> str:
    """Render the human-readable form of a report."""
    lines = [f"# {REPORT_TITLE} — {format_date_range(report.week_start, report.week_end)}", ""]

    if report.total == 0:
        lines.extend([EMPTY_REPORT_LINE, ""])
    else:
        for category in CATEGORY_ORDER:
            prs = report.categories.get(category)
            if not prs:
                continue
            lines.extend([f"## {SECTION_TITLES[category]}", ""])
            lines.extend(f"- (#{pr.number}) {pr.title} — @{pr.author}" for pr in prs)
            lines.append("")

    lines.extend(["", "---", "", REPORT_FOOTER, ""])
    return "\n".join(lines)


def generate_weekly_report(store, fetch=None, now: Optional[datetime] = None) -> Tuple[str, WeeklyReport]:
    """
    Fetch merged PRs, build the report and persist both of its forms.

    Errors from the PR search or the store propagate to the caller.
    """
    if fetch is None:
        from app.providers.github import fetch_merged_prs as fetch

    now = now or datetime.now(timezone.utc)
    prs = fetch(now)
    report = build_report(prs, now)
    key = store.save(report)
    logger.info(f"Generated weekly report {key} with {report.total} PRs")
    return key, report
