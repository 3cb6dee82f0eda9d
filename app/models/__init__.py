"""Data models."""

from app.models.pull_request import CATEGORY_ORDER, CategorizedPR, MergedPullRequest, PRCategory
from app.models.report import ReportCategories, WeeklyReport
from app.models.subscription import NewsletterSubscription, SubscriptionCollection, SubscriptionStatus

__all__ = [
    "CATEGORY_ORDER",
    "CategorizedPR",
    "MergedPullRequest",
    "PRCategory",
    "ReportCategories",
    "WeeklyReport",
    "NewsletterSubscription",
    "SubscriptionCollection",
    "SubscriptionStatus",
]
