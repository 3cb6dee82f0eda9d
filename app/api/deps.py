"""Dependency providers for the routers (overridable in tests)."""

from app.core.newsletter import SubscriptionStore, get_subscription_store
from app.core.report_store import ReportStore, get_report_store
from app.core.social_media import SocialMediaService
from app.providers.luma import LumaProvider


def report_store() -> ReportStore:
    return get_report_store()


def subscription_store() -> SubscriptionStore:
    return get_subscription_store()


def luma_provider() -> LumaProvider:
    return LumaProvider()


def social_media_service() -> SocialMediaService:
    return SocialMediaService()
