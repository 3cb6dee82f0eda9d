"""Newsletter subscription model."""

import enum
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SubscriptionStatus(str, enum.Enum):
    """Subscription status enum."""

    ACTIVE = "active"
    UNSUBSCRIBED = "unsubscribed"


class NewsletterSubscription(BaseModel):
    """Newsletter subscription - one record per lowercased email."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    email: str
    subscribed_at: datetime = Field(alias="subscribedAt")
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE
    unsubscribe_token: str = Field(alias="unsubscribeToken")
    source: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status == SubscriptionStatus.ACTIVE

    def __repr__(self) -> str:
        return f"<NewsletterSubscription(email='{self.email}', status='{self.status.value}')>"


class SubscriptionCollection(BaseModel):
    """On-disk layout of the subscription file."""

    subscriptions: List[NewsletterSubscription] = Field(default_factory=list)
