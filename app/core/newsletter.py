"""Newsletter subscription store."""

import json
import logging
import os
import secrets
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from app.config import settings
from app.core.errors import AlreadySubscribedError, StorageError
from app.models.subscription import NewsletterSubscription, SubscriptionCollection, SubscriptionStatus

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32


def generate_unsubscribe_token() -> str:
    """Random unsubscribe token (64 hex chars)."""
    return secrets.token_hex(TOKEN_BYTES)


class SubscriptionBackend(ABC):
    """Loads and saves the whole subscription collection."""

    @abstractmethod
    def load(self) -> List[NewsletterSubscription]:
        pass

    @abstractmethod
    def save(self, subscriptions: List[NewsletterSubscription]) -> None:
        pass


class InMemorySubscriptionBackend(SubscriptionBackend):
    """Backend holding the collection in memory (serialized, so records are copies)."""

    def __init__(self):
        self._data = SubscriptionCollection().model_dump_json()

    def load(self) -> List[NewsletterSubscription]:
        return SubscriptionCollection.model_validate_json(self._data).subscriptions

    def save(self, subscriptions: List[NewsletterSubscription]) -> None:
        self._data = SubscriptionCollection(subscriptions=subscriptions).model_dump_json(by_alias=True)


class JsonFileSubscriptionBackend(SubscriptionBackend):
    """Backend storing {"subscriptions": [...]} in a JSON file."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path or settings.subscriptions_file)

    def load(self) -> List[NewsletterSubscription]:
        if not self.path.exists():
            self.save([])
            return []

        try:
            collection = SubscriptionCollection.model_validate_json(self.path.read_text(encoding="utf-8"))
        except PydanticValidationError as e:
            logger.error(f"Failed to load newsletter subscriptions from {self.path}: {e.error_count()} errors")
            raise StorageError(f"Failed to load newsletter subscriptions: {self.path} is invalid") from e
        return collection.subscriptions

    def save(self, subscriptions: List[NewsletterSubscription]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = SubscriptionCollection(subscriptions=subscriptions).model_dump(mode="json", by_alias=True)

        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        os.replace(tmp_path, self.path)


class SubscriptionStore:
    """
    Newsletter subscriptions keyed by lowercased email.

    Every mutation is a read-modify-write of the whole collection, serialized
    by a process-local lock (single-process deployment).
    """

    def __init__(self, backend: Optional[SubscriptionBackend] = None):
        self.backend = backend or JsonFileSubscriptionBackend()
        self._lock = threading.Lock()

    @staticmethod
    def _find_email(subscriptions: List[NewsletterSubscription], email: str) -> Optional[NewsletterSubscription]:
        email = email.lower()
        return next((sub for sub in subscriptions if sub.email.lower() == email), None)

    def add_subscription(self, email: str, source: Optional[str] = None) -> NewsletterSubscription:
        """
        Subscribe an email.

        Raises:
            AlreadySubscribedError: the email already has an active subscription
        """
        with self._lock:
            subscriptions = self.backend.load()
            existing = self._find_email(subscriptions, email)

            if existing is not None:
                if existing.is_active:
                    raise AlreadySubscribedError(existing.email)

                existing.status = SubscriptionStatus.ACTIVE
                existing.subscribed_at = datetime.now(timezone.utc)
                existing.unsubscribe_token = generate_unsubscribe_token()
                if source:
                    existing.source = source
                self.backend.save(subscriptions)
                logger.info(f"Re-subscribed: {existing.email}")
                return existing

            subscription = NewsletterSubscription(
                email=email.lower(),
                subscribed_at=datetime.now(timezone.utc),
                status=SubscriptionStatus.ACTIVE,
                unsubscribe_token=generate_unsubscribe_token(),
                source=source,
            )
            subscriptions.append(subscription)
            self.backend.save(subscriptions)
            logger.info(f"New subscriber: {subscription.email}")
            return subscription

    def unsubscribe_email(self, email: str, token: str) -> Optional[NewsletterSubscription]:
        """Unsubscribe the record matching both email and token, whatever its status."""
        email = email.lower()
        with self._lock:
            subscriptions = self.backend.load()
            subscription = next(
                (sub for sub in subscriptions if sub.email.lower() == email and sub.unsubscribe_token == token),
                None,
            )
            if subscription is None:
                logger.warning(f"Unsubscribe failed, no match for {email}")
                return None

            subscription.status = SubscriptionStatus.UNSUBSCRIBED
            self.backend.save(subscriptions)
            logger.info(f"Unsubscribed: {subscription.email}")
            return subscription

    def unsubscribe_by_token(self, token: str) -> Optional[NewsletterSubscription]:
        """Unsubscribe the active record holding the token (unsubscribe links)."""
        with self._lock:
            subscriptions = self.backend.load()
            subscription = next(
                (sub for sub in subscriptions if sub.unsubscribe_token == token and sub.is_active),
                None,
            )
            if subscription is None:
                logger.warning("Unsubscribe failed, unknown or inactive token")
                return None

            subscription.status = SubscriptionStatus.UNSUBSCRIBED
            self.backend.save(subscriptions)
            logger.info(f"Unsubscribed: {subscription.email}")
            return subscription

    def get_by_email(self, email: str) -> Optional[NewsletterSubscription]:
        """Subscription for an email, any status."""
        with self._lock:
            return self._find_email(self.backend.load(), email)

    def active_subscriptions(self) -> List[NewsletterSubscription]:
        """All active subscriptions."""
        # Loading may initialise the backing file, so reads take the lock too
        with self._lock:
            return [sub for sub in self.backend.load() if sub.is_active]

    def count(self) -> int:
        """Number of active subscriptions."""
        return len(self.active_subscriptions())


_store: Optional[SubscriptionStore] = None


def get_subscription_store() -> SubscriptionStore:
    """Process-wide subscription store."""
    global _store
    if _store is None:
        _store = SubscriptionStore()
    return _store
