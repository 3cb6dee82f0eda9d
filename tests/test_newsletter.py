"""Tests for the newsletter subscription store."""

import json

import pytest

from app.core.errors import AlreadySubscribedError, StorageError
from app.core.newsletter import (
    InMemorySubscriptionBackend,
    JsonFileSubscriptionBackend,
    SubscriptionStore,
    generate_unsubscribe_token,
)
from app.models.subscription import SubscriptionStatus


@pytest.fixture
def store():
    return SubscriptionStore(InMemorySubscriptionBackend())


def test_token_format():
    """Test unsubscribe tokens are 64 hex characters and unique."""
    token = generate_unsubscribe_token()
    assert len(token) == 64
    int(token, 16)
    assert token != generate_unsubscribe_token()


def test_add_subscription(store):
    """Test a new subscription is stored lowercased and active."""
    subscription = store.add_subscription("Satoshi@Example.com", source="homepage")

    assert subscription.email == "satoshi@example.com"
    assert subscription.status == SubscriptionStatus.ACTIVE
    assert subscription.source == "homepage"
    assert len(subscription.unsubscribe_token) == 64
    assert store.count() == 1


def test_duplicate_is_case_insensitive(store):
    """Test subscribing twice with different case conflicts."""
    store.add_subscription("a@example.com")
    with pytest.raises(AlreadySubscribedError):
        store.add_subscription("A@EXAMPLE.COM")
    assert store.count() == 1


def test_resubscribe_reuses_record(store):
    """Test resubscribing reactivates the record with a fresh token."""
    first = store.add_subscription("a@example.com", source="footer")
    store.unsubscribe_by_token(first.unsubscribe_token)

    second = store.add_subscription("A@example.com")

    assert second.status == SubscriptionStatus.ACTIVE
    assert second.unsubscribe_token != first.unsubscribe_token
    assert second.source == "footer"
    assert len(store.backend.load()) == 1


def test_unsubscribe_email_requires_matching_pair(store):
    """Test unsubscribe by email needs both email and token to match."""
    subscription = store.add_subscription("a@example.com")
    store.add_subscription("b@example.com")

    assert store.unsubscribe_email("b@example.com", subscription.unsubscribe_token) is None
    assert store.count() == 2

    result = store.unsubscribe_email("A@Example.com", subscription.unsubscribe_token)
    assert result.status == SubscriptionStatus.UNSUBSCRIBED
    assert store.count() == 1


def test_unsubscribe_email_ignores_status(store):
    """Test unsubscribing an already unsubscribed record by email still matches."""
    subscription = store.add_subscription("a@example.com")
    store.unsubscribe_email("a@example.com", subscription.unsubscribe_token)

    again = store.unsubscribe_email("a@example.com", subscription.unsubscribe_token)
    assert again is not None
    assert again.status == SubscriptionStatus.UNSUBSCRIBED


def test_unsubscribe_by_token_requires_active(store):
    """Test a token only works once."""
    subscription = store.add_subscription("a@example.com")

    assert store.unsubscribe_by_token(subscription.unsubscribe_token).email == "a@example.com"
    assert store.unsubscribe_by_token(subscription.unsubscribe_token) is None
    assert store.unsubscribe_by_token("f" * 64) is None


def test_get_by_email_any_status(store):
    """Test lookup returns unsubscribed records too."""
    subscription = store.add_subscription("a@example.com")
    store.unsubscribe_by_token(subscription.unsubscribe_token)

    found = store.get_by_email("A@EXAMPLE.com")
    assert found.status == SubscriptionStatus.UNSUBSCRIBED
    assert store.get_by_email("nobody@example.com") is None
    assert store.active_subscriptions() == []


def test_json_backend_creates_file(tmp_path):
    """Test the JSON backend initialises a missing file."""
    path = tmp_path / "content" / "newsletter-subscriptions.json"
    store = SubscriptionStore(JsonFileSubscriptionBackend(path))

    assert store.count() == 0
    assert json.loads(path.read_text(encoding="utf-8")) == {"subscriptions": []}


def test_json_backend_persists(tmp_path):
    """Test records survive a new store instance and use camelCase keys."""
    path = tmp_path / "subs.json"
    SubscriptionStore(JsonFileSubscriptionBackend(path)).add_subscription("a@example.com", source="flyer")

    raw = json.loads(path.read_text(encoding="utf-8"))["subscriptions"][0]
    assert raw["email"] == "a@example.com"
    assert raw["status"] == "active"
    assert set(raw) >= {"subscribedAt", "unsubscribeToken"}

    reloaded = SubscriptionStore(JsonFileSubscriptionBackend(path))
    assert reloaded.get_by_email("a@example.com").source == "flyer"


def test_json_backend_rejects_invalid_file(tmp_path):
    """Test a file that does not match the schema raises StorageError."""
    path = tmp_path / "subs.json"
    path.write_text('{"subscriptions": [{"email": "x@y.z"}]}', encoding="utf-8")
    store = SubscriptionStore(JsonFileSubscriptionBackend(path))

    with pytest.raises(StorageError):
        store.add_subscription("a@example.com")
    with pytest.raises(StorageError):
        store.count()


class LockCheckingBackend(InMemorySubscriptionBackend):
    def __init__(self):
        super().__init__()
        self.store = None
        self.unlocked_loads = 0

    def load(self):
        if not self.store._lock.locked():
            self.unlocked_loads += 1
        return super().load()


def test_reads_hold_the_lock():
    """Test read paths load under the same lock as writes."""
    backend = LockCheckingBackend()
    store = SubscriptionStore(backend)
    backend.store = store

    store.add_subscription("a@example.com")
    store.get_by_email("a@example.com")
    store.active_subscriptions()
    store.count()

    assert backend.unlocked_loads == 0
