"""Shared fixtures."""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from app.api import deps
from app.api.auth import create_access_token
from app.api.main import app
from app.core.newsletter import InMemorySubscriptionBackend, SubscriptionStore
from app.core.report_store import InMemoryReportStore
from app.models.pull_request import MergedPullRequest

NOW = datetime(2025, 1, 8, 17, 0, tzinfo=timezone.utc)


def make_pr(number=1, title="Untitled", labels=None, body=None, author="satoshi"):
    return MergedPullRequest(
        number=number,
        title=title,
        author=author,
        labels=labels or [],
        merged_at=NOW,
        url=f"https://github.com/Justinohallo/bitcoin-builder/pull/{number}",
        body=body,
    )


@pytest.fixture
def report_store():
    return InMemoryReportStore()


@pytest.fixture
def subscription_store():
    return SubscriptionStore(InMemorySubscriptionBackend())


@pytest.fixture
def client(report_store, subscription_store):
    app.dependency_overrides[deps.report_store] = lambda: report_store
    app.dependency_overrides[deps.subscription_store] = lambda: subscription_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    token = create_access_token({"sub": "organizer", "role": "admin"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def member_headers():
    token = create_access_token({"sub": "visitor", "role": "member"})
    return {"Authorization": f"Bearer {token}"}
