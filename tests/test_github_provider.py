"""Tests for the GitHub merged-PR provider."""

import httpx
import pytest

from app.core.errors import ConfigurationError, UpstreamError
from app.providers.github import GitHubProvider

from tests.conftest import NOW

SEARCH_RESPONSE = {
    "total_count": 2,
    "items": [
        {
            "number": 42,
            "title": "Add events page",
            "user": {"login": "alice"},
            "labels": [{"name": "enhancement"}, {"name": "ui"}],
            "html_url": "https://github.com/Justinohallo/bitcoin-builder/pull/42",
            "body": "Adds the events page",
            "closed_at": "2025-01-07T10:00:00Z",
            "pull_request": {"merged_at": "2025-01-07T09:59:58Z"},
        },
        {
            "number": 41,
            "title": "Fix footer",
            "user": {"login": "bob"},
            "labels": [],
            "html_url": "https://github.com/Justinohallo/bitcoin-builder/pull/41",
            "body": None,
            "closed_at": "2025-01-03T12:00:00Z",
            "pull_request": {},
        },
    ],
}


def make_provider(handler, token="ghp_test"):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return GitHubProvider(token=token, repository="Justinohallo/bitcoin-builder", http_client=client)


def test_fetch_merged_prs():
    """Test the search request and item normalisation."""
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json=SEARCH_RESPONSE)

    prs = make_provider(handler).fetch_merged_prs(NOW)

    request = requests[0]
    assert request.url.path == "/search/issues"
    assert request.url.params["q"] == "repo:Justinohallo/bitcoin-builder is:pr is:merged merged:>2025-01-01"
    assert request.url.params["sort"] == "merged"
    assert request.url.params["order"] == "desc"
    assert request.url.params["per_page"] == "100"
    assert request.headers["Authorization"] == "Bearer ghp_test"
    assert request.headers["Accept"] == "application/vnd.github.v3+json"
    assert request.headers["User-Agent"]

    assert [pr.number for pr in prs] == [42, 41]
    assert prs[0].author == "alice"
    assert prs[0].labels == ["enhancement", "ui"]
    assert prs[0].merged_at.isoformat() == "2025-01-07T09:59:58+00:00"
    assert prs[0].url.endswith("/pull/42")
    assert prs[1].body is None
    assert prs[1].merged_at.day == 3


def test_missing_token_fails_before_request():
    """Test a missing token raises without touching the network."""

    def handler(request):
        raise AssertionError("no request expected")

    with pytest.raises(ConfigurationError, match="GITHUB_TOKEN"):
        make_provider(handler, token="").fetch_merged_prs(NOW)


def test_upstream_error():
    """Test non-2xx responses raise with status and body."""

    def handler(request):
        return httpx.Response(422, json={"message": "Validation Failed"})

    with pytest.raises(UpstreamError) as exc_info:
        make_provider(handler).fetch_merged_prs(NOW)

    assert exc_info.value.status_code == 422
    assert exc_info.value.body == {"message": "Validation Failed"}
    assert "422" in str(exc_info.value)


def test_empty_results():
    """Test an empty search result."""

    def handler(request):
        return httpx.Response(200, json={"total_count": 0, "items": []})

    assert make_provider(handler).fetch_merged_prs(NOW) == []


def test_unexpected_payload():
    """Test search items missing required fields raise UpstreamError."""

    def handler(request):
        return httpx.Response(200, json={"items": [{"number": 1}]})

    with pytest.raises(UpstreamError) as exc_info:
        make_provider(handler).fetch_merged_prs(NOW)
    assert exc_info.value.body == {"items": [{"number": 1}]}
