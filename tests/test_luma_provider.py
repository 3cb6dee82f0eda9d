"""Tests for the Luma provider."""

import json

import httpx
import pytest

from app.core.errors import ConfigurationError, UpstreamError
from app.models.luma import LumaEventCreate, LumaEventUpdate
from app.providers.luma import LumaProvider, to_public_event

EVENT = {
    "api_id": "evt-123",
    "name": "Bitcoin Builder Meetup",
    "description": "Monthly meetup",
    "start_at": "2025-02-01T02:00:00.000Z",
    "end_at": "2025-02-01T05:00:00.000Z",
    "timezone": "America/Vancouver",
    "url": "https://lu.ma/builder",
    "cover_url": "https://images.lu.ma/cover.png",
    "geo_address_json": {"city": "Vancouver", "region": "BC", "country": "Canada"},
}


def make_provider(handler, api_key="luma-key"):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return LumaProvider(api_key=api_key, base_url="https://luma.test", http_client=client)


def test_list_managed_events():
    """Test listing sends the API key and drops empty query params."""
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={"entries": [{"api_id": "cal-1", "event": EVENT}], "has_more": True})

    result = make_provider(handler).list_managed_events(pagination_limit=10)

    assert requests[0].headers["x-luma-api-key"] == "luma-key"
    assert requests[0].url.path == "/v1/calendar/list-events"
    assert dict(requests[0].url.params) == {"pagination_limit": "10"}
    assert result.has_more is True
    assert result.entries[0].event.name == "Bitcoin Builder Meetup"


def test_to_public_event():
    """Test the public projection and location fallback."""

    def handler(request):
        return httpx.Response(200, json={"entries": [{"api_id": "cal-1", "event": EVENT}]})

    entry = make_provider(handler).list_managed_events().entries[0]
    public = to_public_event(entry).model_dump(by_alias=True)

    assert public["eventApiId"] == "cal-1"
    assert public["startAt"] == EVENT["start_at"]
    assert public["locationText"] == "Vancouver, BC, Canada"
    assert public["meetingUrl"] is None


def test_create_and_update_event():
    """Test create returns the new id and update posts the changes."""
    bodies = []

    def handler(request):
        bodies.append((request.url.path, json.loads(request.content)))
        if request.url.path == "/v1/event/create":
            return httpx.Response(200, json={"api_id": "evt-new"})
        return httpx.Response(200, json={})

    provider = make_provider(handler)
    api_id = provider.create_event(
        LumaEventCreate(name="Workshop", start_at="2025-03-01T02:00:00Z", timezone="America/Vancouver")
    )
    provider.update_event(LumaEventUpdate(event_api_id=api_id, name="Lightning Workshop"))

    assert api_id == "evt-new"
    assert bodies[0] == (
        "/v1/event/create",
        {"name": "Workshop", "start_at": "2025-03-01T02:00:00Z", "timezone": "America/Vancouver"},
    )
    assert bodies[1] == ("/v1/event/update", {"event_api_id": "evt-new", "name": "Lightning Workshop"})


def test_missing_api_key():
    """Test calls fail fast without an API key."""

    def handler(request):
        raise AssertionError("no request expected")

    provider = make_provider(handler, api_key="")
    assert not provider.is_available()
    with pytest.raises(ConfigurationError):
        provider.get_event("evt-123")


def test_upstream_error_keeps_text_body():
    """Test a non-JSON error body is kept as text."""

    def handler(request):
        return httpx.Response(502, text="Bad gateway")

    with pytest.raises(UpstreamError) as exc_info:
        make_provider(handler).get_self()
    assert exc_info.value.status_code == 502
    assert exc_info.value.body == "Bad gateway"


def test_unexpected_payload_is_upstream_error():
    """Test a 200 with the wrong shape raises UpstreamError carrying the body."""

    def handler(request):
        return httpx.Response(200, json={"entries": "oops"})

    with pytest.raises(UpstreamError) as exc_info:
        make_provider(handler).list_managed_events()
    assert exc_info.value.body == {"entries": "oops"}


def test_create_event_without_id():
    """Test a create response missing api_id raises UpstreamError."""

    def handler(request):
        return httpx.Response(200, json={})

    with pytest.raises(UpstreamError):
        make_provider(handler).create_event(
            LumaEventCreate(name="Workshop", start_at="2025-03-01T02:00:00Z", timezone="America/Vancouver")
        )
