"""Luma calendar API provider.

API docs: https://docs.luma.com/reference/getting-started-with-your-api
Auth header: x-luma-api-key
"""

import logging
from typing import Any, Dict, Optional

import httpx

from app.config import settings
from app.core.errors import ConfigurationError
from app.models.luma import (
    LumaCalendarEntry,
    LumaEvent,
    LumaEventCreate,
    LumaEventCreated,
    LumaEventDetail,
    LumaEventList,
    LumaEventUpdate,
    PublicLumaEvent,
)
from app.providers.base import ApiProvider

logger = logging.getLogger(__name__)


class LumaProvider(ApiProvider):
    """Client for the Luma public API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        super().__init__("luma")
        self.api_key = settings.luma_api_key if api_key is None else api_key
        self.base_url = (base_url or settings.luma_base_url).rstrip("/")
        self.http_client = http_client

    def is_available(self) -> bool:
        """Check if a Luma API key is configured."""
        return bool(self.api_key)

    def _request(
        self,
        method: str,
        path: str,
        query: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None,
    ) -> Any:
        if not self.is_available():
            raise ConfigurationError("Luma API key not configured (set LUMA_API_KEY)")

        params = {k: v for k, v in (query or {}).items() if v is not None}
        headers = {"content-type": "application/json", "x-luma-api-key": self.api_key}
        url = f"{self.base_url}{path}"

        if self.http_client is not None:
            response = self.http_client.request(method, url, params=params, json=body, headers=headers)
        else:
            with httpx.Client(timeout=30.0) as client:
                response = client.request(method, url, params=params, json=body, headers=headers)

        return self.check_response(response, f"{method} {path}")

    def get_self(self) -> Any:
        """Return the user owning the API key."""
        return self._request("GET", "/v1/user/get-self")

    def list_managed_events(
        self,
        after: Optional[str] = None,
        before: Optional[str] = None,
        pagination_cursor: Optional[str] = None,
        pagination_limit: Optional[int] = None,
        sort_column: Optional[str] = None,
        sort_direction: Optional[str] = None,
    ) -> LumaEventList:
        """List events managed by the calendar of the API key."""
        data = self._request(
            "GET",
            "/v1/calendar/list-events",
            query={
                "after": after,
                "before": before,
                "pagination_cursor": pagination_cursor,
                "pagination_limit": pagination_limit,
                "sort_column": sort_column,
                "sort_direction": sort_direction,
            },
        )
        return self.validate_payload(LumaEventList, data, "list events")

    def get_event(self, event_api_id: str) -> LumaEventDetail:
        """Fetch a single event with its hosts."""
        data = self._request("GET", "/v1/event/get", query={"api_id": event_api_id})
        return self.validate_payload(LumaEventDetail, data, "get event")

    def create_event(self, payload: LumaEventCreate) -> str:
        """Create an event and return its api_id."""
        data = self._request("POST", "/v1/event/create", body=payload.model_dump(exclude_none=True))
        created = self.validate_payload(LumaEventCreated, data, "create event")
        logger.info(f"Created Luma event {created.api_id}")
        return created.api_id

    def update_event(self, payload: LumaEventUpdate) -> None:
        """Update fields of an existing event."""
        self._request("POST", "/v1/event/update", body=payload.model_dump(exclude_none=True))
        logger.info(f"Updated Luma event {payload.event_api_id}")


def format_location_text(event: LumaEvent) -> Optional[str]:
    """Best human-readable location of an event, if any."""
    addr = event.geo_address_json
    if addr is None:
        return None

    parts = [p for p in (addr.city, addr.region, addr.country) if p]
    return addr.full_address or addr.address or addr.city_state or ", ".join(parts) or None


def to_public_event(entry: LumaCalendarEntry) -> PublicLumaEvent:
    """Project a calendar entry onto the fields safe to show publicly."""
    event = entry.event
    return PublicLumaEvent(
        event_api_id=entry.api_id,
        name=event.name,
        description=event.description,
        start_at=event.start_at,
        end_at=event.end_at,
        timezone=event.timezone,
        url=event.url,
        cover_url=event.cover_url,
        meeting_url=event.meeting_url,
        location_text=format_location_text(event),
    )
