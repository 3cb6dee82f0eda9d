"""Luma calendar API models."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class LumaAddress(BaseModel):
    """Geo address block of a Luma event."""

    model_config = ConfigDict(extra="ignore")

    address: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None
    country: Optional[str] = None
    city_state: Optional[str] = None
    full_address: Optional[str] = None


class LumaEvent(BaseModel):
    """Event as returned by the Luma API."""

    model_config = ConfigDict(extra="ignore")

    api_id: str
    name: str
    description: str = ""
    description_md: str = ""
    start_at: str
    end_at: str
    timezone: str
    url: str
    cover_url: str = ""
    meeting_url: Optional[str] = None
    visibility: Optional[str] = None
    geo_latitude: Optional[float] = None
    geo_longitude: Optional[float] = None
    geo_address_json: Optional[LumaAddress] = None


class LumaCalendarEntry(BaseModel):
    """Entry of a calendar event listing."""

    model_config = ConfigDict(extra="ignore")

    api_id: str
    event: LumaEvent


class LumaEventList(BaseModel):
    """Response of /v1/calendar/list-events."""

    model_config = ConfigDict(extra="ignore")

    entries: List[LumaCalendarEntry] = Field(default_factory=list)
    has_more: bool = False
    next_cursor: Optional[str] = None


class LumaHost(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: Optional[str] = None
    avatar_url: Optional[str] = None


class LumaEventDetail(BaseModel):
    """Response of /v1/event/get."""

    model_config = ConfigDict(extra="ignore")

    event: LumaEvent
    hosts: List[LumaHost] = Field(default_factory=list)


class LumaEventCreate(BaseModel):
    """Payload for /v1/event/create."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    start_at: str = Field(min_length=1)
    timezone: str = Field(min_length=1)
    description_md: Optional[str] = None
    end_at: Optional[str] = None
    meeting_url: Optional[str] = None
    cover_url: Optional[str] = None
    visibility: Optional[str] = Field(default=None, pattern="^(public|private|unlisted)$")
    slug: Optional[str] = Field(default=None, min_length=1)


class LumaEventUpdate(BaseModel):
    """Payload for /v1/event/update."""

    model_config = ConfigDict(extra="forbid")

    event_api_id: str = Field(min_length=1)
    name: Optional[str] = Field(default=None, min_length=1)
    start_at: Optional[str] = None
    end_at: Optional[str] = None
    timezone: Optional[str] = Field(default=None, min_length=1)
    description_md: Optional[str] = None
    meeting_url: Optional[str] = None
    cover_url: Optional[str] = None
    visibility: Optional[str] = Field(default=None, pattern="^(public|private|unlisted)$")
    slug: Optional[str] = Field(default=None, min_length=1)


class PublicLumaEvent(BaseModel):
    """Safe subset of a Luma event for the public site."""

    model_config = ConfigDict(populate_by_name=True)

    event_api_id: str = Field(alias="eventApiId")
    name: str
    description: str
    start_at: str = Field(alias="startAt")
    end_at: str = Field(alias="endAt")
    timezone: str
    url: str
    cover_url: str = Field(alias="coverUrl")
    meeting_url: Optional[str] = Field(default=None, alias="meetingUrl")
    location_text: Optional[str] = Field(default=None, alias="locationText")


class LumaEventCreated(BaseModel):
    """Response of /v1/event/create."""

    model_config = ConfigDict(extra="ignore")

    api_id: str
