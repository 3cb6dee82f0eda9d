"""Luma calendar endpoints."""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from pydantic import ValidationError as PydanticValidationError

from app.api.auth import require_admin
from app.api.deps import luma_provider
from app.core.errors import ValidationError, error_details
from app.models.luma import LumaEventCreate, LumaEventUpdate
from app.providers.luma import LumaProvider, to_public_event

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/public/events")
def list_public_events(luma: LumaProvider = Depends(luma_provider)):
    """Public subset of the calendar's events; empty when Luma is not configured."""
    if not luma.is_available():
        return {"events": [], "configured": False}

    result = luma.list_managed_events()
    return {
        "events": [to_public_event(entry).model_dump(by_alias=True) for entry in result.entries],
        "configured": True,
        "hasMore": result.has_more,
    }


@router.get("/events")
def list_events(
    after: Optional[str] = None,
    before: Optional[str] = None,
    pagination_cursor: Optional[str] = None,
    pagination_limit: Optional[int] = Query(None, gt=0),
    sort_column: Optional[str] = None,
    sort_direction: Optional[str] = None,
    luma: LumaProvider = Depends(luma_provider),
    current_user=Depends(require_admin),
):
    """List events managed by the calendar."""
    result = luma.list_managed_events(
        after=after,
        before=before,
        pagination_cursor=pagination_cursor,
        pagination_limit=pagination_limit,
        sort_column=sort_column,
        sort_direction=sort_direction,
    )
    return result.model_dump()


@router.post("/events", status_code=status.HTTP_201_CREATED)
def create_event(
    payload: LumaEventCreate,
    luma: LumaProvider = Depends(luma_provider),
    current_user=Depends(require_admin),
):
    """Create an event in Luma."""
    return {"api_id": luma.create_event(payload)}


@router.get("/events/{event_api_id}")
def get_event(
    event_api_id: str,
    luma: LumaProvider = Depends(luma_provider),
    current_user=Depends(require_admin),
):
    """Fetch event details."""
    return luma.get_event(event_api_id).model_dump()


@router.patch("/events/{event_api_id}")
def update_event(
    event_api_id: str,
    changes: Dict[str, Any] = Body(...),
    luma: LumaProvider = Depends(luma_provider),
    current_user=Depends(require_admin),
):
    """Update an event."""
    try:
        payload = LumaEventUpdate.model_validate({**changes, "event_api_id": event_api_id})
    except PydanticValidationError as e:
        raise ValidationError("Validation error", error_details(e.errors()))
    luma.update_event(payload)
    return {"ok": True}
