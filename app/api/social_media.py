"""Social media posting endpoint."""

import logging

from fastapi import APIRouter, Depends

from app.api.auth import require_admin
from app.api.deps import social_media_service
from app.core.errors import ValidationError
from app.core.social_media import SocialMediaService
from app.models.social import PostRequest, SocialMediaPost

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/post")
async def post(
    payload: PostRequest,
    service: SocialMediaService = Depends(social_media_service),
    current_user=Depends(require_admin),
):
    """Post content to X and/or Nostr (defaults to both)."""
    unconfigured = [p.value for p in payload.platforms if not service.is_configured(p)]
    if unconfigured:
        raise ValidationError(
            "Platform not configured",
            [{"path": "platforms", "message": f"{p} is not configured"} for p in unconfigured],
        )

    content = SocialMediaPost.model_validate(payload.model_dump(exclude={"platforms"}))
    response = await service.post_to_all(content, payload.platforms)
    return response.model_dump(by_alias=True)
