"""Cross-posting to social platforms."""

import asyncio
import logging
from typing import Dict, List, Optional

from app.models.social import Platform, PostResponse, PostResult, SocialMediaPost
from app.providers.social import NostrClient, PostingClient, XClient

logger = logging.getLogger(__name__)


def configured_clients() -> Dict[Platform, PostingClient]:
    """Clients whose credentials are present in the settings."""
    clients: List[PostingClient] = [XClient(), NostrClient()]
    return {client.platform: client for client in clients if client.is_available()}


class SocialMediaService:
    """Posts one piece of content to several platforms."""

    def __init__(self, clients: Optional[Dict[Platform, PostingClient]] = None):
        self.clients = configured_clients() if clients is None else clients

    def is_configured(self, platform: Platform) -> bool:
        return platform in self.clients

    async def post_to_platform(self, platform: Platform, content: SocialMediaPost) -> PostResult:
        client = self.clients.get(platform)
        if client is None:
            return PostResult(platform=platform, success=False, error=f"{platform.value} client not configured")

        try:
            return await client.post(content)
        except Exception as e:
            logger.exception(f"Unexpected error posting to {platform.value}")
            return PostResult(platform=platform, success=False, error=str(e) or e.__class__.__name__)

    async def post_to_all(self, content: SocialMediaPost, platforms: Optional[List[Platform]] = None) -> PostResponse:
        """
        Post concurrently; one platform failing does not affect the others.

        Defaults to every configured platform.
        """
        targets = platforms or list(self.clients)
        results = await asyncio.gather(*(self.post_to_platform(platform, content) for platform in targets))

        response = PostResponse(results=list(results), all_successful=all(r.success for r in results))
        logger.info(
            "Posted to "
            + ", ".join(f"{r.platform.value}={'ok' if r.success else 'failed'}" for r in results)
        )
        return response
