"""Posting clients for X (Twitter) and Nostr."""

import asyncio
import hashlib
import json
import logging
import time
from abc import abstractmethod
from typing import Any, Dict, List, Optional

import httpx
import websockets
from coincurve import PrivateKey

from app.config import settings
from app.models.social import Platform, PostResult, SocialMediaPost
from app.providers.base import ApiProvider, parse_body

logger = logging.getLogger(__name__)


class PostingClient(ApiProvider):
    """Base class for platform clients. post() never raises."""

    platform: Platform

    def __init__(self):
        super().__init__(self.platform.value)

    @abstractmethod
    async def post(self, content: SocialMediaPost) -> PostResult:
        pass

    def failure(self, error: str) -> PostResult:
        logger.error(f"Posting to {self.name} failed: {error}")
        return PostResult(platform=self.platform, success=False, error=error)


class XClient(PostingClient):
    """X API v2 client."""

    platform = Platform.X

    def __init__(self, bearer_token: Optional[str] = None, http_client: Optional[httpx.AsyncClient] = None):
        super().__init__()
        self.bearer_token = settings.x_bearer_token if bearer_token is None else bearer_token
        self.http_client = http_client

    def is_available(self) -> bool:
        return bool(self.bearer_token)

    def build_payload(self, content: SocialMediaPost) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"text": content.content}
        if content.images:
            # Media ids must come from a prior media upload
            payload["media"] = {"media_ids": content.images}
        if content.reply_to:
            payload["reply"] = {"in_reply_to_tweet_id": content.reply_to}
        return payload

    async def post(self, content: SocialMediaPost) -> PostResult:
        if not self.is_available():
            return self.failure("X API credentials not configured")

        url = f"{settings.x_api_url.rstrip('/')}/2/tweets"
        headers = {"Authorization": f"Bearer {self.bearer_token}"}
        try:
            if self.http_client is not None:
                response = await self.http_client.post(url, json=self.build_payload(content), headers=headers)
            else:
                async with httpx.AsyncClient(timeout=30.0) as client:
                    response = await client.post(url, json=self.build_payload(content), headers=headers)
        except httpx.HTTPError as e:
            return self.failure(str(e) or e.__class__.__name__)

        body = parse_body(response)
        if not response.is_success:
            detail = None
            if isinstance(body, dict):
                detail = body.get("detail") or body.get("title")
            return self.failure(detail or f"HTTP {response.status_code}: {response.reason_phrase}")

        try:
            post_id = str(body["data"]["id"])
        except (KeyError, TypeError):
            return self.failure(f"Unexpected X API response: HTTP {response.status_code}")
        return PostResult(
            platform=self.platform,
            success=True,
            post_id=post_id,
            url=f"https://twitter.com/i/web/status/{post_id}",
        )


def compute_event_id(event: Dict[str, Any]) -> str:
    """NIP-01 event id: sha256 of the compact serialized event."""
    serialized = json.dumps(
        [0, event["pubkey"], event["created_at"], event["kind"], event["tags"], event["content"]],
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()


class NostrClient(PostingClient):
    """Publishes kind-1 text notes to a set of relays."""

    platform = Platform.NOSTR
    TEXT_NOTE = 1

    def __init__(self, private_key: Optional[str] = None, relays: Optional[List[str]] = None):
        super().__init__()
        self.private_key = settings.nostr_private_key if private_key is None else private_key
        self.relays = settings.nostr_relays_list if relays is None else relays

    def is_available(self) -> bool:
        return bool(self.private_key and self.relays)

    def sign_event(self, content: SocialMediaPost, created_at: Optional[int] = None) -> Dict[str, Any]:
        """Build and sign (BIP-340 Schnorr) a text note."""
        key = PrivateKey.from_hex(self.private_key)
        event = {
            "pubkey": key.public_key_xonly.format().hex(),
            "created_at": created_at if created_at is not None else int(time.time()),
            "kind": self.TEXT_NOTE,
            "tags": [["t", tag] for tag in content.tags],
            "content": content.content,
        }
        event["id"] = compute_event_id(event)
        event["sig"] = key.sign_schnorr(bytes.fromhex(event["id"])).hex()
        return event

    async def publish_to_relay(self, relay: str, event: Dict[str, Any]) -> bool:
        """Send the event and wait for the relay's OK message."""
        async with websockets.connect(relay, open_timeout=settings.nostr_relay_timeout) as ws:
            await ws.send(json.dumps(["EVENT", event]))
            while True:
                message = json.loads(await asyncio.wait_for(ws.recv(), settings.nostr_relay_timeout))
                if message[:2] == ["OK", event["id"]]:
                    if not message[2]:
                        raise RuntimeError(f"Relay {relay} rejected event: {message[3] if len(message) > 3 else ''}")
                    return True

    async def post(self, content: SocialMediaPost) -> PostResult:
        if not self.is_available():
            return self.failure("Nostr credentials not configured")

        try:
            event = self.sign_event(content)
        except ValueError as e:
            return self.failure(f"Invalid Nostr private key: {e}")

        results = await asyncio.gather(
            *(self.publish_to_relay(relay, event) for relay in self.relays),
            return_exceptions=True,
        )
        if any(result is True for result in results):
            return PostResult(
                platform=self.platform,
                success=True,
                post_id=event["id"],
                url=f"nostr:{event['id']}",
            )

        errors = [f"{relay}: {result}" for relay, result in zip(self.relays, results) if isinstance(result, Exception)]
        return self.failure(errors[0] if errors else "Failed to publish to any relay")
