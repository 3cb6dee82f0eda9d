"""Social media post models."""

import enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Platform(str, enum.Enum):
    """Posting platform enum."""

    X = "x"
    NOSTR = "nostr"


class SocialMediaPost(BaseModel):
    """Content posted to every requested platform."""

    model_config = ConfigDict(populate_by_name=True)

    # X caps posts at 280 characters; Nostr allows more but shares the limit
    content: str = Field(min_length=1, max_length=280)
    images: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    reply_to: Optional[str] = Field(default=None, alias="replyTo")


class PostRequest(SocialMediaPost):
    """API request body: a post plus the target platforms."""

    platforms: List[Platform] = Field(default_factory=lambda: [Platform.X, Platform.NOSTR], min_length=1)


class PostResult(BaseModel):
    """Outcome of posting to one platform."""

    model_config = ConfigDict(populate_by_name=True)

    platform: Platform
    success: bool
    post_id: Optional[str] = Field(default=None, alias="postId")
    url: Optional[str] = None
    error: Optional[str] = None


class PostResponse(BaseModel):
    """Aggregated outcome across platforms."""

    model_config = ConfigDict(populate_by_name=True)

    results: List[PostResult]
    all_successful: bool = Field(alias="allSuccessful")
