"""Clients for the third-party APIs the site talks to."""

from app.providers.base import ApiProvider
from app.providers.github import GitHubProvider
from app.providers.luma import LumaProvider
from app.providers.social import NostrClient, PostingClient, XClient

__all__ = [
    "ApiProvider",
    "GitHubProvider",
    "LumaProvider",
    "PostingClient",
    "XClient",
    "NostrClient",
]
