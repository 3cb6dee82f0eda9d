"""GitHub search provider for merged pull requests."""

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from app.config import settings
from app.core.errors import ConfigurationError, UpstreamError
from app.models.pull_request import MergedPullRequest
from app.providers.base import ApiProvider

logger = logging.getLogger(__name__)


class GitHubProvider(ApiProvider):
    """GitHub Search API provider."""

    SEARCH_PATH = "/search/issues"
    USER_AGENT = "bitcoin-builder-weekly-report"

    def __init__(
        self,
        token: Optional[str] = None,
        repository: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        super().__init__("github")
        self.token = settings.github_token if token is None else token
        self.repository = repository or settings.github_repository
        self.http_client = http_client

    def is_available(self) -> bool:
        """Check if a GitHub token is configured."""
        return bool(self.token)

    def build_query(self, since: datetime) -> str:
        """Search query for PRs merged after the given day."""
        return f"repo:{self.repository} is:pr is:merged merged:>{since.strftime('%Y-%m-%d')}"

    def fetch_merged_prs(self, now: Optional[datetime] = None) -> List[MergedPullRequest]:
        """
        Fetch PRs merged during the trailing report window.

        Order is the one returned by GitHub (most recently merged first).

        Raises:
            ConfigurationError: no GitHub token configured
            UpstreamError: GitHub answered with a non-success status
        """
        if not self.is_available():
            raise ConfigurationError(
                "GITHUB_TOKEN environment variable is required. Please set it in your environment variables."
            )

        now = now or datetime.now(timezone.utc)
        since = now - timedelta(days=settings.report_window_days)
        params = {
            "q": self.build_query(since),
            "sort": "merged",
            "order": "desc",
            "per_page": 100,
        }
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "Authorization": f"Bearer {self.token}",
            "User-Agent": self.USER_AGENT,
        }

        logger.info(f"Fetching merged PRs for {self.repository} since {since.date().isoformat()}")
        url = f"{settings.github_api_url.rstrip('/')}{self.SEARCH_PATH}"
        if self.http_client is not None:
            response = self.http_client.get(url, params=params, headers=headers)
        else:
            with httpx.Client(timeout=settings.github_timeout) as client:
                response = client.get(url, params=params, headers=headers)

        data = self.check_response(response, "search merged PRs")

        try:
            prs = [self._normalize(item) for item in data["items"]]
        except (KeyError, TypeError, PydanticValidationError) as e:
            logger.error(f"Unexpected search payload from GitHub: {e!r}")
            raise UpstreamError(
                "github API returned an unexpected payload: search merged PRs",
                status_code=response.status_code,
                body=data,
            ) from e
        logger.info(f"Found {len(prs)} merged PRs")
        return prs

    @staticmethod
    def _normalize(item: dict) -> MergedPullRequest:
        """Flatten a search result item."""
        pull_request = item.get("pull_request") or {}
        merged_at = pull_request.get("merged_at") or item.get("merged_at") or item.get("closed_at")
        return MergedPullRequest(
            number=item["number"],
            title=item["title"],
            author=(item.get("user") or {}).get("login", ""),
            labels=[label["name"] for label in item.get("labels", [])],
            merged_at=merged_at,
            url=item["html_url"],
            body=item.get("body"),
        )


def fetch_merged_prs(now: Optional[datetime] = None) -> List[MergedPullRequest]:
    """Fetch merged PRs using the configured repository and token."""
    return GitHubProvider().fetch_merged_prs(now)
