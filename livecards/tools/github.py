"""
GitHub REST API client with a stale-tolerant TTL cache
"""
import logging
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from livecards.schemas.outputs import (
    CommitSummary,
    FetchOutcome,
    ProjectStat,
    ReleaseInfo,
    RepositoryInfo,
    UserProfile,
)
from livecards.tools.cache import TTLCache

logger = logging.getLogger(__name__)

GITHUB_API_BASE = "https://api.github.com"


class GitHubClient:
    """Client for the handful of GitHub REST endpoints the page needs"""

    def __init__(
        self,
        username: str,
        cache: TTLCache,
        token: Optional[str] = None,
        api_base: str = GITHUB_API_BASE,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.username = username
        self.api_base = api_base
        self.headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "livecards"
        }
        if token:
            self.headers["Authorization"] = f"Bearer {token}"

        self.client = httpx.AsyncClient(timeout=30.0, transport=transport)
        self.cache = cache

    async def fetch(self, url: str, cache_key: str) -> FetchOutcome:
        """
        GET a URL through the cache.

        A fresh entry is served without touching the network. On any failure
        the cache is left alone and the last good payload (of any age) is
        returned instead, or a ``missing`` outcome when there never was one.
        """
        entry = self.cache.get_entry(cache_key)
        if entry is not None and self.cache.is_fresh(entry):
            return FetchOutcome(cache_key=cache_key, source="cache", data=entry.data)

        try:
            response = await self.client.get(url, headers=self.headers)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            # 404 is how GitHub says "no release" or "no such repo"
            level = logging.DEBUG if e.response.status_code == 404 else logging.WARNING
            logger.log(level, "GitHub API error %s for %s", e.response.status_code, cache_key)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.warning("Error fetching %s from GitHub: %s", cache_key, e)
        else:
            self.cache.set(cache_key, data)
            return FetchOutcome(cache_key=cache_key, source="live", data=data)

        if entry is not None:
            return FetchOutcome(cache_key=cache_key, source="stale", data=entry.data)
        return FetchOutcome(cache_key=cache_key, source="missing")

    async def fetch_with_cache(self, url: str, cache_key: str) -> Any:
        """Cached GET returning the JSON payload, or None when nothing is available"""
        outcome = await self.fetch(url, cache_key)
        return outcome.data if outcome.ok else None

    async def get_user_profile(self) -> Optional[UserProfile]:
        """
        Get the owner's profile
        https://docs.github.com/en/rest/users/users#get-a-user
        """
        data = await self.fetch_with_cache(f"{self.api_base}/users/{self.username}", "user_profile")
        return _parse(UserProfile, data, "user_profile")

    async def get_repository(self, repo_name: str) -> Optional[RepositoryInfo]:
        """
        Get repository information
        https://docs.github.com/en/rest/repos/repos#get-a-repository
        """
        data = await self.fetch_with_cache(
            f"{self.api_base}/repos/{self.username}/{repo_name}",
            f"repo_{repo_name}"
        )
        return _parse(RepositoryInfo, data, f"repo_{repo_name}")

    async def get_latest_release(self, repo_name: str) -> Optional[ReleaseInfo]:
        """
        Get the latest release; None when the repository has none
        https://docs.github.com/en/rest/releases/releases#get-the-latest-release
        """
        data = await self.fetch_with_cache(
            f"{self.api_base}/repos/{self.username}/{repo_name}/releases/latest",
            f"release_{repo_name}"
        )
        return _parse(ReleaseInfo, data, f"release_{repo_name}")

    async def get_repo_stats(self, repo_name: str) -> Optional[ProjectStat]:
        """Project the repository payload into card statistics"""
        repo = await self.get_repository(repo_name)
        if repo is None:
            return None
        return ProjectStat.from_repository(repo)

    async def get_commits(self, per_page: int = 1) -> List[CommitSummary]:
        """
        List the newest commits of the site's own repository
        https://docs.github.com/en/rest/commits/commits#list-commits
        """
        url = f"{self.api_base}/repos/{self.username}/{self.username}.github.io/commits"
        params = f"?per_page={per_page}"
        data = await self.fetch_with_cache(url + params, "last_commit")
        if not isinstance(data, list):
            return []

        commits = []
        for item in data:
            try:
                commits.append(CommitSummary.from_payload(item))
            except (KeyError, TypeError, ValidationError) as e:
                logger.warning("Skipping malformed commit payload: %s", e)
        return commits

    async def close(self):
        """Close the HTTP client"""
        await self.client.aclose()


def _parse(model, data: Any, cache_key: str):
    if data is None:
        return None
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.warning("Unexpected payload for %s: %s", cache_key, e)
        return None
