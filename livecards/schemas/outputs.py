"""
Output schemas for livecards
"""
import math
from datetime import datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field


def format_short_date(moment: datetime) -> str:
    """Render a date the way the page shows it, e.g. 1/5/2024"""
    return f"{moment.month}/{moment.day}/{moment.year}"


class CacheEntry(BaseModel):
    """One cached API response"""
    data: Any = Field(None, description="Decoded JSON payload")
    fetched_at: float = Field(..., description="Clock reading when the payload was stored")


class FetchOutcome(BaseModel):
    """Result of a cached fetch, tagged with where the data came from"""
    cache_key: str = Field(..., description="Logical cache key of the query")
    source: Literal["live", "cache", "stale", "missing"] = Field(..., description="Origin of the data")
    data: Any = Field(None, description="Decoded JSON payload, None when missing")

    @property
    def ok(self) -> bool:
        return self.source != "missing"


class UserProfile(BaseModel):
    """Schema for the owner's GitHub profile"""
    login: str = Field(..., description="Account login")
    name: Optional[str] = Field(None, description="Display name")
    public_repos: int = Field(0, description="Number of public repositories")
    followers: int = Field(0, description="Follower count")
    following: int = Field(0, description="Following count")
    html_url: Optional[str] = Field(None, description="Profile URL")


class RepositoryInfo(BaseModel):
    """Schema for the repository endpoint payload (fields we use)"""
    name: Optional[str] = Field(None, description="Repository name")
    stargazers_count: int = Field(0, description="Stars")
    forks_count: int = Field(0, description="Forks")
    open_issues_count: int = Field(0, description="Open issues and PRs")
    language: Optional[str] = Field(None, description="Primary language")
    updated_at: datetime = Field(..., description="Last updated timestamp")
    size: int = Field(0, description="Repository size in KB")


class ProjectStat(BaseModel):
    """Card statistics derived from a repository payload"""
    stars: int = Field(..., description="Stargazer count")
    forks: int = Field(..., description="Fork count")
    open_issues: int = Field(..., description="Open issue count")
    language: Optional[str] = Field(None, description="Primary language")
    last_updated: str = Field(..., description="Short last-updated date")
    size_mb: int = Field(..., description="Repository size in MB")

    @classmethod
    def from_repository(cls, repo: RepositoryInfo) -> "ProjectStat":
        return cls(
            stars=repo.stargazers_count,
            forks=repo.forks_count,
            open_issues=repo.open_issues_count,
            language=repo.language,
            last_updated=format_short_date(repo.updated_at),
            # KB -> MB, rounding halves up
            size_mb=math.floor(repo.size / 1024 + 0.5),
        )


class ReleaseInfo(BaseModel):
    """Schema for the latest-release payload"""
    tag_name: str = Field(..., description="Release tag")
    published_at: Optional[datetime] = Field(None, description="Publish timestamp")

    @property
    def published_date(self) -> str:
        if self.published_at is None:
            return "unpublished"
        return format_short_date(self.published_at)


class CommitSummary(BaseModel):
    """Newest commit of the site's own repository"""
    sha: str = Field(..., description="Full commit hash")
    author_date: datetime = Field(..., description="Author timestamp")

    @property
    def short_sha(self) -> str:
        return self.sha[:7]

    @classmethod
    def from_payload(cls, payload: dict) -> "CommitSummary":
        return cls(sha=payload["sha"], author_date=payload["commit"]["author"]["date"])


class ProjectUpdate(BaseModel):
    """Outcome of updating one project card"""
    repo_name: str = Field(..., description="Tracked repository name")
    stats: Optional[ProjectStat] = Field(None, description="Stats, None when unavailable")
    release: Optional[ReleaseInfo] = Field(None, description="Latest release, None when absent")
    applied: bool = Field(False, description="Whether the card was re-rendered")


class CycleReport(BaseModel):
    """Outcome of one scheduler cycle"""
    started_at: str = Field(..., description="Cycle start timestamp")
    finished_at: Optional[str] = Field(None, description="Cycle end timestamp")
    projects: List[ProjectUpdate] = Field(default_factory=list, description="Per-project outcomes")
    footer_updated: bool = Field(False, description="Whether the footer commit line was rendered")
    skipped: bool = Field(False, description="True when a running cycle caused this tick to be skipped")
