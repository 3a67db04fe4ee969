"""
Input schemas for livecards
"""
import os
from typing import List, Optional

from pydantic import BaseModel, Field


DEFAULT_USERNAME = "DarrylClay2005"
DEFAULT_PROJECTS = [
    "StashOpusPlayer",
    "ImageCropperMobile",
    "enhanced-image-cropper",
    "Image-Cropper",
    "backup-manager-pro",
    "Linux-System-Startup-Auto-Cleaner",
    "animeverse-app",
    "EQPad",
]


class IntegrationConfig(BaseModel):
    """Settings fixed at startup for the GitHub integration"""
    username: str = Field(DEFAULT_USERNAME, description="GitHub account that owns the projects")
    projects: List[str] = Field(default_factory=lambda: list(DEFAULT_PROJECTS), description="Tracked repository names, in card order")
    cache_ttl_seconds: float = Field(300, gt=0, description="How long a cached response stays fresh")
    update_interval_seconds: float = Field(300, gt=0, description="Delay between update cycles")
    api_base: str = Field("https://api.github.com", description="GitHub REST API base URL")
    token: Optional[str] = Field(None, description="Optional token to raise rate limits")
    page_path: Optional[str] = Field(None, description="HTML page to decorate, built-in page when unset")


def load_config() -> IntegrationConfig:
    """
    Build the config from environment variables (call load_dotenv first)
    """
    values = {}
    if os.getenv("GITHUB_USERNAME"):
        values["username"] = os.getenv("GITHUB_USERNAME")
    if os.getenv("TRACKED_PROJECTS"):
        values["projects"] = [name.strip() for name in os.getenv("TRACKED_PROJECTS").split(",") if name.strip()]
    if os.getenv("CACHE_TTL_SECONDS"):
        values["cache_ttl_seconds"] = os.getenv("CACHE_TTL_SECONDS")
    if os.getenv("UPDATE_INTERVAL_SECONDS"):
        values["update_interval_seconds"] = os.getenv("UPDATE_INTERVAL_SECONDS")
    if os.getenv("GITHUB_API_BASE"):
        values["api_base"] = os.getenv("GITHUB_API_BASE").rstrip("/")
    values["token"] = os.getenv("GITHUB_TOKEN") or None
    values["page_path"] = os.getenv("PAGE_PATH") or None
    return IntegrationConfig(**values)
