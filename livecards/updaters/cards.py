"""
Repository Card Updater - Decorates project cards with live GitHub stats
"""
import asyncio
import logging
from html import escape
from typing import List, Optional, Sequence

from livecards.schemas.outputs import ProjectStat, ProjectUpdate, ReleaseInfo
from livecards.tools.github import GitHubClient
from livecards.tools.page import PageDocument, RenderRegion

logger = logging.getLogger(__name__)

STATS_REGION = RenderRegion("div", "repo-stats", placement="after")
RELEASE_REGION = RenderRegion("div", "release-info", placement="append")


def stats_markup(stats: ProjectStat) -> str:
    return (
        '<div class="stats-row">'
        f'<span class="stat-item">⭐ {stats.stars}</span>'
        f'<span class="stat-item">🍴 {stats.forks}</span>'
        f'<span class="stat-item">🐛 {stats.open_issues}</span>'
        f'<span class="stat-item">📅 {escape(stats.last_updated)}</span>'
        '</div>'
    )


def release_markup(release: ReleaseInfo) -> str:
    return (
        f"<small>Latest: <strong>{escape(release.tag_name)}</strong> "
        f"({escape(release.published_date)})</small>"
    )


class RepositoryCardUpdater:
    """Fetches stats for every tracked project and renders them into its card"""

    def __init__(self, client: GitHubClient, page: PageDocument):
        self.client = client
        self.page = page

    async def fetch_project(self, repo_name: str) -> ProjectUpdate:
        """One project's stats and release; a failure here never spoils the other cards"""
        try:
            stats, release = await asyncio.gather(
                self.client.get_repo_stats(repo_name),
                self.client.get_latest_release(repo_name),
            )
        except Exception as e:
            logger.warning("Failed to fetch data for %s: %s", repo_name, e)
            return ProjectUpdate(repo_name=repo_name)
        return ProjectUpdate(repo_name=repo_name, stats=stats, release=release)

    async def update_all(self, project_names: Sequence[str]) -> List[ProjectUpdate]:
        """
        Update every card; fetches run concurrently, DOM writes follow input order
        """
        updates = await asyncio.gather(*(self.fetch_project(name) for name in project_names))

        for update in updates:
            update.applied = self.update_card_with_stats(update.repo_name, update.stats, update.release)

        applied = sum(1 for u in updates if u.applied)
        logger.info("📊 Updated %d/%d project cards", applied, len(updates))
        return list(updates)

    def update_card_with_stats(
        self,
        repo_name: str,
        stats: Optional[ProjectStat],
        release: Optional[ReleaseInfo]
    ) -> bool:
        """
        Render stats (and the latest release, if any) into the project's card.
        Returns False when the card is missing or there is nothing to show.
        """
        card = self.page.find_card(repo_name)
        if card is None:
            logger.debug("No card found for %s", repo_name)
            return False
        if stats is None:
            logger.debug("No stats for %s, leaving card as is", repo_name)
            return False

        region = STATS_REGION.render(card, card.select_one(".badges"), stats_markup(stats))
        if region is None:
            logger.debug("Card for %s has no badges to anchor stats", repo_name)
            return False

        if release is not None:
            RELEASE_REGION.render(region, region, release_markup(release))
        return True
