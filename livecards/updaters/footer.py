"""
Footer Commit Updater - Shows when the site last changed
"""
import logging
import math
from datetime import datetime, timezone
from html import escape
from typing import Optional

from livecards.schemas.outputs import CommitSummary
from livecards.tools.github import GitHubClient
from livecards.tools.page import PageDocument, RenderRegion

logger = logging.getLogger(__name__)

COMMIT_REGION = RenderRegion("p", "last-commit", placement="append")


def time_ago(moment: datetime, now: Optional[datetime] = None) -> str:
    """Coarse relative time: just now / N minutes / N hours / N days ago"""
    now = now or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    seconds = math.floor((now - moment).total_seconds())
    if seconds < 60:
        return "just now"
    if seconds < 3600:
        return f"{seconds // 60} minutes ago"
    if seconds < 86400:
        return f"{seconds // 3600} hours ago"
    return f"{seconds // 86400} days ago"


class FooterCommitUpdater:
    """Renders the site's newest commit into the page footer"""

    def __init__(self, client: GitHubClient, page: PageDocument):
        self.client = client
        self.page = page

    def commit_url(self, commit: CommitSummary) -> str:
        username = self.client.username
        return f"https://github.com/{username}/{username}.github.io/commit/{commit.sha}"

    def commit_markup(self, commit: CommitSummary, now: Optional[datetime] = None) -> str:
        return (
            f"<small>Last updated: {time_ago(commit.author_date, now)} "
            f'(<a href="{escape(self.commit_url(commit))}" target="_blank" rel="noopener">'
            f"{escape(commit.short_sha)}</a>)</small>"
        )

    async def update_footer(self, now: Optional[datetime] = None) -> bool:
        """Returns True when the commit line was rendered"""
        commits = await self.client.get_commits(per_page=1)
        if not commits:
            logger.info("No commit data, footer left as is")
            return False

        footer = self.page.footer()
        if footer is None:
            logger.debug("Page has no footer")
            return False

        COMMIT_REGION.render(footer, footer, self.commit_markup(commits[0], now))
        return True
