"""
Update Scheduler - Runs the card and footer updaters on a fixed interval
"""
import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from livecards.schemas.inputs import IntegrationConfig
from livecards.schemas.outputs import CycleReport
from livecards.tools.github import GitHubClient
from livecards.tools.page import PageDocument
from livecards.updaters.cards import RepositoryCardUpdater
from livecards.updaters.footer import FooterCommitUpdater

logger = logging.getLogger(__name__)

MAX_PROGRESS_ENTRIES = 200


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class IntegrationScheduler:
    """
    Owns the update lifecycle for one page.

    ``start()`` arms a background task that runs one cycle immediately and
    then one per interval until ``stop()``. Cycles never overlap: a tick that
    fires while a cycle is still running is skipped.
    """

    def __init__(self, client: GitHubClient, page: PageDocument, config: IntegrationConfig):
        self.client = client
        self.page = page
        self.config = config
        self.cards = RepositoryCardUpdater(client, page)
        self.footer = FooterCommitUpdater(client, page)

        self.last_report: Optional[CycleReport] = None
        self._progress_log: List[Dict[str, Any]] = []
        self._running = False
        self._task: Optional[asyncio.Task] = None

    def add_progress(self, message: str, emoji: str = "🔄"):
        """Add a progress message to the log"""
        self._progress_log.append({
            "timestamp": _now(),
            "message": message,
            "emoji": emoji
        })
        del self._progress_log[:-MAX_PROGRESS_ENTRIES]
        logger.info("%s %s", emoji, message)

    def get_progress(self) -> Dict[str, Any]:
        """Get current progress log"""
        return {
            "running": self._running,
            "scheduled": self.is_scheduled,
            "log": list(self._progress_log)
        }

    @property
    def is_scheduled(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_cycle(self) -> CycleReport:
        """
        Run both updaters concurrently and wait for both.
        Returns a skipped report when another cycle is still in flight.
        """
        if self._running:
            self.add_progress("Previous update still running, skipping this cycle", "⏭️")
            return CycleReport(started_at=_now(), finished_at=_now(), skipped=True)

        report = CycleReport(started_at=_now())
        self._running = True
        try:
            projects, footer_updated = await asyncio.gather(
                self.cards.update_all(self.config.projects),
                self.footer.update_footer(),
            )
        finally:
            self._running = False

        report.projects = projects
        report.footer_updated = footer_updated
        report.finished_at = _now()
        self.last_report = report
        return report

    async def tick(self) -> CycleReport:
        """Run a cycle unless the previous one is still in flight"""
        report = await self.run_cycle()
        if report.skipped:
            return report
        applied = sum(1 for p in report.projects if p.applied)
        self.add_progress(f"Updated {applied}/{len(report.projects)} cards", "✅")
        return report

    async def init(self) -> Optional[CycleReport]:
        """First cycle; failures are logged and never prevent scheduling"""
        self.add_progress("Initializing GitHub integration...", "🚀")
        try:
            report = await self.run_cycle()
        except Exception:
            logger.exception("Failed to initialize GitHub integration")
            self.add_progress("Failed to initialize GitHub integration", "❌")
            return None

        self.add_progress("GitHub integration initialized successfully", "🎉")
        return report

    async def _run_forever(self):
        await self.init()
        while True:
            await asyncio.sleep(self.config.update_interval_seconds)
            try:
                await self.tick()
            except Exception:
                logger.exception("Periodic update failed")
                self.add_progress("Periodic update failed", "❌")

    def start(self) -> asyncio.Task:
        """Arm the schedule; must be called from a running event loop"""
        if self.is_scheduled:
            return self._task
        self._task = asyncio.get_running_loop().create_task(self._run_forever())
        return self._task

    async def stop(self):
        """Cancel the schedule and wait for the task to wind down"""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        self.add_progress("Scheduler stopped", "🛑")
