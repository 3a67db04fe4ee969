"""Tests for the footer commit updater."""

from datetime import datetime, timedelta, timezone

import pytest

from livecards.tools.page import PageDocument
from livecards.updaters.footer import FooterCommitUpdater, time_ago
from tests.fakes import commit_payload

NOW = datetime(2024, 3, 10, 12, 0, 0, tzinfo=timezone.utc)
COMMITS_PATH = "/repos/octo/octo.github.io/commits"


class TestTimeAgo:
    """Relative time buckets."""

    @pytest.mark.parametrize(
        ("delta", "expected"),
        [
            (timedelta(seconds=45), "just now"),
            (timedelta(seconds=90), "1 minutes ago"),
            (timedelta(minutes=59, seconds=59), "59 minutes ago"),
            (timedelta(hours=2), "2 hours ago"),
            (timedelta(hours=23, minutes=59), "23 hours ago"),
            (timedelta(days=3), "3 days ago"),
            (timedelta(days=1), "1 days ago"),
        ],
    )
    def test_buckets(self, delta, expected) -> None:
        assert time_ago(NOW - delta, now=NOW) == expected

    def test_future_timestamp_is_just_now(self) -> None:
        assert time_ago(NOW + timedelta(minutes=5), now=NOW) == "just now"

    def test_naive_timestamps_treated_as_utc(self) -> None:
        naive = datetime(2024, 3, 10, 10, 0, 0)
        assert time_ago(naive, now=NOW) == "2 hours ago"


class TestUpdateFooter:
    """Rendering the last-commit line."""

    @pytest.fixture()
    def updater(self, client, page) -> FooterCommitUpdater:
        return FooterCommitUpdater(client, page)

    @pytest.mark.anyio()
    async def test_renders_commit_line(self, updater, github, page) -> None:
        github.add(COMMITS_PATH, [commit_payload(date="2024-03-10T10:00:00Z")])
        assert await updater.update_footer(now=NOW)

        line = page.footer().select_one("p.last-commit")
        assert line.get_text() == "Last updated: 2 hours ago (0123456)"
        link = line.a
        assert link["href"] == "https://github.com/octo/octo.github.io/commit/0123456789abcdef0123456789abcdef01234567"
        assert link["target"] == "_blank"
        assert link["rel"] == ["noopener"]

    @pytest.mark.anyio()
    async def test_requests_single_commit(self, updater, github) -> None:
        github.add(COMMITS_PATH, [commit_payload()])
        await updater.update_footer(now=NOW)
        assert github.requests[-1].url.params["per_page"] == "1"

    @pytest.mark.anyio()
    async def test_rerender_replaces_line(self, updater, github, page) -> None:
        github.add(COMMITS_PATH, [commit_payload(date="2024-03-10T10:00:00Z")])
        await updater.update_footer(now=NOW)
        await updater.update_footer(now=NOW + timedelta(hours=1))
        lines = page.footer().select("p.last-commit")
        assert len(lines) == 1
        assert "3 hours ago" in lines[0].get_text()

    @pytest.mark.anyio()
    async def test_failure_leaves_footer(self, updater, github, page) -> None:
        github.fail(COMMITS_PATH)
        before = page.render()
        assert not await updater.update_footer(now=NOW)
        assert page.render() == before

    @pytest.mark.anyio()
    async def test_empty_commit_list(self, updater, github, page) -> None:
        github.add(COMMITS_PATH, [])
        before = page.render()
        assert not await updater.update_footer(now=NOW)
        assert page.render() == before

    @pytest.mark.anyio()
    async def test_page_without_footer(self, client, github) -> None:
        github.add(COMMITS_PATH, [commit_payload()])
        doc = PageDocument("<main></main>")
        assert not await FooterCommitUpdater(client, doc).update_footer(now=NOW)
        assert doc.render() == "<main></main>"
