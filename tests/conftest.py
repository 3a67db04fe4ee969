"""Shared test fixtures for livecards tests."""

from __future__ import annotations

import httpx
import pytest

from livecards.schemas.inputs import IntegrationConfig
from livecards.tools.cache import TTLCache
from livecards.tools.github import GitHubClient
from livecards.tools.page import PageDocument
from tests.fakes import PAGE_HTML, USERNAME, FakeClock, FakeGitHub


@pytest.fixture()
def anyio_backend():
    return "asyncio"


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture()
def cache(clock: FakeClock) -> TTLCache:
    return TTLCache(ttl_seconds=300, clock=clock)


@pytest.fixture()
def client(github: FakeGitHub, cache: TTLCache) -> GitHubClient:
    return GitHubClient(USERNAME, cache=cache, transport=httpx.MockTransport(github.handler))


@pytest.fixture()
def page() -> PageDocument:
    return PageDocument(PAGE_HTML)


@pytest.fixture()
def config() -> IntegrationConfig:
    return IntegrationConfig(username=USERNAME, projects=["A", "B"], update_interval_seconds=3600)
