"""
SnippetBoard Backend — Test Configuration (conftest.py)
=========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, fresh per test):
    ├── clock: Controllable time source (starts 2026-01-01 12:00 UTC)
    ├── ada / grace / christian: Sample authors
    ├── directory: AuthorDirectory with the three sample authors
    ├── store: Empty unbounded InMemorySnippetStore on `clock`
    ├── feed_service: FeedService over directory + store
    ├── test_settings: Settings for an app with two authors and no seed snippet
    └── test_client: HTTPX AsyncClient talking to a fresh app built from test_settings
"""

import os
from datetime import datetime, timedelta, timezone

# Set before snippetboard is imported: the module-level settings and app read them
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["SEED_SNIPPET_BODY"] = ""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from snippetboard.config import Settings
from snippetboard.main import create_app
from snippetboard.models.author import Author
from snippetboard.services.author_directory import AuthorDirectory
from snippetboard.services.feed_service import FeedService
from snippetboard.services.snippet_store import InMemorySnippetStore


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def christian():
    return Author(id="0", name="christian scott")


@pytest.fixture
def ada():
    return Author(id="7", name="ada")


@pytest.fixture
def grace():
    return Author(id="8", name="grace")


@pytest.fixture
def directory(christian, ada, grace):
    return AuthorDirectory([christian, ada, grace])


@pytest.fixture
def store(clock):
    return InMemorySnippetStore(clock=clock)


@pytest.fixture
def feed_service(directory, store, clock):
    return FeedService(
        directory=directory,
        store=store,
        default_author=Author(id="1", name="Someone New"),
        clock=clock,
    )


@pytest.fixture
def test_settings():
    """
    Two registered authors, no seed snippet, and a posting throttle high
    enough that only the throttle tests ever reach it.
    """
    return Settings(
        authors=[
            {"id": "0", "name": "christian scott"},
            {"id": "7", "name": "ada"},
        ],
        seed_snippet_body="",
        post_rate_limit_requests=1000,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def test_client(test_settings, clock):
    """
    Provides an async HTTP client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    app = create_app(test_settings, clock=clock)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
