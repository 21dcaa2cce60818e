"""Shared fixtures for API integration tests."""

import sys
from pathlib import Path
from typing import AsyncGenerator, Callable

import pytest
from httpx import ASGITransport, AsyncClient

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from app.api.deps import get_current_athlete_id, get_strava_fetcher
from app.database import get_db
from app.main import app

from tests.fixtures.strava import FakeStravaFetcher


@pytest.fixture
async def fake_fetcher() -> AsyncGenerator[FakeStravaFetcher, None]:
    """Strava stand-in served to every request of the test."""
    fetcher = FakeStravaFetcher()
    yield fetcher
    await fetcher.close()


@pytest.fixture(scope="function")
async def client(db_session, fake_fetcher) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API tests."""
    # Create a dependency override that uses the test session
    async def get_test_db():
        yield db_session

    app.dependency_overrides[get_db] = get_test_db
    app.dependency_overrides[get_strava_fetcher] = lambda: fake_fetcher

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    # Clean up overrides
    app.dependency_overrides.clear()


@pytest.fixture
def login_as() -> Callable[[int], None]:
    """Make subsequent requests come from the given athlete id."""
    def _login_as(athlete_id: int) -> None:
        app.dependency_overrides[get_current_athlete_id] = lambda: athlete_id

    return _login_as

