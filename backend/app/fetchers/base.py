"""Base data fetcher."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import httpx

from app.config import get_settings

settings = get_settings()


@dataclass
class ActivityInfo:
    """Activity summary from the Strava athlete activity list."""

    id: int
    name: str
    start_date_local: str  # ISO 8601, athlete's local time
    type: str
    distance: float = 0.0  # meters
    elapsed_time: int = 0  # seconds


@dataclass
class TokenGrant:
    """Result of an OAuth2 authorization-code exchange."""

    access_token: str
    refresh_token: str | None
    expires_at: datetime | None
    athlete: dict[str, Any] = field(default_factory=dict)


class DataFetcher(ABC):
    """Base class for external data fetchers.

    ``transport`` lets callers (tests) swap the network layer.
    """

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None):
        self.client = httpx.AsyncClient(
            base_url=settings.strava_api_base_url,
            timeout=settings.strava_timeout,
            follow_redirects=True,
            transport=transport,
        )

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    @abstractmethod
    async def fetch_activities(
        self,
        access_token: str,
        after: datetime,
        before: datetime,
        per_page: int = 50,
    ) -> list[ActivityInfo]:
        """Fetch the athlete's ride activities within a time window."""
        pass

    @abstractmethod
    async def fetch_activity(self, activity_id: int, access_token: str) -> dict[str, Any]:
        """Fetch full activity detail, including segment efforts."""
        pass

    @abstractmethod
    async def exchange_code(self, code: str) -> TokenGrant:
        """Exchange an OAuth2 authorization code for tokens."""
        pass
