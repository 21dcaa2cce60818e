"""External data fetchers."""

from app.fetchers.base import ActivityInfo, DataFetcher, TokenGrant
from app.fetchers.strava import StravaFetcher

__all__ = [
    "DataFetcher",
    "ActivityInfo",
    "TokenGrant",
    "StravaFetcher",
]
