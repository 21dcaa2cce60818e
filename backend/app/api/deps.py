"""Shared request dependencies: caller identity and the Strava fetcher."""

import logging
from collections.abc import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.exceptions import UnauthenticatedError
from app.fetchers import DataFetcher, StravaFetcher
from app.models import User
from app.repositories import UserRepository

logger = logging.getLogger(__name__)

SESSION_ATHLETE_KEY = "athlete_id"


def get_current_athlete_id(request: Request) -> int:
    """Resolve the caller's Strava athlete id from the signed session.

    A missing or malformed value is treated the same: UNAUTHENTICATED.
    """
    raw = request.session.get(SESSION_ATHLETE_KEY)
    if raw is None:
        raise UnauthenticatedError("User not authenticated")
    if isinstance(raw, bool) or not isinstance(raw, (int, str)):
        logger.warning("Invalid athlete id type in session: %r", raw)
        raise UnauthenticatedError("Invalid Strava ID format")
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid athlete id in session: %r", raw)
        raise UnauthenticatedError("Invalid Strava ID format") from None


async def get_current_user(
    athlete_id: int = Depends(get_current_athlete_id),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Load the caller's User row; a session for an unknown user is unauthenticated."""
    user = await UserRepository(db).get(athlete_id)
    if user is None:
        logger.warning("Session references unknown user %s", athlete_id)
        raise UnauthenticatedError("Authenticated user not found. Please log in again.")
    return user


async def get_strava_fetcher() -> AsyncGenerator[DataFetcher, None]:
    """Dependency for a request-scoped Strava fetcher."""
    async with StravaFetcher() as fetcher:
        yield fetcher
